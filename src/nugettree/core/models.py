"""Resolved package records handed from the registry client to the resolver.

These are the domain objects of a resolution run. Registry wire records
(``nugettree.registry.models``) are mapped into them exactly once, by
``NuGetClient.get_package_info``.
"""

from __future__ import annotations

from dataclasses import dataclass

# Range shown for a dependency that declares no version range.
WILDCARD_RANGE: str = "*"

# Version recorded when the registry omits one for the selected leaf.
UNKNOWN_VERSION: str = "unknown"


@dataclass(frozen=True)
class DependencyInfo:
    """A direct dependency edge: target package id and requested range.

    Attributes:
        id: Dependency package id as declared (original casing).
        range: NuGet version range string, e.g. ``"[1.0.0, )"``.
    """

    id: str
    range: str = WILDCARD_RANGE


@dataclass(frozen=True)
class PackageInfo:
    """A package version with the dependency group selected for a platform.

    Attributes:
        id: Package id. Never empty.
        version: Version string. Never empty.
        dependencies: Direct dependencies, possibly empty.
    """

    id: str
    version: str
    dependencies: tuple[DependencyInfo, ...] = ()

    @property
    def key(self) -> str:
        """Identity used for cycle detection: ``"{id}@{version}"``."""
        return f"{self.id}@{self.version}"
