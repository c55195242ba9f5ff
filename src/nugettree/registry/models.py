"""Records for the NuGet v3 registry documents the client consumes.

Only the fields the resolver needs are kept. Every ``from_json``
constructor is tolerant: a missing field, or one of the wrong JSON type,
becomes ``None`` and malformed list members are dropped. Deciding what
an absent value means is left to the client.

Documents and the fields read from them::

    service index      resources[].@id, resources[].@type
    registration index items[]            (pages)
    registration page  @id, items[]       (leaves)
    registration leaf  catalogEntry.{id, version, dependencyGroups}
    dependency group   targetFramework, dependencies[].{id, range}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _str_or_none(value: Any) -> str | None:  # noqa: ANN401
    return value if isinstance(value, str) else None


def _dicts(value: Any) -> list[dict[str, Any]] | None:  # noqa: ANN401
    """Return the dict members of a JSON array, or None if it is not one."""
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, dict)]


# ---------------------------------------------------------------------------
# Service index
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServiceResource:
    """One resource advertised by the service index."""

    id: str
    type: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ServiceResource | None:
        res_id = _str_or_none(data.get("@id"))
        res_type = _str_or_none(data.get("@type"))
        if res_id is None or res_type is None:
            return None
        return cls(id=res_id, type=res_type)


@dataclass(frozen=True)
class ServiceIndex:
    """Top-level registry entry point listing its resources."""

    resources: tuple[ServiceResource, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> ServiceIndex:  # noqa: ANN401
        if not isinstance(data, dict):
            return cls()
        resources = []
        for item in _dicts(data.get("resources")) or []:
            resource = ServiceResource.from_json(item)
            if resource is not None:
                resources.append(resource)
        return cls(resources=tuple(resources))

    def find_resource(self, *types: str) -> ServiceResource | None:
        """Return the first resource, in document order, of any given type.

        Args:
            types: Accepted ``@type`` values.

        Returns:
            The matching resource, or None if the index has none.
        """
        wanted = set(types)
        for resource in self.resources:
            if resource.type in wanted:
                return resource
        return None


# ---------------------------------------------------------------------------
# Catalog entry and dependency groups
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Dependency:
    """A dependency as declared by a package version."""

    id: str
    range: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Dependency | None:
        dep_id = _str_or_none(data.get("id"))
        if not dep_id:
            return None
        return cls(id=dep_id, range=_str_or_none(data.get("range")))


@dataclass(frozen=True)
class DependencyGroup:
    """Dependencies declared for one target framework.

    A ``target_framework`` of None (or empty) means the group applies to
    every framework.
    """

    target_framework: str | None = None
    dependencies: tuple[Dependency, ...] | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DependencyGroup:
        raw_deps = _dicts(data.get("dependencies"))
        dependencies = None
        if raw_deps is not None:
            parsed = (Dependency.from_json(item) for item in raw_deps)
            dependencies = tuple(dep for dep in parsed if dep is not None)
        return cls(
            target_framework=_str_or_none(data.get("targetFramework")),
            dependencies=dependencies,
        )


@dataclass(frozen=True)
class CatalogEntry:
    """Per-version package metadata."""

    id: str | None = None
    version: str | None = None
    dependency_groups: tuple[DependencyGroup, ...] | None = None

    @classmethod
    def from_json(cls, data: Any) -> CatalogEntry | None:  # noqa: ANN401
        if not isinstance(data, dict):
            return None
        raw_groups = _dicts(data.get("dependencyGroups"))
        groups = None
        if raw_groups is not None:
            groups = tuple(DependencyGroup.from_json(item) for item in raw_groups)
        return cls(
            id=_str_or_none(data.get("id")),
            version=_str_or_none(data.get("version")),
            dependency_groups=groups,
        )


# ---------------------------------------------------------------------------
# Registration documents
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegistrationLeaf:
    """One published version inside a registration page."""

    catalog_entry: CatalogEntry | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> RegistrationLeaf:
        return cls(catalog_entry=CatalogEntry.from_json(data.get("catalogEntry")))


@dataclass(frozen=True)
class RegistrationPage:
    """A contiguous slice of a package's version history.

    Large packages are paged: such pages carry only ``id`` (their URL) and
    ``items`` is None until the page document itself is fetched.
    """

    id: str | None = None
    items: tuple[RegistrationLeaf, ...] | None = None

    @classmethod
    def from_json(cls, data: Any) -> RegistrationPage:  # noqa: ANN401
        if not isinstance(data, dict):
            return cls()
        raw_items = _dicts(data.get("items"))
        items = None
        if raw_items is not None:
            items = tuple(RegistrationLeaf.from_json(item) for item in raw_items)
        return cls(id=_str_or_none(data.get("@id")), items=items)


@dataclass(frozen=True)
class RegistrationIndex:
    """Per-package document listing its registration pages in order."""

    items: tuple[RegistrationPage, ...] | None = None

    @classmethod
    def from_json(cls, data: Any) -> RegistrationIndex:  # noqa: ANN401
        if not isinstance(data, dict):
            return cls()
        raw_pages = _dicts(data.get("items"))
        if raw_pages is None:
            return cls()
        return cls(items=tuple(RegistrationPage.from_json(page) for page in raw_pages))
