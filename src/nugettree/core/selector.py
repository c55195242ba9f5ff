"""Version and target-framework selection for a package's registry leaves.

Registries do not publish a dependency group for every framework, so
group selection walks a fixed fallback chain instead of a full
framework-compatibility matrix:

1. No framework requested: the group with the greatest moniker.
2. Exact (case-insensitive) moniker match.
3. The first ``netstandard*`` group.
4. The first framework-agnostic group (absent or empty moniker).
5. The greatest moniker, as in step 1.

"Greatest" is plain ordinal string ordering. It is a heuristic and is
kept as is: ``net10.0`` sorts below ``net8.0``.
"""

from __future__ import annotations

from collections.abc import Sequence

from nugettree.registry.models import DependencyGroup, RegistrationLeaf

PORTABLE_FRAMEWORK_PREFIX: str = "netstandard"


def select_leaf(
    leaves: Sequence[RegistrationLeaf],
    version: str | None = None,
) -> RegistrationLeaf | None:
    """Pick the leaf for the requested version.

    Args:
        leaves: Leaves in registry order (ascending by version).
        version: Version to match case-insensitively. None selects the
            last leaf, which the registry orders as the latest.

    Returns:
        The selected leaf, or None if nothing matches.
    """
    if version is None:
        return leaves[-1] if leaves else None

    wanted = version.casefold()
    for leaf in leaves:
        entry = leaf.catalog_entry
        if entry is not None and entry.version is not None and entry.version.casefold() == wanted:
            return leaf
    return None


def _greatest_moniker(groups: Sequence[DependencyGroup]) -> DependencyGroup | None:
    # An absent moniker sorts below every string; max() keeps the first of equals.
    if not groups:
        return None
    return max(groups, key=lambda g: (g.target_framework is not None, g.target_framework or ""))


def select_dependency_group(
    groups: Sequence[DependencyGroup],
    target_framework: str | None = None,
) -> DependencyGroup | None:
    """Pick the dependency group that best matches a target framework.

    Args:
        groups: Dependency groups of one package version.
        target_framework: Requested framework moniker, or None.

    Returns:
        The selected group. None only when ``groups`` is empty.
    """
    if target_framework is None:
        return _greatest_moniker(groups)

    wanted = target_framework.casefold()
    for group in groups:
        if group.target_framework is not None and group.target_framework.casefold() == wanted:
            return group

    for group in groups:
        tfm = group.target_framework
        if tfm is not None and tfm.casefold().startswith(PORTABLE_FRAMEWORK_PREFIX):
            return group

    for group in groups:
        if not group.target_framework:
            return group

    return _greatest_moniker(groups)
