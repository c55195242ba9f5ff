"""Resolution engine: package records, version/framework selection, tree building.

Public API::

    from nugettree.core import PackageInfo, DependencyInfo, resolve_tree
"""

from nugettree.core.models import (
    UNKNOWN_VERSION,
    WILDCARD_RANGE,
    DependencyInfo,
    PackageInfo,
)
from nugettree.core.resolver import (
    DependencyNode,
    DependencyTree,
    PackageSource,
    append_child,
    build_dependency_tree,
    resolve_tree,
)
from nugettree.core.selector import select_dependency_group, select_leaf

__all__ = [
    "UNKNOWN_VERSION",
    "WILDCARD_RANGE",
    "DependencyInfo",
    "PackageInfo",
    "DependencyNode",
    "DependencyTree",
    "PackageSource",
    "append_child",
    "build_dependency_tree",
    "resolve_tree",
    "select_dependency_group",
    "select_leaf",
]
