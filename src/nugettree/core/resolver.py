"""Recursive dependency tree construction.

Expands a resolved ``PackageInfo`` into a tree by fetching every direct
dependency's own latest version (for the same target framework) and
recursing into it, depth-first and strictly one fetch at a time.

Cycle detection is per path. Each branch receives its own copy of the
set of ``"{id}@{version}"`` keys seen between the root and itself:

- a key already on the path becomes a terminal circular-reference node;
- the same package under two unrelated branches is expanded in both.

Identical subtrees in different branches are resolved independently and
never shared.

Nodes reach the tree through an ``add_node(parent, node)`` callback that
returns the handle to attach children to. The default callback builds
``DependencyNode`` objects; a presentation layer can pass its own to
build e.g. a ``rich.tree.Tree`` directly while fetching.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from nugettree.core.models import DependencyInfo, PackageInfo

logger = logging.getLogger(__name__)


class PackageSource(Protocol):
    """Anything that can resolve a package the way ``NuGetClient`` does."""

    async def get_package_info(
        self,
        package_id: str,
        version: str | None = None,
        target_framework: str | None = None,
    ) -> PackageInfo | None: ...


# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------


@dataclass
class DependencyNode:
    """One node of a resolved dependency tree.

    An edge node names a dependency and the range its parent requested;
    its children are that dependency's own dependencies. A circular
    reference node names a package version already present on the path
    from the root. It has no range and never has children.

    Attributes:
        id: Package id.
        range: Requested version range (edge nodes only).
        version: Repeated version (circular reference nodes only).
        circular: True for a circular reference marker.
        children: Child nodes in declaration order.
    """

    id: str
    range: str | None = None
    version: str | None = None
    circular: bool = False
    children: list[DependencyNode] = field(default_factory=list)

    @classmethod
    def edge(cls, dependency: DependencyInfo) -> DependencyNode:
        return cls(id=dependency.id, range=dependency.range)

    @classmethod
    def circular_reference(cls, package: PackageInfo) -> DependencyNode:
        return cls(id=package.id, version=package.version, circular=True)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable nested representation."""
        if self.circular:
            return {"id": self.id, "version": self.version, "circular": True}
        return {
            "id": self.id,
            "range": self.range,
            "dependencies": [child.to_dict() for child in self.children],
        }


@dataclass
class DependencyTree:
    """The resolved tree for one root package.

    Attributes:
        root: The resolved root package.
        target_framework: Framework filter used for every lookup.
        children: Nodes for the root's direct dependencies.
    """

    root: PackageInfo
    target_framework: str | None = None
    children: list[DependencyNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable nested representation."""
        return {
            "id": self.root.id,
            "version": self.root.version,
            "target_framework": self.target_framework,
            "dependencies": [child.to_dict() for child in self.children],
        }


NodeFactory = Callable[[Any, DependencyNode], Any]


def append_child(parent: DependencyTree | DependencyNode, node: DependencyNode) -> DependencyNode:
    """Default node factory: append ``node`` to ``parent.children``."""
    parent.children.append(node)
    return node


# ---------------------------------------------------------------------------
# Tree construction
# ---------------------------------------------------------------------------


async def build_dependency_tree(
    client: PackageSource,
    parent: Any,  # noqa: ANN401
    package: PackageInfo,
    target_framework: str | None,
    visited: set[str],
    add_node: NodeFactory = append_child,
) -> None:
    """Attach the dependency subtree of ``package`` under ``parent``.

    Args:
        client: Package source used to resolve every dependency.
        parent: Handle of the node ``package`` hangs from.
        package: The package being expanded.
        target_framework: Framework filter passed unchanged to every lookup.
        visited: Keys on the path from the root down to ``parent``. Owned
            by this call and added to; callers pass a copy.
        add_node: Callback attaching a node under a parent handle and
            returning the new node's handle.

    Raises:
        RegistryConfigurationError: On an unsupported service index.
        RegistryFetchError: On any failed fetch; the whole build aborts.
    """
    if package.key in visited:
        logger.debug("Circular reference to %s", package.key)
        add_node(parent, DependencyNode.circular_reference(package))
        return

    visited.add(package.key)

    for dependency in package.dependencies:
        handle = add_node(parent, DependencyNode.edge(dependency))
        info = await client.get_package_info(dependency.id, None, target_framework)
        if info is None:
            logger.debug("Dependency %s not found; branch ends", dependency.id)
            continue
        await build_dependency_tree(
            client, handle, info, target_framework, set(visited), add_node
        )


async def resolve_tree(
    client: PackageSource,
    package_id: str,
    version: str | None = None,
    target_framework: str | None = None,
) -> DependencyTree | None:
    """Resolve a root package and its full dependency tree.

    Args:
        client: Package source, usually a ``NuGetClient``.
        package_id: Root package id.
        version: Root version. None selects the latest.
        target_framework: Framework filter for the root and every dependency.

    Returns:
        The resolved tree, or None if the root package is not found.
    """
    root = await client.get_package_info(package_id, version, target_framework)
    if root is None:
        return None
    tree = DependencyTree(root=root, target_framework=target_framework)
    await build_dependency_tree(client, tree, root, target_framework, set())
    return tree
