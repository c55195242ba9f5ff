"""Shared test helpers: an in-memory NuGet v3 registry and document builders.

The ``fake_registry`` fixture (conftest.py) patches ``fetch_json`` where
the registry client imports it with ``FakeRegistry.fetch``. No test makes
a real HTTP call.
"""

from __future__ import annotations

from typing import Any

from nugettree.exceptions import RegistryFetchError
from nugettree.registry.client import NUGET_SERVICE_INDEX

REGISTRATION_BASE: str = "https://api.test/v3/registration5-semver1/"


def make_leaf(
    package_id: str | None,
    version: str | None,
    groups: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a registration leaf document."""
    entry: dict[str, Any] = {}
    if package_id is not None:
        entry["id"] = package_id
    if version is not None:
        entry["version"] = version
    if groups is not None:
        entry["dependencyGroups"] = groups
    return {"catalogEntry": entry}


def make_group(framework: str | None, deps: dict[str, str | None] | None = None) -> dict[str, Any]:
    """Build a dependency group document; ``None`` ranges are omitted."""
    group: dict[str, Any] = {}
    if framework is not None:
        group["targetFramework"] = framework
    if deps is not None:
        group["dependencies"] = [
            {"id": dep_id} if dep_range is None else {"id": dep_id, "range": dep_range}
            for dep_id, dep_range in deps.items()
        ]
    return group


class FakeRegistry:
    """In-memory NuGet v3 registry keyed by URL."""

    def __init__(self) -> None:
        self.documents: dict[str, Any] = {
            NUGET_SERVICE_INDEX: {
                "version": "3.0.0",
                "resources": [
                    {"@id": "https://api.test/v3/search", "@type": "SearchQueryService"},
                    {"@id": REGISTRATION_BASE, "@type": "RegistrationsBaseUrl/3.6.0"},
                ],
            }
        }
        self.requested: list[str] = []

    def index_url(self, package_id: str) -> str:
        return f"{REGISTRATION_BASE.rstrip('/')}/{package_id.lower()}/index.json"

    def add_package(
        self,
        package_id: str,
        versions: list[str],
        deps: dict[str, str | None] | None = None,
        framework: str | None = None,
    ) -> None:
        """Publish ``versions`` of a package, all with the same single group."""
        groups = [make_group(framework, deps)] if deps is not None else None
        leaves = [make_leaf(package_id, v, groups) for v in versions]
        self.add_pages(package_id, [leaves])

    def add_pages(
        self,
        package_id: str,
        pages: list[list[dict[str, Any]]],
        *,
        inline: bool = True,
    ) -> None:
        """Publish a package whose leaves are split over several pages."""
        items = []
        for number, leaves in enumerate(pages):
            page_url = f"{REGISTRATION_BASE}{package_id.lower()}/page/{number}.json"
            if inline:
                items.append({"@id": page_url, "items": leaves})
            else:
                items.append({"@id": page_url})
                self.documents[page_url] = {"@id": page_url, "items": leaves}
        self.documents[self.index_url(package_id)] = {"items": items}

    async def fetch(
        self,
        url: str,
        *,
        allow_missing: bool = False,
        client: Any = None,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        self.requested.append(url)
        if url in self.documents:
            return self.documents[url]
        if allow_missing:
            return None
        raise RegistryFetchError(f"HTTP 404 fetching {url}", url=url, status_code=404)

    def count(self, url: str) -> int:
        return self.requested.count(url)
