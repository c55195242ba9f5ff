"""NuGet v3 registry client.

Turns ``(package_id, version, target_framework)`` into a ``PackageInfo``
by walking the registry's three document tiers:

    service index -> registration index -> registration pages (leaves)

The registration base URL is looked up in the service index once per
client and cached for the client's lifetime. Nothing else is cached.

Usage::

    client = NuGetClient()
    info = await client.get_package_info("Newtonsoft.Json", target_framework="net8.0")
"""

from __future__ import annotations

import logging

import httpx

from nugettree.core.models import UNKNOWN_VERSION, WILDCARD_RANGE, DependencyInfo, PackageInfo
from nugettree.core.selector import select_dependency_group, select_leaf
from nugettree.exceptions import RegistryConfigurationError
from nugettree.registry.http_client import fetch_json
from nugettree.registry.models import (
    CatalogEntry,
    RegistrationIndex,
    RegistrationLeaf,
    RegistrationPage,
    ServiceIndex,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NUGET_SERVICE_INDEX: str = "https://api.nuget.org/v3/index.json"

# Accepted service index resource types, most preferred first.
REGISTRATION_RESOURCE_TYPES: tuple[str, ...] = (
    "RegistrationsBaseUrl/3.6.0",
    "RegistrationsBaseUrl",
)


# ---------------------------------------------------------------------------
# NuGet client
# ---------------------------------------------------------------------------


class NuGetClient:
    """Async client for package metadata in a NuGet v3 registry.

    Args:
        service_index_url: Registry service index URL.
        http_client: Optional caller-owned ``httpx.AsyncClient``. When
            omitted each request opens its own short-lived client.
    """

    def __init__(
        self,
        service_index_url: str = NUGET_SERVICE_INDEX,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._service_index_url = service_index_url
        self._http_client = http_client
        self._registration_base_url: str | None = None

    async def _fetch(self, url: str, *, allow_missing: bool = False) -> object:
        return await fetch_json(url, allow_missing=allow_missing, client=self._http_client)

    async def registration_base_url(self) -> str:
        """Return the registration base URL, fetching the service index once.

        Raises:
            RegistryConfigurationError: If the service index advertises no
                registration resource.
            RegistryFetchError: If the service index cannot be fetched.
        """
        if self._registration_base_url is None:
            index = ServiceIndex.from_json(await self._fetch(self._service_index_url))
            resource = index.find_resource(*REGISTRATION_RESOURCE_TYPES)
            if resource is None:
                raise RegistryConfigurationError(
                    "Could not find registration base URL in service index "
                    f"{self._service_index_url}"
                )
            self._registration_base_url = resource.id.rstrip("/")
            logger.debug("Registration base URL: %s", self._registration_base_url)
        return self._registration_base_url

    async def fetch_leaves(self, package_id: str) -> list[RegistrationLeaf] | None:
        """Fetch every registration leaf of a package, in registry order.

        Pages that carry their leaves inline are used as is; other pages
        are fetched by their own URL. A page with neither is skipped.

        Args:
            package_id: Package id, any casing.

        Returns:
            Leaves of all pages, or None if the package is unknown or has
            no published versions.
        """
        base_url = await self.registration_base_url()
        url = f"{base_url}/{package_id.lower()}/index.json"
        registration = RegistrationIndex.from_json(await self._fetch(url, allow_missing=True))
        if not registration.items:
            return None

        leaves: list[RegistrationLeaf] = []
        for page in registration.items:
            page_items = page.items
            if page_items is None and page.id is not None:
                loaded = RegistrationPage.from_json(await self._fetch(page.id))
                page_items = loaded.items
            if page_items is None:
                logger.debug("Skipping registration page without items: %s", page.id)
                continue
            leaves.extend(page_items)

        return leaves or None

    async def list_versions(self, package_id: str) -> list[str] | None:
        """Return every published version of a package, in registry order.

        Leaves without a version are left out.
        """
        leaves = await self.fetch_leaves(package_id)
        if leaves is None:
            return None
        return [
            leaf.catalog_entry.version
            for leaf in leaves
            if leaf.catalog_entry is not None and leaf.catalog_entry.version
        ]

    async def get_package_info(
        self,
        package_id: str,
        version: str | None = None,
        target_framework: str | None = None,
    ) -> PackageInfo | None:
        """Resolve one package version and its dependencies for a framework.

        Args:
            package_id: Package id, any casing.
            version: Exact version to select. None selects the latest.
            target_framework: Framework moniker used to pick the
                dependency group. None picks the greatest moniker.

        Returns:
            The resolved package, or None if the package or version is not
            in the registry.

        Raises:
            RegistryConfigurationError: On an unsupported service index.
            RegistryFetchError: On any network or decoding failure.
        """
        leaves = await self.fetch_leaves(package_id)
        if leaves is None:
            return None

        leaf = select_leaf(leaves, version)
        if leaf is None or leaf.catalog_entry is None:
            logger.debug("No matching version of %s (requested %s)", package_id, version)
            return None

        return _to_package_info(leaf.catalog_entry, package_id, target_framework)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _to_package_info(
    entry: CatalogEntry,
    package_id: str,
    target_framework: str | None,
) -> PackageInfo:
    """Map a catalog entry to a PackageInfo, filling absent identity fields."""
    dependencies: list[DependencyInfo] = []
    group = select_dependency_group(entry.dependency_groups or (), target_framework)
    if group is not None and group.dependencies is not None:
        dependencies = [
            DependencyInfo(id=dep.id, range=dep.range if dep.range is not None else WILDCARD_RANGE)
            for dep in group.dependencies
        ]
    return PackageInfo(
        id=entry.id or package_id,
        version=entry.version or UNKNOWN_VERSION,
        dependencies=tuple(dependencies),
    )
