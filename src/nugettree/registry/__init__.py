"""NuGet v3 registry access.

Provides the async HTTP helpers and the records for the registry
documents the client reads.

Public API::

    from nugettree.registry import ServiceIndex, RegistrationIndex, CatalogEntry
    from nugettree.registry.client import NuGetClient
    from nugettree.registry.http_client import fetch_json
"""

from __future__ import annotations

from nugettree.registry.models import (
    CatalogEntry,
    Dependency,
    DependencyGroup,
    RegistrationIndex,
    RegistrationLeaf,
    RegistrationPage,
    ServiceIndex,
    ServiceResource,
)

__all__ = [
    "CatalogEntry",
    "Dependency",
    "DependencyGroup",
    "RegistrationIndex",
    "RegistrationLeaf",
    "RegistrationPage",
    "ServiceIndex",
    "ServiceResource",
]
