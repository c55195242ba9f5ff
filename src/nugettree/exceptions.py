"""nugettree exception hierarchy.

All public exceptions inherit from NugetTreeError, giving callers a single
base class to catch when they want to handle any registry or resolution
failure without swallowing unrelated errors.

A package or version that the registry does not know is *not* an error:
lookups return ``None`` for that case.
"""

from __future__ import annotations


class NugetTreeError(Exception):
    """Base exception for all nugettree errors."""


class RegistryConfigurationError(NugetTreeError):
    """Raised when the registry's service index has an unsupported shape.

    Covers a service index that does not advertise a registration
    base URL resource. Fatal for the whole run and never retried.
    """


class RegistryFetchError(NugetTreeError):
    """Raised when a registry document cannot be fetched or decoded.

    Covers timeouts, DNS and connection failures, non-success HTTP
    statuses and response bodies that are not valid JSON.

    Attributes:
        url: The URL that failed.
        status_code: HTTP status code, when a response was received.
    """

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
