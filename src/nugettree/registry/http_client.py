"""Shared async HTTP client utilities for the NuGet registry client.

Provides a thin wrapper around ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and error handling. The registry client
uses this module so that HTTP behaviour is consistent and testable.

Raises ``RegistryFetchError`` (a subclass of ``NugetTreeError``) on
unrecoverable HTTP failures. Nothing here retries.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nugettree import __version__
from nugettree.exceptions import RegistryFetchError

logger = logging.getLogger(__name__)

# Timeout for all registry HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = f"nugettree/{__version__}"


def open_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` configured for registry requests.

    The caller owns the client and must close it (``async with``).

    Args:
        timeout: Request timeout in seconds.
        transport: Optional transport override (e.g. ``httpx.MockTransport``).

    Returns:
        A configured, unopened ``httpx.AsyncClient``.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        follow_redirects=True,
        transport=transport,
    )


async def fetch_json(
    url: str,
    *,
    allow_missing: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> Any:  # noqa: ANN401
    """Fetch a URL and parse the response as JSON.

    Args:
        url: The URL to fetch.
        allow_missing: Return ``None`` instead of raising on HTTP 404.
        timeout: Request timeout in seconds (ignored when ``client`` is given).
        client: Optional caller-owned client to reuse across requests.

    Returns:
        Parsed JSON document, or ``None`` for a tolerated 404.

    Raises:
        RegistryFetchError: On HTTP errors, timeouts, malformed URLs or
            invalid JSON.
    """
    if client is None:
        async with open_http_client(timeout=timeout) as own_client:
            return await _get_json(own_client, url, allow_missing=allow_missing)
    return await _get_json(client, url, allow_missing=allow_missing)


async def _get_json(client: httpx.AsyncClient, url: str, *, allow_missing: bool) -> Any:  # noqa: ANN401
    logger.debug("GET %s", url)
    try:
        resp = await client.get(url)
        if allow_missing and resp.status_code == 404:
            logger.debug("Not found: %s", url)
            return None
        resp.raise_for_status()
        return resp.json()
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise RegistryFetchError(f"Timed out fetching {url}", url=url) from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.warning("HTTP %d from %s", status, url)
        raise RegistryFetchError(
            f"HTTP {status} fetching {url}", url=url, status_code=status
        ) from exc
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise RegistryFetchError(f"Request to {url} failed: {exc}", url=url) from exc
    except httpx.InvalidURL as exc:
        logger.warning("Invalid URL %s: %s", url, exc)
        raise RegistryFetchError(f"Invalid URL {url}: {exc}", url=url) from exc
    except ValueError as exc:
        logger.warning("Invalid JSON from %s", url)
        raise RegistryFetchError(f"Invalid JSON from {url}", url=url) from exc
