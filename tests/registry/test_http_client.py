"""Tests for the async HTTP helpers, driven through ``httpx.MockTransport``."""

from __future__ import annotations

import asyncio
import json
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from nugettree.exceptions import NugetTreeError, RegistryFetchError
from nugettree.registry.http_client import USER_AGENT, fetch_json, open_http_client

URL = "https://api.test/v3/index.json"


def _fetch(handler: Any, **kwargs: Any) -> Any:
    """Run fetch_json against a client whose transport calls ``handler``."""

    async def _run() -> Any:
        async with open_http_client(transport=httpx.MockTransport(handler)) as client:
            return await fetch_json(URL, client=client, **kwargs)

    return asyncio.run(_run())


class TestFetchJson:
    """Tests for fetch_json."""

    def test_returns_decoded_document(self) -> None:
        payload = {"version": "3.0.0", "resources": []}
        result = _fetch(lambda request: httpx.Response(200, json=payload))
        assert result == payload

    def test_sends_user_agent(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["user-agent"]
            return httpx.Response(200, json={})

        _fetch(handler)
        assert seen["ua"] == USER_AGENT

    def test_missing_allowed_returns_none(self) -> None:
        result = _fetch(lambda request: httpx.Response(404), allow_missing=True)
        assert result is None

    def test_missing_not_allowed_raises(self) -> None:
        with pytest.raises(RegistryFetchError) as excinfo:
            _fetch(lambda request: httpx.Response(404))
        assert excinfo.value.status_code == 404
        assert excinfo.value.url == URL

    def test_server_error_raises_even_when_missing_allowed(self) -> None:
        with pytest.raises(RegistryFetchError) as excinfo:
            _fetch(lambda request: httpx.Response(503), allow_missing=True)
        assert excinfo.value.status_code == 503

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(RegistryFetchError, match="Invalid JSON"):
            _fetch(lambda request: httpx.Response(200, content=b"<html>"))

    def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(RegistryFetchError, match="Timed out"):
            _fetch(handler)

    def test_connection_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route", request=request)

        with pytest.raises(RegistryFetchError):
            _fetch(handler)

    def test_fetch_error_is_nugettree_error(self) -> None:
        with pytest.raises(NugetTreeError):
            _fetch(lambda request: httpx.Response(500, content=json.dumps({}).encode()))

    def test_malformed_url_raises_fetch_error(self) -> None:
        bad_url = "https://[::1/index.json"

        async def _run() -> Any:
            transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
            async with open_http_client(transport=transport) as client:
                return await fetch_json(bad_url, client=client)

        with pytest.raises(RegistryFetchError, match="Invalid URL") as excinfo:
            asyncio.run(_run())
        assert excinfo.value.url == bad_url
        assert excinfo.value.status_code is None



def _patch_open_http_client(handler: Any, opened: list[httpx.AsyncClient]) -> Any:
    """Patch ``open_http_client`` so self-opened clients use a MockTransport."""

    def _open(**kwargs: Any) -> httpx.AsyncClient:
        client = open_http_client(transport=httpx.MockTransport(handler), **kwargs)
        opened.append(client)
        return client

    return patch("nugettree.registry.http_client.open_http_client", side_effect=_open)


class TestFetchJsonOwnClient:
    """fetch_json without a caller-owned client opens and closes its own."""

    def test_opens_client_with_timeout_and_closes_it(self) -> None:
        payload = {"version": "3.0.0", "resources": []}
        opened: list[httpx.AsyncClient] = []
        with _patch_open_http_client(
            lambda request: httpx.Response(200, json=payload), opened
        ) as mock:
            result = asyncio.run(fetch_json(URL, timeout=5.0))

        assert result == payload
        mock.assert_called_once_with(timeout=5.0)
        assert len(opened) == 1
        assert opened[0].is_closed

    def test_own_client_errors_are_wrapped(self) -> None:
        opened: list[httpx.AsyncClient] = []
        with _patch_open_http_client(lambda request: httpx.Response(404), opened):
            assert asyncio.run(fetch_json(URL, allow_missing=True)) is None
            with pytest.raises(RegistryFetchError) as excinfo:
                asyncio.run(fetch_json(URL))

        assert excinfo.value.status_code == 404
        assert all(client.is_closed for client in opened)
