"""Tests for the HTTP resource fetcher."""
from __future__ import annotations

import httpx
import pytest
import respx

from apps.frm.src.domain.errors import FetchError
from apps.frm.src.integrations.http import ResourceFetcher

URL = "https://cdn.example.org/lib/lib.js"


def test_get_returns_body(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.get(URL).mock(return_value=httpx.Response(200, content=b"lib-bytes"))

    with ResourceFetcher() as fetcher:
        assert fetcher.get(URL) == b"lib-bytes"

    assert route.call_count == 1


@pytest.mark.parametrize("status", (201, 203))
def test_any_success_status_returns_body(respx_mock: respx.MockRouter, status: int) -> None:
    respx_mock.get(URL).mock(return_value=httpx.Response(status, content=b"cached-bytes"))

    with ResourceFetcher() as fetcher:
        assert fetcher.get(URL) == b"cached-bytes"


def test_redirect_is_a_failure(respx_mock: respx.MockRouter) -> None:
    """Redirects are not followed; the manifest must point at the final URL."""

    respx_mock.get(URL).mock(
        return_value=httpx.Response(302, headers={"Location": "https://elsewhere.example.org/lib.js"})
    )

    with ResourceFetcher() as fetcher, pytest.raises(FetchError) as excinfo:
        fetcher.get(URL)

    assert excinfo.value.url == URL
    assert "redirect" in str(excinfo.value)
    assert len(respx_mock.calls) == 1


def test_error_status_is_a_failure(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(URL).mock(return_value=httpx.Response(404))

    with ResourceFetcher() as fetcher, pytest.raises(FetchError, match="HTTP 404"):
        fetcher.get(URL)


def test_transport_error_is_a_failure(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(URL).mock(side_effect=httpx.ConnectError("connection refused"))

    with ResourceFetcher() as fetcher, pytest.raises(FetchError) as excinfo:
        fetcher.get(URL)

    assert str(excinfo.value).startswith(f"Failed to download resource at {URL}")


def test_injected_client_is_not_closed() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"ok"))
    client = httpx.Client(transport=transport)

    fetcher = ResourceFetcher(client=client)
    assert fetcher.get(URL) == b"ok"
    fetcher.close()

    assert not client.is_closed
    client.close()
