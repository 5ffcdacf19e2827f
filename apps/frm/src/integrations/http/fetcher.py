"""Blocking HTTP downloads of foreign resource artifacts."""
from __future__ import annotations

from types import TracebackType

import httpx
from loguru import logger

from apps.frm.src.domain.errors import FetchError


class ResourceFetcher:
    """Download artifacts with redirects disabled.

    A redirect is reported as a failure so that a manifest always pins the
    final location of an artifact.
    """

    def __init__(self, *, timeout: float = 30.0, client: httpx.Client | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=False)

    def __enter__(self) -> ResourceFetcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def get(self, url: str) -> bytes:
        """Return the response body for ``url`` or raise :class:`FetchError`."""

        log = logger.bind(event="foreign_resources.fetch", url=url)
        log.debug("Requesting foreign resource")
        try:
            response = self._client.get(url, follow_redirects=False)
        except httpx.HTTPError as exc:
            log.bind(stage="failure").warning("Transport error while downloading resource")
            raise FetchError(url, str(exc)) from exc

        if response.is_redirect:
            location = response.headers.get("location")
            raise FetchError(url, f"unexpected redirect to {location}")
        if not response.is_success:
            raise FetchError(url, f"HTTP {response.status_code}")

        log.bind(stage="success", bytes=len(response.content)).debug(
            "Downloaded foreign resource"
        )
        return response.content
