"""Async upstream fetch through a scrape provider or directly."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Any
from urllib.parse import urljoin, urlparse

import aiohttp

from ..errors import UpstreamUnavailable
from ..models.config import ServiceConfig
from ..models.document import DocumentSnapshot

logger = logging.getLogger(__name__)


class ScrapeClient:
    """
    Fetches page HTML for the extraction pipeline.

    With ``scrape_endpoint`` configured, the provider is called with the
    target in the ``url`` query parameter (plus ``api_key``) and must reply
    with a JSON object carrying the page in its ``html`` field. Without
    one the page is fetched directly. Failures are not retried.

    Example:
        config = ServiceConfig.from_env()

        async with ScrapeClient(config) as client:
            snapshot = await client.fetch("/photoshop/using/layers.html")
            print(len(snapshot.raw_html))
    """

    MAX_CONTENT_SIZE = 20 * 1024 * 1024  # 20 MB

    def __init__(self, config: ServiceConfig | None = None) -> None:
        """
        Initialize the client.

        Args:
            config: Service configuration (defaults if None)
        """
        self._config = config or ServiceConfig()
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> ScrapeClient:
        """Enter async context and create session."""
        self._session = aiohttp.ClientSession(headers={"User-Agent": self._config.user_agent})
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        await self.close()

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    def resolve_url(self, target: str) -> str:
        """
        Resolve *target* against the configured base address.

        Absolute http(s) addresses are returned unchanged.
        """
        target = target.strip()
        if urlparse(target).scheme in ("http", "https"):
            return target
        return urljoin(self._config.base_url, target.lstrip("/"))

    async def fetch(self, target: str) -> DocumentSnapshot:
        """
        Fetch the HTML for *target*.

        Args:
            target: Absolute or relative page address

        Returns:
            DocumentSnapshot with the page HTML and resolved address

        Raises:
            UpstreamUnavailable: On non-2xx status, transport error, timeout
                or a reply without HTML
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        url = self.resolve_url(target)
        try:
            if self._config.scrape_endpoint:
                html = await self._fetch_via_provider(url)
            else:
                html = await self._fetch_direct(url)
        except asyncio.TimeoutError as e:
            logger.error(f"Upstream timeout for {url}")
            raise UpstreamUnavailable(
                f"Upstream timed out after {self._config.timeout:g}s", url=url
            ) from e
        except aiohttp.ClientError as e:
            logger.error(f"Upstream fetch error for {url}: {e}")
            raise UpstreamUnavailable(f"Upstream fetch failed: {e}", url=url) from e

        if not html.strip():
            raise UpstreamUnavailable("Upstream returned no HTML", url=url)

        logger.debug(f"Fetched {len(html)} chars for {url}")
        return DocumentSnapshot(raw_html=html, source_url=url)

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self._config.timeout)

    async def _fetch_via_provider(self, url: str) -> str:
        assert self._session is not None
        params = {"url": url}
        if self._config.scrape_api_key:
            params["api_key"] = self._config.scrape_api_key

        async with self._session.get(
            self._config.scrape_endpoint,  # type: ignore[arg-type]
            params=params,
            timeout=self._timeout(),
        ) as response:
            self._check_status(response, url)
            try:
                payload: Any = await response.json(content_type=None)
            except ValueError as e:
                raise UpstreamUnavailable("Provider reply is not valid JSON", url=url) from e

        html = payload.get("html") if isinstance(payload, dict) else None
        if not isinstance(html, str):
            raise UpstreamUnavailable("Provider reply has no HTML", url=url)
        return html

    async def _fetch_direct(self, url: str) -> str:
        assert self._session is not None
        async with self._session.get(url, timeout=self._timeout(), allow_redirects=True) as response:
            self._check_status(response, url)

            content_length = response.headers.get("Content-Length")
            if content_length and content_length.isdigit() and int(content_length) > self.MAX_CONTENT_SIZE:
                raise UpstreamUnavailable(f"Upstream page too large: {content_length} bytes", url=url)

            return await response.text(errors="replace")

    def _check_status(self, response: aiohttp.ClientResponse, url: str) -> None:
        if 200 <= response.status < 300:
            return
        logger.error(f"Upstream returned HTTP {response.status} for {url}")
        raise UpstreamUnavailable(
            f"Upstream returned HTTP {response.status}",
            url=url,
            details={"upstream_status": response.status},
        )
