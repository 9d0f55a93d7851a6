"""Discover published tz data versions from the remote directory listing."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import logging
from typing import List

import httpx

from tzsource.catalog.errors import FetchError, ListingParseError, MalformedLocationError, TZSourceError
from tzsource.catalog.sources import CatalogListener, VersionCatalog
from tzsource.config.settings import Settings, get_settings
from tzsource.ingest.listing import entry_location, extract_versions
from tzsource.utils.messages import PaneMessage, capture_messages

logger = logging.getLogger("tzsource.ingest.discovery")


@dataclass
class DiscoveryResult:
    """Outcome of one pass over the listing."""

    url: str
    discovered: List[str] = field(default_factory=list)
    failure: TZSourceError | None = None
    messages: List[PaneMessage] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failure is None

    @property
    def error(self) -> str | None:
        return str(self.failure) if self.failure is not None else None

    @property
    def status(self) -> str:
        if self.error:
            return f"❌ {self.url}: {self.error}"[:180]
        return f"✅ {self.url} ({len(self.discovered)} versions)"


class SourceDiscovery:
    """Fetch the version listing and stream it into a catalog."""

    def __init__(self, settings: Settings | None = None, *, client: httpx.Client | None = None) -> None:
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self.settings.request_timeout,
            follow_redirects=True,
            headers={
                "User-Agent": self.settings.user_agent,
                "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
            },
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SourceDiscovery":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def listing_url(self) -> str:
        url = self.settings.base_url
        try:
            httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise MalformedLocationError(url, exc) from exc
        return url

    def find_sources(self, catalog: VersionCatalog) -> DiscoveryResult:
        """Run one blocking fetch-and-parse pass, inserting versions as they appear.

        Errors are logged and recorded on the result together with every warning
        logged during the pass; versions inserted before a failure stay in the
        catalog.
        """
        with capture_messages(capacity=self.settings.message_pane_capacity) as pane:
            result = self._run_pass(catalog)
        result.messages = pane.messages()
        if result.discovered and self.settings.select_latest_on_discovery:
            catalog.select_latest()
        logger.info(result.status)
        return result

    def _run_pass(self, catalog: VersionCatalog) -> DiscoveryResult:
        try:
            url = self.listing_url()
        except MalformedLocationError as exc:
            logger.error("Cannot build listing location: %s", exc)
            return DiscoveryResult(url=self.settings.base_url, failure=exc)

        result = DiscoveryResult(url=url)
        try:
            request = self._client.build_request("GET", url)
            response = self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            logger.error("Failed to open listing %s: %s", url, exc)
            result.failure = FetchError(url, f"fetch failed: {exc}", exc)
            return result

        try:
            response.raise_for_status()
            encoding = response.charset_encoding or "utf-8"
            for identifier in extract_versions(response.iter_bytes(), encoding=encoding):
                try:
                    location = entry_location(url, identifier, self.settings.entry_suffix)
                except MalformedLocationError as exc:
                    logger.error("Skipping version %s: %s", identifier, exc)
                    continue
                catalog.insert(identifier, location)
                result.discovered.append(identifier)
        except httpx.HTTPStatusError as exc:
            logger.error("Listing %s returned HTTP %s", url, exc.response.status_code)
            result.failure = FetchError(url, f"HTTP {exc.response.status_code}", exc)
        except httpx.HTTPError as exc:
            logger.error("Failed to read listing %s: %s", url, exc)
            result.failure = FetchError(url, f"fetch failed: {exc}", exc)
        except ListingParseError as exc:
            logger.error("Failed to parse listing %s: %s", url, exc)
            result.failure = exc
        finally:
            try:
                response.close()
            except httpx.HTTPError as exc:
                logger.warning("Failed to close listing stream %s: %s", url, exc)

        return result

    async def find_sources_async(self, catalog: VersionCatalog) -> DiscoveryResult:
        """Run :meth:`find_sources` in a worker thread."""
        return await asyncio.to_thread(self.find_sources, catalog)


class _LoopListener:
    def __init__(self, listener: CatalogListener, loop: asyncio.AbstractEventLoop) -> None:
        self._listener = listener
        self._loop = loop

    def interval_added(self, start: int, end: int) -> None:
        self._loop.call_soon_threadsafe(self._listener.interval_added, start, end)


def marshal_to_loop(listener: CatalogListener, loop: asyncio.AbstractEventLoop) -> CatalogListener:
    """Deliver catalog notifications on the thread running ``loop``."""
    return _LoopListener(listener, loop)


def find_sources(
    catalog: VersionCatalog | None = None,
    *,
    settings: Settings | None = None,
) -> tuple[VersionCatalog, DiscoveryResult]:
    """Convenience helper for one-off discovery."""
    catalog = catalog if catalog is not None else VersionCatalog()
    with SourceDiscovery(settings) as discovery:
        return catalog, discovery.find_sources(catalog)
