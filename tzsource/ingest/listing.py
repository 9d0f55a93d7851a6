"""Directory listing parsing helpers.

The tz data repository publishes one sub-directory per data version and serves
an index page whose ``<li>`` items name those directories::

    <ul>
      <li><a href="../">..</a></li>
      <li><a href="2007h/">2007h/</a></li>
      <li><a href="2007k/">2007k/</a></li>
    </ul>

``extract_versions`` turns such a page into version identifiers in document
order. Sorting is left to :class:`tzsource.catalog.sources.VersionCatalog`.
"""
from __future__ import annotations

import codecs
from html.parser import HTMLParser
from typing import Iterable, Iterator, List

import httpx

from tzsource.catalog.errors import ListingParseError, MalformedLocationError

PARENT_DIRECTORY = ".."


class _ListingParser(HTMLParser):
    """Push parser that collects text found inside list items.

    ``feed`` may hand over a text node in several pieces, so text is buffered
    and only turned into a name at the next tag or at ``close``.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._in_list_item = False
        self._text: List[str] = []
        self._pending: List[str] = []

    def handle_starttag(self, tag: str, attrs) -> None:
        self._flush_text()
        if tag == "li":
            self._in_list_item = True

    def handle_endtag(self, tag: str) -> None:
        self._flush_text()
        if tag == "li":
            self._in_list_item = False

    def handle_data(self, data: str) -> None:
        if self._in_list_item:
            self._text.append(data)

    def close(self) -> None:
        super().close()
        self._flush_text()

    def _flush_text(self) -> None:
        if not self._text:
            return
        name = normalize_entry("".join(self._text))
        self._text = []
        if name is not None:
            self._pending.append(name)

    def drain(self) -> List[str]:
        names, self._pending = self._pending, []
        return names


def normalize_entry(text: str) -> str | None:
    """Return the version named by a listing entry, or ``None`` to skip it."""
    name = text.strip()
    if not name:
        return None
    if name.endswith("/"):
        name = name[:-1]
    if not name or name == PARENT_DIRECTORY:
        return None
    return name


def _iter_chunks(document: str | bytes | Iterable[str | bytes]) -> Iterable[str | bytes]:
    if isinstance(document, (str, bytes, bytearray)):
        return (document,)
    return document


def extract_versions(
    document: str | bytes | Iterable[str | bytes],
    *,
    encoding: str = "utf-8",
) -> Iterator[str]:
    """Yield version identifiers from a directory listing as they are parsed.

    ``document`` may be the whole page or an iterable of chunks, for example
    ``httpx.Response.iter_bytes()``. Bytes are decoded strictly with
    ``encoding``, so undecodable input is a :class:`ListingParseError`. Every
    call starts a fresh parse.
    """
    parser = _ListingParser()
    try:
        decoder = codecs.getincrementaldecoder(encoding)()
        for chunk in _iter_chunks(document):
            if isinstance(chunk, (bytes, bytearray)):
                chunk = decoder.decode(chunk)
            if chunk:
                parser.feed(chunk)
                yield from parser.drain()
        tail = decoder.decode(b"", final=True)
        if tail:
            parser.feed(tail)
        parser.close()
    except (AssertionError, LookupError, ValueError) as exc:
        raise ListingParseError(f"Unable to parse directory listing: {exc}") from exc
    yield from parser.drain()


def entry_location(base_url: str, identifier: str, suffix: str) -> str:
    """Build the download location of one version's resource file."""
    location = f"{base_url}{identifier}{suffix}"
    try:
        httpx.URL(location)
    except httpx.InvalidURL as exc:
        raise MalformedLocationError(location, exc) from exc
    return location
