"""Exceptions raised while building the source catalog."""
from __future__ import annotations


class TZSourceError(RuntimeError):
    """Base class for catalog and discovery failures."""


class LocalInspectionError(TZSourceError):
    """Raised when the local tz resource file cannot be inspected."""

    def __init__(self, path: object, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class VersionReadError(LocalInspectionError):
    """Raised when a resource file carries no readable TZVersion."""


class MalformedLocationError(TZSourceError):
    """Raised when a listing or entry URL cannot be constructed."""

    def __init__(self, location: str, original: Exception | None = None) -> None:
        super().__init__(f"Malformed location '{location}'")
        self.location = location
        self.original = original


class FetchError(TZSourceError):
    """Raised when the version listing cannot be downloaded."""

    def __init__(self, url: str, message: str, original: Exception | None = None) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url
        self.original = original


class ListingParseError(TZSourceError):
    """Raised when a directory listing cannot be parsed at all."""
