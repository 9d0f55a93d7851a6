"""Inspection of the locally installed tz resource file."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
from pathlib import Path
from typing import Callable

from tzsource.catalog.errors import VersionReadError
from tzsource.catalog.resource import read_tz_version
from tzsource.config.settings import get_settings

logger = logging.getLogger("tzsource.catalog.local")

LOCAL_COPY_NAME = "Local Copy"
UNKNOWN_VERSION_LABEL = f"{LOCAL_COPY_NAME} (unknown version)"

VersionReader = Callable[[Path], str]


@dataclass(frozen=True)
class LocalCopy:
    """The local resource file as it appears at the top of the source list."""

    label: str
    path: Path
    location: str | None = None
    version: str | None = None

    @property
    def exists(self) -> bool:
        return self.location is not None

    def matches(self, choice: str) -> bool:
        """Return True when ``choice`` names this entry (case-insensitive)."""
        folded = choice.strip().casefold()
        return folded in {self.label.casefold(), LOCAL_COPY_NAME.casefold()}


def inspect_local_copy(path: str | Path, reader: VersionReader = read_tz_version) -> LocalCopy:
    """Describe the resource file at ``path``; never raises for a missing or bad file."""
    path = Path(path)
    if not path.is_file():
        # The updater still works without a local baseline
        logger.error("Local copy (%s) does not exist", path)
        return LocalCopy(label=LOCAL_COPY_NAME, path=path)

    resolved = path.resolve()
    location = resolved.as_uri()
    try:
        version = reader(resolved)
    except VersionReadError as exc:
        logger.error("Failed to determine version of local copy: %s", exc)
        version = None

    if not version:
        return LocalCopy(label=UNKNOWN_VERSION_LABEL, path=resolved, location=location)
    logger.info("Local copy %s has version %s", resolved, version)
    return LocalCopy(label=f"{LOCAL_COPY_NAME} ({version})", path=resolved, location=location, version=version)


@lru_cache(maxsize=1)
def get_local_copy() -> LocalCopy:
    """Inspect the configured local file once and share the result."""
    return inspect_local_copy(get_settings().local_filename)
