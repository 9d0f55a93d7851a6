"""Sorted catalog of tz data sources backing the updater's source list.

Slot 0 of the list is always the local resource file; slots after it are the
remote versions in ascending order. Versions arrive one at a time while a
listing is parsed, and listeners hear about each one at its sorted position.
"""
from __future__ import annotations

from bisect import bisect_right, insort
from dataclasses import dataclass
import logging
from threading import Lock
from typing import Iterable, Iterator, List, Protocol

from tzsource.catalog.local_copy import LocalCopy, get_local_copy
from tzsource.catalog.selection import (
    LOCAL_COPY,
    RemoteIdentifier,
    SelectionState,
    coerce_choice,
)

logger = logging.getLogger("tzsource.catalog")


@dataclass(frozen=True)
class CatalogEntry:
    identifier: str
    location: str


class CatalogListener(Protocol):
    def interval_added(self, start: int, end: int) -> None:
        """Called after rows ``start`` to ``end`` (inclusive) were added."""


class VersionCatalog:
    """Remote versions plus the local copy, in presentation order."""

    def __init__(
        self,
        local_copy: LocalCopy | None = None,
        *,
        listeners: Iterable[CatalogListener] = (),
        selection: SelectionState | None = None,
    ) -> None:
        self.local_copy = local_copy if local_copy is not None else get_local_copy()
        self.selection = selection if selection is not None else SelectionState(self.local_copy)
        self._listeners: List[CatalogListener] = list(listeners)
        self._identifiers: List[str] = []
        self._locations: dict[str, str] = {}
        self._lock = Lock()

    def add_listener(self, listener: CatalogListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: CatalogListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def insert(self, identifier: str, location: str) -> int:
        """Add a remote version and return its list index.

        A repeated identifier only replaces the stored location.
        """
        with self._lock:
            known = identifier in self._locations
            self._locations[identifier] = location
            if not known:
                insort(self._identifiers, identifier)
            # Remote versions <= identifier; slot 0 belongs to the local copy
            index = bisect_right(self._identifiers, identifier)

        if known:
            logger.debug("Replaced location of %s with %s", identifier, location)
            return index

        logger.debug("Added source %s at index %d", identifier, index)
        for listener in list(self._listeners):
            listener.interval_added(index, index)
        return index

    def size(self) -> int:
        with self._lock:
            return len(self._identifiers) + 1

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._locations

    def at(self, index: int) -> str | None:
        """Return the label shown at ``index`` or ``None`` when out of range."""
        if index == 0:
            return self.local_copy.label
        with self._lock:
            # index == remote count resolves to None as well
            if index < 0 or index >= len(self._identifiers):
                return None
            return self._identifiers[index - 1]

    def identifiers(self) -> list[str]:
        with self._lock:
            return list(self._identifiers)

    def entries(self) -> Iterator[CatalogEntry]:
        with self._lock:
            snapshot = [CatalogEntry(name, self._locations[name]) for name in self._identifiers]
        return iter(snapshot)

    def latest(self) -> str | None:
        with self._lock:
            return self._identifiers[-1] if self._identifiers else None

    def location_of(self, choice: object) -> str | None:
        """Resolve a choice to the URL its resource file is fetched from."""
        resolved = coerce_choice(choice, self.local_copy)
        if resolved is None:
            return None
        if resolved is LOCAL_COPY:
            return self.local_copy.location
        with self._lock:
            return self._locations.get(resolved.identifier)

    def version_of(self, choice: object) -> str | None:
        """Resolve a choice to its tz data version label."""
        resolved = coerce_choice(choice, self.local_copy)
        if resolved is None:
            return None
        if resolved is LOCAL_COPY:
            return self.local_copy.version
        # A remote identifier is its own version
        return resolved.identifier

    def get_selected(self) -> object:
        return self.selection.get()

    def set_selected(self, choice: object) -> None:
        self.selection.set(choice)

    def selected_label(self) -> str | None:
        return self.selection.display()

    def select_latest(self) -> str | None:
        """Select the newest remote version, if any has been discovered."""
        latest = self.latest()
        if latest is not None:
            self.selection.set(RemoteIdentifier(latest))
        return latest
