"""Selection values for the source list."""
from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Union

from tzsource.catalog.local_copy import LocalCopy


@dataclass(frozen=True)
class RemoteIdentifier:
    """A remote tz data version chosen by the user."""

    identifier: str

    def __str__(self) -> str:
        return self.identifier


class LocalCopySentinel:
    """Marker for the local resource file entry."""

    _instance: "LocalCopySentinel | None" = None

    def __new__(cls) -> "LocalCopySentinel":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "LOCAL_COPY"


LOCAL_COPY = LocalCopySentinel()

Choice = Union[RemoteIdentifier, LocalCopySentinel]


def coerce_choice(value: object, local_copy: LocalCopy) -> Choice | None:
    """Turn a UI value (label string or tagged choice) into a :data:`Choice`."""
    if value is None:
        return None
    if isinstance(value, (RemoteIdentifier, LocalCopySentinel)):
        return value
    if isinstance(value, str):
        if local_copy.matches(value):
            return LOCAL_COPY
        return RemoteIdentifier(value)
    return None


class SelectionState:
    """Current choice of the source list, defaulting to the local copy."""

    def __init__(self, local_copy: LocalCopy, initial: Choice = LOCAL_COPY) -> None:
        self._local_copy = local_copy
        self._choice: object = initial
        self._lock = Lock()

    def get(self) -> object:
        """Return the current choice; values that are not strings or choices come back as stored."""
        with self._lock:
            return self._choice

    def set(self, choice: object) -> None:
        # No validation: unknown versions simply resolve to None later
        coerced = coerce_choice(choice, self._local_copy)
        with self._lock:
            self._choice = coerced if coerced is not None else choice

    def display(self) -> str | None:
        """Return the string the UI shows for the current choice."""
        choice = self.get()
        if choice is None:
            return None
        if choice is LOCAL_COPY:
            return self._local_copy.label
        return str(choice)
