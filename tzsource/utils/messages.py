"""Warnings and errors raised during a discovery pass, for the updater's message pane."""
from __future__ import annotations

import logging
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Deque, Iterator, List


@dataclass(frozen=True)
class PaneMessage:
    timestamp: datetime
    level: str
    logger: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.level in {"ERROR", "CRITICAL"}

    def __str__(self) -> str:
        return f"{self.level}: {self.message}"


class MessagePaneHandler(logging.Handler):
    """Keep the most recent ``tzsource`` warnings and errors."""

    def __init__(self, capacity: int = 100, level: int = logging.WARNING) -> None:
        super().__init__(level=level)
        self._messages: Deque[PaneMessage] = deque(maxlen=capacity)
        self._lock = Lock()

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        try:
            message = record.getMessage()
        except Exception:  # pragma: no cover - malformed format arguments
            message = str(record.msg)
        entry = PaneMessage(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
            level=record.levelname,
            logger=record.name,
            message=message,
        )
        with self._lock:
            self._messages.append(entry)

    def messages(self) -> List[PaneMessage]:
        with self._lock:
            return list(self._messages)


@contextmanager
def capture_messages(logger_name: str = "tzsource", capacity: int = 100) -> Iterator[MessagePaneHandler]:
    """Attach a temporary pane handler to ``logger_name`` for the duration of the block."""

    handler = MessagePaneHandler(capacity=capacity)
    logger = logging.getLogger(logger_name)
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
