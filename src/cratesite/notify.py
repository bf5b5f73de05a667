"""User-facing notification sinks.

The resolver reports a missing requested version through ``notify``; how the
message reaches the user is up to the sink.
"""
from __future__ import annotations

import logging
from typing import List, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Anything that can deliver a one-line message to the user."""

    def notify(self, message: str) -> None:
        ...


class FlashQueue:
    """Queue of flash messages shown on the next rendered page."""

    def __init__(self) -> None:
        self._messages: List[str] = []

    def notify(self, message: str) -> None:
        self._messages.append(message)

    # Alias matching the page-level flash API
    queue = notify

    @property
    def messages(self) -> List[str]:
        return list(self._messages)

    def clear(self) -> List[str]:
        """Drain and return all queued messages."""
        drained, self._messages = self._messages, []
        return drained


class LoggingNotifier:
    """Deliver notifications as WARNING log records."""

    def __init__(self, target: logging.Logger = logger) -> None:
        self._logger = target

    def notify(self, message: str) -> None:
        self._logger.warning("%s", message)
