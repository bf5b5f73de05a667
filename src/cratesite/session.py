"""Login session with explicit state-change subscriptions."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

SessionListener = Callable[[bool], None]


class Session:
    """Tracks whether a user is logged in and tells subscribers when that changes."""

    def __init__(self) -> None:
        self._user: Optional[str] = None
        self._listeners: List[SessionListener] = []

    @property
    def is_logged_in(self) -> bool:
        return self._user is not None

    @property
    def user(self) -> Optional[str]:
        return self._user

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def log_in(self, user: str) -> None:
        was_logged_in = self.is_logged_in
        self._user = user
        if not was_logged_in:
            self._emit()

    def log_out(self) -> None:
        if self.is_logged_in:
            self._user = None
            self._emit()

    def _emit(self) -> None:
        state = self.is_logged_in
        logger.debug("Session state changed: logged_in=%s", state)
        for listener in list(self._listeners):
            listener(state)
