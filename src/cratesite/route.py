"""Version page route: resolves the version for each navigation.

The route subscribes to the session and re-resolves whenever the login
state changes.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from .session import Session
from .versioning.models import DocumentationUpdate, PackageSummary, ResolutionOutcome, VersionRecord
from .versioning.resolver import VersionResolver, normalize_request

logger = logging.getLogger(__name__)


class VersionRoute:
    """Per-crate version page controller."""

    def __init__(
        self,
        package: PackageSummary,
        resolver: VersionResolver,
        session: Optional[Session] = None,
    ):
        self.package = package
        self.resolver = resolver
        self.requested_version = ""
        self.outcome: Optional[ResolutionOutcome] = None
        self.pending_refresh: Optional[asyncio.Task] = None
        self._version_num: Optional[str] = None
        self._generation = 0
        self._unsubscribe = session.subscribe(self._on_session_change) if session else None

    async def model(self, version_num: Optional[str] = None) -> VersionRecord:
        """Resolve the record for a navigation to ``version_num``."""
        self._version_num = version_num
        self.requested_version = normalize_request(version_num)
        self._generation += 1
        generation = self._generation

        def _apply_if_current(update: DocumentationUpdate) -> None:
            # Results from superseded navigations are dropped.
            if generation == self._generation:
                update.apply(self.package)

        self.outcome = await self.resolver.resolve(
            self.package, version_num, on_documentation_update=_apply_if_current
        )
        return self.outcome.version

    async def refresh(self) -> Optional[VersionRecord]:
        """Re-run the most recent navigation, if there was one."""
        if self.outcome is None:
            return None
        return await self.model(self._version_num)

    @staticmethod
    def serialize(record: VersionRecord) -> Dict[str, str]:
        """Route parameters for linking to ``record``."""
        return {"version_num": record.num}

    def close(self) -> None:
        """Stop listening for session changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_session_change(self, logged_in: bool) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("Session changed outside an event loop; refresh skipped")
            return
        logger.debug("Refreshing %s after login change (logged_in=%s)", self.package.name, logged_in)
        self.pending_refresh = loop.create_task(self.refresh())
