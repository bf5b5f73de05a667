"""Pick the version shown on a crate's version page.

With an explicit request the requested identifier is looked up as-is. Without
one, the crate's max version is used unless it is a pre-release, in which
case the newest stable unyanked version wins, then the newest unyanked one,
then max version regardless. Lookups that miss fall back to max version and
finally to the first record, so a non-empty crate always yields a record.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Tuple

from ..common.logging_utils import extra_context, is_debug_enabled
from ..constants import Constants
from ..docs.probe import DocumentationProbe
from ..docs.trigger import probe_documentation
from ..errors import NoVersionsError
from ..notify import LoggingNotifier, Notifier
from .models import (
    DocumentationUpdate,
    LiteralToken,
    PackageSummary,
    RecordToken,
    ResolutionOutcome,
    VersionToken,
)
from .prerelease import is_prerelease

logger = logging.getLogger(__name__)

UpdateHandler = Callable[[DocumentationUpdate], None]


def normalize_request(requested: Optional[str]) -> str:
    """Map the "all versions" route token and missing values to ""."""
    if not requested or requested == Constants.ALL_VERSIONS_TOKEN:
        return ""
    return requested


def fallback_token(package: PackageSummary) -> Tuple[VersionToken, bool]:
    """Choose the version to show when none was requested.

    Returns:
        (token, degraded) where degraded is True when no unyanked version
        exists and max version is used anyway.
    """
    max_version = package.max_version
    if max_version == Constants.ALL_YANKED_MAX_VERSION or not is_prerelease(max_version):
        return LiteralToken(max_version), False

    for record in package.versions:
        if not record.is_prerelease and not record.yanked:
            return RecordToken(record), False
    for record in package.versions:
        if not record.yanked:
            return RecordToken(record), False
    return LiteralToken(max_version), True


def update_applier(package: PackageSummary) -> UpdateHandler:
    """Return a handler that stores documentation updates on ``package``."""
    def _apply(update: DocumentationUpdate) -> None:
        update.apply(package)
    return _apply


class VersionResolver:
    """Resolve version page requests for loaded crates."""

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        probe: Optional[DocumentationProbe] = None,
        on_documentation_update: Optional[UpdateHandler] = None,
    ):
        """Initialize the resolver.

        Args:
            notifier: Receives the "does not exist" message for unknown versions.
            probe: Documentation probe; None disables documentation discovery.
            on_documentation_update: Called with each successful probe result.
                Defaults to applying the update to the resolved summary.
        """
        self.notifier = notifier or LoggingNotifier()
        self.probe = probe
        self.on_documentation_update = on_documentation_update

    async def resolve(
        self,
        package: PackageSummary,
        requested_token: Optional[str] = None,
        on_documentation_update: Optional[UpdateHandler] = None,
    ) -> ResolutionOutcome:
        """Return the effective version record for ``package``.

        The documentation probe, if configured, is scheduled on the running
        loop and exposed as ``outcome.documentation_probe``; it is not awaited.
        ``on_documentation_update`` overrides the resolver-wide handler for
        this call only.

        Raises:
            NoVersionsError: if ``package`` has no version records.
        """
        if not package.versions:
            raise NoVersionsError(package.name)

        requested = normalize_request(requested_token)
        degraded = False
        if requested:
            target = requested
        else:
            token, degraded = fallback_token(package)
            target = token.num

        probe_task = self._schedule_probe(
            package, target, on_documentation_update or self.on_documentation_update
        )

        version = package.find_version(target)
        not_found = None
        if requested and package.find_version(requested) is None:
            not_found = requested
            self.notifier.notify(
                f"Version '{requested}' of crate '{package.name}' does not exist"
            )
        if version is None:
            version = package.find_version(package.max_version) or package.versions[0]

        if is_debug_enabled(logger):
            logger.debug(
                "Version resolved",
                extra=extra_context(
                    event="resolve",
                    component="version_resolver",
                    package=package.name,
                    requested=requested or None,
                    target=target,
                    resolved=version.num,
                    degraded=degraded or None,
                ),
            )
        return ResolutionOutcome(
            version=version,
            requested=requested,
            effective=target,
            not_found=not_found,
            degraded=degraded,
            documentation_probe=probe_task,
        )

    def _schedule_probe(
        self, package: PackageSummary, target: str, handler: Optional[UpdateHandler]
    ) -> Optional["asyncio.Task[Optional[DocumentationUpdate]]"]:
        if self.probe is None:
            return None
        task = asyncio.create_task(probe_documentation(package, target, self.probe))
        if handler is None:
            handler = update_applier(package)

        def _deliver(done: "asyncio.Task[Optional[DocumentationUpdate]]") -> None:
            if done.cancelled() or done.exception() is not None:
                return
            update = done.result()
            if update is not None:
                handler(update)

        task.add_done_callback(_deliver)
        return task
