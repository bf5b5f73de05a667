"""docs.rs build status client."""

from __future__ import annotations

import asyncio
import logging
import urllib.parse
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import aiohttp

from ..common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from ..constants import Constants

logger = logging.getLogger(__name__)


class ProbeError(Exception):
    """The build status could not be fetched or understood."""


@dataclass(frozen=True)
class BuildStatus:
    """Outcome of a docs.rs build lookup."""
    build_succeeded: bool


class DocumentationProbe(Protocol):
    """Reports whether hosted documentation was built for a crate version."""

    base_url: str

    async def check_build_status(self, name: str, version: str) -> BuildStatus:
        ...

    def documentation_url(self, name: str, version: str) -> str:
        ...


class DocsRsProbe:
    """Query ``<base>/crate/<name>/<version>/builds.json``.

    The session is created lazily and may be shared between probes; call
    ``stop`` to close it.
    """

    def __init__(
        self,
        base_url: str = Constants.DOCS_RS_BASE,
        timeout: int = Constants.REQUEST_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def start(self) -> None:
        """Start the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"User-Agent": Constants.USER_AGENT, "Accept": "application/json"},
            )
            self._owns_session = True

    async def stop(self) -> None:
        """Stop the HTTP session if this probe created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    def builds_url(self, name: str, version: str) -> str:
        return (
            f"{self.base_url}crate/{urllib.parse.quote(name, safe='')}/"
            f"{urllib.parse.quote(version, safe='')}/builds.json"
        )

    def documentation_url(self, name: str, version: str) -> str:
        return f"{self.base_url}{name}/{version}/"

    async def check_build_status(self, name: str, version: str) -> BuildStatus:
        """Fetch the build list and report whether the newest build succeeded.

        Raises:
            ProbeError: on transport errors, non-200 responses or malformed JSON.
        """
        if self._session is None:
            await self.start()
        assert self._session is not None
        url = self.builds_url(name, version)
        with Timer() as t:
            try:
                async with self._session.get(url) as response:
                    if response.status != 200:
                        raise ProbeError(f"docs.rs returned HTTP {response.status}")
                    payload = await response.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
                raise ProbeError(str(exc)) from exc
        if is_debug_enabled(logger):
            logger.debug(
                "docs.rs build status fetched",
                extra=extra_context(
                    event="http_response",
                    component="docs_probe",
                    action="GET",
                    target=safe_url(url),
                    duration_ms=t.duration_ms(),
                ),
            )
        return BuildStatus(build_succeeded=_latest_build_succeeded(payload))


def _latest_build_succeeded(payload: Any) -> bool:
    """docs.rs lists builds newest first; only the first entry counts."""
    if not isinstance(payload, list) or not payload:
        return False
    first = payload[0]
    if not isinstance(first, dict):
        return False
    return first.get("build_status") is True
