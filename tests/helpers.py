"""Test doubles shared across test modules."""

import asyncio
from typing import List, Optional, Tuple

from cratesite.docs.probe import BuildStatus
from cratesite.versioning.models import PackageSummary, VersionRecord


class FakeProbe:
    """Documentation probe that records calls and returns a canned status."""

    base_url = "https://docs.rs/"

    def __init__(self, succeeded: bool = True, error: Optional[Exception] = None,
                 gate: Optional[asyncio.Event] = None):
        self.succeeded = succeeded
        self.error = error
        self.gate = gate
        self.calls: List[Tuple[str, str]] = []

    async def check_build_status(self, name: str, version: str) -> BuildStatus:
        self.calls.append((name, version))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return BuildStatus(build_succeeded=self.succeeded)

    def documentation_url(self, name: str, version: str) -> str:
        return f"{self.base_url}{name}/{version}/"


def make_package(name, max_version, versions, documentation=None) -> PackageSummary:
    """Build a summary from (num, yanked) pairs."""
    return PackageSummary(
        name=name,
        max_version=max_version,
        versions=[VersionRecord(num=num, yanked=yanked) for num, yanked in versions],
        documentation=documentation,
    )
