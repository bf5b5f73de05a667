"""Data models for crate versions and version resolution."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .prerelease import is_prerelease


@dataclass(frozen=True)
class VersionRecord:
    """One published version of a crate."""
    num: str
    yanked: bool = False

    @property
    def is_prerelease(self) -> bool:
        return is_prerelease(self.num)


@dataclass
class PackageSummary:
    """A crate as loaded for one navigation, with its versions in catalog order."""
    name: str
    max_version: str
    versions: List[VersionRecord] = field(default_factory=list)
    documentation: Optional[str] = None

    def find_version(self, num: Optional[str]) -> Optional[VersionRecord]:
        """Return the record whose identifier equals ``num`` exactly."""
        if not num:
            return None
        for record in self.versions:
            if record.num == num:
                return record
        return None


@dataclass(frozen=True)
class LiteralToken:
    """A version identifier given as a plain string."""
    value: str

    @property
    def num(self) -> str:
        return self.value


@dataclass(frozen=True)
class RecordToken:
    """A version identifier taken from a loaded record."""
    record: VersionRecord

    @property
    def num(self) -> str:
        return self.record.num


# Fallback candidates are either literal identifiers or records; both expose ``num``.
VersionToken = Union[LiteralToken, RecordToken]


@dataclass(frozen=True)
class DocumentationUpdate:
    """Cache-update message produced by a successful documentation probe."""
    package_name: str
    version: str
    url: str

    def apply(self, summary: PackageSummary) -> bool:
        """Store the URL on ``summary`` if it describes the same crate."""
        if summary.name != self.package_name:
            return False
        summary.documentation = self.url
        return True


@dataclass
class ResolutionOutcome:
    """Result of resolving a version page request."""
    version: VersionRecord
    requested: str
    effective: str
    not_found: Optional[str] = None
    degraded: bool = False
    documentation_probe: Optional[asyncio.Task] = None
