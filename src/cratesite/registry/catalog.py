"""Version catalog interface and an in-memory implementation."""

from __future__ import annotations

from typing import Dict, Iterable, List, Protocol

from ..errors import PackageNotFoundError
from ..versioning.models import PackageSummary, VersionRecord


class VersionCatalog(Protocol):
    """Supplies already-loaded crate data; resolution never triggers loading."""

    def get_package(self, name: str) -> PackageSummary:
        ...

    def get_versions(self, name: str) -> List[VersionRecord]:
        ...

    def get_max_version(self, name: str) -> str:
        ...


class InMemoryCatalog:
    """Catalog backed by a dict of summaries keyed by crate name."""

    def __init__(self, packages: Iterable[PackageSummary] = ()):
        self._packages: Dict[str, PackageSummary] = {p.name: p for p in packages}

    def add(self, package: PackageSummary) -> None:
        self._packages[package.name] = package

    def get_package(self, name: str) -> PackageSummary:
        try:
            return self._packages[name]
        except KeyError:
            raise PackageNotFoundError(name) from None

    def get_versions(self, name: str) -> List[VersionRecord]:
        return list(self.get_package(name).versions)

    def get_max_version(self, name: str) -> str:
        return self.get_package(name).max_version
