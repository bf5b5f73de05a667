"""Version catalogs: where crate summaries and version lists come from."""

from .catalog import InMemoryCatalog, VersionCatalog
from .crates_io import CratesIoCatalog

__all__ = ["CratesIoCatalog", "InMemoryCatalog", "VersionCatalog"]
