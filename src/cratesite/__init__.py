"""cratesite: crate version page resolution for a package-registry web client."""

from .versioning.models import (
    DocumentationUpdate,
    PackageSummary,
    ResolutionOutcome,
    VersionRecord,
)
from .versioning.resolver import VersionResolver

__all__ = [
    "DocumentationUpdate",
    "PackageSummary",
    "ResolutionOutcome",
    "VersionRecord",
    "VersionResolver",
]

__version__ = "0.1.0"
