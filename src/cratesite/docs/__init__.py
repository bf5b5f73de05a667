"""Hosted documentation discovery (docs.rs)."""

from .probe import BuildStatus, DocsRsProbe, DocumentationProbe, ProbeError
from .trigger import probe_documentation, should_probe

__all__ = [
    "BuildStatus",
    "DocsRsProbe",
    "DocumentationProbe",
    "ProbeError",
    "probe_documentation",
    "should_probe",
]
