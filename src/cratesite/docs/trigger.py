"""Opportunistic documentation URL discovery for a resolved version.

The probe runs at most once per call and never raises; a failed or
unsuccessful lookup simply yields no update.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..common.logging_utils import extra_context, is_debug_enabled
from ..versioning.models import DocumentationUpdate, PackageSummary
from .probe import DocumentationProbe

logger = logging.getLogger(__name__)


def should_probe(documentation: Optional[str], docs_base: str) -> bool:
    """Probe only when no URL is known or the known URL is on the docs host."""
    return not documentation or documentation.startswith(docs_base)


async def probe_documentation(
    package: PackageSummary,
    version: Optional[str],
    probe: DocumentationProbe,
) -> Optional[DocumentationUpdate]:
    """Check hosted docs for ``package`` at ``version``.

    Returns:
        DocumentationUpdate with the canonical URL when the latest build
        succeeded, otherwise None.
    """
    if not version or not should_probe(package.documentation, probe.base_url):
        return None
    try:
        status = await probe.check_build_status(package.name, version)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        if is_debug_enabled(logger):
            logger.debug(
                "Documentation probe failed",
                extra=extra_context(
                    event="docs_probe",
                    component="docs_trigger",
                    outcome="error",
                    package=package.name,
                    version=version,
                    error=str(exc),
                ),
            )
        return None
    if not status.build_succeeded:
        logger.debug("No successful docs build for %s %s", package.name, version)
        return None
    return DocumentationUpdate(
        package_name=package.name,
        version=version,
        url=probe.documentation_url(package.name, version),
    )
