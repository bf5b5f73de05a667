"""Command line entry point: resolve a crate's version page from crates.io."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .args import parse_args
from .common.logging_utils import configure_logging
from .config import configure
from .constants import Constants, ExitCodes
from .docs.probe import DocsRsProbe
from .errors import NoVersionsError, PackageNotFoundError, RegistryConnectionError
from .notify import FlashQueue
from .registry.crates_io import CratesIoCatalog
from .versioning.resolver import VersionResolver

logger = logging.getLogger(__name__)


def _setup_logging(args: Any) -> None:
    """Configure logging based on CLI arguments."""
    configure_logging(getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


async def run(crate: str, version: Optional[str], with_docs: bool = True) -> Dict[str, Any]:
    """Load ``crate``, resolve ``version`` and wait for the docs probe.

    Returns:
        A report dict with the resolved version, flash messages and docs URL.
    """
    catalog = CratesIoCatalog(Constants.REGISTRY_URL_CRATES_IO)
    package = catalog.get_package(crate)
    flashes = FlashQueue()
    probe = DocsRsProbe(Constants.DOCS_RS_BASE, timeout=Constants.REQUEST_TIMEOUT) if with_docs else None
    resolver = VersionResolver(notifier=flashes, probe=probe)
    try:
        outcome = await resolver.resolve(package, version)
        if outcome.documentation_probe is not None:
            # Wait so the report carries any discovered documentation URL.
            await outcome.documentation_probe
    finally:
        if probe is not None:
            await probe.stop()

    messages: List[str] = flashes.clear()
    return {
        "crate": package.name,
        "requested": outcome.requested or None,
        "version": outcome.version.num,
        "yanked": outcome.version.yanked,
        "prerelease": outcome.version.is_prerelease,
        "max_version": package.max_version,
        "degraded": outcome.degraded,
        "documentation": package.documentation,
        "messages": messages,
    }


def _render_text(report: Dict[str, Any]) -> str:
    lines = [f"{report['crate']} {report['version']}"]
    if report["yanked"]:
        lines[0] += " (yanked)"
    if report["documentation"]:
        lines.append(f"documentation: {report['documentation']}")
    lines.extend(f"! {message}" for message in report["messages"])
    return "\n".join(lines)


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    configure(args)
    logger.debug("Arguments parsed: %s", vars(args))

    try:
        report = asyncio.run(run(args.crate, args.version, with_docs=not args.NO_DOCS))
    except PackageNotFoundError as e:
        logging.error("%s", e)
        return ExitCodes.NOT_FOUND.value
    except NoVersionsError as e:
        logging.error("%s", e)
        return ExitCodes.NOT_FOUND.value
    except RegistryConnectionError as e:
        logging.error("Registry error: %s", e)
        return ExitCodes.CONNECTION_ERROR.value

    if args.OUTPUT_FORMAT == "json":
        print(json.dumps(report, indent=2))
    else:
        print(_render_text(report))
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
