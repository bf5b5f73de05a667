"""Argument parsing for the cratesite CLI."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="cratesite",
        description="Resolve which version of a crate a version page shows",
        add_help=True,
    )

    parser.add_argument("crate",
                        help="Crate name, e.g. serde")
    parser.add_argument("version",
                        nargs="?",
                        default=None,
                        help="Requested version; omit or pass 'all' for the default version")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML config file",
                        action="store",
                        type=str)
    parser.add_argument("--registry-url",
                        dest="REGISTRY_URL",
                        help="Base URL of the crates API (default: crates.io)",
                        action="store",
                        type=str)
    parser.add_argument("--docs-base",
                        dest="DOCS_BASE",
                        help="Base URL of the hosted documentation service (default: docs.rs)",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="HTTP timeout in seconds",
                        action="store",
                        type=int)
    parser.add_argument("--no-docs",
                        dest="NO_DOCS",
                        help="Skip the documentation build probe.",
                        action="store_true")
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or text, default: text)",
                        action="store",
                        type=str.lower,
                        choices=["json", "text"],
                        default="text")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: CRATESITE_LOG_LEVEL or INFO)",
                        action="store",
                        type=str,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
