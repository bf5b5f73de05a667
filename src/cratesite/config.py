"""Runtime configuration: YAML file, environment, then CLI overrides.

Values land on ``Constants`` so every module reads one place. Overrides
never raise; a bad value is logged and the default kept.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from .constants import Constants

logger = logging.getLogger(__name__)


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML config file.

    Args:
        config_path: Path to a YAML file; None or a missing file yields {}.

    Returns:
        Parsed mapping, or {} when absent or unreadable.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return {}
    return data if isinstance(data, dict) else {}


def _set_timeout(value: Any, source: str) -> None:
    try:
        Constants.REQUEST_TIMEOUT = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid request timeout from %s: %r", source, value)


def apply_config(data: Dict[str, Any]) -> None:
    """Apply ``registry``, ``docs`` and ``http`` sections from a config mapping."""
    registry = data.get("registry") or {}
    if isinstance(registry, dict) and registry.get("url"):
        Constants.REGISTRY_URL_CRATES_IO = str(registry["url"])

    docs = data.get("docs") or {}
    if isinstance(docs, dict) and docs.get("base_url"):
        Constants.DOCS_RS_BASE = str(docs["base_url"])

    http = data.get("http") or {}
    if isinstance(http, dict):
        if http.get("timeout") is not None:
            _set_timeout(http["timeout"], "config")
        if http.get("cache_ttl") is not None:
            try:
                Constants.HTTP_CACHE_TTL_SEC = int(http["cache_ttl"])
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid cache_ttl from config: %r", http["cache_ttl"])


def apply_env_overrides(environ: Optional[Dict[str, str]] = None) -> None:
    """Apply ``CRATESITE_*`` environment variables."""
    env = os.environ if environ is None else environ
    if env.get(Constants.ENV_REGISTRY_URL):
        Constants.REGISTRY_URL_CRATES_IO = env[Constants.ENV_REGISTRY_URL]
    if env.get(Constants.ENV_DOCS_BASE):
        Constants.DOCS_RS_BASE = env[Constants.ENV_DOCS_BASE]
    if env.get(Constants.ENV_REQUEST_TIMEOUT):
        _set_timeout(env[Constants.ENV_REQUEST_TIMEOUT], "environment")


def apply_cli_overrides(args: Any) -> None:
    """Apply CLI flags, which take precedence over file and environment."""
    if getattr(args, "REGISTRY_URL", None):
        Constants.REGISTRY_URL_CRATES_IO = args.REGISTRY_URL
    if getattr(args, "DOCS_BASE", None):
        Constants.DOCS_RS_BASE = args.DOCS_BASE
    if getattr(args, "TIMEOUT", None) is not None:
        _set_timeout(args.TIMEOUT, "command line")


def configure(args: Any) -> None:
    """Apply config file, environment and CLI settings in that order."""
    apply_config(load_config(getattr(args, "CONFIG", None)))
    apply_env_overrides()
    apply_cli_overrides(args)
