"""crates.io catalog: load a crate and its versions from the registry API."""
from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, List, Optional

from ..common.http_client import get_json
from ..common.logging_utils import extra_context, is_debug_enabled, safe_url
from ..constants import Constants
from ..errors import PackageNotFoundError, RegistryConnectionError
from ..versioning.models import PackageSummary, VersionRecord

logger = logging.getLogger(__name__)


def parse_crate_response(data: Dict[str, Any]) -> PackageSummary:
    """Build a PackageSummary from a ``/api/v1/crates/<name>`` payload.

    Versions keep the order the registry returned them in.

    Raises:
        RegistryConnectionError: if the payload lacks the crate object.
    """
    crate = data.get("crate")
    if not isinstance(crate, dict) or not crate.get("name"):
        raise RegistryConnectionError("Malformed crate response: missing 'crate'")

    versions: List[VersionRecord] = []
    for item in data.get("versions") or []:
        if not isinstance(item, dict) or not item.get("num"):
            continue
        versions.append(VersionRecord(num=str(item["num"]), yanked=bool(item.get("yanked", False))))

    return PackageSummary(
        name=crate["name"],
        max_version=str(crate.get("max_version") or Constants.ALL_YANKED_MAX_VERSION),
        versions=versions,
        documentation=crate.get("documentation") or None,
    )


class CratesIoCatalog:
    """Catalog reading from the crates.io HTTP API.

    Summaries are cached per instance so repeated navigations within one
    session reuse the same snapshot.
    """

    def __init__(self, base_url: str = Constants.REGISTRY_URL_CRATES_IO):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._loaded: Dict[str, PackageSummary] = {}

    def _fetch(self, name: str) -> PackageSummary:
        url = self.base_url + urllib.parse.quote(name, safe="")
        headers = {"Accept": "application/json", "User-Agent": Constants.USER_AGENT}
        status_code, _, data = get_json(url, headers=headers)
        if status_code == 404:
            raise PackageNotFoundError(name)
        if status_code == 0:
            raise RegistryConnectionError(f"crates.io unreachable for {safe_url(url)}")
        if status_code != 200 or not isinstance(data, dict):
            raise RegistryConnectionError(
                f"Unexpected crates.io response ({status_code}) for {safe_url(url)}"
            )
        summary = parse_crate_response(data)
        if is_debug_enabled(logger):
            logger.debug(
                "Crate loaded",
                extra=extra_context(
                    event="catalog_load",
                    component="crates_io",
                    package=summary.name,
                    max_version=summary.max_version,
                    version_count=len(summary.versions),
                ),
            )
        return summary

    def get_package(self, name: str, refresh: bool = False) -> PackageSummary:
        """Return the summary for ``name``, loading it on first use."""
        cached: Optional[PackageSummary] = None if refresh else self._loaded.get(name)
        if cached is None:
            cached = self._fetch(name)
            self._loaded[name] = cached
        return cached

    def get_versions(self, name: str) -> List[VersionRecord]:
        return list(self.get_package(name).versions)

    def get_max_version(self, name: str) -> str:
        return self.get_package(name).max_version
