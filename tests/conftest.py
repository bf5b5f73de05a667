"""Shared fixtures for the cratesite test suite."""

import pytest

from cratesite.common import http_client
from cratesite.constants import Constants

_TUNABLES = (
    "REGISTRY_URL_CRATES_IO",
    "DOCS_RS_BASE",
    "REQUEST_TIMEOUT",
    "HTTP_CACHE_TTL_SEC",
)


@pytest.fixture(autouse=True)
def restore_constants():
    """Undo runtime overrides of Constants and the HTTP cache after each test."""
    saved = {name: getattr(Constants, name) for name in _TUNABLES}
    http_client.clear_cache()
    yield
    for name, value in saved.items():
        setattr(Constants, name, value)
    http_client.clear_cache()
