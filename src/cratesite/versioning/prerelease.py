"""Stable / pre-release classification of version identifiers."""

from functools import lru_cache

import semantic_version


@lru_cache(maxsize=1024)
def is_prerelease(num: str) -> bool:
    """Return True if ``num`` parses as semver and carries a pre-release component.

    Identifiers that are not valid semantic versions are treated as stable,
    so they stay eligible for default resolution.
    """
    try:
        return bool(semantic_version.Version(num.strip()).prerelease)
    except (ValueError, AttributeError):
        return False
