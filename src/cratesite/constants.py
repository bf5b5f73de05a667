"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    CONNECTION_ERROR = 2
    NOT_FOUND = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_CRATES_IO = "https://crates.io/api/v1/crates/"
    DOCS_RS_BASE = "https://docs.rs/"
    USER_AGENT = "cratesite/0.1 (version page resolver)"

    # Route parameter meaning "no specific version requested"
    ALL_VERSIONS_TOKEN = "all"
    # max_version reported by the registry when every version is yanked
    ALL_YANKED_MAX_VERSION = "0.0.0"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "CRATESITE_LOG_LEVEL"
    ENV_REGISTRY_URL = "CRATESITE_REGISTRY_URL"
    ENV_DOCS_BASE = "CRATESITE_DOCS_BASE"
    ENV_REQUEST_TIMEOUT = "CRATESITE_REQUEST_TIMEOUT"

    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_CACHE_TTL_SEC = 300
