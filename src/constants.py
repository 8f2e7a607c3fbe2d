"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_INDEX_URL = "https://pypi.org/simple"
    DEFAULT_EXCLUDE_DIRS = ("venv", ".venv", ".git", "target")
    SOURCE_FILE_SUFFIX = ".py"
    PYPROJECT_TOML_FILE = "pyproject.toml"
    CONFIG_FILE = ".pydepsync.toml"
    COMPATIBLE_RELEASE_OPERATOR = "~="
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "PYDEPSYNC_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "pydepsync/0.1"
    INDEX_ACCEPT_HEADER = (
        "application/vnd.pypi.simple.v1+json, "
        "application/json;q=0.9, "
        "text/html;q=0.8"
    )
