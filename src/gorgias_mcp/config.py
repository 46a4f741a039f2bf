import os
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as pkg_version

SERVER_NAME = "gorgias-mcp"

# Version info for health/UA
try:
    PACKAGE_VERSION = pkg_version("gorgias-mcp")
except PackageNotFoundError:
    PACKAGE_VERSION = "dev"

USER_AGENT = f"gorgias-mcp/{PACKAGE_VERSION}"

DEFAULT_CHARACTER_LIMIT = 50000
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def get_env_number(key: str, default: int) -> int:
    """Read an integer environment variable, falling back when absent or non-numeric."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value.strip(), 10)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    character_limit: int = DEFAULT_CHARACTER_LIMIT
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            character_limit=get_env_number("CHARACTER_LIMIT", DEFAULT_CHARACTER_LIMIT),
            default_page_size=get_env_number("DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            max_page_size=get_env_number("MAX_PAGE_SIZE", MAX_PAGE_SIZE),
        )


def get_host() -> str:
    return os.getenv("HOST") or "0.0.0.0"


def get_port() -> int:
    return get_env_number("PORT", 8787)


def get_log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").upper()
