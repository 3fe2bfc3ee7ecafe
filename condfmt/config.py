"""Library configuration.

Single source of truth for all configuration values.
Loads from environment variables with .env file support.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"
load_dotenv(_ENV_FILE)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


class Config:
    """Configuration singleton.

    Values are loaded from environment variables with sensible defaults.
    """

    # int and float arguments/literals are different comparison kinds
    STRICT_NUMBER_KINDS: bool = _env_bool("CONDFMT_STRICT_NUMBER_KINDS", "true")

    # Compiled templates kept by format_string(); read once at import
    CACHE_SIZE: int = int(os.getenv("CONDFMT_CACHE_SIZE", "256"))

    # Default level for setup_logging()
    LOG_LEVEL: str = os.getenv("CONDFMT_LOG_LEVEL", "WARNING")

    @classmethod
    def reload(cls) -> None:
        """Reload configuration from environment.

        Useful for testing or runtime config changes.
        """
        load_dotenv(_ENV_FILE, override=True)
        cls.STRICT_NUMBER_KINDS = _env_bool("CONDFMT_STRICT_NUMBER_KINDS", "true")
        cls.CACHE_SIZE = int(os.getenv("CONDFMT_CACHE_SIZE", "256"))
        cls.LOG_LEVEL = os.getenv("CONDFMT_LOG_LEVEL", "WARNING")
