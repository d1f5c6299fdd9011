"""
Configuration management for the command console.
Loads environment variables and provides configuration settings.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

from utils.validation import ValidationUtils

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    """Console configuration settings."""

    # Discord transport
    DISCORD_TOKEN: str = ""

    # Dispatch
    COMMAND_PREFIX: str = "/"
    OPERATOR_IDS: Tuple[str, ...] = ()
    CHECK_PERMISSION: bool = True
    REPLY_ON_FAILURE: bool = True
    OWNER_ONLY: bool = True

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        operators = os.getenv("OPERATOR_IDS", "")
        return cls(
            DISCORD_TOKEN=os.getenv("DISCORD_TOKEN", ""),
            COMMAND_PREFIX=os.getenv("COMMAND_PREFIX", "/"),
            OPERATOR_IDS=tuple(op.strip() for op in operators.split(",") if op.strip()),
            CHECK_PERMISSION=_env_bool("CHECK_PERMISSION", True),
            REPLY_ON_FAILURE=_env_bool("REPLY_ON_FAILURE", True),
            OWNER_ONLY=_env_bool("OWNER_ONLY", True),
            DEBUG=_env_bool("DEBUG", False),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def log_level(self) -> int:
        if self.DEBUG:
            return logging.DEBUG
        level = logging.getLevelName(self.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO

    def validate(self, require_token: bool = False) -> None:
        """Validate configuration."""
        prefix = ValidationUtils.validate_prefix(self.COMMAND_PREFIX)
        if not prefix:
            raise ValueError(prefix.error)
        if require_token and not self.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")


# Global config instance
config = Config.from_env()
