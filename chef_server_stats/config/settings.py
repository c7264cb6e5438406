"""Environment settings."""

import os
from typing import Optional


class Settings:
    """Application settings from environment variables."""

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> str:
        """
        Get environment variable value.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            str: Environment variable value, empty if unset
        """
        return os.getenv(key, default) or ""

    @staticmethod
    def config_path() -> Optional[str]:
        """Config file named by CHEF_STATS_CONFIG, if any."""
        return Settings.get("CHEF_STATS_CONFIG") or None

    @staticmethod
    def log_level() -> Optional[str]:
        """Explicit LOG_LEVEL override, if any. Unknown level names are ignored."""
        level = Settings.get("LOG_LEVEL").upper()
        if level in ("DEBUG", "INFO", "WARNING", "ERROR"):
            return level
        return None
