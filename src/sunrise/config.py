"""Configuration management for Sunrise.

This module provides centralized configuration loaded from environment variables.
Nothing is persisted; command-line flags override individual values.
"""

import os
from dataclasses import dataclass


@dataclass
class Config:
    """Application configuration.

    All settings can be overridden via environment variables with the
    SUNRISE_ prefix (e.g., SUNRISE_LOG_LEVEL).
    """

    # Inventory / launcher
    gcloud_binary: str = "gcloud"
    default_project: str | None = None

    # Logging Configuration
    log_level: str = "INFO"
    log_file: str | None = None
    enable_credential_scrubbing: bool = True

    # UI Configuration
    list_min_height: int = 5  # rows
    ui_overhead: int = 7  # title, margins, help text

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables.

        Environment variables:
            SUNRISE_GCLOUD_BINARY: Name or path of the gcloud executable
            SUNRISE_PROJECT: Project to open directly (skips project selection)
            SUNRISE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
            SUNRISE_LOG_FILE: Log file path (optional)
            SUNRISE_ENABLE_CREDENTIAL_SCRUBBING: Enable credential scrubbing (true/false)
            SUNRISE_LIST_MIN_HEIGHT: Minimum number of visible list rows
            SUNRISE_UI_OVERHEAD: Terminal rows reserved for title and help text

        Returns:
            Config instance with values from environment
        """
        return cls(
            gcloud_binary=os.getenv("SUNRISE_GCLOUD_BINARY", "gcloud"),
            default_project=os.getenv("SUNRISE_PROJECT") or None,
            log_level=os.getenv("SUNRISE_LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("SUNRISE_LOG_FILE"),
            enable_credential_scrubbing=os.getenv(
                "SUNRISE_ENABLE_CREDENTIAL_SCRUBBING", "true"
            ).lower()
            == "true",
            list_min_height=int(os.getenv("SUNRISE_LIST_MIN_HEIGHT", "5")),
            ui_overhead=int(os.getenv("SUNRISE_UI_OVERHEAD", "7")),
        )


# Global config instance (lazy-loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config instance (loads from environment on first call)
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
