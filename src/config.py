# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - StoreConfig (dataclass)
#     backend: str       (default "json")   → "json" or "memory"
#     path: str          (default "preferences/editor_prefs.json")
#
# - AppConfig (dataclass)
#     store: StoreConfig
#     application_name: str  (default "")   → empty means "use script name"
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from src.config import get_config
#   config = get_config()
#   print(config.store.path)
#   print(config.application_name)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


SUPPORTED_BACKENDS = ("json", "memory")


@dataclass
class StoreConfig:
    """Backing store configuration."""
    backend: str = "json"
    path: str = "preferences/editor_prefs.json"

    def __post_init__(self):
        if self.backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unknown preference backend '{self.backend}' "
                f"(expected one of {', '.join(SUPPORTED_BACKENDS)})"
            )


@dataclass
class AppConfig:
    """Main application configuration."""
    store: StoreConfig = field(default_factory=StoreConfig)
    application_name: str = ""


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    store_config = StoreConfig(
        backend=os.getenv("PREFS_BACKEND", "json").strip().lower(),
        path=os.getenv("PREFS_STORE_PATH", "preferences/editor_prefs.json")
    )

    _config_instance = AppConfig(
        store=store_config,
        application_name=os.getenv("PREFS_APPLICATION_NAME", "").strip()
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None
