"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations

The remote endpoint, trusted domain and update feed are fixed constants.
Only paths, log level and user preferences are configurable.
"""

import os
from pathlib import Path
from typing import Optional
import logging
import yaml

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from lobby.domain.models import UserPreferences

logger = logging.getLogger(__name__)

APP_NAME = "Lobby"
APP_VERSION = "1.0.0"
BUNDLE_IDENTIFIER = "ai.thelobby.desktop"

HOME_URL = "https://thelobby.ai/lobby/Urgent"
TRUSTED_DOMAIN = "thelobby.ai"
UPDATE_FEED_URL = "https://thelobby.ai/desktop/appcast.xml"
UPDATE_CHECK_INTERVAL_HOURS = 24

NOTIFICATION_SETTINGS_URL = "x-apple.systempreferences:com.apple.notifications-Settings"

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800


class Settings(BaseSettings):
    """
    Application settings with multiple sources:
    1. Default values (hardcoded)
    2. YAML config file (preferences only)
    3. Environment variables (highest priority)
    """
    model_config = SettingsConfigDict(
        env_prefix='LOBBY_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Application paths
    app_name: str = APP_NAME
    config_dir: Optional[Path] = None

    # Logging
    log_level: str = "INFO"

    # User preferences
    preferences: UserPreferences = UserPreferences()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        self._load_yaml_config()

    @property
    def config_file(self) -> Path:
        return self.config_dir / "settings.yaml"

    @property
    def log_dir(self) -> Path:
        return self.config_dir / "logs"

    def _init_paths(self):
        """Initialize default paths based on OS"""
        if self.config_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.config'
            self.config_dir = base / self.app_name.lower()

        self.config_dir.mkdir(parents=True, exist_ok=True)

    def _load_yaml_config(self):
        """Load preferences from the YAML file, keeping defaults if it is unreadable"""
        if not self.config_file.exists():
            return

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
            if config_data:
                self.preferences = UserPreferences(**config_data)
        except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.config_file, e)

    def save_preferences(self):
        """Save current preferences to YAML file"""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            yaml.dump(self.preferences.model_dump(), f, default_flow_style=False)

    def update_preferences(self, **changes) -> UserPreferences:
        """Apply changes to the preferences and persist them"""
        self.preferences = self.preferences.model_copy(update=changes)
        try:
            self.save_preferences()
        except OSError as e:
            logger.error("Failed to save preferences: %s", e)
        return self.preferences


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings from file"""
    global _settings
    _settings = Settings()
    return _settings
