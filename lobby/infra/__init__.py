"""Infrastructure layer - Configuration, logging and OS integration"""

from .config import Settings, get_settings, reload_settings
from .logging_setup import configure_logging

__all__ = ["Settings", "get_settings", "reload_settings", "configure_logging"]
