"""UI layer - PySide6 GUI components"""

from .application import LobbyApp
from .main_window import MainWindow
from .settings_dialog import SettingsDialog

__all__ = ["LobbyApp", "MainWindow", "SettingsDialog"]
