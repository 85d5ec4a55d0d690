"""
Factory for creating platform-specific OS services.

Architecture Decision: Factory Pattern
Instantiates the correct notifier / login-item service based on the current OS.
"""

import logging
import platform

from PySide6.QtGui import QIcon

from .base import LoginItemService, Notifier

logger = logging.getLogger(__name__)


def create_notifier(icon: QIcon = None) -> Notifier:
    """
    Create the appropriate notifier for the current platform.

    Returns:
        Notifier instance for the current platform
    """
    if platform.system() == "Darwin":  # macOS
        from .macos_notifier import MacOSNotifier
        return MacOSNotifier()

    from .tray_notifier import TrayNotifier
    return TrayNotifier(icon)


def create_login_item_service() -> LoginItemService:
    """
    Create the appropriate login-item service for the current platform.

    Returns:
        LoginItemService instance for the current platform
    """
    system = platform.system()

    if system == "Windows":
        from .windows_login_item import WindowsLoginItem
        return WindowsLoginItem()
    elif system == "Linux":
        from .linux_login_item import LinuxLoginItem
        return LinuxLoginItem()
    elif system == "Darwin":  # macOS
        from .macos_login_item import MacOSLoginItem
        return MacOSLoginItem()
    else:
        # Fallback to an inert service for unsupported platforms
        class DummyLoginItem(LoginItemService):
            def is_registered(self) -> bool:
                return False

            def register(self):
                logger.warning("Login items not supported on %s", system)

            def unregister(self):
                pass

        return DummyLoginItem()
