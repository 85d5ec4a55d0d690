"""Services layer - Browser glue and background integrations"""

from .navigation_policy import NavigationPolicy
from .network_monitor import NetworkMonitor
from .notification_bridge import NotificationBridge
from .updater import Updater, UpdateChecker
from .window_controller import WindowController

__all__ = ["NavigationPolicy", "NetworkMonitor", "NotificationBridge", "Updater", "UpdateChecker", "WindowController"]
