"""OS-specific notification and login-item services"""

from .base import LoginItemError, LoginItemService, Notifier
from .factory import create_login_item_service, create_notifier

__all__ = [
    "LoginItemError",
    "LoginItemService",
    "Notifier",
    "create_login_item_service",
    "create_notifier",
]
