"""Domain layer - Preference and message models"""

from .models import (
    AuthorizationStatus,
    NavigationDecision,
    NavigationRequest,
    NotificationPayload,
    UserPreferences,
    WindowState,
)

__all__ = [
    "AuthorizationStatus",
    "NavigationDecision",
    "NavigationRequest",
    "NotificationPayload",
    "UserPreferences",
    "WindowState",
]
