"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
The page talks to the host through an untyped JavaScript channel. Pydantic gives
an explicit schema for what the host accepts, so malformed messages are rejected
in one place instead of being checked field by field.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class UserPreferences(BaseModel):
    """
    User configuration persisted between launches.

    The OS notification permission is NOT stored here. It is queried live and
    combined with ``notifications_enabled`` at delivery time.
    """
    model_config = ConfigDict(from_attributes=True)

    notifications_enabled: bool = Field(default=True, description="Deliver notifications sent by the page")
    launch_at_login: bool = Field(default=True, description="Start the app when the user logs in")


class NotificationPayload(BaseModel):
    """
    A notification forwarded from the page over the ``sendNotification`` channel.

    Example: {"title": "New message", "body": "Anna joined the lobby"}
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    title: StrictStr
    body: StrictStr


class AuthorizationStatus(Enum):
    """OS-level permission to show notifications"""
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    AUTHORIZED = "authorized"

    @property
    def is_authorized(self) -> bool:
        return self is AuthorizationStatus.AUTHORIZED


class NavigationDecision(Enum):
    ALLOW = "allow"
    OPEN_EXTERNALLY = "open_externally"


@dataclass(frozen=True)
class NavigationRequest:
    """An outgoing navigation from the embedded browser view."""
    url: str
    is_main_frame: bool
    opens_new_window: bool = False


class WindowState(Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"
