"""
Base classes for OS notification and login-item services.

Architecture Decision: Observer Pattern + Factory Pattern
Defines abstract interfaces that platform-specific implementations must follow.
"""

import logging
from abc import ABC, ABCMeta, abstractmethod

from PySide6.QtCore import QObject, Qt, Signal

from lobby.domain.models import AuthorizationStatus

logger = logging.getLogger(__name__)


class QABCMeta(type(QObject), ABCMeta):
    """Combined metaclass for QObject and ABC"""
    pass


class Notifier(QObject, metaclass=QABCMeta):
    """
    Abstract base class for delivering native notifications.

    OS callbacks may arrive on arbitrary threads. Implementations report them
    through ``_status_received`` which is connected with a queued connection,
    so ``authorization_status`` only ever changes on the main thread.
    """

    # Signals
    authorization_changed = Signal(object)  # AuthorizationStatus
    _status_received = Signal(object)

    def __init__(self):
        super().__init__()
        self._status = AuthorizationStatus.NOT_DETERMINED
        self._status_received.connect(self._apply_status, Qt.QueuedConnection)

    @property
    def authorization_status(self) -> AuthorizationStatus:
        return self._status

    def _apply_status(self, status: AuthorizationStatus):
        if status == self._status:
            return
        logger.info("Notification authorization: %s", status.value)
        self._status = status
        self.authorization_changed.emit(status)

    def request_authorization(self):
        """Ask the OS for permission to post notifications"""
        raise NotImplementedError("Subclasses must implement request_authorization")

    def refresh_authorization(self):
        """Re-query the OS permission; result arrives via authorization_changed"""
        raise NotImplementedError("Subclasses must implement refresh_authorization")

    def deliver(self, title: str, body: str):
        """Post one notification with default sound"""
        raise NotImplementedError("Subclasses must implement deliver")


class LoginItemError(Exception):
    """Raised when the OS refuses to change the login-item registration"""


class LoginItemService(ABC):
    """
    Registers the app to start at user login.
    """

    @abstractmethod
    def is_registered(self) -> bool:
        ...

    @abstractmethod
    def register(self):
        ...

    @abstractmethod
    def unregister(self):
        ...

    def sync(self, enabled: bool) -> bool:
        """
        Make the OS registration match ``enabled``.

        At most one register/unregister call is made, none when the OS
        already reflects the desired state. Failures are logged, never raised.

        Returns:
            True if the registration now matches ``enabled``
        """
        try:
            registered = self.is_registered()
            if enabled and not registered:
                self.register()
                logger.info("Registered as login item")
            elif not enabled and registered:
                self.unregister()
                logger.info("Unregistered login item")
            return True
        except LoginItemError as e:
            logger.warning("Login item update failed: %s", e)
        except OSError as e:
            logger.warning("Login item update failed: %s", e)
        return False
