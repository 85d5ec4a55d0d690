"""
Fallback notifier for Windows and Linux using the Qt system tray.
"""

import logging

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QSystemTrayIcon

from lobby.domain.models import AuthorizationStatus
from .base import Notifier

logger = logging.getLogger(__name__)


class TrayNotifier(Notifier):
    """
    Shows notifications as tray balloons.

    There is no permission prompt on these platforms; notifications count as
    authorized whenever the desktop has a tray that supports messages.
    """

    MESSAGE_TIMEOUT_MS = 5000

    def __init__(self, icon: QIcon = None):
        super().__init__()
        self._icon = icon
        self._tray = None

    def _current_status(self) -> AuthorizationStatus:
        if QSystemTrayIcon.isSystemTrayAvailable() and QSystemTrayIcon.supportsMessages():
            return AuthorizationStatus.AUTHORIZED
        return AuthorizationStatus.DENIED

    def request_authorization(self):
        self.refresh_authorization()

    def refresh_authorization(self):
        self._status_received.emit(self._current_status())

    def deliver(self, title: str, body: str):
        if self._tray is None:
            self._tray = QSystemTrayIcon(self._icon or QIcon(), self)
            self._tray.setToolTip("Lobby")
            self._tray.show()
        self._tray.showMessage(title, body, QSystemTrayIcon.Information, self.MESSAGE_TIMEOUT_MS)
