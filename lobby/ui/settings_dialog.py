from PySide6.QtCore import Qt, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QCheckBox, QDialog, QDialogButtonBox, QFormLayout, QLabel, QPushButton, QVBoxLayout, QWidget
)

from lobby.domain.models import AuthorizationStatus
from lobby.infra.config import NOTIFICATION_SETTINGS_URL, Settings
from lobby.infra.os_hooks.base import Notifier


class SettingsDialog(QDialog):
    """
    Preference panel with a single notifications toggle.

    The toggle is disabled while the OS denies notifications. The live
    permission is polled each time the panel is shown; the panel never
    changes the OS permission itself.
    """

    def __init__(self, settings: Settings, notifier: Notifier, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setFixedWidth(300)

        self.settings = settings
        self.notifier = notifier

        self._setup_ui()
        self._load_data()

        self.notifier.authorization_changed.connect(self._apply_authorization)

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        form = QFormLayout()
        self.check_notifications = QCheckBox("Enable Notifications")
        self.check_notifications.toggled.connect(self._on_notifications_toggled)
        form.addRow(self.check_notifications)
        layout.addLayout(form)

        # Shown only while the OS denies notifications
        self.denied_panel = QWidget()
        denied_layout = QVBoxLayout(self.denied_panel)
        denied_layout.setContentsMargins(0, 4, 0, 0)
        denied_layout.setSpacing(4)

        self.denied_label = QLabel("Notifications are disabled in System Settings.")
        self.denied_label.setWordWrap(True)
        self.denied_label.setStyleSheet("color: gray;")
        denied_layout.addWidget(self.denied_label)

        self.btn_open_os_settings = QPushButton("Open Notification Settings")
        self.btn_open_os_settings.clicked.connect(self._open_os_settings)
        denied_layout.addWidget(self.btn_open_os_settings, alignment=Qt.AlignLeft)

        layout.addWidget(self.denied_panel)

        self.btns = QDialogButtonBox(QDialogButtonBox.Close)
        self.btns.rejected.connect(self.reject)
        layout.addWidget(self.btns)

        self._apply_authorization(self.notifier.authorization_status)

    def _load_data(self):
        self.check_notifications.blockSignals(True)
        self.check_notifications.setChecked(self.settings.preferences.notifications_enabled)
        self.check_notifications.blockSignals(False)

    def showEvent(self, event):
        super().showEvent(event)
        self._load_data()
        self.notifier.refresh_authorization()

    def _apply_authorization(self, status: AuthorizationStatus):
        allowed = status.is_authorized
        self.check_notifications.setEnabled(allowed)
        self.denied_panel.setVisible(not allowed)

    def _on_notifications_toggled(self, checked: bool):
        self.settings.update_preferences(notifications_enabled=checked)

    def _open_os_settings(self):
        QDesktopServices.openUrl(QUrl(NOTIFICATION_SETTINGS_URL))
