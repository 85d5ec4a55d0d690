"""
Lobby Application - Process-lifetime context and main UI entry point.

Architecture Decision: Presentation Layer
This layer only wires things together. Browser policy, notification delivery,
window lifecycle and updates are delegated to Services; OS specifics to
infra.os_hooks. Every long-lived handle is a field of LobbyApp, created at
startup and torn down on quit.
"""

import logging
import platform
import sys
from typing import Optional

from packaging.version import InvalidVersion
from PySide6.QtCore import QEvent, QObject, Qt, QTimer, QUrl
from PySide6.QtGui import QAction, QColor, QDesktopServices, QIcon, QKeySequence, QPixmap
from PySide6.QtWidgets import QApplication, QMenuBar, QMessageBox

from lobby.domain.models import WindowState
from lobby.infra.config import (
    APP_NAME, APP_VERSION, TRUSTED_DOMAIN, UPDATE_CHECK_INTERVAL_HOURS, UPDATE_FEED_URL,
    Settings, get_settings,
)
from lobby.infra.os_hooks import create_login_item_service, create_notifier
from lobby.services import NavigationPolicy, NetworkMonitor, NotificationBridge, Updater, UpdateChecker, WindowController
from lobby.services.updater import AppcastItem
from lobby.utils import get_resource_path
from .main_window import MainWindow
from .settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


def build_update_prompt(item: AppcastItem, parent=None):
    """
    Returns:
        (message box, download button, release-notes button or None)
    """
    box = QMessageBox(parent)
    box.setIcon(QMessageBox.Information)
    box.setWindowTitle("Update Available")
    box.setText(f"{APP_NAME} {item.version} is available. You have {APP_VERSION}.")
    download_btn = box.addButton("Download", QMessageBox.AcceptRole)
    notes_btn = None
    if item.release_notes_url:
        notes_btn = box.addButton("Release Notes", QMessageBox.HelpRole)
    box.addButton("Later", QMessageBox.RejectRole)
    return box, download_btn, notes_btn


class _QuitWatcher(QObject):
    """Marks the window controller as quitting before Qt closes windows"""

    def __init__(self, controller: WindowController, parent=None):
        super().__init__(parent)
        self.controller = controller

    def eventFilter(self, obj, event):
        if event.type() == QEvent.Quit:
            self.controller.prepare_quit()
        return False


class LobbyApp:
    """
    Main application class owning the window and every background service.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.app = QApplication.instance() or QApplication(sys.argv)
        self.app.setApplicationName(APP_NAME)
        self.app.setApplicationVersion(APP_VERSION)
        self.app.setOrganizationDomain(TRUSTED_DOMAIN)
        self.app.setQuitOnLastWindowClosed(False)  # Keep running when the window closes

        # Set application icon (for dock, taskbar, tray)
        app_icon = self._create_icon()
        self.app.setWindowIcon(app_icon)

        # Settings
        self.settings = settings or get_settings()

        # OS services
        self.notifier = create_notifier(app_icon)
        self.login_items = create_login_item_service()

        # Services
        self.policy = NavigationPolicy(TRUSTED_DOMAIN)
        self.bridge = NotificationBridge(self.notifier, self.settings)
        self.network_monitor = NetworkMonitor()
        self.updater: Optional[Updater] = None

        # Windows
        self.main_window = MainWindow(self.policy, self.bridge)
        self.window_controller = WindowController(self.main_window)
        self.main_window.controller = self.window_controller
        self.settings_window: Optional[SettingsDialog] = None

        self.quit_watcher = _QuitWatcher(self.window_controller)
        self.app.installEventFilter(self.quit_watcher)

        # Connect signals
        self._connect_signals()

        # Setup UI
        self.setup_menu()

        # Initialize on startup
        QTimer.singleShot(0, self._async_init)

    def _create_icon(self):
        """Create the application icon from assets"""
        icon_path = get_resource_path("lobby/assets/icon.png")
        if icon_path.exists():
            return QIcon(str(icon_path))

        # Fallback if icon not found
        pixmap = QPixmap(16, 16)
        pixmap.fill(QColor("#6a4cff"))
        return QIcon(pixmap)

    def _connect_signals(self):
        """Connect service signals to UI handlers"""
        self.app.applicationStateChanged.connect(self._on_application_state_changed)
        self.app.aboutToQuit.connect(self._shutdown)

        self.network_monitor.reconnected.connect(self.main_window.reload)
        self.main_window.navigation_state_changed.connect(self._update_navigation_actions)

    def _async_init(self):
        """Startup tasks; each one is optional and may fail on its own"""
        self.window_controller.show()
        self.main_window.load_home()

        self.notifier.request_authorization()

        self.login_items.sync(self.settings.preferences.launch_at_login)

        self._start_updater()

        self.network_monitor.start()

    def _start_updater(self):
        try:
            checker = UpdateChecker(UPDATE_FEED_URL, APP_VERSION)
        except InvalidVersion as e:
            logger.error("Updater disabled: %s", e)
            return

        self.updater = Updater(checker, UPDATE_CHECK_INTERVAL_HOURS)
        self.updater.update_available.connect(self._on_update_available)
        self.updater.up_to_date.connect(self._on_up_to_date)
        self.updater.check_failed.connect(self._on_update_check_failed)
        self.updater.start()

    def setup_menu(self):
        """Setup the application menu bar"""
        # On macOS a parentless menu bar stays available while the window is hidden
        if platform.system() == "Darwin":
            self.menu_bar = QMenuBar()
        else:
            self.menu_bar = self.main_window.menuBar()

        app_menu = self.menu_bar.addMenu(APP_NAME)

        # Settings
        settings_action = QAction("Settings...", self.app)
        settings_action.setMenuRole(QAction.PreferencesRole)
        settings_action.setShortcut(QKeySequence.Preferences)
        settings_action.triggered.connect(self._show_settings)
        app_menu.addAction(settings_action)

        # Updates
        self.update_action = QAction("Check for Updates...", self.app)
        self.update_action.setMenuRole(QAction.ApplicationSpecificRole)
        self.update_action.triggered.connect(self._check_for_updates)
        app_menu.addAction(self.update_action)

        # Login item
        self.login_action = QAction("Launch at Login", self.app)
        self.login_action.setCheckable(True)
        self.login_action.setChecked(self.settings.preferences.launch_at_login)
        self.login_action.toggled.connect(self._on_launch_at_login_toggled)
        app_menu.addAction(self.login_action)

        app_menu.addSeparator()

        # Quit Action
        quit_action = QAction(f"Quit {APP_NAME}", self.app)
        quit_action.setMenuRole(QAction.QuitRole)
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self._quit_application)
        app_menu.addAction(quit_action)

        view_menu = self.menu_bar.addMenu("View")

        reload_action = QAction("Reload", self.app)
        reload_action.setShortcut(QKeySequence.Refresh)
        reload_action.triggered.connect(self.main_window.reload)
        view_menu.addAction(reload_action)

        self.back_action = QAction("Back", self.app)
        self.back_action.setShortcut(QKeySequence.Back)
        self.back_action.setEnabled(False)
        self.back_action.triggered.connect(self.main_window.go_back)
        view_menu.addAction(self.back_action)

        self.forward_action = QAction("Forward", self.app)
        self.forward_action.setShortcut(QKeySequence.Forward)
        self.forward_action.setEnabled(False)
        self.forward_action.triggered.connect(self.main_window.go_forward)
        view_menu.addAction(self.forward_action)

        window_menu = self.menu_bar.addMenu("Window")
        self.show_action = QAction(f"Show {APP_NAME}", self.app)
        self.show_action.setEnabled(self.window_controller.state == WindowState.HIDDEN)
        self.show_action.triggered.connect(self.window_controller.show)
        window_menu.addAction(self.show_action)
        self.window_controller.state_changed.connect(self._on_window_state_changed)

    def _on_window_state_changed(self, state: WindowState):
        self.show_action.setEnabled(state == WindowState.HIDDEN)

    def _update_navigation_actions(self, can_go_back: bool, can_go_forward: bool):
        self.back_action.setEnabled(can_go_back)
        self.forward_action.setEnabled(can_go_forward)

    def _show_settings(self):
        """Show settings dialog"""
        if not self.settings_window:
            self.settings_window = SettingsDialog(self.settings, self.notifier)
        self.settings_window.show()
        self.settings_window.raise_()
        self.settings_window.activateWindow()

    def _on_launch_at_login_toggled(self, checked: bool):
        self.settings.update_preferences(launch_at_login=checked)
        self.login_items.sync(checked)

    def _check_for_updates(self):
        if self.updater is None:
            logger.info("Manual update check ignored; updater not running")
            return
        self.updater.check_now()

    def _on_update_available(self, item: AppcastItem, user_initiated: bool):
        box, download_btn, notes_btn = build_update_prompt(item, self.main_window)
        box.exec()

        clicked = box.clickedButton()
        if clicked is download_btn and item.download_url:
            QDesktopServices.openUrl(QUrl(item.download_url))
        elif notes_btn is not None and clicked is notes_btn:
            QDesktopServices.openUrl(QUrl(item.release_notes_url))

    def _on_up_to_date(self, user_initiated: bool):
        if user_initiated:
            QMessageBox.information(
                self.main_window, "You're up to date!",
                f"{APP_NAME} {APP_VERSION} is currently the newest version available."
            )

    def _on_update_check_failed(self, message: str, user_initiated: bool):
        if user_initiated:
            QMessageBox.information(
                self.main_window, "Update Error",
                "Unable to check for updates. Please try again later."
            )

    def _on_application_state_changed(self, state):
        """Dock click: reshow the window when nothing is visible"""
        if state != Qt.ApplicationActive:
            return
        has_visible_windows = any(window.isVisible() for window in self.app.topLevelWindows())
        self.window_controller.handle_reopen(has_visible_windows)

    def _shutdown(self):
        """Stop background services"""
        self.window_controller.prepare_quit()
        self.network_monitor.stop()
        if self.updater:
            self.updater.stop()

    def _quit_application(self):
        """Quit the application"""
        self.window_controller.prepare_quit()
        self.app.quit()

    def run(self):
        """Run the application"""
        return self.app.exec()
