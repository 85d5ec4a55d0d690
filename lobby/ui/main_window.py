"""
Main Window - The single window hosting the embedded browser view.

Architecture Decision: Hide, don't destroy
Closing the window only hides it. The WindowController decides; the window
just forwards close events to it.
"""

import logging

from PySide6.QtCore import QUrl, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWebEngineCore import QWebEngineProfile
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QApplication, QMainWindow

from lobby.infra.config import APP_NAME, HOME_URL, WINDOW_HEIGHT, WINDOW_WIDTH
from lobby.services.navigation_policy import NavigationPolicy
from lobby.services.notification_bridge import NotificationBridge
from .web_page import LobbyWebPage

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Fixed-size browser window pointed at the Lobby web app.

    The window title follows the page title; back/forward availability is
    reported so the menu can reflect it.
    """

    # Signals
    navigation_state_changed = Signal(bool, bool)  # can_go_back, can_go_forward

    def __init__(self, policy: NavigationPolicy, bridge: NotificationBridge, parent=None):
        super().__init__(parent)
        self.controller = None

        self.setWindowTitle(APP_NAME)
        self.setFixedSize(WINDOW_WIDTH, WINDOW_HEIGHT)

        # Named profile keeps cookies and local storage between launches.
        # Owned by the app so it outlives the page.
        self.profile = QWebEngineProfile(APP_NAME.lower(), QApplication.instance())

        self.view = QWebEngineView(self)
        self.page = LobbyWebPage(self.profile, policy, bridge, self.view)
        self.view.setPage(self.page)
        self.setCentralWidget(self.view)

        self._connect_signals()
        self._center_on_screen()

    def _connect_signals(self):
        self.view.loadFinished.connect(self._on_load_finished)
        self.view.titleChanged.connect(self._on_title_changed)
        self.view.urlChanged.connect(lambda _url: self._emit_navigation_state())

    def _center_on_screen(self):
        screen = QGuiApplication.primaryScreen()
        if screen is None:
            return
        frame = self.frameGeometry()
        frame.moveCenter(screen.availableGeometry().center())
        self.move(frame.topLeft())

    def load_home(self):
        logger.info("Loading %s", HOME_URL)
        self.view.load(QUrl(HOME_URL))

    def reload(self):
        self.view.reload()

    def go_back(self):
        self.view.back()

    def go_forward(self):
        self.view.forward()

    def _on_load_finished(self, ok: bool):
        if not ok:
            logger.warning("Page failed to load: %s", self.view.url().toString())
        self._emit_navigation_state()

    def _on_title_changed(self, title: str):
        self.setWindowTitle(title or APP_NAME)

    def _emit_navigation_state(self):
        history = self.view.history()
        self.navigation_state_changed.emit(history.canGoBack(), history.canGoForward())

    def closeEvent(self, event):
        """Hide instead of close unless the app is quitting"""
        if self.controller is None or self.controller.handle_close():
            event.accept()
        else:
            event.ignore()
