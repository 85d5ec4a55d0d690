"""
Web Page - QWebEnginePage wired to the navigation policy and notification bridge.
"""

import logging
from typing import Callable

from PySide6.QtCore import QFile, QIODevice, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWebChannel import QWebChannel
from PySide6.QtWebEngineCore import QWebEnginePage, QWebEngineProfile, QWebEngineScript

from lobby.domain.models import NavigationDecision, NavigationRequest
from lobby.services.navigation_policy import NavigationPolicy
from lobby.services.notification_bridge import BRIDGE_SCRIPT, CHANNEL_NAME, NotificationBridge

logger = logging.getLogger(__name__)
web_logger = logging.getLogger("lobby.web")

WEB_CHANNEL_JS = ":/qtwebchannel/qwebchannel.js"


def load_web_channel_js() -> str:
    """Read the qwebchannel.js client bundled with Qt WebChannel"""
    source = QFile(WEB_CHANNEL_JS)
    if not source.open(QIODevice.ReadOnly):
        logger.warning("Cannot read %s; notification bridge disabled", WEB_CHANNEL_JS)
        return ""
    try:
        return bytes(source.readAll()).decode("utf-8")
    finally:
        source.close()


def build_bridge_script() -> QWebEngineScript:
    """Notification shim, injected before page scripts in every frame"""
    script = QWebEngineScript()
    script.setName("lobby-notification-bridge")
    script.setSourceCode(load_web_channel_js() + BRIDGE_SCRIPT)
    script.setInjectionPoint(QWebEngineScript.InjectionPoint.DocumentCreation)
    script.setRunsOnSubFrames(True)
    return script


def open_externally(url: QUrl):
    logger.info("Opening in default browser: %s", url.toString())
    if not QDesktopServices.openUrl(url):
        logger.warning("Default browser refused %s", url.toString())


class LobbyWebPage(QWebEnginePage):
    """
    Page that applies the navigation policy and exposes the bridge.
    """

    _console_levels = {
        QWebEnginePage.JavaScriptConsoleMessageLevel.InfoMessageLevel: logging.DEBUG,
        QWebEnginePage.JavaScriptConsoleMessageLevel.WarningMessageLevel: logging.INFO,
        QWebEnginePage.JavaScriptConsoleMessageLevel.ErrorMessageLevel: logging.WARNING,
    }

    def __init__(
        self,
        profile: QWebEngineProfile,
        policy: NavigationPolicy,
        bridge: NotificationBridge,
        parent=None,
        external_opener: Callable[[QUrl], None] = open_externally,
    ):
        super().__init__(profile, parent)
        self.policy = policy
        self.bridge = bridge
        self.external_opener = external_opener

        self.channel = QWebChannel(self)
        self.channel.registerObject(CHANNEL_NAME, bridge)
        self.setWebChannel(self.channel)

        scripts = self.scripts()
        if not scripts.find("lobby-notification-bridge"):
            scripts.insert(build_bridge_script())

    def acceptNavigationRequest(self, url: QUrl, nav_type, is_main_frame: bool) -> bool:
        request = NavigationRequest(url=url.toString(), is_main_frame=is_main_frame)
        if self.policy.decide(request) == NavigationDecision.OPEN_EXTERNALLY:
            self.external_opener(url)
            return False
        return True

    def createWindow(self, window_type):
        # The new page only reports its first URL, then goes away
        return _NewWindowPage(self.profile(), self.policy, self.external_opener, self)

    def javaScriptConsoleMessage(self, level, message, line_number, source_id):
        web_logger.log(self._console_levels.get(level, logging.DEBUG), "%s:%s %s", source_id, line_number, message)


class _NewWindowPage(QWebEnginePage):
    """
    Target of target=_blank / window.open. Never shown; hands the first
    requested URL to the default browser exactly once.
    """

    def __init__(self, profile, policy: NavigationPolicy, external_opener, parent=None):
        super().__init__(profile, parent)
        self.policy = policy
        self.external_opener = external_opener
        self.handled = False

    def acceptNavigationRequest(self, url: QUrl, nav_type, is_main_frame: bool) -> bool:
        if self.handled:
            return False
        self.handled = True

        request = NavigationRequest(url=url.toString(), is_main_frame=True, opens_new_window=True)
        if self.policy.decide(request) == NavigationDecision.OPEN_EXTERNALLY:
            self.external_opener(url)
        self.deleteLater()
        return False
