"""
Notification Bridge - Forwards web notifications to the native notifier.

Architecture Decision: One-way typed channel
The page's ``window.Notification`` is replaced before any page script runs.
Every notification the page creates is posted, fire-and-forget, to the
``sendNotification`` web channel object. The host validates the message
against ``NotificationPayload`` and delivers it only when the user preference
AND the OS authorization both allow it.
"""

import logging

from pydantic import ValidationError
from PySide6.QtCore import QObject, Slot

from lobby.domain.models import NotificationPayload
from lobby.infra.config import Settings
from lobby.infra.os_hooks.base import Notifier

logger = logging.getLogger(__name__)

CHANNEL_NAME = "sendNotification"

# Runs at document creation in every frame, after qwebchannel.js.
# Messages posted before the channel is ready are queued, not lost.
BRIDGE_SCRIPT = """
(function () {
    if (window.__lobbyNotificationBridge) {
        return;
    }
    window.__lobbyNotificationBridge = true;

    var pending = [];
    var host = null;

    function post(payload) {
        if (host) {
            host.postMessage(payload);
        } else {
            pending.push(payload);
        }
    }

    if (typeof QWebChannel !== "undefined" && window.qt && qt.webChannelTransport) {
        new QWebChannel(qt.webChannelTransport, function (channel) {
            host = channel.objects.%(channel)s;
            pending.splice(0).forEach(function (payload) {
                host.postMessage(payload);
            });
        });
    }

    function BridgedNotification(title, options) {
        var body = (options && options.body) || "";
        this.title = title;
        this.body = body;
        post({ title: title, body: body });
    }
    BridgedNotification.permission = "granted";
    BridgedNotification.requestPermission = function (callback) {
        if (callback) {
            callback("granted");
        }
        return Promise.resolve("granted");
    };
    BridgedNotification.prototype.close = function () {};
    BridgedNotification.prototype.addEventListener = function () {};
    BridgedNotification.prototype.removeEventListener = function () {};

    window.Notification = BridgedNotification;
})();
""" % {"channel": CHANNEL_NAME}


class NotificationBridge(QObject):
    """
    Host side of the ``sendNotification`` channel.

    Registered on the page's QWebChannel; ``postMessage`` is the only method
    the page can call.
    """

    def __init__(self, notifier: Notifier, settings: Settings, parent=None):
        super().__init__(parent)
        self.notifier = notifier
        self.settings = settings

    @Slot("QVariant")
    def postMessage(self, message):
        self.handle_message(message)

    def handle_message(self, message) -> bool:
        """
        Validate and deliver one bridged message.

        Returns:
            True if a native notification was posted
        """
        if not isinstance(message, dict):
            logger.debug("Dropping non-object notification message: %r", message)
            return False

        try:
            payload = NotificationPayload.model_validate(message)
        except ValidationError as e:
            logger.debug("Dropping malformed notification message: %s", e.errors())
            return False

        if not self.settings.preferences.notifications_enabled:
            logger.debug("Notifications disabled by user; dropping %r", payload.title)
            return False

        if not self.notifier.authorization_status.is_authorized:
            logger.debug("Notifications not authorized by OS; dropping %r", payload.title)
            return False

        self.notifier.deliver(payload.title, payload.body)
        return True
