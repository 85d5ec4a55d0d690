"""
macOS notifier using pyobjc.

Posts through UNUserNotificationCenter. Completion handlers run on a private
queue, so results are forwarded through the queued ``_status_received`` signal.
"""

import logging
import uuid

from lobby.domain.models import AuthorizationStatus
from .base import Notifier

logger = logging.getLogger(__name__)

try:
    import objc
    from Foundation import NSObject
    from UserNotifications import (
        UNAuthorizationOptionAlert,
        UNAuthorizationOptionBadge,
        UNAuthorizationOptionSound,
        UNAuthorizationStatusAuthorized,
        UNAuthorizationStatusDenied,
        UNAuthorizationStatusNotDetermined,
        UNMutableNotificationContent,
        UNNotificationPresentationOptionBanner,
        UNNotificationPresentationOptionSound,
        UNNotificationRequest,
        UNNotificationSound,
        UNUserNotificationCenter,
    )
    HAS_PYOBJC = True
except ImportError:
    HAS_PYOBJC = False


def status_from_native(native_status) -> AuthorizationStatus:
    """Map UNAuthorizationStatus to our enum (provisional counts as denied)"""
    if not HAS_PYOBJC:
        return AuthorizationStatus.DENIED
    if native_status == UNAuthorizationStatusAuthorized:
        return AuthorizationStatus.AUTHORIZED
    if native_status == UNAuthorizationStatusNotDetermined:
        return AuthorizationStatus.NOT_DETERMINED
    return AuthorizationStatus.DENIED


class MacOSNotifier(Notifier):
    """
    Delivers notifications via the macOS notification center.
    """

    def __init__(self):
        super().__init__()
        self._center = None
        self._delegate = None

        if not HAS_PYOBJC:
            logger.warning("pyobjc not installed. Install with: pip install pyobjc-framework-UserNotifications")
            return

        try:
            self._center = UNUserNotificationCenter.currentNotificationCenter()
            # Show banners even while the app is frontmost
            self._delegate = _NotificationCenterDelegate.alloc().init()
            self._center.setDelegate_(self._delegate)
        except Exception as e:
            # Raised by the framework when not running from an app bundle
            logger.warning("Notification center unavailable: %s", e)
            self._center = None

    def request_authorization(self):
        if self._center is None:
            self._status_received.emit(AuthorizationStatus.DENIED)
            return

        options = UNAuthorizationOptionAlert | UNAuthorizationOptionBadge | UNAuthorizationOptionSound

        def handler(granted, error):
            if error is not None:
                logger.warning("Notification authorization error: %s", error)
            elif not granted:
                logger.info("Notifications not allowed by the user")
            self._status_received.emit(
                AuthorizationStatus.AUTHORIZED if granted else AuthorizationStatus.DENIED
            )

        self._center.requestAuthorizationWithOptions_completionHandler_(options, handler)

    def refresh_authorization(self):
        if self._center is None:
            self._status_received.emit(AuthorizationStatus.DENIED)
            return

        def handler(settings):
            self._status_received.emit(status_from_native(settings.authorizationStatus()))

        self._center.getNotificationSettingsWithCompletionHandler_(handler)

    def deliver(self, title: str, body: str):
        if self._center is None:
            return

        content = UNMutableNotificationContent.alloc().init()
        content.setTitle_(title)
        content.setBody_(body)
        content.setSound_(UNNotificationSound.defaultSound())

        request = UNNotificationRequest.requestWithIdentifier_content_trigger_(
            str(uuid.uuid4()), content, None
        )

        def handler(error):
            if error is not None:
                logger.warning("Failed to post notification: %s", error)

        self._center.addNotificationRequest_withCompletionHandler_(request, handler)


if HAS_PYOBJC:
    class _NotificationCenterDelegate(NSObject, protocols=[objc.protocolNamed("UNUserNotificationCenterDelegate")]):
        """Presents notifications as banner + sound while the app is active"""

        def userNotificationCenter_willPresentNotification_withCompletionHandler_(
            self, center, notification, completion_handler
        ):
            completion_handler(UNNotificationPresentationOptionBanner | UNNotificationPresentationOptionSound)
