"""
macOS login item using pyobjc.

Uses SMAppService (macOS 13+), which only works when running from a signed
app bundle. Outside a bundle every call fails and is logged by the caller.
"""

import logging

from .base import LoginItemError, LoginItemService

logger = logging.getLogger(__name__)

try:
    from ServiceManagement import SMAppService, SMAppServiceStatusEnabled
    HAS_PYOBJC = True
except ImportError:
    HAS_PYOBJC = False


class MacOSLoginItem(LoginItemService):
    """
    Registers the main app bundle with SMAppService.
    """

    def __init__(self):
        self._service = None
        if not HAS_PYOBJC:
            logger.warning("pyobjc not installed. Install with: pip install pyobjc-framework-ServiceManagement")
            return
        self._service = SMAppService.mainAppService()

    def _require_service(self):
        if self._service is None:
            raise LoginItemError("ServiceManagement is not available")
        return self._service

    def is_registered(self) -> bool:
        if self._service is None:
            return False
        return self._service.status() == SMAppServiceStatusEnabled

    def register(self):
        ok, error = self._require_service().registerAndReturnError_(None)
        if not ok:
            raise LoginItemError(f"register failed: {error}")

    def unregister(self):
        ok, error = self._require_service().unregisterAndReturnError_(None)
        if not ok:
            raise LoginItemError(f"unregister failed: {error}")
