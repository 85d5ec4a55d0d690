"""
Pytest configuration and fixtures.
"""

import os
import sys
from pathlib import Path
import pytest

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
# Chromium cannot sandbox itself inside most CI containers
os.environ.setdefault("QTWEBENGINE_DISABLE_SANDBOX", "1")
os.environ.setdefault("QTWEBENGINE_CHROMIUM_FLAGS", "--no-sandbox")

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

# WebEngine must be loaded before pytest-qt creates the QApplication
import PySide6.QtWebEngineWidgets  # noqa: F401

from lobby.domain.models import AuthorizationStatus
from lobby.infra.config import Settings
from lobby.infra.os_hooks.base import LoginItemService, Notifier


class FakeNotifier(Notifier):
    """Records deliveries instead of talking to the OS"""

    def __init__(self, status=AuthorizationStatus.AUTHORIZED):
        super().__init__()
        self.delivered = []
        self.refresh_count = 0
        self.set_status(status)

    def set_status(self, status):
        # Applied directly; the queued path is covered in test_notifier.py
        self._apply_status(status)

    def request_authorization(self):
        pass

    def refresh_authorization(self):
        self.refresh_count += 1

    def deliver(self, title, body):
        self.delivered.append((title, body))


class FakeLoginItem(LoginItemService):
    """In-memory login item that counts OS calls"""

    def __init__(self, registered=False, fail=False):
        self.registered = registered
        self.fail = fail
        self.register_calls = 0
        self.unregister_calls = 0

    def is_registered(self):
        return self.registered

    def register(self):
        self.register_calls += 1
        if self.fail:
            from lobby.infra.os_hooks.base import LoginItemError
            raise LoginItemError("denied")
        self.registered = True

    def unregister(self):
        self.unregister_calls += 1
        self.registered = False


@pytest.fixture
def settings(tmp_path):
    """Settings isolated in a temporary config directory"""
    return Settings(config_dir=tmp_path / "config")


@pytest.fixture
def notifier(qapp):
    return FakeNotifier()
