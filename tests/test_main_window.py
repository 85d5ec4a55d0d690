"""
Tests for the browser window and the update prompt.
"""

import pytest
from packaging.version import Version
from PySide6.QtCore import QSize
from PySide6.QtWidgets import QMessageBox

from conftest import FakeNotifier
from lobby.infra.config import APP_NAME, TRUSTED_DOMAIN, WINDOW_HEIGHT, WINDOW_WIDTH, Settings
from lobby.services.navigation_policy import NavigationPolicy
from lobby.services.notification_bridge import NotificationBridge
from lobby.services.updater import AppcastItem
from lobby.ui.application import build_update_prompt
from lobby.ui.main_window import MainWindow


@pytest.fixture(scope="module")
def window(qapp, tmp_path_factory):
    # One window per module: the persistent profile is shared by name
    settings = Settings(config_dir=tmp_path_factory.mktemp("config"))
    bridge = NotificationBridge(FakeNotifier(), settings)
    window = MainWindow(NavigationPolicy(TRUSTED_DOMAIN), bridge)
    yield window
    window.deleteLater()


class TestMainWindow:

    def test_window_is_not_resizable(self, window):
        expected = QSize(WINDOW_WIDTH, WINDOW_HEIGHT)
        assert window.minimumSize() == expected
        assert window.maximumSize() == expected

    def test_page_title_becomes_window_title(self, window):
        window._on_title_changed("Urgent - Lobby")
        assert window.windowTitle() == "Urgent - Lobby"

    def test_empty_page_title_falls_back_to_app_name(self, window):
        window._on_title_changed("Something")
        window._on_title_changed("")
        assert window.windowTitle() == APP_NAME


class TestUpdatePrompt:

    def test_release_notes_button_when_feed_links_notes(self, qtbot):
        item = AppcastItem(
            version=Version("1.2.0"), title="1.2.0",
            download_url="https://thelobby.ai/desktop/Lobby-1.2.0.zip",
            release_notes_url="https://thelobby.ai/desktop/notes/1.2.0",
        )

        box, download_btn, notes_btn = build_update_prompt(item)
        qtbot.addWidget(box)

        assert download_btn.text() == "Download"
        assert notes_btn is not None
        assert box.buttonRole(notes_btn) == QMessageBox.HelpRole
        assert "1.2.0" in box.text()

    def test_no_release_notes_button_without_link(self, qtbot):
        item = AppcastItem(version=Version("1.2.0"), title="1.2.0")

        box, _download_btn, notes_btn = build_update_prompt(item)
        qtbot.addWidget(box)

        assert notes_btn is None
        assert [b.text() for b in box.buttons()].count("Release Notes") == 0
