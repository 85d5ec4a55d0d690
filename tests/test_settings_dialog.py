"""
Tests for the notifications preference panel.
"""

import pytest

from lobby.domain.models import AuthorizationStatus
from lobby.ui.settings_dialog import SettingsDialog


@pytest.fixture
def dialog(qtbot, settings, notifier):
    dialog = SettingsDialog(settings, notifier)
    qtbot.addWidget(dialog)
    return dialog


def test_toggle_reflects_preference(dialog, settings):
    assert dialog.check_notifications.isChecked() == settings.preferences.notifications_enabled


def test_toggle_persists_preference(dialog, settings):
    dialog.check_notifications.setChecked(False)

    assert settings.preferences.notifications_enabled is False
    assert settings.config_file.exists()


def test_denied_permission_disables_toggle(dialog, notifier):
    notifier.set_status(AuthorizationStatus.DENIED)

    assert not dialog.check_notifications.isEnabled()
    assert not dialog.denied_panel.isHidden()


def test_authorized_permission_enables_toggle(dialog, notifier):
    notifier.set_status(AuthorizationStatus.DENIED)
    notifier.set_status(AuthorizationStatus.AUTHORIZED)

    assert dialog.check_notifications.isEnabled()
    assert dialog.denied_panel.isHidden()


def test_showing_polls_os_permission(dialog, notifier):
    before = notifier.refresh_count
    dialog.show()
    assert notifier.refresh_count == before + 1
    dialog.hide()


def test_queued_denial_disables_toggle(qtbot, dialog, notifier):
    """A status reported from an OS callback reaches the panel via the event loop."""
    with qtbot.waitSignal(notifier.authorization_changed):
        notifier._status_received.emit(AuthorizationStatus.DENIED)

    assert not dialog.check_notifications.isEnabled()
