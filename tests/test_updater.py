"""
Tests for appcast parsing and update checks.

The feed is served by httpx.MockTransport; nothing touches the network.
"""

import httpx
import pytest
from packaging.version import Version

from lobby.services.updater import (
    AppcastItem, UpdateCheckError, UpdateChecker, Updater, latest_item, parse_appcast
)

FEED_URL = "https://thelobby.ai/desktop/appcast.xml"

APPCAST = """<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0" xmlns:sparkle="http://www.andymatuschak.org/xml-namespaces/sparkle">
  <channel>
    <title>Lobby</title>
    <item>
      <title>Version 1.1.0</title>
      <sparkle:version>110</sparkle:version>
      <sparkle:shortVersionString>1.1.0</sparkle:shortVersionString>
      <sparkle:releaseNotesLink>https://thelobby.ai/desktop/notes/1.1.0</sparkle:releaseNotesLink>
      <enclosure url="https://thelobby.ai/desktop/Lobby-1.1.0.zip" length="1000" type="application/octet-stream"/>
    </item>
    <item>
      <title>Version 1.2.0</title>
      <enclosure url="https://thelobby.ai/desktop/Lobby-1.2.0.zip"
                 sparkle:shortVersionString="1.2.0" sparkle:version="120"
                 length="1000" type="application/octet-stream"/>
    </item>
    <item>
      <title>Broken</title>
      <sparkle:shortVersionString>not a version</sparkle:shortVersionString>
    </item>
    <item>
      <title>No version at all</title>
    </item>
  </channel>
</rss>
"""


def make_checker(current_version, status_code=200, text=APPCAST):
    def handler(request):
        return httpx.Response(status_code, text=text)
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return UpdateChecker(FEED_URL, current_version, client=client)


class TestParseAppcast:

    def test_items_with_usable_versions_are_parsed(self):
        items = parse_appcast(APPCAST)

        assert [item.version for item in items] == [Version("1.1.0"), Version("1.2.0")]

    def test_item_fields(self):
        first = parse_appcast(APPCAST)[0]

        assert first.title == "Version 1.1.0"
        assert first.download_url == "https://thelobby.ai/desktop/Lobby-1.1.0.zip"
        assert first.release_notes_url == "https://thelobby.ai/desktop/notes/1.1.0"

    def test_latest_item_picks_highest_version(self):
        assert latest_item(parse_appcast(APPCAST)).version == Version("1.2.0")

    def test_latest_item_of_empty_feed(self):
        assert latest_item([]) is None

    def test_invalid_xml_raises(self):
        with pytest.raises(UpdateCheckError):
            parse_appcast("<rss><channel>")


class TestUpdateChecker:

    def test_newer_version_is_reported(self):
        item = make_checker("1.0.0").check()
        assert item is not None
        assert item.version == Version("1.2.0")

    def test_current_version_is_up_to_date(self):
        assert make_checker("1.2.0").check() is None

    def test_newer_local_version_is_up_to_date(self):
        assert make_checker("2.0.0").check() is None

    def test_http_error_raises_update_check_error(self):
        with pytest.raises(UpdateCheckError):
            make_checker("1.0.0", status_code=500).check()


class TestUpdaterSignals:

    @pytest.fixture
    def updater(self, qtbot):
        return Updater(make_checker("1.0.0"), interval_hours=24)

    def test_available_update_is_signalled(self, updater):
        received = []
        updater.update_available.connect(lambda item, user: received.append((item.version, user)))
        updater.checking = True

        updater._on_finished(AppcastItem(version=Version("1.2.0"), title="1.2.0"), True)

        assert received == [(Version("1.2.0"), True)]
        assert updater.checking is False

    def test_no_update_is_signalled(self, updater):
        received = []
        updater.up_to_date.connect(received.append)

        updater._on_finished(None, False)

        assert received == [False]

    def test_failure_is_signalled_not_raised(self, updater):
        received = []
        updater.check_failed.connect(lambda message, user: received.append((message, user)))
        updater.checking = True

        updater._on_failed("boom", True)

        assert received == [("boom", True)]
        assert updater.checking is False

    def test_interval_is_configured(self, updater):
        assert updater.timer.interval() == 24 * 3600 * 1000


class CrashingChecker(UpdateChecker):
    """Fails with something other than UpdateCheckError"""

    def check(self):
        raise ValueError("bad feed")


class TestUpdaterRoundTrip:
    """Checks run in the thread pool; results arrive through queued signals."""

    def test_manual_check_offers_update(self, qtbot):
        updater = Updater(make_checker("1.0.0"))

        with qtbot.waitSignal(updater.update_available, timeout=5000) as blocker:
            updater.check_now()

        item, user_initiated = blocker.args
        assert item.version == Version("1.2.0")
        assert user_initiated is True
        assert updater.checking is False

    def test_background_check_reports_up_to_date_silently(self, qtbot):
        updater = Updater(make_checker("1.2.0"))

        with qtbot.waitSignal(updater.up_to_date, timeout=5000) as blocker:
            updater.check(user_initiated=False)

        assert blocker.args == [False]

    def test_manual_check_joins_running_background_check(self, qtbot):
        updater = Updater(make_checker("1.2.0"))
        received = []
        updater.up_to_date.connect(received.append)

        with qtbot.waitSignal(updater.up_to_date, timeout=5000) as blocker:
            updater.check(user_initiated=False)
            # The background result cannot arrive before the event loop runs
            assert updater.checking is True
            updater.check_now()

        assert blocker.args == [True]
        qtbot.wait(100)
        assert received == [True]

    def test_http_failure_is_reported_to_manual_check(self, qtbot):
        updater = Updater(make_checker("1.0.0", status_code=503))

        with qtbot.waitSignal(updater.check_failed, timeout=5000) as blocker:
            updater.check_now()

        assert blocker.args[1] is True
        assert updater.checking is False

    def test_unexpected_error_releases_updater(self, qtbot):
        updater = Updater(CrashingChecker(FEED_URL, "1.0.0"))

        with qtbot.waitSignal(updater.check_failed, timeout=5000) as blocker:
            updater.check(user_initiated=False)

        message, user_initiated = blocker.args
        assert "bad feed" in message
        assert user_initiated is False
        assert updater.checking is False

        # A later check is not blocked by the crashed one
        with qtbot.waitSignal(updater.check_failed, timeout=5000) as blocker:
            updater.check_now()
        assert blocker.args[1] is True
