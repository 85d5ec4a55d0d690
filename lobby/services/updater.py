"""
Updater - Polls a Sparkle-style appcast feed for new releases.

Architecture Decision: Thread pool + Qt signals
Feed requests run in a QThreadPool worker; results come back through signals,
which Qt queues onto the main thread. Background checks are silent unless an
update exists. Failures are logged and never stop the app.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Optional

import httpx
from packaging.version import InvalidVersion, Version
from PySide6.QtCore import QObject, QRunnable, QThreadPool, QTimer, Signal

logger = logging.getLogger(__name__)

SPARKLE_NS = "http://www.andymatuschak.org/xml-namespaces/sparkle"


class UpdateCheckError(Exception):
    """Raised when the feed cannot be fetched or parsed"""


@dataclass(frozen=True)
class AppcastItem:
    version: Version
    title: str
    download_url: Optional[str] = None
    release_notes_url: Optional[str] = None


def _sparkle(name: str) -> str:
    return f"{{{SPARKLE_NS}}}{name}"


def _item_version(item: ET.Element, enclosure: Optional[ET.Element]) -> Optional[str]:
    for tag in ("shortVersionString", "version"):
        text = item.findtext(_sparkle(tag))
        if text and text.strip():
            return text.strip()
        if enclosure is not None and enclosure.get(_sparkle(tag)):
            return enclosure.get(_sparkle(tag)).strip()
    return None


def parse_appcast(xml_text: str) -> List[AppcastItem]:
    """
    Parse an appcast feed into items, skipping entries without a usable version.

    Raises:
        UpdateCheckError: if the document is not well-formed XML
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise UpdateCheckError(f"invalid appcast: {e}") from e

    items = []
    for item in root.iter("item"):
        enclosure = item.find("enclosure")
        raw_version = _item_version(item, enclosure)
        if raw_version is None:
            continue
        try:
            version = Version(raw_version)
        except InvalidVersion:
            logger.debug("Skipping appcast item with invalid version %r", raw_version)
            continue

        items.append(AppcastItem(
            version=version,
            title=(item.findtext("title") or f"Version {raw_version}").strip(),
            download_url=enclosure.get("url") if enclosure is not None else item.findtext("link"),
            release_notes_url=item.findtext(_sparkle("releaseNotesLink")),
        ))
    return items


def latest_item(items: List[AppcastItem]) -> Optional[AppcastItem]:
    if not items:
        return None
    return max(items, key=lambda item: item.version)


class UpdateChecker:
    """
    Fetches the feed and compares it with the running version.
    """

    def __init__(self, feed_url: str, current_version: str, client: Optional[httpx.Client] = None):
        self.feed_url = feed_url
        self.current_version = Version(current_version)
        self._client = client

    def fetch_feed(self) -> str:
        try:
            if self._client is not None:
                response = self._client.get(self.feed_url)
            else:
                with httpx.Client(timeout=15.0, follow_redirects=True) as client:
                    response = client.get(self.feed_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpdateCheckError(f"cannot fetch {self.feed_url}: {e}") from e
        return response.text

    def check(self) -> Optional[AppcastItem]:
        """
        Returns:
            The newest feed item if it is newer than the running version, else None
        """
        newest = latest_item(parse_appcast(self.fetch_feed()))
        if newest is not None and newest.version > self.current_version:
            return newest
        return None


class _CheckSignals(QObject):
    finished = Signal(object, bool)  # Optional[AppcastItem], user_initiated
    failed = Signal(str, bool)  # message, user_initiated


class _CheckTask(QRunnable):
    def __init__(self, checker: UpdateChecker, user_initiated: bool):
        super().__init__()
        self.checker = checker
        self.user_initiated = user_initiated
        self.signals = _CheckSignals()

    def run(self):
        try:
            item = self.checker.check()
        except UpdateCheckError as e:
            self.signals.failed.emit(str(e), self.user_initiated)
            return
        except Exception as e:
            # Any crash must still report back, or the updater stays busy forever
            logger.exception("Unexpected error during update check")
            self.signals.failed.emit(f"unexpected error: {e}", self.user_initiated)
            return
        self.signals.finished.emit(item, self.user_initiated)


class Updater(QObject):
    """
    Background updater with a manual "check now" action.

    Only one check runs at a time. A manual check requested while a
    background check is in flight attaches to it: that result is reported
    as user-initiated.
    """

    # Signals
    update_available = Signal(object, bool)  # AppcastItem, user_initiated
    up_to_date = Signal(bool)  # user_initiated
    check_failed = Signal(str, bool)  # message, user_initiated

    def __init__(self, checker: UpdateChecker, interval_hours: float = 24, parent=None):
        super().__init__(parent)
        self.checker = checker
        self.pool = QThreadPool.globalInstance()
        self.checking = False
        self._user_waiting = False
        self._pending_tasks = []

        self.timer = QTimer(self)
        self.timer.setInterval(int(interval_hours * 3600 * 1000))
        self.timer.timeout.connect(lambda: self.check(user_initiated=False))

    def start(self):
        """Check once now, then on every interval"""
        logger.info("Updater started for %s", self.checker.feed_url)
        self.timer.start()
        self.check(user_initiated=False)

    def stop(self):
        self.timer.stop()

    def check_now(self):
        self.check(user_initiated=True)

    def check(self, user_initiated: bool):
        if self.checking:
            if user_initiated:
                self._user_waiting = True
            logger.debug("Update check already running")
            return
        self.checking = True
        self._user_waiting = user_initiated

        task = _CheckTask(self.checker, user_initiated)
        task.signals.finished.connect(self._on_finished)
        task.signals.failed.connect(self._on_failed)
        # Keep the signal object alive until the worker reports back
        self._pending_tasks.append(task)
        self.pool.start(task)

    def _release(self, user_initiated: bool) -> bool:
        user_initiated = user_initiated or self._user_waiting
        self.checking = False
        self._user_waiting = False
        self._pending_tasks.clear()
        return user_initiated

    def _on_finished(self, item: Optional[AppcastItem], user_initiated: bool):
        user_initiated = self._release(user_initiated)
        if item is None:
            logger.info("No update available")
            self.up_to_date.emit(user_initiated)
            return
        logger.info("Update available: %s", item.version)
        self.update_available.emit(item, user_initiated)

    def _on_failed(self, message: str, user_initiated: bool):
        user_initiated = self._release(user_initiated)
        logger.warning("Update check failed: %s", message)
        self.check_failed.emit(message, user_initiated)
