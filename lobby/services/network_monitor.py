"""
Network Monitor - Reloads the page after connectivity comes back.

Edge-triggered: losing connectivity sets ``was_offline``; the next transition
to online clears it and emits ``reconnected`` exactly once. No retries.
"""

import logging

from PySide6.QtCore import QObject, Signal
from PySide6.QtNetwork import QNetworkInformation

logger = logging.getLogger(__name__)

Reachability = QNetworkInformation.Reachability


class NetworkMonitor(QObject):
    """
    Watches reachability through QNetworkInformation.
    """

    # Signals
    reconnected = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.was_offline = False
        self._info = None

    def start(self) -> bool:
        """
        Start monitoring.

        Returns:
            False if no reachability backend is available (monitor stays inert)
        """
        if self._info is not None:
            return True

        if not QNetworkInformation.loadBackendByFeatures(QNetworkInformation.Feature.Reachability):
            logger.info("No network reachability backend; reload on reconnect disabled")
            return False

        self._info = QNetworkInformation.instance()
        self._info.reachabilityChanged.connect(self.handle_reachability)
        logger.debug("Network monitor started with backend %s", self._info.backendName())
        return True

    def stop(self):
        """Stop monitoring"""
        if self._info is None:
            return
        self._info.reachabilityChanged.disconnect(self.handle_reachability)
        self._info = None

    def handle_reachability(self, reachability):
        if reachability == Reachability.Unknown:
            return

        if reachability == Reachability.Online:
            if self.was_offline:
                logger.info("Network connection restored")
                self.was_offline = False
                self.reconnected.emit()
        elif not self.was_offline:
            logger.info("Network connection lost")
            self.was_offline = True
