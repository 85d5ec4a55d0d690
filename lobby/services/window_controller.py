"""
Window Controller - Lifecycle of the single application window.

States: HIDDEN, VISIBLE. Closing hides the window (the object is kept),
reactivating the app with no visible windows shows it again. The process
only ends on an explicit quit.
"""

import logging

from PySide6.QtCore import QObject, Signal

from lobby.domain.models import WindowState

logger = logging.getLogger(__name__)


class WindowController(QObject):
    """
    Owns the main window and decides what close/reopen do.

    ``window`` only needs show/hide/raise_/activateWindow, so tests can pass
    any stand-in object.
    """

    # Signals
    state_changed = Signal(object)  # WindowState

    def __init__(self, window, parent=None):
        super().__init__(parent)
        self.window = window
        self.state = WindowState.HIDDEN
        self.quitting = False

    def _set_state(self, state: WindowState):
        if state == self.state:
            return
        logger.debug("Window %s -> %s", self.state.value, state.value)
        self.state = state
        self.state_changed.emit(state)

    def show(self):
        """Show and focus the window (launch, menu, dock click)"""
        self.window.show()
        self.window.raise_()
        self.window.activateWindow()
        self._set_state(WindowState.VISIBLE)

    def handle_close(self) -> bool:
        """
        React to the user closing the window.

        Returns:
            True if the close should proceed (only while quitting)
        """
        if self.quitting:
            return True
        self.window.hide()
        self._set_state(WindowState.HIDDEN)
        return False

    def handle_reopen(self, has_visible_windows: bool) -> bool:
        """
        React to the app being reactivated from the dock.

        Returns:
            True if the window was shown
        """
        if has_visible_windows:
            return False
        self.show()
        return True

    def prepare_quit(self):
        self.quitting = True
