"""
Windows login item via the per-user Run registry key.
"""

import subprocess
from typing import List, Optional

from lobby.infra.config import APP_NAME
from lobby.utils import get_launch_command
from .base import LoginItemError, LoginItemService

try:
    import winreg
except ImportError:
    winreg = None

RUN_SUBKEY = r"Software\Microsoft\Windows\CurrentVersion\Run"


class WindowsLoginItem(LoginItemService):
    """
    Stores the launch command under ``HKCU\\...\\Run\\Lobby``.
    """

    def __init__(self, command: Optional[List[str]] = None, winreg_module=winreg):
        self.command = command or get_launch_command()
        self._winreg = winreg_module

    def _open_run_key(self, writable: bool):
        if self._winreg is None:
            raise LoginItemError("winreg is not available")
        access = self._winreg.KEY_SET_VALUE if writable else self._winreg.KEY_READ
        return self._winreg.OpenKey(self._winreg.HKEY_CURRENT_USER, RUN_SUBKEY, 0, access)

    def is_registered(self) -> bool:
        if self._winreg is None:
            return False
        try:
            with self._open_run_key(writable=False) as key:
                self._winreg.QueryValueEx(key, APP_NAME)
                return True
        except FileNotFoundError:
            return False

    def register(self):
        try:
            with self._open_run_key(writable=True) as key:
                self._winreg.SetValueEx(
                    key, APP_NAME, 0, self._winreg.REG_SZ, subprocess.list2cmdline(self.command)
                )
        except OSError as e:
            raise LoginItemError(f"cannot write Run key: {e}") from e

    def unregister(self):
        try:
            with self._open_run_key(writable=True) as key:
                self._winreg.DeleteValue(key, APP_NAME)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise LoginItemError(f"cannot delete Run value: {e}") from e
