"""
Linux login item via an XDG autostart entry.
"""

import os
import shlex
from pathlib import Path
from typing import List, Optional

from lobby.infra.config import APP_NAME
from lobby.utils import get_launch_command
from .base import LoginItemError, LoginItemService


def _autostart_dir() -> Path:
    base = os.getenv("XDG_CONFIG_HOME")
    return (Path(base) if base else Path.home() / ".config") / "autostart"


class LinuxLoginItem(LoginItemService):
    """
    Writes ``~/.config/autostart/lobby.desktop``.
    """

    def __init__(self, autostart_dir: Optional[Path] = None, command: Optional[List[str]] = None):
        self.autostart_dir = autostart_dir or _autostart_dir()
        self.command = command or get_launch_command()

    @property
    def entry_path(self) -> Path:
        return self.autostart_dir / f"{APP_NAME.lower()}.desktop"

    def is_registered(self) -> bool:
        return self.entry_path.exists()

    def register(self):
        entry = "\n".join([
            "[Desktop Entry]",
            "Type=Application",
            f"Name={APP_NAME}",
            f"Exec={shlex.join(self.command)}",
            "X-GNOME-Autostart-enabled=true",
            "",
        ])
        try:
            self.autostart_dir.mkdir(parents=True, exist_ok=True)
            self.entry_path.write_text(entry, encoding="utf-8")
        except OSError as e:
            raise LoginItemError(f"cannot write {self.entry_path}: {e}") from e

    def unregister(self):
        try:
            self.entry_path.unlink(missing_ok=True)
        except OSError as e:
            raise LoginItemError(f"cannot remove {self.entry_path}: {e}") from e
