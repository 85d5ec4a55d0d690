"""
Logging configuration.

Console output for development plus a rotating file in the config directory,
so failures of optional features (updates, login items, notifications) can be
inspected after the fact without ever being surfaced to the user.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILE_NAME = "lobby.log"


def configure_logging(level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Install console and file handlers on the root logger.

    Args:
        level: Level name, e.g. "DEBUG" or "INFO"
        log_dir: Directory for the rotating log file; console only when None

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Reconfiguring replaces our own handlers only
    for handler in list(root.handlers):
        if getattr(handler, "_lobby_handler", False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console._lobby_handler = True
    root.addHandler(console)

    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_dir / LOG_FILE_NAME, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            file_handler._lobby_handler = True
            root.addHandler(file_handler)
        except OSError as e:
            root.warning("File logging disabled: %s", e)

    # Chromium prints a lot of noise on stderr
    os.environ.setdefault("QTWEBENGINE_CHROMIUM_FLAGS", "--log-level=3")
    os.environ.setdefault("QT_LOGGING_RULES", "qt.webenginecontext.debug=false")

    return root
