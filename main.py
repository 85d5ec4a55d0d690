#!/usr/bin/env python

"""
Lobby Desktop - Main Entry Point

A desktop shell for the Lobby web app with native notifications,
hide-on-close window handling, launch at login and auto-update.

Usage:
    python main.py

Requirements:
    - Python 3.12+
    - See pyproject.toml for dependencies
"""

import sys
from pathlib import Path

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent))

from lobby.infra import configure_logging, get_settings


def main():
    """Main entry point"""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_dir)

    # Imported after logging is configured so Qt WebEngine picks up its env flags
    from lobby.ui import LobbyApp

    app = LobbyApp(settings)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
