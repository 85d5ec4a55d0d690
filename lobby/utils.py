import sys
from pathlib import Path
from typing import List

def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    
    Args:
        relative_path: Relative path from project root (e.g., "lobby/assets/icon.png")
        
    Returns:
        Absolute Path object
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller creates a temp folder and stores path in _MEIPASS
        base_path = Path(sys._MEIPASS)
    else:
        # Standard python execution
        # This file is in lobby/utils.py, so project root is up two levels
        base_path = Path(__file__).parent.parent.absolute()

    return base_path / relative_path


def get_launch_command() -> List[str]:
    """
    Command line that starts this app, for login-item registration.

    Frozen builds are started directly, source checkouts through main.py.
    """
    if getattr(sys, 'frozen', False):
        return [sys.executable]
    return [sys.executable, str(get_resource_path("main.py"))]
