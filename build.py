import os
import subprocess
import sys
from pathlib import Path

from lobby.infra.config import APP_NAME, BUNDLE_IDENTIFIER

def main():
    """Build the application using PyInstaller"""
    project_root = Path(__file__).parent

    # Configuration
    entry_point = "main.py"

    # Assets to include: (source, destination) relative to project root
    # Windows uses ";" as separator, macOS/Linux ":"
    sep = ";" if os.name == "nt" else ":"

    add_data = []
    if (project_root / "lobby" / "assets").exists():
        add_data.append(("lobby/assets", "lobby/assets"))

    # Construct PyInstaller arguments
    # Use "PyInstaller" as module name
    args = [
        "PyInstaller",
        "--noconfirm",
        "--clean",
        "--windowed",  # No console window, .app bundle on macOS
        f"--name={APP_NAME}",
    ]

    if sys.platform == "darwin":
        # SMAppService and the notification center need a real bundle identity
        args.append(f"--osx-bundle-identifier={BUNDLE_IDENTIFIER}")

    # Add data arguments
    for src, dst in add_data:
        args.append(f"--add-data={src}{sep}{dst}")

    # Qt WebEngine ships its own resources and helper process
    args.append("--collect-all=PySide6.QtWebEngineCore")

    if sys.platform == "darwin":
        args.append("--hidden-import=UserNotifications")
        args.append("--hidden-import=ServiceManagement")
    else:
        args.append("--exclude-module=AppKit")
        args.append("--exclude-module=Foundation")

    # Entry point
    args.append(entry_point)

    print("=" * 50)
    print(f"Building {APP_NAME}...")
    print(f"Command: {' '.join(args)}")
    print("=" * 50)

    try:
        # Check if pyinstaller is installed
        subprocess.run([sys.executable, "-m", "PyInstaller", "--version"], check=True, capture_output=True)

        # Run build
        subprocess.run([sys.executable, "-m"] + args, check=True)

        print("\nBuild successful!")
        print(f"Output is located at: {project_root / 'dist'}")

    except subprocess.CalledProcessError as e:
        print(f"\nError: Build failed with exit code {e.returncode}")
        print("Ensure 'pyinstaller' is installed: pip install -e .[build]")
        sys.exit(1)
    except FileNotFoundError:
        print("\nError: PyInstaller not found.")
        print("Please install it: pip install -e .[build]")
        sys.exit(1)

if __name__ == "__main__":
    main()
