import sys
import os
import argparse
import logging

# Ensure project root is in path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from PySide6.QtWidgets import QApplication

from playorder.core.logging_utils import setup_logging
from playorder.core.playback import NullPlayback
from playorder.core.providers import FolderProvider, RemovableDriveProvider, default_music_dir
from playorder.core.settings_manager import SettingsManager
from playorder.ui.main_window import MainWindow

logger = logging.getLogger("playorder")


def parse_args(argv):
    parser = argparse.ArgumentParser(description="Put the files of a music player in play order")
    parser.add_argument("--debug", action="store_true", help="Open the local Music folder instead of a device")
    parser.add_argument("--folder", help="Open this folder instead of a device")
    # Qt keeps its own options (-style, -platform, ...)
    args, _ = parser.parse_known_args(argv)
    return args


def create_player():
    try:
        from playorder.ui.player import QtPlayback
        return QtPlayback()
    except Exception as e:
        logger.warning("Audio playback unavailable: %s", e)
        return NullPlayback()


def main():
    args = parse_args(sys.argv[1:])
    settings = SettingsManager()
    setup_logging(debug=args.debug or settings.debug)

    app = QApplication(sys.argv)
    app.setApplicationName("PlayOrder")

    if args.folder:
        provider = FolderProvider(args.folder)
    elif args.debug:
        provider = FolderProvider(default_music_dir())
    else:
        provider = RemovableDriveProvider(settings.mirror_root)

    window = MainWindow(player=create_player(), provider=provider)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
