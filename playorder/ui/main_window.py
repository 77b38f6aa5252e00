import logging
from PySide6.QtWidgets import (QMainWindow, QFileDialog, QStatusBar, QMessageBox, QToolBar)

from .track_list import TrackList
from ..core.engine import ReorderEngine, ApplyStatus
from ..core.errors import PlayOrderError, MirrorIOFailure
from ..core.playback import NullPlayback
from ..core.providers import FolderProvider, RemovableDriveProvider, WorkingLocation

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, player=None, provider=None):
        super().__init__()
        self.setWindowTitle("PlayOrder")
        self.resize(520, 640)

        from ..core.settings_manager import SettingsManager
        self.settings = SettingsManager()
        self.player = player or NullPlayback()
        self.engine = None
        self.provider = None

        self.track_list = TrackList()
        self.setCentralWidget(self.track_list)

        # Status Bar
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self._create_toolbar()

        # Signals
        self.track_list.itemSelectionChanged.connect(self._on_selection_changed)
        self.track_list.itemDoubleClicked.connect(lambda item: self.start_play())
        self.track_list.rename_requested.connect(self._on_rename_requested)
        self.track_list.order_changed.connect(self._update_status_count)
        if hasattr(self.player, "playingChanged"):
            self.player.playingChanged.connect(self._on_playing_changed)

        self._update_buttons()
        self._update_status_count()

        if provider is not None:
            self.open_provider(provider)

    def _create_toolbar(self):
        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.action_open_device = toolbar.addAction("Open Device")
        self.action_open_device.triggered.connect(self._on_open_device)

        self.action_open_folder = toolbar.addAction("Open Folder...")
        self.action_open_folder.triggered.connect(self._on_open_folder)

        toolbar.addSeparator()
        self.action_save = toolbar.addAction("Save Order")
        self.action_save.setShortcut("Ctrl+S")
        self.action_save.triggered.connect(self.save_order)

        toolbar.addSeparator()
        self.action_play = toolbar.addAction("Play")
        self.action_play.triggered.connect(self.start_play)
        self.action_stop = toolbar.addAction("Stop")
        self.action_stop.triggered.connect(self.stop_play)

        toolbar.addSeparator()
        self.action_settings = toolbar.addAction("Settings")
        self.action_settings.triggered.connect(self._on_open_settings)

    # --- Locations ---

    def _on_open_device(self):
        provider = RemovableDriveProvider(self.settings.mirror_root)
        if not self.open_provider(provider):
            QMessageBox.information(self, "No Device", "No removable drive was found.")
        else:
            self.settings.source_mode = "device"

    def _on_open_folder(self):
        directory = QFileDialog.getExistingDirectory(self, "Select Folder", self.settings.last_folder)
        if directory:
            self.settings.last_folder = directory
            self.settings.source_mode = "folder"
            self.open_provider(FolderProvider(directory))

    def open_provider(self, provider) -> bool:
        location = provider.locate()
        if location is None:
            return False
        self.provider = provider
        self.open_location(location)
        return True

    def reopen_current(self, mirror_root=None) -> bool:
        """Locates the current source again, picking up a changed mirror root."""
        if isinstance(self.provider, RemovableDriveProvider):
            return self.open_provider(RemovableDriveProvider(mirror_root or self.settings.mirror_root))
        if self.provider is not None:
            return self.open_provider(self.provider)
        return False

    def open_location(self, location: WorkingLocation):
        self.stop_play()
        self.engine = ReorderEngine(location.directory, location.mirror_directory,
                                    extension=self.settings.extension, player=self.player)
        self.setWindowTitle(f"PlayOrder - {location.directory}")

        # Bring the backup up to date with whatever is on the medium now
        if location.mirror_directory:
            try:
                self.engine.sync_mirror()
            except MirrorIOFailure as e:
                logger.error("Initial mirror sync failed: %s", e)
                self.status_bar.showMessage(f"Backup failed: {e}", 5000)

        self.reload()

    def reload(self):
        if self.engine is None:
            self.track_list.set_tracks([])
        else:
            self.track_list.set_tracks(self.engine.list_tracks(with_tags=True))
        self.stop_play()
        self._update_status_count()

    # --- Renaming ---

    def save_order(self):
        if self.engine is None:
            return
        tracks = self.track_list.ordered_tracks()
        try:
            result = self.engine.apply(tracks)
        except PlayOrderError as e:
            QMessageBox.critical(self, "Error", str(e))
            self.reload()
            return

        if result.status == ApplyStatus.ORDERING_UNVERIFIED:
            QMessageBox.warning(self, "Error", "The files are not sorted correctly on the device.")
        if result.mirror_error:
            self.status_bar.showMessage(f"Backup failed: {result.mirror_error}", 5000)
        elif result.status != ApplyStatus.UNCHANGED:
            self.status_bar.showMessage(f"Renamed {len(result.renamed)} file(s)", 5000)

        if result.status != ApplyStatus.UNCHANGED:
            self.reload()

    def _on_rename_requested(self, track, new_label):
        if self.engine is None:
            return
        try:
            track.name = self.engine.rename_one(track.name, new_label, track.suffix)
        except (PlayOrderError, ValueError) as e:
            QMessageBox.critical(self, "Rename Failed", str(e))
            self.reload()

    # --- Playback ---

    def start_play(self):
        track = self.track_list.selected_track()
        if track is None or self.engine is None or self.player.is_playing:
            return
        self.player.set_source(track.path_in(self.engine.working_dir))
        self.player.play()
        self._update_buttons(playing=True)

    def stop_play(self):
        self.player.stop()
        self._update_buttons()

    def _on_selection_changed(self):
        self.stop_play()

    def _on_playing_changed(self, playing):
        # Also fires when a track runs to its end
        self._update_buttons(playing=playing)

    def _update_buttons(self, playing=False):
        self.action_play.setEnabled(not playing and self.track_list.selected_track() is not None)
        self.action_stop.setEnabled(playing)
        self.action_save.setEnabled(self.engine is not None)

    def _update_status_count(self):
        count = self.track_list.count()
        self.status_bar.showMessage(f"{count} files")

    def _on_open_settings(self):
        from .dialogs import SettingsDialog
        dialog = SettingsDialog(self)
        if dialog.exec() and self.provider is not None:
            self.reopen_current()

    def closeEvent(self, event):
        self.player.stop()
        super().closeEvent(event)
