from PySide6.QtCore import QObject, Signal, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput


class QtPlayback(QObject):
    """Playback capability backed by QMediaPlayer."""
    playingChanged = Signal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.audio = QAudioOutput()
        self.media = QMediaPlayer()
        self.media.setAudioOutput(self.audio)
        self.audio.setVolume(0.7)
        self.media.playbackStateChanged.connect(self._on_state_changed)

    def set_source(self, path: str) -> None:
        self.media.setSource(QUrl.fromLocalFile(path))

    def play(self) -> None:
        self.media.play()

    def stop(self) -> None:
        if self.media.playbackState() != QMediaPlayer.StoppedState:
            self.media.stop()
        # Drop the source so the file handle is released before renames.
        self.media.setSource(QUrl())

    @property
    def is_playing(self) -> bool:
        return self.media.playbackState() == QMediaPlayer.PlayingState

    def _on_state_changed(self, state):
        self.playingChanged.emit(state == QMediaPlayer.PlayingState)
