from typing import Protocol, runtime_checkable


@runtime_checkable
class Playback(Protocol):
    """What the engine needs from a media player."""

    def set_source(self, path: str) -> None: ...

    def play(self) -> None: ...

    def stop(self) -> None: ...

    @property
    def is_playing(self) -> bool: ...


class NullPlayback:
    """Player stand-in when no audio backend is available."""

    def __init__(self):
        self.source = None

    def set_source(self, path: str) -> None:
        self.source = path

    def play(self) -> None:
        pass

    def stop(self) -> None:
        pass

    @property
    def is_playing(self) -> bool:
        return False
