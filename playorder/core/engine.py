import os
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple, Union

from .errors import IOFailure, MirrorIOFailure, NameCollision
from .file_scanner import DirectoryScanner
from .filesystem import LocalFileSystem, normalize_extension
from .mirror import SyncReport, sync_directory
from .naming import canonicalize, strip_title
from .playback import NullPlayback, Playback
from .reorder import DEFAULT_ATTEMPTS, reorder_and_verify
from .track import Track

logger = logging.getLogger(__name__)


class ApplyStatus(Enum):
    UNCHANGED = auto()
    SUCCESS = auto()
    ORDERING_UNVERIFIED = auto()


@dataclass
class ApplyResult:
    status: ApplyStatus
    renamed: List[Tuple[str, str]] = field(default_factory=list)
    attempts: int = 0
    mirror: Optional[SyncReport] = None
    mirror_error: Optional[str] = None

    @property
    def ordered(self) -> bool:
        return self.status != ApplyStatus.ORDERING_UNVERIFIED

    @property
    def exit_code(self) -> int:
        return 1 if self.status == ApplyStatus.ORDERING_UNVERIFIED else 0


class ReorderEngine:
    """
    Renames the files of one working directory to match a chosen play order
    and re-lays the directory so players that follow entry order agree.

    The engine assumes nothing else writes to the directory while it runs.
    After apply() or rename_one() the caller's list is stale and should be
    reloaded with list_tracks().
    """

    def __init__(self, working_dir: str, mirror_dir: Optional[str] = None,
                 extension: str = '.mp3', player: Optional[Playback] = None,
                 fs: Optional[LocalFileSystem] = None,
                 reorder_attempts: int = DEFAULT_ATTEMPTS):
        self.working_dir = working_dir
        self.mirror_dir = mirror_dir
        self.extension = normalize_extension(extension)
        self.player = player or NullPlayback()
        self.fs = fs or LocalFileSystem()
        self.reorder_attempts = reorder_attempts
        self.scanner = DirectoryScanner(self.fs)

    def list_tracks(self, with_tags: bool = False) -> List[Track]:
        return self.scanner.list_tracks(self.working_dir, self.extension, with_tags=with_tags)

    def _as_track(self, item: Union[Track, str], ordinal: int, on_disk: dict) -> Track:
        if isinstance(item, Track):
            return item
        # Keep the suffix casing found on disk ("a.MP3")
        found = on_disk.get(item)
        suffix = found.suffix if found is not None else self.extension
        return Track(ordinal=ordinal, name=item, suffix=suffix)

    def _rename(self, current: str, target: str, suffix: str):
        src = os.path.join(self.working_dir, current + suffix)
        dst = os.path.join(self.working_dir, target + suffix)
        # os.rename silently replaces on POSIX; a case-only rename on a
        # case-insensitive volume points at the same file and is allowed.
        if self.fs.exists(dst) and not self.fs.same_file(src, dst):
            raise NameCollision(current + suffix, target + suffix)
        try:
            self.fs.move(src, dst)
        except FileExistsError as e:
            raise NameCollision(current + suffix, target + suffix) from e
        except OSError as e:
            raise IOFailure(f"Could not rename {src} to {dst}: {e}", src) from e
        logger.info("Renamed: %s -> %s", current + suffix, target + suffix)

    def apply(self, order: Sequence[Union[Track, str]]) -> ApplyResult:
        """
        Gives every track in `order` the canonical name for its position,
        then re-lays the directory and refreshes the mirror.

        Raises NameCollision or IOFailure from the rename/reorder passes;
        renames done before the failure are kept.
        """
        on_disk = {}
        if any(not isinstance(item, Track) for item in order):
            on_disk = {t.name: t for t in self.list_tracks()}
        tracks = [self._as_track(item, i, on_disk) for i, item in enumerate(order, start=1)]

        # An open handle can block a rename on some platforms.
        self.player.stop()

        renamed = []
        for ordinal, track in enumerate(tracks, start=1):
            label = track.display_name
            if strip_title(label) is None:
                logger.debug("Skipping '%s': no title left after stripping", label)
                continue
            new_name = canonicalize(label, ordinal)
            if new_name == track.name:
                continue
            self._rename(track.name, new_name, track.suffix)
            renamed.append((track.name, new_name))

        if not renamed:
            logger.info("Order unchanged in %s", self.working_dir)
            return ApplyResult(ApplyStatus.UNCHANGED)

        ordered, attempts = reorder_and_verify(self.working_dir, self.extension, self.fs,
                                               attempts=self.reorder_attempts)
        if ordered:
            result = ApplyResult(ApplyStatus.SUCCESS, renamed, attempts)
        else:
            logger.warning("Files in %s are not listed in order after %d passes",
                           self.working_dir, attempts)
            result = ApplyResult(ApplyStatus.ORDERING_UNVERIFIED, renamed, attempts)

        if self.mirror_dir:
            try:
                result.mirror = self.sync_mirror()
            except MirrorIOFailure as e:
                logger.error("Mirror sync failed: %s", e)
                result.mirror_error = str(e)

        return result

    def rename_one(self, current: str, new_label: str, suffix: Optional[str] = None) -> str:
        """
        Renames a single file right away, as done for an in-place label edit.
        No reorder or mirror pass follows.

        :return: the new base name.
        """
        new_name = (new_label or '').strip()
        if not new_name:
            raise ValueError("A file name cannot be empty")
        if new_name == current:
            return current

        self.player.stop()
        self._rename(current, new_name, suffix or self.extension)
        return new_name

    def sync_mirror(self) -> Optional[SyncReport]:
        if not self.mirror_dir:
            return None
        return sync_directory(self.working_dir, self.mirror_dir, self.extension, self.fs)
