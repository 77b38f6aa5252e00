import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import MirrorIOFailure
from .filesystem import LocalFileSystem, matching_names

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    deleted: List[str] = field(default_factory=list)
    copied: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.deleted or self.copied)


def needs_copy(source_file: str, dest_file: str, fs: LocalFileSystem) -> bool:
    """
    A destination file is stale when it is missing or its size differs.
    Same-size files with different content are not detected.
    """
    if not fs.exists(dest_file):
        return True
    return fs.size(source_file) != fs.size(dest_file)


def sync_directory(source_dir: str, dest_dir: str, extension: str = '.mp3',
                   fs: Optional[LocalFileSystem] = None) -> SyncReport:
    """
    One-way mirror of the matching files of source_dir into dest_dir.

    Files in dest_dir without a counterpart in source_dir are deleted,
    missing or size-mismatched files are copied over. source_dir is only
    read. Running it again without changes to the source is a no-op.
    """
    fs = fs or LocalFileSystem()
    report = SyncReport()

    try:
        if not fs.is_dir(dest_dir):
            fs.make_dirs(dest_dir)

        source_names = matching_names(fs, source_dir, extension)
        dest_names = matching_names(fs, dest_dir, extension)

        # Remove extra files in dest_dir
        source_set = set(source_names)
        for name in dest_names:
            if name not in source_set:
                fs.remove(os.path.join(dest_dir, name))
                report.deleted.append(name)
                logger.debug("Mirror: deleted %s", name)

        # Copy new or updated files
        for name in source_names:
            source_file = os.path.join(source_dir, name)
            dest_file = os.path.join(dest_dir, name)
            if needs_copy(source_file, dest_file, fs):
                fs.copy(source_file, dest_file)
                report.copied.append(name)
                logger.debug("Mirror: copied %s", name)
    except OSError as e:
        raise MirrorIOFailure(f"Sync {source_dir} -> {dest_dir} failed: {e}",
                              getattr(e, 'filename', None)) from e

    logger.info("Mirror %s -> %s: %d copied, %d deleted",
                source_dir, dest_dir, len(report.copied), len(report.deleted))
    return report
