"""
Physical reordering of directory entries.

Many flash-based MP3 players play files in the order the directory entries
sit on disk, not by name. There is no API to set that order, but on FAT-style
filesystems a file moved into a directory takes the first free slot, which is
the end of the directory once the directory has been emptied. Emptying the
directory into a scratch folder and moving everything back in ascending name
order therefore leaves the entries sorted.

That is an observed behaviour rather than a contract, so the result is read
back through the normal listing call and checked (`is_ordered`), and the
caller decides whether to retry.
"""
import os
import logging
import uuid
from typing import List, Optional, Sequence, Tuple

from .errors import IOFailure
from .filesystem import LocalFileSystem, matching_names, normalize_extension

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 2


def make_scratch_dir(directory: str, extension: str, fs: LocalFileSystem) -> str:
    """Creates an unused, randomly named directory directly below `directory`."""
    stem = normalize_extension(extension).lstrip('.') or 'files'
    while True:
        path = os.path.join(directory, f"{stem}-{uuid.uuid4().hex[:8]}.dir")
        if fs.exists(path):
            continue
        try:
            fs.make_dir(path)
        except FileExistsError:
            continue
        except OSError as e:
            raise IOFailure(f"Could not create scratch directory {path}: {e}", path) from e
        logger.debug("Created scratch directory %s", path)
        return path


def move_files(source_dir: str, dest_dir: str, extension: str, fs: LocalFileSystem) -> List[str]:
    """
    Moves every matching file from source_dir to dest_dir, one at a time in
    ascending name order, so they are appended to dest_dir in that order.
    """
    try:
        names = sorted(matching_names(fs, source_dir, extension))
    except OSError as e:
        raise IOFailure(f"Could not list {source_dir}: {e}", source_dir) from e

    for name in names:
        src = os.path.join(source_dir, name)
        dst = os.path.join(dest_dir, name)
        try:
            fs.move(src, dst)
        except OSError as e:
            raise IOFailure(f"Could not move {src} to {dst}: {e}", src) from e
    return names


def reorder_directory(directory: str, extension: str = '.mp3', fs: Optional[LocalFileSystem] = None):
    """
    Re-lays the directory entries of all matching files in ascending name order.
    The set of files is unchanged; only their position in the directory moves.
    """
    fs = fs or LocalFileSystem()
    scratch = make_scratch_dir(directory, extension, fs)

    moved = move_files(directory, scratch, extension, fs)
    move_files(scratch, directory, extension, fs)

    try:
        fs.remove_dir(scratch)
    except OSError as e:
        raise IOFailure(f"Could not remove scratch directory {scratch}: {e}", scratch) from e

    logger.info("Re-laid %d entries in %s", len(moved), directory)


def is_sorted(items: Sequence[str]) -> bool:
    return all(items[i - 1] <= items[i] for i in range(1, len(items)))


def is_ordered(directory: str, extension: str = '.mp3', fs: Optional[LocalFileSystem] = None) -> bool:
    """True if the platform lists the matching files in ascending order."""
    fs = fs or LocalFileSystem()
    try:
        names = matching_names(fs, directory, extension)
    except OSError as e:
        raise IOFailure(f"Could not list {directory}: {e}", directory) from e
    return is_sorted([os.path.join(directory, name) for name in names])


def reorder_and_verify(directory: str, extension: str = '.mp3',
                       fs: Optional[LocalFileSystem] = None,
                       attempts: int = DEFAULT_ATTEMPTS) -> Tuple[bool, int]:
    """
    Runs reorder_directory until the listing reads back sorted, at most
    `attempts` times. A second pass clears up most leftover disorder.

    :return: (ordered, passes run)
    """
    fs = fs or LocalFileSystem()
    for attempt in range(1, attempts + 1):
        reorder_directory(directory, extension, fs)
        if is_ordered(directory, extension, fs):
            logger.debug("Directory %s ordered after %d pass(es)", directory, attempt)
            return True, attempt
        logger.info("Directory %s still out of order after pass %d", directory, attempt)
    return False, attempts
