import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from playorder.core.filesystem import LocalFileSystem


class AppendOrderFileSystem(LocalFileSystem):
    """
    Real disk operations, but directories list their files in insertion
    order the way a FAT volume does: a file entering a directory goes to
    the end, a file leaving it frees its slot.
    """

    def __init__(self):
        self._entries = {}

    def _key(self, path):
        return os.path.normcase(os.path.abspath(path))

    def _slots(self, directory):
        return self._entries.setdefault(self._key(directory), [])

    def _detach(self, path):
        slots = self._slots(os.path.dirname(path))
        name = os.path.basename(path)
        if name in slots:
            slots.remove(name)

    def _attach(self, path):
        self._detach(path)
        self._slots(os.path.dirname(path)).append(os.path.basename(path))

    def create(self, directory, name, content=b"x"):
        """Creates a real file and appends its entry."""
        path = os.path.join(directory, name)
        with open(path, "wb") as f:
            f.write(content)
        self._attach(path)
        return path

    def list_names(self, directory):
        on_disk = set(super().list_names(directory))
        slots = self._slots(directory)
        slots[:] = [n for n in slots if n in on_disk]
        # Files created behind our back go last
        slots.extend(sorted(on_disk - set(slots)))
        return list(slots)

    def move(self, src, dst):
        super().move(src, dst)
        self._detach(src)
        self._attach(dst)

    def copy(self, src, dst):
        existed = os.path.exists(dst)
        super().copy(src, dst)
        if not existed:
            self._attach(dst)

    def remove(self, path):
        super().remove(path)
        self._detach(path)


class ReversedFileSystem(AppendOrderFileSystem):
    """A volume whose listing never comes back in ascending order."""

    def list_names(self, directory):
        return sorted(super().list_names(directory), reverse=True)


class FailingCopyFileSystem(AppendOrderFileSystem):
    def copy(self, src, dst):
        raise PermissionError(13, "Permission denied", dst)


def write_file(path, content=b"x"):
    with open(path, "wb") as f:
        f.write(content)
    return path


def read_file(path):
    with open(path, "rb") as f:
        return f.read()
