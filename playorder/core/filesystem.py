import os
import shutil
from typing import List


class LocalFileSystem:
    """
    The handful of filesystem primitives the engine is allowed to use.

    Listing goes through os.scandir so names come back in the order the
    platform enumerates them, which is exactly what the reorder pass
    tries to influence. Swap this object out to target storage with
    different enumeration rules.
    """

    def list_names(self, directory: str) -> List[str]:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries if entry.is_file()]

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def same_file(self, a: str, b: str) -> bool:
        try:
            return os.path.samefile(a, b)
        except OSError:
            return False

    def make_dir(self, path: str):
        os.mkdir(path)

    def make_dirs(self, path: str):
        os.makedirs(path, exist_ok=True)

    def remove_dir(self, path: str):
        # os.rmdir refuses non-empty directories
        os.rmdir(path)

    def move(self, src: str, dst: str):
        os.rename(src, dst)

    def copy(self, src: str, dst: str):
        shutil.copyfile(src, dst)

    def remove(self, path: str):
        os.remove(path)

    def size(self, path: str) -> int:
        return os.path.getsize(path)


def normalize_extension(extension: str) -> str:
    ext = extension.strip().lower()
    if ext and not ext.startswith('.'):
        ext = '.' + ext
    return ext


def matching_names(fs: LocalFileSystem, directory: str, extension: str) -> List[str]:
    """
    File names in `directory` ending with `extension` (case-insensitive),
    in enumeration order.
    """
    ext = normalize_extension(extension)
    return [name for name in fs.list_names(directory) if name.lower().endswith(ext)]
