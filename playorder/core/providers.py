"""
Where the working directory and its mirror come from.

The engine only ever sees a WorkingLocation; whether it points at a
removable player or at a folder picked by hand is decided here.
"""
from __future__ import annotations

import os
import logging
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import psutil

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkingLocation:
    directory: str
    mirror_directory: Optional[str] = None


@dataclass(frozen=True)
class VolumeInfo:
    mountpoint: str
    device: str
    label: str
    serial: int


def default_music_dir() -> str:
    return str(Path.home() / "Music")


def mirror_path_for(mirror_root: str, label: str, serial: int) -> str:
    """
    Backup folder for a volume: <mirror_root>/<label>/<serial as 8 hex digits>.
    The same medium always maps to the same folder.
    """
    return os.path.join(mirror_root, label or "Removable", f"{serial & 0xFFFFFFFF:08X}")


class FolderProvider:
    """A folder chosen by the user (or the Music folder in debug mode)."""

    def __init__(self, path: str, mirror_directory: Optional[str] = None):
        self.path = path
        self.mirror_directory = mirror_directory

    def locate(self) -> Optional[WorkingLocation]:
        if not os.path.isdir(self.path):
            logger.warning("Folder %s does not exist", self.path)
            return None
        return WorkingLocation(self.path, self.mirror_directory)


def _volume_info_windows(mountpoint: str) -> Optional[tuple]:
    import ctypes
    from ctypes import wintypes

    vol_name_buf = ctypes.create_unicode_buffer(261)
    fs_name_buf = ctypes.create_unicode_buffer(261)
    serial = wintypes.DWORD()
    max_comp_len = wintypes.DWORD()
    fs_flags = wintypes.DWORD()

    ok = ctypes.windll.kernel32.GetVolumeInformationW(
        ctypes.c_wchar_p(mountpoint),
        vol_name_buf,
        len(vol_name_buf),
        ctypes.byref(serial),
        ctypes.byref(max_comp_len),
        ctypes.byref(fs_flags),
        fs_name_buf,
        len(fs_name_buf),
    )
    if not ok:
        return None
    return vol_name_buf.value, serial.value


def _parse_fs_uuid(value: str) -> Optional[int]:
    # FAT volume ids look like "1A2B-3C4D"; longer UUIDs keep their last 32 bits.
    digits = value.replace("-", "")
    try:
        return int(digits, 16) & 0xFFFFFFFF
    except ValueError:
        return None


def _volume_serial_posix(device: str, by_uuid_dir: str = "/dev/disk/by-uuid") -> Optional[int]:
    if not os.path.isdir(by_uuid_dir):
        return None
    target = os.path.realpath(device)
    for name in os.listdir(by_uuid_dir):
        if os.path.realpath(os.path.join(by_uuid_dir, name)) == target:
            return _parse_fs_uuid(name)
    return None


def _is_removable(part) -> bool:
    sysname = platform.system()
    if sysname == "Windows":
        return "removable" in (part.opts or "")
    mp = part.mountpoint.replace("\\", "/")
    if sysname == "Darwin":
        return mp.startswith("/Volumes/")
    return mp.startswith(("/media/", "/run/media/", "/mnt/"))


def read_volume_info(part) -> Optional[VolumeInfo]:
    if platform.system() == "Windows":
        try:
            info = _volume_info_windows(part.mountpoint)
        except OSError as e:
            logger.debug("GetVolumeInformation failed for %s: %s", part.mountpoint, e)
            info = None
        if info is None:
            return None
        label, serial = info
    else:
        label = os.path.basename(os.path.normpath(part.mountpoint))
        serial = _volume_serial_posix(part.device)
        if serial is None:
            # No filesystem id available: fall back to the device number.
            serial = os.stat(part.mountpoint).st_dev
    return VolumeInfo(part.mountpoint, part.device, label, serial)


class RemovableDriveProvider:
    """The first ready removable volume, mirrored under mirror_root."""

    def __init__(self, mirror_root: Optional[str] = None):
        self.mirror_root = mirror_root or default_music_dir()

    def find_volume(self) -> Optional[VolumeInfo]:
        for part in psutil.disk_partitions(all=False):
            if not _is_removable(part) or not os.path.isdir(part.mountpoint):
                continue
            info = read_volume_info(part)
            if info is not None:
                logger.info("Found removable volume %s (%s, %08X)",
                            info.mountpoint, info.label, info.serial & 0xFFFFFFFF)
                return info
        return None

    def locate(self) -> Optional[WorkingLocation]:
        info = self.find_volume()
        if info is None:
            logger.info("No removable volume found")
            return None
        mirror = mirror_path_for(self.mirror_root, info.label, info.serial)
        return WorkingLocation(info.mountpoint, mirror)
