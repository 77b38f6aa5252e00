import os
import logging
from typing import List, Dict, Any, Optional

import mutagen

from .filesystem import LocalFileSystem, matching_names, normalize_extension
from .track import Track

logger = logging.getLogger(__name__)


class DirectoryScanner:
    def __init__(self, fs: Optional[LocalFileSystem] = None):
        self.fs = fs or LocalFileSystem()

    def list_tracks(self, path: str, extension: str = '.mp3', with_tags: bool = False) -> List[Track]:
        """
        Lists the matching files of a single directory as Tracks, sorted by name.
        :param path: Directory to list (not recursive).
        :param extension: Tracked extension, e.g. '.mp3'.
        :param with_tags: Also read duration/title with mutagen for display.
        :return: Tracks numbered from 1.
        """
        tracks = []
        if not self.fs.is_dir(path):
            return tracks

        ext_len = len(normalize_extension(extension))
        names = sorted(matching_names(self.fs, path, extension))

        for ordinal, filename in enumerate(names, start=1):
            track = Track(ordinal=ordinal, name=filename[:-ext_len], suffix=filename[-ext_len:])
            if with_tags:
                track.metadata = self.load_tags(os.path.join(path, filename))
            tracks.append(track)

        return tracks

    def load_tags(self, file_path: str) -> Dict[str, Any]:
        """
        Display-only metadata. Unreadable files give an empty dict.
        """
        try:
            audio = mutagen.File(file_path, easy=True)
        except Exception as e:
            logger.debug("Could not read tags of %s: %s", file_path, e)
            return {}
        if audio is None:
            return {}

        tags = {}
        if audio.info is not None and getattr(audio.info, 'length', None):
            tags['duration'] = float(audio.info.length)
        title = (audio.get('title') or [None])[0] if audio.tags is not None else None
        if title:
            tags['title'] = title
        return tags
