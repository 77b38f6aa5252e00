import unittest
import os
import sys
import shutil
import tempfile

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from helpers import AppendOrderFileSystem, ReversedFileSystem, FailingCopyFileSystem
from playorder.core.engine import ReorderEngine, ApplyStatus
from playorder.core.errors import NameCollision
from playorder.core.reorder import is_ordered
from playorder.core.track import Track


class RecordingPlayer:
    def __init__(self):
        self.calls = []
        self.playing = True

    def set_source(self, path):
        self.calls.append(("set_source", path))

    def play(self):
        self.calls.append(("play",))
        self.playing = True

    def stop(self):
        self.calls.append(("stop",))
        self.playing = False

    @property
    def is_playing(self):
        return self.playing


class TestReorderEngine(unittest.TestCase):
    def setUp(self):
        self.root = tempfile.mkdtemp(prefix="playorder_engine_")
        self.work = os.path.join(self.root, "device")
        self.mirror = os.path.join(self.root, "backup")
        os.makedirs(self.work)
        self.fs = AppendOrderFileSystem()
        self.player = RecordingPlayer()

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def _engine(self, fs=None):
        return ReorderEngine(self.work, self.mirror, ".mp3", player=self.player, fs=fs or self.fs)

    def _seed(self, names, fs=None):
        fs = fs or self.fs
        for name in names:
            fs.create(self.work, name, (name * 3).encode("utf-8"))

    def test_end_to_end(self):
        self._seed(["c.mp3", "a.mp3", "b.mp3"])
        engine = self._engine()

        result = engine.apply(["a", "b", "c"])

        self.assertEqual(result.status, ApplyStatus.SUCCESS)
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.renamed, [("a", "01 - a"), ("b", "02 - b"), ("c", "03 - c")])
        expected = ["01 - a.mp3", "02 - b.mp3", "03 - c.mp3"]
        self.assertEqual(self.fs.list_names(self.work), expected)
        self.assertTrue(is_ordered(self.work, ".mp3", self.fs))

        self.assertEqual(sorted(os.listdir(self.mirror)), expected)
        for name in expected:
            self.assertEqual(os.path.getsize(os.path.join(self.mirror, name)),
                             os.path.getsize(os.path.join(self.work, name)))
        self.assertEqual(sorted(result.mirror.copied), expected)

    def test_reload_after_apply(self):
        self._seed(["b.mp3", "a.mp3"])
        engine = self._engine()
        engine.apply(["b", "a"])

        tracks = engine.list_tracks()
        self.assertEqual([t.name for t in tracks], ["01 - b", "02 - a"])
        self.assertEqual([t.ordinal for t in tracks], [1, 2])

    def test_names_keep_suffix_casing(self):
        self._seed(["b.MP3", "a.mp3"])
        result = self._engine().apply(["b", "a"])

        self.assertEqual(result.status, ApplyStatus.SUCCESS)
        self.assertEqual(self.fs.list_names(self.work), ["01 - b.MP3", "02 - a.mp3"])

    def test_stops_playback_first(self):
        self._seed(["a.mp3"])
        self._engine().apply(["a"])
        self.assertEqual(self.player.calls[0], ("stop",))

    def test_unchanged_is_noop(self):
        self._seed(["02 - b.mp3", "01 - a.mp3"])
        engine = self._engine()

        result = engine.apply(engine.list_tracks())

        self.assertEqual(result.status, ApplyStatus.UNCHANGED)
        self.assertEqual(result.renamed, [])
        self.assertIsNone(result.mirror)
        self.assertFalse(os.path.exists(self.mirror))
        # No reorder pass ran
        self.assertEqual(self.fs.list_names(self.work), ["02 - b.mp3", "01 - a.mp3"])

    def test_edited_labels(self):
        self._seed(["01 - a.mp3", "02 - b.mp3"])
        tracks = [
            Track(ordinal=1, name="02 - b", label="Intro"),
            Track(ordinal=2, name="01 - a"),
        ]
        result = self._engine().apply(tracks)

        self.assertEqual(result.renamed, [("02 - b", "01 - Intro"), ("01 - a", "02 - a")])
        self.assertEqual(sorted(os.listdir(self.work)), ["01 - Intro.mp3", "02 - a.mp3"])

    def test_unusable_label_skipped(self):
        self._seed(["a.mp3", "b.mp3"])
        tracks = [Track(ordinal=1, name="a", label="--"), Track(ordinal=2, name="b")]

        result = self._engine().apply(tracks)

        self.assertEqual(result.renamed, [("b", "02 - b")])
        self.assertEqual(sorted(os.listdir(self.work)), ["02 - b.mp3", "a.mp3"])

    def test_collision_aborts(self):
        self._seed(["x.mp3", "01 - x.mp3", "z.mp3"])

        with self.assertRaises(NameCollision) as ctx:
            self._engine().apply(["x", "01 - x", "z"])

        self.assertEqual(ctx.exception.target, "01 - x.mp3")
        self.assertEqual(sorted(os.listdir(self.work)), ["01 - x.mp3", "x.mp3", "z.mp3"])
        self.assertFalse(os.path.exists(self.mirror))

    def test_partial_application_kept(self):
        self._seed(["a.mp3", "b.mp3", "02 - b.mp3"])

        with self.assertRaises(NameCollision):
            self._engine().apply(["a", "b", "02 - b"])

        self.assertEqual(sorted(os.listdir(self.work)), ["01 - a.mp3", "02 - b.mp3", "b.mp3"])

    def test_ordering_unverified(self):
        fs = ReversedFileSystem()
        self._seed(["b.mp3", "a.mp3"], fs)

        result = self._engine(fs).apply(["a", "b"])

        self.assertEqual(result.status, ApplyStatus.ORDERING_UNVERIFIED)
        self.assertEqual(result.attempts, 2)
        self.assertEqual(result.exit_code, 1)
        # Renames stay, and the mirror is still refreshed
        self.assertEqual(sorted(os.listdir(self.work)), ["01 - a.mp3", "02 - b.mp3"])
        self.assertEqual(sorted(os.listdir(self.mirror)), ["01 - a.mp3", "02 - b.mp3"])

    def test_mirror_failure_does_not_block(self):
        fs = FailingCopyFileSystem()
        self._seed(["b.mp3", "a.mp3"], fs)

        result = self._engine(fs).apply(["a", "b"])

        self.assertEqual(result.status, ApplyStatus.SUCCESS)
        self.assertIsNotNone(result.mirror_error)
        self.assertIsNone(result.mirror)
        self.assertEqual(sorted(os.listdir(self.work)), ["01 - a.mp3", "02 - b.mp3"])

    def test_without_mirror(self):
        self._seed(["a.mp3"])
        engine = ReorderEngine(self.work, extension="mp3", fs=self.fs)

        result = engine.apply(["a"])

        self.assertEqual(result.status, ApplyStatus.SUCCESS)
        self.assertIsNone(result.mirror)


class TestRenameOne(unittest.TestCase):
    def setUp(self):
        self.work = tempfile.mkdtemp(prefix="playorder_rename_")
        self.fs = AppendOrderFileSystem()
        self.player = RecordingPlayer()
        self.engine = ReorderEngine(self.work, os.path.join(self.work, "backup"),
                                    player=self.player, fs=self.fs)
        self.fs.create(self.work, "a.mp3")
        self.fs.create(self.work, "b.mp3")

    def tearDown(self):
        shutil.rmtree(self.work, ignore_errors=True)

    def test_renames_immediately(self):
        self.assertEqual(self.engine.rename_one("a", " Morning "), "Morning")
        self.assertEqual(sorted(os.listdir(self.work)), ["Morning.mp3", "b.mp3"])
        self.assertIn(("stop",), self.player.calls)
        # No mirror pass for a single rename
        self.assertFalse(os.path.exists(os.path.join(self.work, "backup")))

    def test_empty_label_rejected(self):
        with self.assertRaises(ValueError):
            self.engine.rename_one("a", "   ")
        self.assertEqual(sorted(os.listdir(self.work)), ["a.mp3", "b.mp3"])

    def test_collision(self):
        with self.assertRaises(NameCollision):
            self.engine.rename_one("a", "b")
        self.assertEqual(sorted(os.listdir(self.work)), ["a.mp3", "b.mp3"])


if __name__ == '__main__':
    unittest.main()
