from __future__ import annotations

import importlib.util
import sys
import tempfile
import time
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from stickynote.constants import SETTINGS_FILE_NAME
from stickynote.note_settings import NoteSettings
from stickynote.settings_store import SettingsStore


class RecordingStore(SettingsStore):
    """Keeps the background writers so tests can join them."""

    def __init__(self, path) -> None:
        super().__init__(path)
        self.workers = []

    def save_async(self, settings):
        worker = super().save_async(settings)
        self.workers.append(worker)
        return worker


@unittest.skipUnless(importlib.util.find_spec("gi"), "PyGObject is not installed")
class AutoSaveTest(unittest.TestCase):
    def setUp(self) -> None:
        from gi.repository import GLib
        from stickynote.auto_save import AutoSave

        self.context = GLib.MainContext.default()
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.path = Path(self.tmpdir.name) / SETTINGS_FILE_NAME
        self.store = RecordingStore(self.path)
        self.settings = NoteSettings()
        self.autosave = AutoSave(self.store, self.settings, delay_ms=10)
        self.addCleanup(self.autosave.close)

    def spin(self, seconds: float = 0.2) -> None:
        deadline = time.monotonic() + seconds
        while time.monotonic() < deadline:
            self.context.iteration(False)
            time.sleep(0.005)

    def join_workers(self) -> None:
        for worker in self.store.workers:
            worker.join(timeout=5)
            self.assertFalse(worker.is_alive())

    def test_change_schedules_background_save(self) -> None:
        self.settings.content = "typed"
        self.assertIsNotNone(self.autosave._timeout_id)
        self.assertFalse(self.path.exists())

        self.spin()
        self.join_workers()
        self.assertEqual(len(self.store.workers), 1)
        self.assertIsNone(self.autosave._timeout_id)
        self.assertEqual(self.store.load().content, "typed")

    def test_burst_of_changes_saves_once(self) -> None:
        self.settings.content = "a"
        self.settings.content = "ab"
        self.settings.is_locked = True

        self.spin()
        self.join_workers()
        self.assertEqual(len(self.store.workers), 1)
        loaded = self.store.load()
        self.assertEqual(loaded.content, "ab")
        self.assertTrue(loaded.is_locked)

    def test_flush_writes_synchronously_and_cancels_timer(self) -> None:
        self.settings.content = "flushed"
        self.autosave.flush()

        self.assertIsNone(self.autosave._timeout_id)
        self.assertEqual(self.store.load().content, "flushed")
        self.spin()
        self.assertEqual(self.store.workers, [])

    def test_close_unsubscribes_from_the_model(self) -> None:
        self.settings.content = "pending"
        self.autosave.close()

        self.assertEqual(self.settings._handlers, {})
        self.assertIsNone(self.autosave._timeout_id)
        self.settings.content = "after close"
        self.spin()
        self.assertEqual(self.store.workers, [])
        self.assertFalse(self.path.exists())


if __name__ == "__main__":
    unittest.main()
