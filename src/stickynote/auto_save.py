# SPDX-License-Identifier: GPL-3.0-or-later

from gi.repository import GLib

from stickynote.constants import AUTOSAVE_DELAY_MS


class AutoSave:
    """Debounced background save whenever a settings field changes."""

    def __init__(self, store, settings, delay_ms=AUTOSAVE_DELAY_MS):
        self._store = store
        self._settings = settings
        self._delay_ms = delay_ms
        self._timeout_id = None
        self._handler_id = settings.connect(self._on_settings_changed)

    def _on_settings_changed(self, settings, field_name):
        self.trigger()

    def trigger(self):
        """Schedule a save after the debounce delay. Resets if called again."""
        self.cancel()
        self._timeout_id = GLib.timeout_add(self._delay_ms, self._do_save)

    def cancel(self):
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
            self._timeout_id = None

    def flush(self):
        """Save synchronously, dropping any pending background save."""
        self.cancel()
        self._store.save(self._settings)

    def close(self):
        self.cancel()
        if self._handler_id is not None:
            self._settings.disconnect(self._handler_id)
            self._handler_id = None

    def _do_save(self):
        self._timeout_id = None
        self._store.save_async(self._settings)
        return GLib.SOURCE_REMOVE
