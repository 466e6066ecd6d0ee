# SPDX-License-Identifier: GPL-3.0-or-later

import logging

import gi
gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Adw, Gio, GLib

from stickynote import __version__
from stickynote.auto_save import AutoSave
from stickynote.config import APP_ID
from stickynote.logger import configure_logging
from stickynote.settings_store import LoadStatus, SettingsStore

_LOG = logging.getLogger(__name__)


class StickyNoteApp(Adw.Application):

    def __init__(self, version=__version__, store=None, **kwargs):
        super().__init__(
            application_id=APP_ID,
            flags=Gio.ApplicationFlags.DEFAULT_FLAGS,
            **kwargs,
        )
        self.version = version
        self.store = store
        self.settings = None
        self._auto_save = None
        self._window = None
        self._lock_action = None

    def do_startup(self):
        Adw.Application.do_startup(self)
        configure_logging()

        if self.store is None:
            self.store = SettingsStore()
        result = self.store.load_result()
        if result.status is LoadStatus.FALLBACK:
            _LOG.warning('Settings file unreadable, starting from defaults: %s', result.error)
        self.settings = result.settings

        self._auto_save = AutoSave(self.store, self.settings)
        self.settings.connect(self._on_settings_changed)

        self._setup_actions()
        self._setup_shortcuts()

    def _setup_actions(self):
        actions = [
            ('settings', self._on_settings),
            ('quit', self._on_quit),
        ]
        for name, callback in actions:
            action = Gio.SimpleAction.new(name, None)
            action.connect('activate', callback)
            self.add_action(action)

        self._lock_action = Gio.SimpleAction.new_stateful(
            'toggle-lock', None, GLib.Variant.new_boolean(self.settings.is_locked),
        )
        self._lock_action.connect('activate', self._on_toggle_lock)
        self.add_action(self._lock_action)

    def _setup_shortcuts(self):
        self.set_accels_for_action('app.settings', ['<Control>comma'])
        self.set_accels_for_action('app.toggle-lock', ['<Control>l'])
        self.set_accels_for_action('app.quit', ['<Control>q'])

    def do_activate(self):
        from stickynote.note_window import NoteWindow

        if self._window is None:
            self._window = NoteWindow(application=self, settings=self.settings)
            self._window.connect('close-request', self._on_window_closed)
        self._window.present()

    def _on_window_closed(self, win):
        self._window = None
        return False

    def do_shutdown(self):
        if self._auto_save is not None:
            self._auto_save.flush()
            self._auto_save.close()
        Adw.Application.do_shutdown(self)

    def apply_settings(self, draft):
        """Commit an edited copy of the settings to the live instance."""
        self.settings.copy_from(draft)
        self.settings.validate_and_fix()
        self._auto_save.flush()

    def _on_settings_changed(self, settings, field_name):
        if field_name == 'is_locked':
            self._lock_action.set_state(GLib.Variant.new_boolean(settings.is_locked))

    def _on_toggle_lock(self, action, param):
        self.settings.is_locked = not self.settings.is_locked

    def _on_settings(self, action, param):
        from stickynote.preferences import SettingsDialog

        dialog = SettingsDialog(self.settings, on_save=self.apply_settings)
        dialog.present(self.get_active_window())

    def _on_quit(self, action, param):
        if self._window is not None:
            self._window.close()
        self.quit()
