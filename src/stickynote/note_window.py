# SPDX-License-Identifier: GPL-3.0-or-later

import logging

import gi
gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Adw, Gdk, Gio, Gtk

from stickynote.config import APP_NAME
from stickynote.constants import MIN_HEIGHT, MIN_WIDTH
from stickynote.markup_buffer import render_to_buffer
from stickynote.markup_renderer import render

_LOG = logging.getLogger(__name__)

RENDER_FIELDS = {'content', 'font_family', 'font_size', 'font_color'}


class NoteWindow(Adw.ApplicationWindow):
    """The note itself: rendered markup that turns into an editor on double click."""

    def __init__(self, application, settings, **kwargs):
        super().__init__(application=application, **kwargs)
        self._settings = settings
        self._editing = False
        self._syncing_size = False
        self._css_provider = Gtk.CssProvider()

        self.set_title(APP_NAME)
        self.set_size_request(int(MIN_WIDTH), int(MIN_HEIGHT))
        self.set_default_size(int(settings.width), int(settings.height))
        self.add_css_class('sticky-note')

        Gtk.StyleContext.add_provider_for_display(
            Gdk.Display.get_default(),
            self._css_provider,
            Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION,
        )

        self._build_ui()
        self._apply_font_css()
        self._render()

        self._handler_id = settings.connect(self._on_settings_changed)
        self.connect('notify::default-width', self._on_size_changed)
        self.connect('notify::default-height', self._on_size_changed)

    def _build_ui(self):
        self._stack = Gtk.Stack(
            transition_type=Gtk.StackTransitionType.CROSSFADE,
        )

        # View mode
        view_scroller = Gtk.ScrolledWindow(vexpand=True, hexpand=True)
        self._view = Gtk.TextView(
            editable=False, cursor_visible=False,
            wrap_mode=Gtk.WrapMode.WORD_CHAR,
            left_margin=12, right_margin=12,
            top_margin=8, bottom_margin=8,
        )
        self._view.add_css_class('note-view')
        view_scroller.set_child(self._view)
        self._stack.add_named(view_scroller, 'view')

        click = Gtk.GestureClick(button=Gdk.BUTTON_PRIMARY)
        click.set_propagation_phase(Gtk.PropagationPhase.CAPTURE)
        click.connect('pressed', self._on_view_pressed)
        self._view.add_controller(click)

        drag = Gtk.GestureDrag(button=Gdk.BUTTON_PRIMARY)
        drag.connect('drag-update', self._on_view_drag_update)
        self._view.add_controller(drag)

        context_click = Gtk.GestureClick(button=Gdk.BUTTON_SECONDARY)
        context_click.connect('pressed', self._on_context_pressed)
        self._view.add_controller(context_click)

        menu = Gio.Menu()
        menu.append('Settings', 'app.settings')
        menu.append('Lock Position', 'app.toggle-lock')
        menu.append('Quit', 'app.quit')
        self._context_menu = Gtk.PopoverMenu(menu_model=menu, has_arrow=False)
        self._context_menu.set_parent(self._view)

        # Edit mode
        edit_scroller = Gtk.ScrolledWindow(vexpand=True, hexpand=True)
        self._editor = Gtk.TextView(
            wrap_mode=Gtk.WrapMode.WORD_CHAR,
            left_margin=12, right_margin=12,
            top_margin=8, bottom_margin=8,
            accepts_tab=False,
        )
        self._editor.add_css_class('note-editor')
        edit_scroller.set_child(self._editor)
        self._stack.add_named(edit_scroller, 'edit')

        focus = Gtk.EventControllerFocus()
        focus.connect('leave', self._on_editor_focus_leave)
        self._editor.add_controller(focus)

        keys = Gtk.EventControllerKey()
        keys.connect('key-pressed', self._on_editor_key_pressed)
        self._editor.add_controller(keys)

        self._stack.set_visible_child_name('view')
        self.set_content(self._stack)

    # --- Rendering ---

    def _render(self):
        s = self._settings
        items = render(s.content, s.font_family, s.font_size, s.font_color)
        render_to_buffer(self._view.get_buffer(), items)

    def _apply_font_css(self):
        s = self._settings
        family = s.font_family.replace('"', '')
        self._css_provider.load_from_string(
            f'.sticky-note .note-view, .sticky-note .note-editor {{\n'
            f'    font-family: "{family}";\n'
            f'    font-size: {s.font_size}pt;\n'
            f'    color: {s.font_color};\n'
            f'}}\n'
        )

    def _on_settings_changed(self, settings, field_name):
        if field_name in RENDER_FIELDS:
            if field_name != 'content':
                self._apply_font_css()
            self._render()
        elif field_name in ('width', 'height') and not self._syncing_size:
            self.set_default_size(int(settings.width), int(settings.height))

    def _on_size_changed(self, window, pspec):
        width, height = self.get_default_size()
        self._syncing_size = True
        try:
            if width > 0:
                self._settings.width = float(width)
            if height > 0:
                self._settings.height = float(height)
        finally:
            self._syncing_size = False

    # --- View mode ---

    def _on_view_pressed(self, gesture, n_press, x, y):
        if n_press == 2:
            gesture.set_state(Gtk.EventSequenceState.CLAIMED)
            self._start_editing(x, y)

    def _on_view_drag_update(self, gesture, offset_x, offset_y):
        if self._settings.is_locked:
            return
        ok, start_x, start_y = gesture.get_start_point()
        if not ok or not self._view.drag_check_threshold(
            int(start_x), int(start_y),
            int(start_x + offset_x), int(start_y + offset_y),
        ):
            return
        surface = self.get_surface()
        ok, window_x, window_y = self._view.translate_coordinates(self, start_x, start_y)
        if surface is None or not ok:
            return
        gesture.set_state(Gtk.EventSequenceState.CLAIMED)
        surface.begin_move(
            gesture.get_device(),
            gesture.get_current_button(),
            window_x, window_y,
            gesture.get_current_event_time(),
        )
        gesture.reset()

    def _on_context_pressed(self, gesture, n_press, x, y):
        rect = Gdk.Rectangle()
        rect.x, rect.y, rect.width, rect.height = int(x), int(y), 1, 1
        self._context_menu.set_pointing_to(rect)
        self._context_menu.popup()

    # --- Edit mode ---

    def _start_editing(self, x=None, y=None):
        buffer = self._editor.get_buffer()
        buffer.set_text(self._settings.content)
        self._editing = True
        self._stack.set_visible_child_name('edit')
        self._editor.grab_focus()

        if x is not None:
            # Rendered text differs from the source, so this is approximate.
            buffer_x, buffer_y = self._view.window_to_buffer_coords(
                Gtk.TextWindowType.WIDGET, int(x), int(y),
            )
            found, cursor = self._editor.get_iter_at_location(buffer_x, buffer_y)
            if found:
                buffer.place_cursor(cursor)
                return
        buffer.place_cursor(buffer.get_end_iter())

    def _on_editor_focus_leave(self, controller):
        if self._editing:
            self.commit_edit()

    def _on_editor_key_pressed(self, controller, keyval, keycode, state):
        if keyval == Gdk.KEY_Escape:
            self.cancel_edit()
            return Gdk.EVENT_STOP
        return Gdk.EVENT_PROPAGATE

    def commit_edit(self):
        buffer = self._editor.get_buffer()
        text = buffer.get_text(buffer.get_start_iter(), buffer.get_end_iter(), True)
        self._editing = False
        self._stack.set_visible_child_name('view')
        self._settings.content = text
        _LOG.debug('Committed %d characters', len(text))

    def cancel_edit(self):
        self._editing = False
        self._stack.set_visible_child_name('view')
        self._editor.get_buffer().set_text(self._settings.content)

    def do_close_request(self):
        if self._editing:
            self.commit_edit()
        self._settings.disconnect(self._handler_id)
        self._context_menu.unparent()
        Gtk.StyleContext.remove_provider_for_display(
            Gdk.Display.get_default(), self._css_provider,
        )
        return False
