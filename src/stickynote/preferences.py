# SPDX-License-Identifier: GPL-3.0-or-later

import gi
gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Adw, Gtk

from stickynote.settings_form import SettingsForm


class SettingsDialog(Adw.AlertDialog):
    """Edits a copy of the settings; ``on_save`` receives it on confirm."""

    def __init__(self, settings, on_save, **kwargs):
        super().__init__(heading='Settings', **kwargs)
        self._draft = settings.clone()
        self._on_save = on_save
        self._families = self._list_font_families()

        self._build_ui(SettingsForm.from_settings(self._draft, self._families))

        self.add_response('cancel', 'Cancel')
        self.add_response('save', 'Save')
        self.set_response_appearance('save', Adw.ResponseAppearance.SUGGESTED)
        self.set_default_response('save')
        self.set_close_response('cancel')
        self.connect('response', self._on_response)

    def _list_font_families(self):
        font_map = self.get_pango_context().get_font_map()
        return sorted(family.get_name() for family in font_map.list_families())

    def _build_ui(self, form):
        rows = Gtk.ListBox(selection_mode=Gtk.SelectionMode.NONE)
        rows.add_css_class('boxed-list')

        self._width_row = Adw.EntryRow(title='Width', text=form.width)
        self._height_row = Adw.EntryRow(title='Height', text=form.height)
        rows.append(self._width_row)
        rows.append(self._height_row)

        self._family_row = Adw.ComboRow(title='Font')
        self._family_row.set_model(Gtk.StringList.new(self._families))
        if form.font_family in self._families:
            self._family_row.set_selected(self._families.index(form.font_family))
        rows.append(self._family_row)

        self._size_row = Adw.EntryRow(title='Font Size', text=form.font_size)
        self._color_row = Adw.EntryRow(title='Font Color (#RRGGBB)', text=form.font_color)
        rows.append(self._size_row)
        rows.append(self._color_row)

        self._locked_row = Adw.SwitchRow(
            title='Lock Position',
            subtitle='Prevent the note from being dragged',
            active=form.is_locked,
        )
        rows.append(self._locked_row)

        self.set_extra_child(rows)

    def _selected_family(self):
        item = self._family_row.get_selected_item()
        return item.get_string() if item is not None else None

    def _on_response(self, dialog, response):
        if response != 'save':
            return

        form = SettingsForm(
            width=self._width_row.get_text(),
            height=self._height_row.get_text(),
            font_family=self._selected_family(),
            font_size=self._size_row.get_text(),
            font_color=self._color_row.get_text(),
            is_locked=self._locked_row.get_active(),
        )
        self._on_save(form.apply_to(self._draft))
