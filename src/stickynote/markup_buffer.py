# SPDX-License-Identifier: GPL-3.0-or-later
"""Display of rendered markup in a GtkTextBuffer."""

import gi
gi.require_version('Gtk', '4.0')
from gi.repository import Pango

from stickynote.markup_renderer import LineBreak


STYLE_TAG_PREFIX = 'style:'

EMPHASIS_TAGS = {
    'bold': {'weight': Pango.Weight.BOLD},
    'italic': {'style': Pango.Style.ITALIC},
}


def render_to_buffer(text_buffer, items):
    """Replace the buffer's text with renderer output."""
    text_buffer.set_text('')
    _remove_style_tags(text_buffer)
    _ensure_tags(text_buffer)

    for item in items:
        end = text_buffer.get_end_iter()
        if isinstance(item, LineBreak):
            text_buffer.insert(end, '\n')
            continue

        tags = [_style_tag(text_buffer, item.font_family, item.font_size, item.font_color)]
        if item.bold:
            tags.append(text_buffer.get_tag_table().lookup('bold'))
        if item.italic:
            tags.append(text_buffer.get_tag_table().lookup('italic'))
        text_buffer.insert_with_tags(end, item.text, *tags)


def _ensure_tags(text_buffer):
    table = text_buffer.get_tag_table()
    for name, props in EMPHASIS_TAGS.items():
        if table.lookup(name) is None:
            text_buffer.create_tag(name, **props)


def _remove_style_tags(text_buffer):
    """Drop base-style tags left over from earlier font settings."""
    table = text_buffer.get_tag_table()
    stale = []
    table.foreach(lambda tag: stale.append(tag) if _is_style_tag(tag) else None)
    for tag in stale:
        table.remove(tag)


def _is_style_tag(tag) -> bool:
    name = tag.get_property('name')
    return bool(name) and name.startswith(STYLE_TAG_PREFIX)


def _style_tag(text_buffer, font_family, font_size, font_color):
    """Return the tag carrying one base font style, creating it on first use."""
    name = f'{STYLE_TAG_PREFIX}{font_family}:{font_size}:{font_color}'
    tag = text_buffer.get_tag_table().lookup(name)
    if tag is None:
        tag = text_buffer.create_tag(
            name,
            family=font_family,
            size_points=float(font_size),
            foreground=font_color,
        )
    return tag
