# SPDX-License-Identifier: GPL-3.0-or-later
"""Field handling for the settings dialog, kept free of any toolkit code."""

import math
from dataclasses import dataclass
from typing import Optional

from stickynote.constants import (
    DEFAULT_FONT_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    MIN_HEIGHT,
    MIN_WIDTH,
)
from stickynote.note_settings import NoteSettings, is_hex_color


def parse_number(text, fallback: float) -> float:
    try:
        value = float(text.strip())
    except (AttributeError, ValueError):
        return fallback
    return value if math.isfinite(value) else fallback


def resolve_font_family(name, available) -> str:
    return name if name in available else DEFAULT_FONT_FAMILY


def format_number(value) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class SettingsForm:
    width: str
    height: str
    font_family: Optional[str]
    font_size: str
    font_color: str
    is_locked: bool

    @classmethod
    def from_settings(cls, settings: NoteSettings, available) -> 'SettingsForm':
        return cls(
            width=format_number(settings.width),
            height=format_number(settings.height),
            font_family=resolve_font_family(settings.font_family, available),
            font_size=format_number(settings.font_size),
            font_color=settings.font_color or '',
            is_locked=settings.is_locked,
        )

    def apply_to(self, draft: NoteSettings) -> NoteSettings:
        """Write the edited values into ``draft`` and return it."""
        draft.width = max(parse_number(self.width, DEFAULT_WIDTH), MIN_WIDTH)
        draft.height = max(parse_number(self.height, DEFAULT_HEIGHT), MIN_HEIGHT)
        draft.font_family = self.font_family or DEFAULT_FONT_FAMILY
        draft.font_size = max(parse_number(self.font_size, DEFAULT_FONT_SIZE), 1.0)

        color = (self.font_color or '').strip()
        draft.font_color = color if is_hex_color(color) else DEFAULT_FONT_COLOR

        draft.is_locked = bool(self.is_locked)
        return draft
