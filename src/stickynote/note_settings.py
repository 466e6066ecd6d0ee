# SPDX-License-Identifier: GPL-3.0-or-later

import dataclasses
import itertools
import math
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from stickynote.constants import (
    DEFAULT_FONT_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    DEFAULT_X,
    DEFAULT_Y,
    MIN_HEIGHT,
    MIN_WIDTH,
)

HEX_COLOR_PATTERN = re.compile(r'#[0-9a-fA-F]{6}')

# attribute name -> key in the settings file
FIELD_KEYS = {
    'x': 'x',
    'y': 'y',
    'width': 'width',
    'height': 'height',
    'is_locked': 'isLocked',
    'content': 'content',
    'font_family': 'fontFamily',
    'font_size': 'fontSize',
    'font_color': 'fontColor',
}

_NUMBER_FIELDS = {'x', 'y', 'width', 'height', 'font_size'}
_STRING_FIELDS = {'content', 'font_family', 'font_color'}

ChangeCallback = Callable[['NoteSettings', str], None]


def is_hex_color(value) -> bool:
    return isinstance(value, str) and HEX_COLOR_PATTERN.fullmatch(value) is not None


@dataclass
class NoteSettings:
    """The note's persisted state: geometry, lock flag, text and font.

    Assigning a field a value different from the current one notifies every
    callback registered with :meth:`connect`; assigning an equal value does
    nothing.
    """

    x: float = DEFAULT_X
    y: float = DEFAULT_Y
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    is_locked: bool = False
    content: Optional[str] = ''
    font_family: Optional[str] = DEFAULT_FONT_FAMILY
    font_size: float = DEFAULT_FONT_SIZE
    font_color: Optional[str] = DEFAULT_FONT_COLOR
    _handlers: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def __setattr__(self, name, value):
        if name in FIELD_KEYS and name in self.__dict__:
            current = self.__dict__[name]
            if current is value or current == value:
                return
            super().__setattr__(name, value)
            self._notify(name)
            return
        super().__setattr__(name, value)

    # --- Change notification ---

    _handler_ids = itertools.count(1)

    def connect(self, callback: ChangeCallback) -> int:
        handler_id = next(self._handler_ids)
        self._handlers[handler_id] = callback
        return handler_id

    def disconnect(self, handler_id):
        self._handlers.pop(handler_id, None)

    def _notify(self, name):
        handlers = self.__dict__.get('_handlers')
        if not handlers:
            return
        for callback in list(handlers.values()):
            callback(self, name)

    # --- Validation ---

    def validate_and_fix(self):
        """Bring every field back into its valid range. Never raises."""
        if self.content is None:
            self.content = ''
        if not self.font_family:
            self.font_family = DEFAULT_FONT_FAMILY
        if not is_hex_color(self.font_color):
            self.font_color = DEFAULT_FONT_COLOR

        if not math.isfinite(self.x):
            self.x = DEFAULT_X
        if not math.isfinite(self.y):
            self.y = DEFAULT_Y

        # Negated comparisons also catch NaN
        if not 1 <= self.font_size < math.inf:
            self.font_size = DEFAULT_FONT_SIZE
        if not MIN_WIDTH <= self.width < math.inf:
            self.width = MIN_WIDTH
        if not MIN_HEIGHT <= self.height < math.inf:
            self.height = MIN_HEIGHT

    # --- Copies ---

    def clone(self) -> 'NoteSettings':
        return dataclasses.replace(self)

    def copy_from(self, source: 'NoteSettings'):
        """Overwrite every field with ``source``'s, keeping this instance."""
        for name in FIELD_KEYS:
            setattr(self, name, getattr(source, name))

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {key: getattr(self, name) for name, key in FIELD_KEYS.items()}

    @classmethod
    def from_dict(cls, data) -> 'NoteSettings':
        """Build settings from a decoded settings file.

        Missing keys keep their defaults and unknown keys are ignored.
        Raises ValueError when a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f'settings must be an object, got {type(data).__name__}')

        values = {}
        for name, key in FIELD_KEYS.items():
            if key not in data:
                continue
            value = data[key]
            if name in _NUMBER_FIELDS:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f'{key} must be a number, got {value!r}')
                try:
                    value = float(value)
                except OverflowError:
                    raise ValueError(f'{key} is out of range') from None
                if not math.isfinite(value):
                    raise ValueError(f'{key} must be finite, got {value!r}')
            elif name in _STRING_FIELDS:
                if value is not None and not isinstance(value, str):
                    raise ValueError(f'{key} must be a string, got {value!r}')
            elif not isinstance(value, bool):
                raise ValueError(f'{key} must be a boolean, got {value!r}')
            values[name] = value
        return cls(**values)
