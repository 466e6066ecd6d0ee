# SPDX-License-Identifier: GPL-3.0-or-later
"""
Rendering of the note's inline markup into styled text runs.

Recognized markup:

    **bold**        bold run
    *italic*        italic run
    - item, * item  bullet line, shown as "・ item"
    1. item         numbered line

Anything that does not match is kept as literal text, so rendering never
fails. Each source line yields its segments in order, with a LINE_BREAK
between consecutive lines.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Union

from stickynote.constants import BULLET_PREFIX, LIST_INDENT

BOLD_PATTERN = re.compile(r'\*\*(.+?)\*\*')
ITALIC_PATTERN = re.compile(r'(?<!\*)\*([^*]+)\*(?!\*)')
BULLET_PATTERN = re.compile(r'^\s*[-*]\s+(.+)$')
NUMBER_PATTERN = re.compile(r'^\s*(\d+)\.\s+(.+)$')


@dataclass(frozen=True)
class StyledSegment:
    text: str
    font_family: str
    font_size: float
    font_color: str
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class LineBreak:
    pass


LINE_BREAK = LineBreak()

RenderItem = Union[StyledSegment, LineBreak]


def render(text, font_family, font_size, font_color) -> Iterator[RenderItem]:
    """Yield the styled segments and line breaks for ``text``."""
    lines = (text or '').replace('\r\n', '\n').split('\n')
    for line_idx, line in enumerate(lines):
        yield from _render_line(line, font_family, font_size, font_color)
        if line_idx < len(lines) - 1:
            yield LINE_BREAK


def _render_line(line, font_family, font_size, font_color):
    content = line
    indented = True

    bullet_match = BULLET_PATTERN.match(line)
    number_match = NUMBER_PATTERN.match(line)
    if bullet_match:
        content = BULLET_PREFIX + bullet_match.group(1)
    elif number_match:
        content = f'{number_match.group(1)}. {number_match.group(2)}'
    else:
        indented = False

    if indented:
        yield StyledSegment(LIST_INDENT, font_family, font_size, font_color)

    yield from _render_inline(content, font_family, font_size, font_color)


def _render_inline(text, font_family, font_size, font_color):
    index = 0
    while index < len(text):
        # Searching with a start offset keeps the italic lookbehind able to
        # see the character just before the cursor.
        bold_match = BOLD_PATTERN.search(text, index)
        italic_match = ITALIC_PATTERN.search(text, index)
        match = _select_next_match(bold_match, italic_match)

        if match is None:
            yield StyledSegment(text[index:], font_family, font_size, font_color)
            return

        if match.start() > index:
            yield StyledSegment(
                text[index:match.start()], font_family, font_size, font_color,
            )

        is_bold = match is bold_match
        yield StyledSegment(
            match.group(1), font_family, font_size, font_color,
            bold=is_bold, italic=not is_bold,
        )
        index = match.end()


def _select_next_match(bold_match, italic_match):
    if bold_match is None:
        return italic_match
    if italic_match is None:
        return bold_match
    return bold_match if bold_match.start() <= italic_match.start() else italic_match
