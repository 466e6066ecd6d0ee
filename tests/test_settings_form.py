import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from stickynote.constants import (
    DEFAULT_FONT_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    MIN_HEIGHT,
    MIN_WIDTH,
)
from stickynote.note_settings import NoteSettings
from stickynote.settings_form import (
    SettingsForm,
    format_number,
    parse_number,
    resolve_font_family,
)

FAMILIES = ["DejaVu Sans", "Monospace", "Serif", DEFAULT_FONT_FAMILY]


def make_form(**overrides) -> SettingsForm:
    values = dict(
        width="320", height="240", font_family="Serif",
        font_size="16", font_color="#ABCDEF", is_locked=False,
    )
    values.update(overrides)
    return SettingsForm(**values)


def test_parse_number() -> None:
    assert parse_number(" 12.5 ", 1.0) == 12.5
    assert parse_number("7", 1.0) == 7.0
    assert parse_number("abc", 3.0) == 3.0
    assert parse_number("", 3.0) == 3.0
    assert parse_number(None, 3.0) == 3.0
    assert parse_number("nan", 3.0) == 3.0
    assert parse_number("inf", 3.0) == 3.0


def test_format_number() -> None:
    assert format_number(228.0) == "228"
    assert format_number(12.5) == "12.5"
    assert format_number(1500000) == "1500000"


def test_resolve_font_family() -> None:
    assert resolve_font_family("Serif", FAMILIES) == "Serif"
    assert resolve_font_family("Comic Sans", FAMILIES) == DEFAULT_FONT_FAMILY
    assert resolve_font_family(None, FAMILIES) == DEFAULT_FONT_FAMILY


def test_form_from_settings() -> None:
    settings = NoteSettings(width=300, height=180.5, font_family="Missing Font",
                            font_size=12, font_color="#102030", is_locked=True)
    form = SettingsForm.from_settings(settings, FAMILIES)
    assert form == SettingsForm(
        width="300", height="180.5", font_family=DEFAULT_FONT_FAMILY,
        font_size="12", font_color="#102030", is_locked=True,
    )


def test_apply_valid_values() -> None:
    draft = NoteSettings()
    result = make_form(is_locked=True).apply_to(draft)
    assert result is draft
    assert (draft.width, draft.height) == (320.0, 240.0)
    assert draft.font_family == "Serif"
    assert draft.font_size == 16.0
    assert draft.font_color == "#ABCDEF"
    assert draft.is_locked is True


def test_apply_clamps_small_geometry() -> None:
    draft = make_form(width="10", height="-5").apply_to(NoteSettings())
    assert draft.width == MIN_WIDTH
    assert draft.height == MIN_HEIGHT


def test_apply_unparsable_numbers_use_defaults() -> None:
    draft = make_form(width="wide", height="", font_size="big").apply_to(
        NoteSettings(width=999, height=999, font_size=30)
    )
    assert draft.width == DEFAULT_WIDTH
    assert draft.height == DEFAULT_HEIGHT
    assert draft.font_size == DEFAULT_FONT_SIZE


def test_apply_small_font_size_is_raised_to_one() -> None:
    assert make_form(font_size="0.5").apply_to(NoteSettings()).font_size == 1.0
    assert make_form(font_size="-4").apply_to(NoteSettings()).font_size == 1.0


def test_apply_color_is_trimmed_and_validated() -> None:
    assert make_form(font_color="  #a1b2c3 ").apply_to(NoteSettings()).font_color == "#a1b2c3"
    assert make_form(font_color="blue").apply_to(NoteSettings()).font_color == DEFAULT_FONT_COLOR
    assert make_form(font_color="").apply_to(NoteSettings()).font_color == DEFAULT_FONT_COLOR


def test_apply_without_family_selection_uses_default() -> None:
    draft = make_form(font_family=None).apply_to(NoteSettings(font_family="Serif"))
    assert draft.font_family == DEFAULT_FONT_FAMILY


def test_dialog_flow_commits_through_copy_from() -> None:
    live = NoteSettings(content="keep me")
    changed = []
    live.connect(lambda settings, name: changed.append(name))

    draft = make_form(width="400").apply_to(live.clone())
    assert live.width == DEFAULT_WIDTH
    assert changed == []

    live.copy_from(draft)
    live.validate_and_fix()
    assert live.width == 400.0
    assert live.content == "keep me"
    assert "width" in changed
    assert "content" not in changed
