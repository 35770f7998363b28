"""Unit tests for the slot-aligned and character-offset layout strategies."""

import pytest

from songsheet.layout_strategy import (
    CharacterOffsetLayout,
    LayoutMode,
    SlotAlignedLayout,
    get_layout_strategy,
    layout_line,
)
from songsheet.song_models import Line, Placement, Song


def _amazing_grace() -> Song:
    return Song(
        title="Amazing Grace",
        key="G",
        lines=(
            Line(lyrics=("Amazing", "grace"), chords=("C", None)),
            Line(lyrics=("how", "sweet", "the", "sound"), chords=(None, "G", "", "D7")),
        ),
    )


# ── Character-offset mode ────────────────────────────────────────────────────

def test_offset_mode_places_chord_at_word_start() -> None:
    line = _amazing_grace().lines[0]
    result = CharacterOffsetLayout().layout_line(line, 0)
    assert result.chord_positions == (Placement(text="C", column=0),)


def test_offset_mode_has_no_marker_for_absent_chord() -> None:
    line = _amazing_grace().lines[0]
    result = CharacterOffsetLayout().layout_line(line, 0)
    assert len(result.chord_positions) == 1
    assert result.word_positions == (
        Placement(text="Amazing", column=0),
        Placement(text="grace", column=8),
    )


def test_offset_mode_columns_follow_single_space_join() -> None:
    line = _amazing_grace().lines[1]
    result = CharacterOffsetLayout().layout_line(line, 0)
    # "how sweet the sound": sweet at 4, sound at 14
    assert result.chord_positions == (
        Placement(text="G", column=4),
        Placement(text="D7", column=14),
    )
    assert result.lyric_text() == "how sweet the sound"


def test_offset_mode_transposes_chords() -> None:
    line = _amazing_grace().lines[1]
    result = CharacterOffsetLayout().layout_line(line, 2)
    assert [p.text for p in result.chord_positions] == ["A", "E7"]


def test_offset_mode_scales_columns_by_char_width() -> None:
    strategy = CharacterOffsetLayout(char_width=2.5)
    assert strategy.x_for(0) == 0.0
    assert strategy.x_for(8) == 20.0


def test_offset_mode_rejects_non_positive_char_width() -> None:
    with pytest.raises(ValueError):
        CharacterOffsetLayout(char_width=0)


# ── Slot-aligned mode ────────────────────────────────────────────────────────

def test_slot_mode_uses_slot_index_as_column() -> None:
    line = _amazing_grace().lines[1]
    result = SlotAlignedLayout().layout_line(line, 0)
    assert result.chord_positions == (
        Placement(text="G", column=1),
        Placement(text="D7", column=3),
    )
    assert [p.column for p in result.word_positions] == [0, 1, 2, 3]


def test_slot_mode_chord_cells_have_gaps() -> None:
    line = _amazing_grace().lines[1]
    result = SlotAlignedLayout().layout_line(line, -2)
    assert result.chord_cells() == ["", "F", "", "C7"]


def test_short_chords_sequence_treated_as_empty_slots() -> None:
    line = Line(lyrics=("one", "two", "three"), chords=("E",))
    result = SlotAlignedLayout().layout_line(line, 0)
    assert result.chord_cells() == ["E", "", ""]
    assert result.slot_count == 3


def test_extra_chords_beyond_lyrics_are_ignored() -> None:
    line = Line(lyrics=("one",), chords=("E", "A"))
    result = CharacterOffsetLayout().layout_line(line, 0)
    assert result.chord_positions == (Placement(text="E", column=0),)


def test_opaque_chord_is_emitted_unchanged() -> None:
    line = Line(lyrics=("hum",), chords=("N.C.",))
    result = SlotAlignedLayout().layout_line(line, 5)
    assert result.chord_cells() == ["N.C."]


# ── Song layout and factory ──────────────────────────────────────────────────

@pytest.mark.parametrize("mode", list(LayoutMode))
def test_layout_song_keeps_line_order(mode: LayoutMode) -> None:
    song = _amazing_grace()
    lines = get_layout_strategy(mode).layout_song(song, 0)
    assert [line.lyric_text() for line in lines] == ["Amazing grace", "how sweet the sound"]
    assert all(line.mode == mode.value for line in lines)


def test_layout_is_recomputed_identically() -> None:
    song = _amazing_grace()
    strategy = get_layout_strategy("offset")
    assert strategy.layout_song(song, 3) == strategy.layout_song(song, 3)


def test_get_layout_strategy_accepts_string_values() -> None:
    assert isinstance(get_layout_strategy("slot"), SlotAlignedLayout)
    assert isinstance(get_layout_strategy("offset"), CharacterOffsetLayout)


def test_get_layout_strategy_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        get_layout_strategy("diagonal")


def test_module_layout_line_defaults_to_slot_mode() -> None:
    line = _amazing_grace().lines[0]
    assert layout_line(line, 0).mode == LayoutMode.SLOT_ALIGNED.value


def test_offset_mode_placements_carry_scaled_x() -> None:
    line = _amazing_grace().lines[1]
    result = get_layout_strategy("offset", char_width=2.5).layout_line(line, 0)
    assert [p.x for p in result.chord_positions] == [10.0, 35.0]
    assert [p.x for p in result.word_positions] == [0.0, 10.0, 25.0, 35.0]


def test_slot_mode_x_is_slot_index() -> None:
    line = _amazing_grace().lines[1]
    result = SlotAlignedLayout().layout_line(line, 0)
    assert [p.x for p in result.chord_positions] == [1.0, 3.0]
