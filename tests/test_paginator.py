"""Unit tests for export pagination and filename derivation."""

import pytest

from songsheet.paginator import (
    PageGeometry,
    chord_row_text,
    export_filename,
    lyrics_row_text,
    pages,
    paginate,
)
from songsheet.song_models import DrawText, Line, PageBreak, Song


def _song(line_count: int, with_chords: bool = True, key: str | None = "G") -> Song:
    chords = ("G", None, "D") if with_chords else (None, None, None)
    line = Line(lyrics=("la", "la", "la"), chords=chords)
    return Song(title="Test Song", key=key, lines=(line,) * line_count)


def _texts(commands: list, role: str) -> list[DrawText]:
    return [c for c in commands if isinstance(c, DrawText) and c.role == role]


def test_title_block_comes_first() -> None:
    commands = paginate(_song(1), 0)
    assert commands[0] == DrawText(text="Test Song", x=20.0, y=20.0, font_size=20.0, role="title")
    assert commands[1] == DrawText(text="Key: G", x=20.0, y=30.0, font_size=12.0, role="key")


def test_key_is_transposed() -> None:
    commands = paginate(_song(1, key="Bb"), 2)
    assert _texts(commands, "key")[0].text == "Key: C"


def test_no_key_line_without_key() -> None:
    commands = paginate(_song(1, key=None), 0)
    assert _texts(commands, "key") == []


def test_title_override() -> None:
    commands = paginate(_song(1), 0, title="Other")
    assert _texts(commands, "title")[0].text == "Other"


def test_first_line_starts_below_title_block() -> None:
    commands = paginate(_song(1), 0)
    chords, lyrics = _texts(commands, "chords")[0], _texts(commands, "lyrics")[0]
    assert chords.y == 40.0
    assert lyrics.y == 45.0
    assert chords.font_size == 10.0
    assert lyrics.font_size == 12.0


def test_chord_row_joined_with_double_space() -> None:
    line = Line(lyrics=("a", "b", "c"), chords=("G", None, "D7"))
    assert chord_row_text(line, 0) == "G    D7"
    assert chord_row_text(line, 2) == "A    E7"


def test_lyrics_row_joined_with_single_space() -> None:
    assert lyrics_row_text(Line(lyrics=("Amazing", "grace"))) == "Amazing grace"


def test_blank_chord_row_is_skipped() -> None:
    commands = paginate(_song(2, with_chords=False), 0)
    assert _texts(commands, "chords") == []
    lyrics = _texts(commands, "lyrics")
    assert [t.y for t in lyrics] == [40.0, 50.0]


def test_page_break_counts_with_chords() -> None:
    # 15 mm per line: 16 lines fit below the title block, 17 on later pages.
    commands = paginate(_song(40), 0)
    split = pages(commands)
    assert sum(isinstance(c, PageBreak) for c in commands) == 2
    assert [len(_texts(page, "lyrics")) for page in split] == [16, 17, 7]


def test_page_break_counts_without_chords() -> None:
    commands = paginate(_song(60, with_chords=False), 0)
    split = pages(commands)
    assert [len(_texts(page, "lyrics")) for page in split] == [24, 26, 10]


def test_short_song_has_no_page_break() -> None:
    commands = paginate(_song(5), 0)
    assert not any(isinstance(c, PageBreak) for c in commands)


def test_cursor_resets_to_top_margin_after_break() -> None:
    commands = paginate(_song(20), 0)
    second_page = pages(commands)[1]
    assert second_page[0].role == "chords"
    assert second_page[0].y == 20.0


@pytest.mark.parametrize("page_height", [60.0, 100.0, 150.0])
def test_lines_are_never_split_across_pages(page_height: float) -> None:
    commands = paginate(_song(30), 0, page_height)
    for i, command in enumerate(commands):
        if isinstance(command, PageBreak):
            assert isinstance(commands[i - 1], DrawText) and commands[i - 1].role == "lyrics"
            assert isinstance(commands[i + 1], DrawText) and commands[i + 1].role == "chords"


def test_custom_page_height_breaks_earlier() -> None:
    default_breaks = sum(isinstance(c, PageBreak) for c in paginate(_song(30), 0))
    tight_breaks = sum(isinstance(c, PageBreak) for c in paginate(_song(30), 0, 100.0))
    assert tight_breaks > default_breaks


def test_custom_geometry() -> None:
    geometry = PageGeometry(left_margin=10.0, body_start_y=50.0)
    commands = paginate(_song(1), 0, geometry=geometry)
    first_chords = _texts(commands, "chords")[0]
    assert (first_chords.x, first_chords.y) == (10.0, 50.0)


def test_geometry_rejects_zero_row_height() -> None:
    with pytest.raises(ValueError):
        PageGeometry(lyrics_row_height=0)


def test_pages_of_empty_song_is_single_page() -> None:
    commands = paginate(Song(title="Empty"), 0)
    assert len(pages(commands)) == 1


def test_export_filename_sanitizes_title() -> None:
    assert export_filename("Amazing Grace (Live)!") == "amazing_grace__live__.pdf"


def test_export_filename_custom_extension() -> None:
    assert export_filename("Rocky Top", ".html") == "rocky_top.html"


def test_break_happens_only_when_line_start_exceeds_page_height() -> None:
    # Lyric-only lines start at 40, 50, 60, 70 ... below the title block.
    song = _song(6, with_chords=False)
    at_threshold = pages(paginate(song, 0, 60.0))
    assert [len(_texts(page, "lyrics")) for page in at_threshold] == [3, 3]

    just_below = pages(paginate(song, 0, 59.9))
    assert len(_texts(just_below[0], "lyrics")) == 2


def test_break_count_follows_cursor_not_line_total() -> None:
    # 17 lines of 15 mm fill 255 mm, under the 270 mm threshold, yet the
    # body starts at 40 mm so the 17th line starts on a new page.
    commands = paginate(_song(17), 0)
    assert sum(isinstance(c, PageBreak) for c in commands) == 1
