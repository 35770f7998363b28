"""Paginator: turns a song into page-broken draw commands for export."""

from __future__ import annotations

import re
from dataclasses import dataclass

from songsheet.chord_transposer import transpose_chord
from songsheet.song_models import DrawCommand, DrawText, Line, PageBreak, Song

# Export chord rows join slots with a double space rather than measuring
# character offsets.
CHORD_SEPARATOR = "  "
LYRIC_SEPARATOR = " "

DEFAULT_EXTENSION = ".pdf"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


@dataclass(frozen=True)
class PageGeometry:
    """
    Vertical layout of an exported page, in millimetres from the top edge.

    The defaults lay a song out on A4 portrait. ``page_height`` is the
    near-bottom threshold: once the cursor has moved past it, the next line
    starts a new page.
    """

    page_width: float = 210.0
    paper_height: float = 297.0
    left_margin: float = 20.0
    title_y: float = 20.0
    key_y: float = 30.0
    body_start_y: float = 40.0
    page_height: float = 270.0
    top_margin: float = 20.0
    chord_row_height: float = 5.0
    lyrics_row_height: float = 10.0
    title_font_size: float = 20.0
    key_font_size: float = 12.0
    chord_font_size: float = 10.0
    lyrics_font_size: float = 12.0

    def __post_init__(self) -> None:
        if self.chord_row_height <= 0 or self.lyrics_row_height <= 0:
            raise ValueError("Row heights must be positive.")
        if self.top_margin > self.page_height:
            raise ValueError("top_margin must not exceed page_height.")


def chord_row_text(line: Line, steps: int) -> str:
    """Transposed chords of a line, one slot each, double-space separated."""
    return CHORD_SEPARATOR.join(transpose_chord(chord, steps) if chord else "" for chord, _ in line.slots())


def lyrics_row_text(line: Line) -> str:
    return LYRIC_SEPARATOR.join(line.lyrics)


def paginate(
    song: Song,
    steps: int,
    page_height: float | None = None,
    *,
    title: str | None = None,
    geometry: PageGeometry | None = None,
) -> list[DrawCommand]:
    """
    Produce the draw commands for exporting a song.

    The title block comes first (title, then ``Key: <transposed key>`` when
    the song has a key). Each line then gets an optional chords row and a
    lyrics row. A PageBreak is emitted before any line that starts below
    ``page_height``, so a line's two rows always share a page.

    Args:
        song:        Song to export.
        steps:       Transpose offset in semitones.
        page_height: Cursor threshold that triggers a page break. Defaults
                     to ``geometry.page_height``.
        title:       Heading text. Defaults to the song's title.
        geometry:    Page layout constants.

    Returns:
        DrawText and PageBreak commands in drawing order.
    """
    geo = geometry or PageGeometry()
    threshold = geo.page_height if page_height is None else page_height
    heading = song.title if title is None else title
    x = geo.left_margin

    commands: list[DrawCommand] = [
        DrawText(text=heading, x=x, y=geo.title_y, font_size=geo.title_font_size, role="title")
    ]
    if song.key:
        commands.append(
            DrawText(
                text=f"Key: {transpose_chord(song.key, steps)}",
                x=x,
                y=geo.key_y,
                font_size=geo.key_font_size,
                role="key",
            )
        )

    cursor = geo.body_start_y
    for line in song.lines:
        if cursor > threshold:
            commands.append(PageBreak())
            cursor = geo.top_margin

        chords = chord_row_text(line, steps)
        if chords.strip():
            commands.append(DrawText(text=chords, x=x, y=cursor, font_size=geo.chord_font_size, role="chords"))
            cursor += geo.chord_row_height

        commands.append(
            DrawText(text=lyrics_row_text(line), x=x, y=cursor, font_size=geo.lyrics_font_size, role="lyrics")
        )
        cursor += geo.lyrics_row_height

    return commands


def pages(commands: list[DrawCommand]) -> list[list[DrawText]]:
    """Split a command list into pages at each PageBreak."""
    result: list[list[DrawText]] = [[]]
    for command in commands:
        if isinstance(command, PageBreak):
            result.append([])
        else:
            result[-1].append(command)
    return result


def export_filename(title: str, extension: str = DEFAULT_EXTENSION) -> str:
    """
    Derive a download filename from a song title.

    Every character outside ``[a-zA-Z0-9]`` becomes ``_`` and the result is
    lowercased, e.g. "Amazing Grace (Live)!" -> "amazing_grace__live__.pdf".
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", title).lower() + extension
