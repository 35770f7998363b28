"""Plain-text rendering of laid-out songs for the terminal."""

from songsheet.chord_transposer import transpose_chord
from songsheet.layout_strategy import LayoutMode
from songsheet.song_models import LayoutLine, Song

CELL_GAP = " "


def render_heading(song: Song, steps: int) -> str:
    """Song title followed by the transposed key, e.g. 'Jolene [Key: D]'."""
    if not song.key:
        return song.title
    return f"{song.title} [Key: {transpose_chord(song.key, steps)}]"


def _slot_rows(line: LayoutLine) -> tuple[str, str]:
    chord_cells: list[str] = []
    word_cells: list[str] = []
    for chord, word in zip(line.chord_cells(), line.word_positions):
        width = max(len(chord), len(word.text))
        chord_cells.append(chord.ljust(width))
        word_cells.append(word.text.ljust(width))
    return CELL_GAP.join(chord_cells).rstrip(), CELL_GAP.join(word_cells).rstrip()


def _offset_rows(line: LayoutLine) -> tuple[str, str]:
    row = ""
    for placement in line.chord_positions:
        if row and len(row) >= placement.column:
            # Would touch or overlap the previous chord.
            row += CELL_GAP
        else:
            row = row.ljust(placement.column)
        row += placement.text
    return row, line.lyric_text()


def render_line(line: LayoutLine) -> str:
    """Chord row over lyric row; the chord row is left out when empty."""
    if line.mode == LayoutMode.CHARACTER_OFFSET.value:
        chords, lyrics = _offset_rows(line)
    else:
        chords, lyrics = _slot_rows(line)
    if chords.strip():
        return f"{chords}\n{lyrics}"
    return lyrics


def render_lines(lines: list[LayoutLine]) -> str:
    return "\n".join(render_line(line) for line in lines)
