"""LayoutStrategy: Strategy pattern for placing transposed chords above lyrics."""

from abc import ABC, abstractmethod
from enum import Enum

from songsheet.chord_transposer import transpose_chord
from songsheet.song_models import LayoutLine, Line, Placement, Song

WORD_SEPARATOR = " "


class LayoutMode(str, Enum):
    """Selectable chord placement policies."""

    SLOT_ALIGNED = "slot"
    CHARACTER_OFFSET = "offset"


# ── Abstract base ────────────────────────────────────────────────────────────

class LayoutStrategy(ABC):
    """
    Abstract Strategy for mapping a line's chords to horizontal positions.

    Concrete subclasses decide what a "column" means. Both transpose every
    chord that is present and skip absent ones entirely.
    """

    mode: LayoutMode

    @abstractmethod
    def layout_line(self, line: Line, steps: int) -> LayoutLine:
        """
        Compute word and chord placements for one line.

        Args:
            line:  Source line with lyrics and chord slots.
            steps: Transpose offset in semitones.

        Returns:
            LayoutLine with placements in source order.
        """

    def layout_song(self, song: Song, steps: int) -> list[LayoutLine]:
        """Lay out every line of a song, keeping the song's line order."""
        return [self.layout_line(line, steps) for line in song.lines]


# ── Concrete strategies ──────────────────────────────────────────────────────

class SlotAlignedLayout(LayoutStrategy):
    """
    Chord-per-word block layout.

    Column is the slot index: chord i sits over word i in a two-row grid.
    Nothing here measures text; the renderer sizes the cells.
    """

    mode = LayoutMode.SLOT_ALIGNED

    def layout_line(self, line: Line, steps: int) -> LayoutLine:
        words: list[Placement] = []
        chords: list[Placement] = []
        for index, (chord, word) in enumerate(line.slots()):
            words.append(Placement(text=word, column=index, x=float(index)))
            if chord:
                chords.append(Placement(text=transpose_chord(chord, steps), column=index, x=float(index)))

        return LayoutLine(
            mode=self.mode.value,
            word_positions=tuple(words),
            chord_positions=tuple(chords),
            slot_count=len(words),
        )


class CharacterOffsetLayout(LayoutStrategy):
    """
    Chords positioned at the character column where their word begins.

    Words are joined with single spaces into one lyric string. A chord on
    word i is placed at word i's start index in that string. Horizontal
    distance is approximated as ``column * char_width`` for a fixed-width
    font.
    """

    mode = LayoutMode.CHARACTER_OFFSET
    DEFAULT_CHAR_WIDTH = 1.0  # one unit per character (terminal columns)

    def __init__(self, char_width: float = DEFAULT_CHAR_WIDTH) -> None:
        """
        Args:
            char_width: Width of one character in output units (e.g. mm for
                        a 10 pt Courier run is roughly 2.1).
        """
        if char_width <= 0:
            raise ValueError("char_width must be positive.")
        self.char_width = char_width

    def x_for(self, column: int) -> float:
        """Horizontal offset of a character column."""
        return column * self.char_width

    def layout_line(self, line: Line, steps: int) -> LayoutLine:
        words: list[Placement] = []
        chords: list[Placement] = []
        column = 0
        for chord, word in line.slots():
            words.append(Placement(text=word, column=column, x=self.x_for(column)))
            if chord:
                chords.append(Placement(text=transpose_chord(chord, steps), column=column, x=self.x_for(column)))
            column += len(word) + len(WORD_SEPARATOR)

        return LayoutLine(
            mode=self.mode.value,
            word_positions=tuple(words),
            chord_positions=tuple(chords),
            slot_count=len(words),
        )


DEFAULT_LAYOUT_MODE = LayoutMode.SLOT_ALIGNED


def get_layout_strategy(
    mode: LayoutMode | str = DEFAULT_LAYOUT_MODE,
    char_width: float = CharacterOffsetLayout.DEFAULT_CHAR_WIDTH,
) -> LayoutStrategy:
    """
    Return the LayoutStrategy for a mode or its string value.

    ``char_width`` only applies to character-offset layout.
    """
    resolved = LayoutMode(mode)
    if resolved is LayoutMode.CHARACTER_OFFSET:
        return CharacterOffsetLayout(char_width)
    return SlotAlignedLayout()


def layout_line(line: Line, steps: int, mode: LayoutMode | str = DEFAULT_LAYOUT_MODE) -> LayoutLine:
    """Lay out a single line with the strategy for ``mode``."""
    return get_layout_strategy(mode).layout_line(line, steps)
