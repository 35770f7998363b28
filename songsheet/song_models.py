"""Data models for songs, layout output and export draw commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import zip_longest
from typing import Iterator, Literal, Union


@dataclass(frozen=True)
class Line:
    """
    One lyric line with a chord slot per word.

    ``chords[i]`` annotates ``lyrics[i]``; an absent chord is None or "".
    """

    lyrics: tuple[str, ...]
    chords: tuple[str | None, ...] = ()

    def slots(self) -> Iterator[tuple[str | None, str]]:
        """
        Yield ``(chord, word)`` pairs in order.

        A chords sequence shorter than the lyrics is padded with None; chords
        with no word underneath are dropped.
        """
        for chord, word in zip_longest(self.chords[: len(self.lyrics)], self.lyrics):
            yield (chord or None), word


@dataclass(frozen=True)
class Song:
    """A song as delivered by the data source; read-only to the core."""

    title: str
    key: str | None = None
    lines: tuple[Line, ...] = ()


@dataclass(frozen=True)
class SongIndexEntry:
    """An entry of the song index pointing at a song document."""

    title: str
    filename: str


# ── Layout output ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Placement:
    """
    A word or chord anchored at a horizontal column.

    ``x`` is the column scaled to output units by the layout strategy; it is
    derived from ``column`` and left out of comparisons.
    """

    text: str
    column: int
    x: float = field(default=0.0, compare=False)


@dataclass(frozen=True)
class LayoutLine:
    """
    Positions of the words and transposed chords of a single line.

    Attributes:
        mode:            Layout mode value that produced this line.
        word_positions:  Lyric words, left to right.
        chord_positions: Transposed chords, left to right. Lines without
                         chords have none.
        slot_count:      Number of word slots in the source line.
    """

    mode: str
    word_positions: tuple[Placement, ...] = ()
    chord_positions: tuple[Placement, ...] = ()
    slot_count: int = 0

    def chord_cells(self) -> list[str]:
        """Chord text per slot, "" where the slot carries no chord."""
        cells = [""] * self.slot_count
        for placement in self.chord_positions:
            if 0 <= placement.column < self.slot_count:
                cells[placement.column] = placement.text
        return cells

    def lyric_text(self) -> str:
        return " ".join(p.text for p in self.word_positions)


# ── Export draw commands ─────────────────────────────────────────────────────

TextRole = Literal["title", "key", "chords", "lyrics"]


@dataclass(frozen=True)
class DrawText:
    """Place a run of text at (x, y) millimetres from the page's top-left."""

    text: str
    x: float
    y: float
    font_size: float
    role: TextRole


@dataclass(frozen=True)
class PageBreak:
    """Start a new page before drawing anything else."""

    kind: Literal["page_break"] = field(default="page_break")


DrawCommand = Union[DrawText, PageBreak]
