"""ChordTransposer: parses chord symbols and shifts their root by semitones."""

from dataclasses import dataclass

# Chromatic pitch class names (index 0 = C), always spelled with sharps
NOTE_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Flat spellings rewritten to their sharp equivalent before lookup
FLAT_TO_SHARP: dict[str, str] = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

SEMITONES_PER_OCTAVE = 12

ROOT_LETTERS = frozenset("ABCDEFG")
ACCIDENTALS = frozenset("#b")


@dataclass(frozen=True)
class ParsedChord:
    """
    A chord symbol split into root spelling and untouched suffix.

    Attributes:
        letter:     Root letter, "A" through "G".
        accidental: "#", "b" or "" when the root is natural.
        suffix:     Everything after the accidental, copied verbatim
                    (quality, extensions, slash bass, spaces...).
    """

    letter: str
    accidental: str
    suffix: str

    @property
    def spelled_root(self) -> str:
        """Root as written in the source, e.g. 'Bb' or 'F#'."""
        return self.letter + self.accidental

    @property
    def pitch_class(self) -> int | None:
        """
        Index of the root in NOTE_NAMES, or None for spellings outside the
        table (Cb, Fb, E#, B#).
        """
        root = FLAT_TO_SHARP.get(self.spelled_root, self.spelled_root)
        try:
            return NOTE_NAMES.index(root)
        except ValueError:
            return None


def parse_chord(symbol: str) -> ParsedChord | None:
    """
    Split a chord symbol into letter, optional accidental and suffix.

    Only the leading characters are inspected: an uppercase root letter, then
    at most one ``#`` or ``b``. Whatever follows is the suffix.

    Args:
        symbol: Raw chord text, e.g. "Bb7" or "F#m/C#".

    Returns:
        A ParsedChord, or None when the symbol does not start with a root
        letter (the symbol is opaque).
    """
    if not symbol or symbol[0] not in ROOT_LETTERS:
        return None

    letter = symbol[0]
    rest = symbol[1:]
    accidental = ""
    if rest and rest[0] in ACCIDENTALS:
        accidental = rest[0]
        rest = rest[1:]

    return ParsedChord(letter=letter, accidental=accidental, suffix=rest)


def shift_pitch_class(pitch_class: int, steps: int) -> int:
    """Move a pitch class by ``steps`` semitones, wrapping into 0-11."""
    return ((pitch_class + steps) % SEMITONES_PER_OCTAVE + SEMITONES_PER_OCTAVE) % SEMITONES_PER_OCTAVE


def transpose_chord(symbol: str | None, steps: int) -> str:
    """
    Transpose a chord symbol by a number of semitones.

    The root is rewritten with its canonical sharp spelling; the suffix is
    never reinterpreted. Symbols that cannot be parsed are returned as-is.

    Args:
        symbol: Chord text. Empty or None yields "".
        steps:  Semitones to shift, any sign and magnitude.

    Returns:
        The transposed chord text.

    Examples:
        >>> transpose_chord("Bb7", 2)
        'C7'
        >>> transpose_chord("Db", 0)
        'C#'
        >>> transpose_chord("N.C.", 5)
        'N.C.'
    """
    if not symbol:
        return ""

    parsed = parse_chord(symbol)
    if parsed is None:
        return symbol

    index = parsed.pitch_class
    if index is None:
        return symbol

    return NOTE_NAMES[shift_pitch_class(index, steps)] + parsed.suffix
