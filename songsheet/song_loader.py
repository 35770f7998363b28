"""Loading of song documents and the song index from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from songsheet.song_models import Line, Song, SongIndexEntry

logger = logging.getLogger(__name__)


class SongLoadError(ValueError):
    """A song or index document is missing, unreadable or malformed."""


def _require_str(data: dict[str, Any], field: str, where: str) -> str:
    value = data.get(field)
    if not isinstance(value, str):
        raise SongLoadError(f"{where}: '{field}' must be a string.")
    return value


def _line_from_dict(data: Any, index: int) -> Line:
    where = f"line {index + 1}"
    if not isinstance(data, dict):
        raise SongLoadError(f"{where}: expected an object.")

    lyrics = data.get("lyrics")
    if not isinstance(lyrics, list) or not all(isinstance(word, str) for word in lyrics):
        raise SongLoadError(f"{where}: 'lyrics' must be a list of strings.")

    chords = data.get("chords", [])
    if not isinstance(chords, list):
        raise SongLoadError(f"{where}: 'chords' must be a list.")
    for chord in chords:
        if chord is not None and not isinstance(chord, str):
            raise SongLoadError(f"{where}: chord entries must be strings or null.")

    if len(chords) != len(lyrics):
        logger.debug("%s: %d chords for %d words", where, len(chords), len(lyrics))

    return Line(
        lyrics=tuple(lyrics),
        chords=tuple(chord if chord and chord.strip() else None for chord in chords),
    )


def song_from_dict(data: Any) -> Song:
    """Build a Song from a decoded song document."""
    if not isinstance(data, dict):
        raise SongLoadError("Song document must be a JSON object.")

    title = _require_str(data, "title", "song")
    key = data.get("key")
    if key is not None and not isinstance(key, str):
        raise SongLoadError("song: 'key' must be a string.")

    raw_lines = data.get("lines")
    if not isinstance(raw_lines, list):
        raise SongLoadError("song: 'lines' must be a list.")

    return Song(
        title=title,
        key=key or None,
        lines=tuple(_line_from_dict(line, i) for i, line in enumerate(raw_lines)),
    )


def index_from_list(data: Any) -> list[SongIndexEntry]:
    """Build index entries from a decoded song index."""
    if not isinstance(data, list):
        raise SongLoadError("Song index must be a JSON array.")

    entries: list[SongIndexEntry] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise SongLoadError(f"index entry {i + 1}: expected an object.")
        where = f"index entry {i + 1}"
        entries.append(
            SongIndexEntry(
                title=_require_str(item, "title", where),
                filename=_require_str(item, "filename", where),
            )
        )
    return entries


def _read_json(path: str | Path) -> Any:
    try:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise SongLoadError(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SongLoadError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise SongLoadError(f"Could not read {path}: {exc}") from exc


def load_song(path: str | Path) -> Song:
    """
    Read a song document.

    Raises:
        SongLoadError: If the file is missing, not JSON, or not a song.
    """
    song = song_from_dict(_read_json(path))
    logger.debug("Loaded '%s' (%d lines) from %s", song.title, len(song.lines), path)
    return song


def load_song_index(path: str | Path) -> list[SongIndexEntry]:
    """
    Read the song index (a list of ``{"title", "filename"}`` objects).

    Raises:
        SongLoadError: If the file is missing, not JSON, or malformed.
    """
    entries = index_from_list(_read_json(path))
    logger.debug("Loaded %d index entries from %s", len(entries), path)
    return entries
