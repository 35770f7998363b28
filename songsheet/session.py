"""ViewerSession: the transpose state of one open song and its command handlers."""

from __future__ import annotations

import logging
from pathlib import Path

from songsheet.layout_strategy import DEFAULT_LAYOUT_MODE, LayoutMode, LayoutStrategy, get_layout_strategy
from songsheet.screen import render_heading
from songsheet.sheet_exporter import SheetExporter
from songsheet.song_models import LayoutLine, Song

logger = logging.getLogger(__name__)


class ViewerSession:
    """
    Owns the transpose offset for the song currently being viewed.

    Every handler that changes the offset recomputes the full layout from the
    immutable song and returns it, so callers only ever re-render from return
    values. Opening another song resets the offset to zero.

    Usage:

        session = ViewerSession(song)
        lines = session.on_transpose_up()
        path = session.on_export(SheetExporter(), "out/")
    """

    def __init__(
        self,
        song: Song,
        transpose: int = 0,
        layout_mode: LayoutMode | str = DEFAULT_LAYOUT_MODE,
    ) -> None:
        self.song = song
        self.transpose = transpose
        self.strategy: LayoutStrategy = get_layout_strategy(layout_mode)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> list[LayoutLine]:
        """Layout of the whole song at the current transpose offset."""
        return self.strategy.layout_song(self.song, self.transpose)

    def heading(self) -> str:
        return render_heading(self.song, self.transpose)

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------

    def on_transpose_up(self) -> list[LayoutLine]:
        self.transpose += 1
        logger.debug("Transpose up -> %+d", self.transpose)
        return self.render()

    def on_transpose_down(self) -> list[LayoutLine]:
        self.transpose -= 1
        logger.debug("Transpose down -> %+d", self.transpose)
        return self.render()

    def on_open(self, song: Song) -> list[LayoutLine]:
        """Switch to another song and reset the transpose offset."""
        self.song = song
        self.transpose = 0
        return self.render()

    def on_export(self, exporter: SheetExporter, output_dir: str | Path = ".") -> Path:
        """
        Export the song at the current offset into ``output_dir``.

        The filename is derived from the title (see ``export_filename``).

        Raises:
            OSError: If the file cannot be written.
        """
        target = Path(output_dir) / exporter.default_filename(self.song)
        return exporter.export(self.song, self.transpose, target)
