"""SheetExporter: converts a song into a paginated PDF or HTML document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from songsheet.paginator import PageGeometry, export_filename, paginate
from songsheet.sheet_renderers import HtmlSheetRenderer, PdfSheetRenderer, SheetRenderer
from songsheet.song_models import Song

SUPPORTED_FORMATS: Final[set[str]] = {"pdf", "html"}

logger = logging.getLogger(__name__)


class SheetExporter:
    """
    Export a song through the paginator and a pluggable renderer.

    Supported formats:
    - ``pdf``: draw commands executed on a reportlab canvas.
    - ``html``: one printable ``.page`` div per paginated page.
    """

    def __init__(
        self,
        title: str = "",
        output_format: str = "pdf",
        geometry: PageGeometry | None = None,
    ) -> None:
        self.title = title
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.geometry = geometry or PageGeometry()
        self.renderer = self._build_renderer(normalized)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_renderer(self, output_format: str) -> SheetRenderer:
        if output_format == "html":
            return HtmlSheetRenderer(self.geometry)
        return PdfSheetRenderer(self.geometry)

    def _resolve_title(self, song: Song) -> str:
        return self.title or song.title

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def default_filename(self, song: Song) -> str:
        """Sanitized download filename for a song in this format."""
        return export_filename(self._resolve_title(song), self.renderer.default_extension)

    def render(self, song: Song, steps: int = 0) -> str | bytes:
        """Paginate and render a song transposed by ``steps`` semitones."""
        title = self._resolve_title(song)
        commands = paginate(song, steps, title=title, geometry=self.geometry)
        logger.debug("Paginated '%s' into %d draw commands", title, len(commands))
        return self.renderer.render(title=title, commands=commands)

    def export(self, song: Song, steps: int, output_path: str | Path) -> Path:
        """
        Render a song and write it to disk.

        Returns:
            The path written.

        Raises:
            OSError: If the output file cannot be written.
        """
        content = self.render(song, steps)
        path = Path(output_path)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        logger.info("Exported '%s' (transpose %+d) to %s", self._resolve_title(song), steps, path)
        return path
