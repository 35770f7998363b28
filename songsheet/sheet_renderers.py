"""Renderer implementations for exported song sheets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO

from songsheet.paginator import PageGeometry, pages
from songsheet.song_models import DrawCommand, DrawText, PageBreak


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class SheetRenderer(ABC):
    """Abstract sheet renderer consuming paginated draw commands."""

    def __init__(self, geometry: PageGeometry | None = None) -> None:
        self.geometry = geometry or PageGeometry()

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, *, title: str, commands: list[DrawCommand]) -> str | bytes:
        """Render draw commands into file content."""


class HtmlSheetRenderer(SheetRenderer):
    """Render draw commands into a self-contained, printable HTML document."""

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(self, *, title: str, commands: list[DrawCommand]) -> str:
        page_bodies = [self._render_page(page) for page in pages(commands)]
        return self.build_html(title, page_bodies)

    def _render_page(self, texts: list[DrawText]) -> str:
        rows = []
        for text in texts:
            css_class = "song-title" if text.role == "title" else f"{text.role}-row"
            rows.append(f'    <div class="{css_class}">{_escape_html(text.text)}</div>')
        return "\n".join(rows)

    def build_html(self, title: str, page_bodies: list[str]) -> str:
        """
        Wrap rendered page bodies in a self-contained HTML document.

        Each page is placed in its own ``.page`` div. The stylesheet includes
        both screen styles (white cards on a grey background) and print styles
        (``page-break-after: always`` per page, no drop shadows). Chord rows
        keep their spacing with ``white-space: pre``.
        """
        title_safe = _escape_html(title)
        page_divs = "\n".join(f'  <div class="page">\n{body}\n  </div>' for body in page_bodies)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; }}
    body {{
      font-family: Georgia, serif;
      background: #f0f0f0;
      margin: 0;
      padding: 2rem;
    }}
    .page {{
      background: #fff;
      box-shadow: 0 2px 8px rgba(0, 0, 0, 0.15);
      margin: 0 auto 3rem;
      max-width: 860px;
      padding: 2rem;
    }}
    .song-title {{
      font-size: 1.6rem;
      margin-bottom: 0.5rem;
      color: #222;
    }}
    .key-row {{
      color: #555;
      margin-bottom: 1.5rem;
    }}
    .chords-row, .lyrics-row {{
      font-family: "Courier New", monospace;
      white-space: pre;
    }}
    .chords-row {{
      font-weight: bold;
      color: #1a1a80;
    }}
    .lyrics-row {{
      margin-bottom: 0.75rem;
    }}
    @media print {{
      body {{
        background: #fff;
        padding: 0;
        margin: 0;
      }}
      .page {{
        box-shadow: none;
        page-break-after: always;
        max-width: 100%;
        padding: 0;
        margin: 0;
      }}
      .page:last-child {{
        page-break-after: avoid;
      }}
    }}
  </style>
</head>
<body>
{page_divs}
</body>
</html>"""


class PdfSheetRenderer(SheetRenderer):
    """
    Draw commands onto a reportlab canvas and return the PDF bytes.

    Command coordinates are millimetres measured down from the top-left
    corner; reportlab measures points up from the bottom-left, so y is
    flipped against the paper height.
    """

    FONT_NAME = "Helvetica"
    TITLE_FONT_NAME = "Helvetica-Bold"

    @property
    def default_extension(self) -> str:
        return ".pdf"

    def render(self, *, title: str, commands: list[DrawCommand]) -> bytes:
        from reportlab.lib.units import mm
        from reportlab.pdfgen import canvas

        geo = self.geometry
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(geo.page_width * mm, geo.paper_height * mm))
        pdf.setTitle(title)

        for command in commands:
            if isinstance(command, PageBreak):
                pdf.showPage()
                continue
            font = self.TITLE_FONT_NAME if command.role == "title" else self.FONT_NAME
            pdf.setFont(font, command.font_size)
            pdf.drawString(command.x * mm, (geo.paper_height - command.y) * mm, command.text)

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()
