"""
PDF listings for the registry exports, drawn with reportlab Platypus.

    pdf = PdfExporter(title="Faturas", filters={"Status": "pending"})
    pdf.add_header()
    pdf.add_table(headers, rows)
    content = pdf.build()

Orientation follows the column count (see ``page_size_for``).  The title
band is only laid out once the orientation is known, so ``add_header`` just
flags it.  Every cell goes through ``Paragraph`` so long text wraps; values
are XML-escaped because ``Paragraph`` reads markup.
"""

import io
from datetime import datetime
from typing import Any, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import cm, mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

NAVY = colors.HexColor("#1F3B57")
TEAL = colors.HexColor("#2C7A7B")
STRIPE = colors.HexColor("#F1F5F9")
GRID = colors.HexColor("#D1D5DB")
INK = colors.HexColor("#1F2937")
MUTED = colors.HexColor("#6B7280")

# More columns than this and the page turns sideways
LANDSCAPE_THRESHOLD = 6

_MARGIN = 1.5 * cm
_FILTER_KEY_WIDTH = 3 * cm

# name -> (font, size, colour, alignment)
_PARAGRAPH_STYLES: dict[str, tuple[str, float, Any, int]] = {
    "title": ("Helvetica-Bold", 18, colors.white, TA_CENTER),
    "subtitle": ("Helvetica", 9, colors.white, TA_CENTER),
    "filter_key": ("Helvetica-Bold", 8, NAVY, TA_RIGHT),
    "filter_value": ("Helvetica", 8, INK, TA_LEFT),
    "count": ("Helvetica-Bold", 9, INK, TA_LEFT),
    "col_header": ("Helvetica-Bold", 8, colors.white, TA_CENTER),
    "text": ("Helvetica", 7.5, INK, TA_LEFT),
    "number": ("Helvetica", 7.5, INK, TA_RIGHT),
}


def page_size_for(n_cols: int, force_landscape: bool | None = None) -> tuple[float, float]:
    """A4 portrait for narrow listings, landscape above ``LANDSCAPE_THRESHOLD``."""
    wide = n_cols > LANDSCAPE_THRESHOLD if force_landscape is None else force_landscape
    return landscape(A4) if wide else A4


def _paragraph_styles() -> dict[str, ParagraphStyle]:
    styles = {
        name: ParagraphStyle(
            f"splice_{name}", fontName=font, fontSize=size, textColor=colour, alignment=align
        )
        for name, (font, size, colour, align) in _PARAGRAPH_STYLES.items()
    }
    styles["count"].spaceAfter = 4
    return styles


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class PdfExporter:
    """Builds one registry listing in memory.

    ``landscape_mode`` forces the orientation; left as ``None`` it is picked
    from the column count of the first table.
    """

    def __init__(
        self,
        title: str,
        filters: dict[str, str] | None = None,
        landscape_mode: bool | None = None,
    ) -> None:
        self.title = title
        self.filters = filters or {}
        self._force_landscape = landscape_mode
        self._buffer = io.BytesIO()
        self._doc: SimpleDocTemplate | None = None
        self._story: list[Any] = []
        self._header_wanted = False
        self._generated_at = datetime.now().strftime("%d/%m/%Y %H:%M")
        self._styles = _paragraph_styles()

    def _document(self, n_cols: int) -> SimpleDocTemplate:
        if self._doc is None:
            self._doc = SimpleDocTemplate(
                self._buffer,
                pagesize=page_size_for(n_cols, self._force_landscape),
                leftMargin=_MARGIN,
                rightMargin=_MARGIN,
                topMargin=_MARGIN,
                bottomMargin=2 * cm,
                title=self.title,
                author="Sistema Splice",
            )
        return self._doc

    def _para(self, value: Any, style: str) -> Paragraph:
        return Paragraph(escape(str(value)), self._styles[style])

    def _footer(self, canvas: Any, doc: Any) -> None:
        canvas.saveState()
        canvas.setFont("Helvetica", 7)
        canvas.setFillColor(MUTED)
        canvas.drawCentredString(
            doc.pagesize[0] / 2,
            1.2 * cm,
            f"Sistema Splice  |  Gerado em: {self._generated_at}  |  Página {doc.page}",
        )
        canvas.restoreState()

    def add_header(self) -> "PdfExporter":
        self._header_wanted = True
        return self

    def _flush_header(self, width: float) -> list[Any]:
        if not self._header_wanted:
            return []
        self._header_wanted = False

        band = Table(
            [
                [self._para(self.title, "title")],
                [self._para(f"Gerado em: {self._generated_at}", "subtitle")],
            ],
            colWidths=[width],
        )
        band.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (0, 0), TEAL),
            ("BACKGROUND", (0, 1), (0, 1), NAVY),
            ("TOPPADDING", (0, 0), (-1, -1), 7),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 7),
        ]))
        flowables: list[Any] = [band, Spacer(1, 4 * mm)]

        if self.filters:
            applied = Table(
                [
                    [self._para(f"{key}:", "filter_key"), self._para(value, "filter_value")]
                    for key, value in self.filters.items()
                ],
                colWidths=[_FILTER_KEY_WIDTH, width - _FILTER_KEY_WIDTH],
            )
            applied.setStyle(TableStyle([
                ("BACKGROUND", (0, 0), (-1, -1), STRIPE),
                ("LINEBELOW", (0, 0), (-1, -1), 0.25, GRID),
                ("TOPPADDING", (0, 0), (-1, -1), 2),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
            ]))
            flowables += [applied, Spacer(1, 6 * mm)]
        return flowables

    def add_table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> "PdfExporter":
        """Append the record count and the listing.

        Columns split the printable width evenly; numbers are right-aligned
        and the header row repeats on every page.
        """
        n_cols = max(len(headers), 1)
        width = self._document(n_cols).width
        self._story += self._flush_header(width)
        self._story.append(self._para(f"Total de registros: {len(rows)}", "count"))

        data = [[self._para(h, "col_header") for h in headers]]
        data += [
            [self._para(v, "number" if _is_number(v) else "text") for v in row]
            for row in rows
        ]

        commands: list[tuple[Any, ...]] = [
            ("BACKGROUND", (0, 0), (-1, 0), NAVY),
            ("GRID", (0, 0), (-1, -1), 0.25, GRID),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 3),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]
        commands += [
            ("BACKGROUND", (0, r), (-1, r), STRIPE) for r in range(2, len(data), 2)
        ]
        listing = Table(data, colWidths=[width / n_cols] * n_cols, repeatRows=1)
        listing.setStyle(TableStyle(commands))
        self._story.append(listing)
        return self

    def build(self) -> bytes:
        """Render and return the PDF bytes; call once."""
        doc = self._document(1)
        self._story[:0] = self._flush_header(doc.width)
        if not self._story:
            self._story.append(Spacer(1, 1))
        doc.build(self._story, onFirstPage=self._footer, onLaterPages=self._footer)
        return self._buffer.getvalue()
