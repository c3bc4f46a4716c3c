"""PDF rendering of tabular documents using PyMuPDF."""

from typing import Callable
from decimal import Decimal

import fitz  # PyMuPDF

from finsight.reports.documents import TabularDocument

PAGE_WIDTH = 595  # A4 in points
PAGE_HEIGHT = 842
MARGIN = 50
ROW_HEIGHT = 20
REGULAR_FONT = "helv"
BOLD_FONT = "hebo"


class _PageWriter:
    """Tracks the cursor and starts a new page when the current one is full."""

    def __init__(self, doc: fitz.Document):
        self.doc = doc
        self.page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN

    def advance(self, amount: float) -> None:
        self.y += amount
        if self.y > PAGE_HEIGHT - MARGIN:
            self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            self.y = MARGIN + ROW_HEIGHT

    def text(self, x: float, value: str, size: float, bold: bool = False) -> None:
        self.page.insert_text(
            fitz.Point(x, self.y),
            value,
            fontsize=size,
            fontname=BOLD_FONT if bold else REGULAR_FONT,
        )

    def right_text(self, value: str, size: float, bold: bool = False) -> None:
        fontname = BOLD_FONT if bold else REGULAR_FONT
        width = fitz.get_text_length(value, fontname=fontname, fontsize=size)
        self.text(PAGE_WIDTH - MARGIN - width, value, size, bold)

    def rule(self, offset: float = 0) -> None:
        y = self.y + offset
        self.page.draw_line(
            fitz.Point(MARGIN, y), fitz.Point(PAGE_WIDTH - MARGIN, y), width=1
        )


def render_pdf(document: TabularDocument, format_amount: Callable[[Decimal], str]) -> bytes:
    """Render a document to PDF bytes.

    Pages are A4. A document that does not fit on one page continues on
    further pages instead of being clipped at the bottom margin.

    Args:
        document: Layout to draw
        format_amount: Formatter for the amount column

    Returns:
        PDF file content
    """
    doc = fitz.open()
    try:
        writer = _PageWriter(doc)
        writer.text(MARGIN, document.title, 20, bold=True)
        writer.advance(30)
        writer.text(MARGIN, document.period_line, 12)
        writer.advance(40)

        for section in document.sections:
            writer.text(MARGIN, section.heading, 14, bold=True)
            writer.advance(30)
            if section.column_headers is not None:
                label_header, amount_header = section.column_headers
                writer.text(MARGIN + 10, label_header, 10, bold=True)
                writer.right_text(amount_header, 10, bold=True)
                writer.rule(offset=5)
                writer.advance(ROW_HEIGHT)

            for row in section.rows:
                if row.is_total:
                    writer.rule(offset=-12)
                writer.text(MARGIN + 10, row.label, 10, bold=row.is_total)
                writer.right_text(format_amount(row.amount), 10, bold=row.is_total)
                writer.advance(ROW_HEIGHT)

            writer.advance(20)

        if document.summary_lines:
            writer.text(MARGIN, "Summary", 14, bold=True)
            writer.advance(20)
            for line in document.summary_lines:
                writer.text(MARGIN + 10, line, 10)
                writer.advance(15)

        return doc.tobytes()
    finally:
        doc.close()
