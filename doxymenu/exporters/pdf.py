import time

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from ..models import MenuNode
from .base import BaseExporter


def sanitize_text_for_pdf(text: str) -> str:
    """
    Replace characters the built-in PDF fonts cannot encode.

    The core fonts cover Latin-1, which keeps Portuguese, Spanish, French
    and German labels intact.
    """
    return text.encode("latin-1", "replace").decode("latin-1")


class PdfExporter(BaseExporter):
    """PDF outline of the menu, one indented line per entry."""

    extension = ".pdf"
    line_height = 7
    indent_width = 6

    def render(self, root: MenuNode) -> bytes:
        pdf = FPDF()
        pdf.set_auto_page_break(auto=True, margin=15)
        pdf.add_page()
        self._add_title(pdf, root)

        for depth, node in root.walk():
            if depth == 0:
                continue
            pdf.set_x(pdf.l_margin + (depth - 1) * self.indent_width)
            pdf.set_font("Helvetica", "B" if depth == 1 else "", size=12 if depth == 1 else 11)
            label = sanitize_text_for_pdf(node.text)
            pdf.cell(
                0,
                self.line_height,
                f"{label}  ({sanitize_text_for_pdf(node.url)})",
                link=node.url,
                new_x=XPos.LMARGIN,
                new_y=YPos.NEXT,
            )

        return bytes(pdf.output())

    def _add_title(self, pdf: FPDF, root: MenuNode):
        pdf.set_font("Helvetica", "B", size=18)
        pdf.cell(0, 12, sanitize_text_for_pdf(root.text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "I", size=10)
        pdf.cell(0, 6, f"Home: {sanitize_text_for_pdf(root.url)}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.cell(
            0,
            6,
            f"Entries: {root.count() - 1}  Generated: {time.strftime('%Y-%m-%d %H:%M:%S')}",
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )
        pdf.ln(6)
