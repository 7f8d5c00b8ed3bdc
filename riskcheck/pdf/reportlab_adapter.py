import io

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib.colors import HexColor
from reportlab.pdfgen import canvas

from riskcheck.layout.models import (
    FOOTER_INSET,
    BadgeBlock,
    Block,
    Document,
    Footer,
    HeaderBand,
    MeasuredRow,
    Page,
    QrBlock,
    RuleBlock,
    TableBlock,
    TextBlock,
)
from riskcheck.pdf.base import BaseDocumentRenderer
from riskcheck.pdf.exceptions import PdfRenderError

WATERMARK_COLOR = "#e3e6ec"
HEADER_COLOR = "#4a5568"


def baseline(top: float, leading: float, size: float) -> float:
    """Top-down offset of the baseline for a line box starting at ``top``."""
    return top + (leading + 0.6 * size) / 2


class ReportLabRenderer(BaseDocumentRenderer):
    """Paints laid-out pages onto a ReportLab canvas.

    The canvas runs in invariant mode, so identical documents produce
    identical bytes.
    """

    def render(self, document: Document) -> bytes:
        if not document.pages:
            raise PdfRenderError("Document has no pages")
        buffer = io.BytesIO()
        try:
            pdf = canvas.Canvas(buffer, invariant=1)
            pdf.setTitle(document.title)
            pdf.setSubject(document.subject)
            pdf.setCreator("riskcheck")
            for page in document.pages:
                self._draw_page(pdf, page, document.page_count)
            pdf.save()
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(f"reportlab rendering failed: {exc}") from exc
        return buffer.getvalue()

    def _draw_page(self, pdf: canvas.Canvas, page: Page, page_count: int) -> None:
        geometry = page.geometry
        pdf.setPageSize((geometry.width, geometry.height))
        if page.watermark:
            self._draw_watermark(pdf, page, page.watermark)
        if page.header is not None:
            self._draw_header(pdf, page, page.header)
        for block in page.blocks:
            self._draw_block(pdf, page, block)
        if page.footer is None:
            raise PdfRenderError(f"Page {page.number} was never sealed")
        self._draw_footer(pdf, page, page.footer, page_count)
        pdf.showPage()

    def _draw_block(self, pdf: canvas.Canvas, page: Page, block: Block) -> None:
        if isinstance(block, TextBlock):
            self._draw_text(pdf, page, block)
        elif isinstance(block, TableBlock):
            self._draw_table(pdf, page, block)
        elif isinstance(block, RuleBlock):
            self._draw_rule(pdf, page, block)
        elif isinstance(block, BadgeBlock):
            self._draw_badge(pdf, page, block)
        elif isinstance(block, QrBlock):
            self._draw_qr(pdf, page, block)
        else:
            raise PdfRenderError(f"Unsupported block type: {type(block).__name__}")

    @staticmethod
    def _flip(page: Page, y: float) -> float:
        return page.geometry.height - y

    def _draw_text(self, pdf: canvas.Canvas, page: Page, block: TextBlock) -> None:
        pdf.setFont(block.font, block.size)
        pdf.setFillColor(HexColor(block.color))
        for index, line in enumerate(block.lines):
            y = self._flip(page, baseline(block.y + index * block.leading, block.leading, block.size))
            if block.align == "center":
                pdf.drawCentredString(block.x + block.width / 2, y, line)
            elif block.align == "right":
                pdf.drawRightString(block.x + block.width, y, line)
            else:
                pdf.drawString(block.x, y, line)

    def _draw_rule(self, pdf: canvas.Canvas, page: Page, block: RuleBlock) -> None:
        pdf.setStrokeColor(HexColor(block.color))
        pdf.setLineWidth(block.thickness)
        y = self._flip(page, block.y)
        pdf.line(block.x, y, block.x + block.width, y)

    def _draw_badge(self, pdf: canvas.Canvas, page: Page, block: BadgeBlock) -> None:
        pdf.setFillColor(HexColor(block.fill))
        pdf.roundRect(
            block.x,
            self._flip(page, block.y + block.height),
            block.width,
            block.height,
            4,
            stroke=0,
            fill=1,
        )
        pdf.setFillColor(HexColor(block.text_color))
        pdf.setFont(block.font, block.size)
        pdf.drawCentredString(
            block.x + block.width / 2,
            self._flip(page, block.y + block.height / 2 + block.size * 0.35),
            block.text,
        )

    def _draw_qr(self, pdf: canvas.Canvas, page: Page, block: QrBlock) -> None:
        widget = QrCodeWidget(block.data)
        left, bottom, right, top = widget.getBounds()
        drawing = Drawing(
            block.size,
            block.size,
            transform=[block.size / (right - left), 0, 0, block.size / (top - bottom), 0, 0],
        )
        drawing.add(widget)
        renderPDF.draw(drawing, pdf, block.x, self._flip(page, block.y + block.size))

    def _draw_table(self, pdf: canvas.Canvas, page: Page, block: TableBlock) -> None:
        style = block.style
        top = block.y
        self._draw_row(
            pdf, page, block, block.header, top,
            fill=style.header_fill, font=style.header_font, color=style.header_text,
        )
        top += block.header.height
        for offset, row in enumerate(block.rows):
            striped = (block.first_row_index + offset) % 2 == 1
            self._draw_row(
                pdf, page, block, row, top,
                fill=style.stripe_fill if striped else None, font=style.font, color="#111111",
            )
            top += row.height

    def _draw_row(
        self,
        pdf: canvas.Canvas,
        page: Page,
        block: TableBlock,
        row: MeasuredRow,
        top: float,
        *,
        fill: str | None,
        font: str,
        color: str,
    ) -> None:
        style = block.style
        x = block.x
        bottom = self._flip(page, top + row.height)
        pdf.setStrokeColor(HexColor(style.border))
        pdf.setLineWidth(0.5)
        for width, lines in zip(block.widths, row.cells):
            if fill:
                pdf.setFillColor(HexColor(fill))
                pdf.rect(x, bottom, width, row.height, stroke=1, fill=1)
            else:
                pdf.rect(x, bottom, width, row.height, stroke=1, fill=0)
            pdf.setFillColor(HexColor(color))
            pdf.setFont(font, style.size)
            for index, line in enumerate(lines):
                line_top = top + style.padding + index * style.leading
                pdf.drawString(
                    x + style.padding,
                    self._flip(page, baseline(line_top, style.leading, style.size)),
                    line,
                )
            x += width

    def _draw_watermark(self, pdf: canvas.Canvas, page: Page, text: str) -> None:
        geometry = page.geometry
        pdf.saveState()
        pdf.setFillColor(HexColor(WATERMARK_COLOR))
        pdf.setFillAlpha(0.35)
        pdf.translate(geometry.width / 2, geometry.height / 2)
        pdf.rotate(45)
        pdf.setFont("Helvetica-Bold", 48)
        pdf.drawCentredString(0, 0, text)
        pdf.restoreState()

    def _draw_header(self, pdf: canvas.Canvas, page: Page, header: HeaderBand) -> None:
        geometry = page.geometry
        y = self._flip(page, geometry.header_top + 12)
        pdf.setFillColor(HexColor(HEADER_COLOR))
        pdf.setFont("Helvetica-Bold", 9)
        pdf.drawString(geometry.content_left, y, header.brand)
        pdf.setFont("Helvetica", 9)
        pdf.drawRightString(geometry.content_left + geometry.content_width, y, header.section)
        rule_y = self._flip(page, geometry.safe_top - 10)
        pdf.setStrokeColor(HexColor("#d0d4dc"))
        pdf.setLineWidth(0.6)
        pdf.line(
            geometry.content_left, rule_y, geometry.content_left + geometry.content_width, rule_y
        )

    def _draw_footer(
        self, pdf: canvas.Canvas, page: Page, footer: Footer, page_count: int
    ) -> None:
        geometry = page.geometry
        left = geometry.content_left
        width = geometry.content_width
        rule_y = self._flip(page, geometry.footer_top + 4)
        pdf.setStrokeColor(HexColor("#d0d4dc"))
        pdf.setLineWidth(0.6)
        pdf.line(left, rule_y, left + width, rule_y)
        pdf.setFillColor(HexColor("#666666"))
        pdf.setFont(footer.font, footer.size)
        lines = [*footer.lines, f"Page {footer.page_number} of {page_count}"]
        for index, line in enumerate(lines):
            top = geometry.footer_top + FOOTER_INSET + index * footer.leading
            pdf.drawCentredString(
                left + width / 2,
                self._flip(page, baseline(top, footer.leading, footer.size)),
                line,
            )
