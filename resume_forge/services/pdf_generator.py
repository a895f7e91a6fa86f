"""Service for serializing a PDF page description to bytes with ReportLab."""

import logging
from io import BytesIO
from typing import Callable, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import (
    Flowable,
    HRFlowable,
    KeepInFrame,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from resume_forge.config import EngineSettings, get_settings
from resume_forge.models.pdf_models import PdfDocument, PdfNode, PdfPage
from resume_forge.services.resume_styles import PdfStyle, font_name, get_pdf_style

logger = logging.getLogger(__name__)

LINE_HEIGHT = 1.4
ROW_LEFT_SHARE = 0.72

ALIGNMENTS = {
    "left": TA_LEFT,
    "center": TA_CENTER,
    "right": TA_RIGHT,
}

FLAT_TABLE = TableStyle([
    ("LEFTPADDING", (0, 0), (-1, -1), 0),
    ("RIGHTPADDING", (0, 0), (-1, -1), 0),
    ("TOPPADDING", (0, 0), (-1, -1), 0),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
    ("VALIGN", (0, 0), (-1, -1), "TOP"),
])


class PDFGenerator:
    """Service to generate PDF bytes from a page description using ReportLab."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize the PDF generator.

        Args:
            settings: Engine settings for document metadata. If None, uses the shared settings.
        """
        self.settings = settings or get_settings()

    def generate_pdf(self, document: PdfDocument) -> bytes:
        """
        Generate PDF from a page description.

        The canvas runs in invariant mode, so the same document always
        produces the same bytes. Each page is kept in one frame and scaled
        down when the estimated heights undershoot the printed ones.

        Args:
            document: PDF page description

        Returns:
            bytes: PDF file as bytes
        """
        if not document.pages:
            raise ValueError("PDF document has no pages")

        buffer = BytesIO()
        first = document.pages[0]
        doc = SimpleDocTemplate(
            buffer,
            pagesize=(first.width, first.height),
            leftMargin=first.margins.left,
            rightMargin=first.margins.right,
            topMargin=first.margins.top,
            bottomMargin=first.margins.bottom,
            title=document.title,
            author=self.settings.pdf_author,
            creator=self.settings.pdf_creator,
            invariant=1,
        )

        story: List[Flowable] = []
        for index, page in enumerate(document.pages):
            if index:
                story.append(PageBreak())
            story.append(KeepInFrame(0, 0, _PageWriter(document.font_family, page).flowables(), mode="shrink"))

        doc.build(story)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.debug("Generated PDF for %s (%d bytes)", document.title, len(pdf_bytes))
        return pdf_bytes


class _PageWriter:
    """Turns the primitives of one page into ReportLab flowables."""

    def __init__(self, font_family: str, page: PdfPage):
        self.font_family = font_family
        self.page = page
        self.width = page.width - page.margins.left - page.margins.right
        self.handlers: Dict[str, Callable[[PdfNode], List[Flowable]]] = {
            "header_contact": self._inline_line,
            "section_title": self._section_title,
            "entry_header": self._row,
            "entry_subheader": self._row,
            "bullet_item": self._bullet,
            "skill_category": self._inline_line,
        }

    def flowables(self) -> List[Flowable]:
        story: List[Flowable] = []
        for node in self.page.children:
            story.extend(self._node(node))
        return story

    def _node(self, node: PdfNode) -> List[Flowable]:
        handler = self.handlers.get(node.style)
        if handler is not None:
            return handler(node)
        if node.kind != "view":
            return [Paragraph(self._markup(node), self._paragraph_style(node.style))]

        story: List[Flowable] = []
        for child in node.children:
            story.extend(self._node(child))
        spacing = get_pdf_style(node.style).space_after
        if spacing:
            story.append(Spacer(1, spacing))
        return story

    def _paragraph_style(self, name: str, **overrides) -> ParagraphStyle:
        style = get_pdf_style(name)
        options = dict(
            name=name,
            fontName=font_name(self.font_family, style.weight),
            fontSize=style.font_size,
            leading=style.font_size * LINE_HEIGHT,
            textColor=colors.HexColor(style.color),
            alignment=ALIGNMENTS.get(style.align, TA_LEFT),
            leftIndent=style.left_indent,
            spaceAfter=style.space_after,
        )
        options.update(overrides)
        return ParagraphStyle(**options)

    def _markup(self, node: PdfNode, inline: bool = False) -> str:
        """Paragraph markup for a text or link node."""
        style = get_pdf_style(node.style)
        text = node.text or ""
        if style.uppercase:
            text = text.upper()
        markup = escape(text).replace("\n", "<br/>")
        if node.kind == "link" and node.href:
            href = escape(node.href, {'"': "&quot;"})
            markup = f'<link href="{href}">{markup}</link>'
        if inline:
            markup = (
                f'<font name="{font_name(self.font_family, style.weight)}" '
                f'size="{style.font_size}" color="{style.color}">{markup}</font>'
            )
        return markup

    def _inline_line(self, node: PdfNode) -> List[Flowable]:
        """One paragraph whose runs keep their own fonts (contact line, skill line)."""
        markup = " ".join(self._markup(child, inline=True) for child in node.children)
        return [Paragraph(markup, self._paragraph_style(node.style))]

    def _section_title(self, node: PdfNode) -> List[Flowable]:
        style = get_pdf_style(node.style)
        title = Paragraph(self._markup(node), self._paragraph_style(node.style, spaceAfter=2))
        rule = HRFlowable(
            width="100%",
            thickness=style.border_bottom,
            color=colors.black,
            spaceBefore=0,
            spaceAfter=style.space_after,
        )
        return [title, rule]

    def _row(self, node: PdfNode) -> List[Flowable]:
        """Left-aligned text with an optional right-aligned companion."""
        cells = [Paragraph(self._markup(child), self._paragraph_style(child.style)) for child in node.children]
        spacing = get_pdf_style(node.style).space_after
        if len(cells) == 1:
            row: Flowable = cells[0]
        else:
            left = self.width * ROW_LEFT_SHARE
            row = Table([cells[:2]], colWidths=[left, self.width - left], style=FLAT_TABLE)
        return [row, Spacer(1, spacing)] if spacing else [row]

    def _bullet(self, node: PdfNode) -> List[Flowable]:
        point = next((child for child in node.children if child.style == "bullet_point"), None)
        content = next((child for child in node.children if child.style == "bullet_content"), None)
        style: PdfStyle = get_pdf_style(node.style)
        paragraph_style = self._paragraph_style(
            "bullet_content",
            leftIndent=style.left_indent + get_pdf_style("bullet_list").left_indent,
            bulletIndent=get_pdf_style("bullet_list").left_indent,
            bulletFontName=font_name(self.font_family),
            bulletFontSize=style.font_size,
            spaceAfter=style.space_after,
        )
        return [Paragraph(
            self._markup(content) if content else "",
            paragraph_style,
            bulletText=point.text if point else None,
        )]
