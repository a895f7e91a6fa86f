"""
Service for rendering a resolved layout as a PDF page description.

The walk mirrors ``templates/resume.html`` node for node: same section and
entry order, same conditions, same text. Byte serialization is done by
``PDFGenerator``.
"""

from typing import List
from resume_forge.models.ast_models import ResumeEntry, ResumeHeader, ResumeSection
from resume_forge.models.layout_models import ResolvedLayout
from resume_forge.models.pdf_models import PdfDocument, PdfMargins, PdfNode, PdfPage
from resume_forge.models.template_rules import PageSize
from resume_forge.utils.template_helpers import (
    BULLET_SYMBOL,
    CONTACT_SEPARATOR,
    company_line,
    contact_items,
    entry_heading,
    has_subheader,
    is_skills_section,
    skill_label,
    skill_list,
)

POINTS_PER_INCH = 72

# Width x height in points
PAGE_DIMENSIONS = {
    PageSize.LETTER: (612.0, 792.0),
    PageSize.A4: (595.28, 841.89),
}


def _view(style: str, children: List[PdfNode], **attrs) -> PdfNode:
    return PdfNode(kind="view", style=style, children=children, **attrs)


def _text(style: str, text: str) -> PdfNode:
    return PdfNode(kind="text", style=style, text=text)


def _header(header: ResumeHeader) -> PdfNode:
    contact: List[PdfNode] = []
    for index, item in enumerate(contact_items(header)):
        if index:
            contact.append(_text("contact_separator", CONTACT_SEPARATOR))
        if item.href:
            contact.append(PdfNode(kind="link", style="contact_link", text=item.text, href=item.href))
        else:
            contact.append(_text("contact_item", item.text))
    return _view("header", [
        _text("header_name", header.name),
        _view("header_contact", contact),
    ])


def _skill_entry(entry: ResumeEntry, index: int) -> PdfNode:
    children = []
    if entry.title:
        children.append(_text("skill_category_name", skill_label(entry)))
    if entry.bullets:
        children.append(_text("skill_list", skill_list(entry)))
    return _view("skill_category", children, entry_index=index)


def _standard_entry(entry: ResumeEntry, index: int) -> PdfNode:
    first_line = [_text("entry_title", entry_heading(entry))]
    if entry.date:
        first_line.append(_text("entry_date", entry.date))
    children = [_view("entry_header", first_line)]

    if has_subheader(entry):
        second_line = [_text("entry_company", company_line(entry))]
        if entry.location:
            second_line.append(_text("entry_location", entry.location))
        children.append(_view("entry_subheader", second_line))

    if entry.bullets:
        children.append(_view("bullet_list", [
            _view("bullet_item", [_text("bullet_point", BULLET_SYMBOL), _text("bullet_content", bullet)])
            for bullet in entry.bullets
        ]))
    elif entry.description:
        children.append(_text("entry_description", entry.description))
    return _view("entry", children, entry_index=index)


def _section(section: ResumeSection) -> PdfNode:
    if is_skills_section(section):
        content = [_view("skills_grid", [
            _skill_entry(entry, index) for index, entry in enumerate(section.entries)
        ])]
    else:
        content = [_standard_entry(entry, index) for index, entry in enumerate(section.entries)]
    return _view(
        "section",
        [_text("section_title", section.title)] + content,
        section_id=section.id,
    )


def render_pdf_document(layout: ResolvedLayout) -> PdfDocument:
    """
    Build the single-page PDF description of a resolved layout.

    Args:
        layout: Resolved layout

    Returns:
        PdfDocument: Page primitives ready for serialization
    """
    width, height = PAGE_DIMENSIONS.get(layout.page_size, PAGE_DIMENSIONS[PageSize.LETTER])
    margins = layout.margins
    page = PdfPage(
        size=layout.page_size,
        width=width,
        height=height,
        margins=PdfMargins(
            top=margins.top * POINTS_PER_INCH,
            right=margins.right * POINTS_PER_INCH,
            bottom=margins.bottom * POINTS_PER_INCH,
            left=margins.left * POINTS_PER_INCH,
        ),
        children=[_header(layout.header)] + [_section(section) for section in layout.sections],
    )
    return PdfDocument(title=layout.header.name, font_family=layout.font_family, pages=[page])
