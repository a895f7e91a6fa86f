"""
Style table of the PDF page description.

Each entry mirrors a rule of ``templates/resume.css`` so the PDF reads like
the HTML preview. Sizes and spacing are in points.
"""

from typing import Dict
from pydantic import BaseModel


class PdfStyle(BaseModel):
    """Text and box properties of one PDF style name."""

    font_size: float = 10
    weight: str = "regular"  # regular | bold | italic
    color: str = "#000000"
    align: str = "left"  # left | center | right
    uppercase: bool = False
    space_after: float = 0
    left_indent: float = 0
    border_bottom: float = 0

    class Config:
        frozen = True


# Vertical spacing per element stays within what HeightModel charges for it
PDF_STYLES: Dict[str, PdfStyle] = {
    "page": PdfStyle(),
    "header": PdfStyle(align="center", space_after=10),
    "header_name": PdfStyle(font_size=18, weight="bold", align="center", uppercase=True, space_after=4),
    "header_contact": PdfStyle(font_size=9, color="#333333", align="center", space_after=4),
    "contact_item": PdfStyle(font_size=9, color="#333333"),
    "contact_separator": PdfStyle(font_size=9, color="#333333"),
    "contact_link": PdfStyle(font_size=9, color="#333333"),
    "section": PdfStyle(),
    "section_title": PdfStyle(
        font_size=11, weight="bold", uppercase=True, space_after=6, border_bottom=1,
    ),
    "entry": PdfStyle(space_after=6),
    "entry_header": PdfStyle(),
    "entry_title": PdfStyle(font_size=10, weight="bold"),
    "entry_date": PdfStyle(font_size=9, align="right"),
    "entry_subheader": PdfStyle(),
    "entry_company": PdfStyle(font_size=10, weight="italic", color="#444444"),
    "entry_location": PdfStyle(font_size=9, weight="italic", color="#444444", align="right"),
    "entry_description": PdfStyle(font_size=10, space_after=2),
    "bullet_list": PdfStyle(left_indent=15),
    "bullet_item": PdfStyle(font_size=10, left_indent=15),
    "bullet_point": PdfStyle(font_size=10),
    "bullet_content": PdfStyle(font_size=10),
    "skills_grid": PdfStyle(),
    "skill_category": PdfStyle(font_size=10, space_after=2),
    "skill_category_name": PdfStyle(font_size=10, weight="bold"),
    "skill_list": PdfStyle(font_size=10),
}

FONT_VARIANTS: Dict[str, Dict[str, str]] = {
    "Times-Roman": {"regular": "Times-Roman", "bold": "Times-Bold", "italic": "Times-Italic"},
    "Helvetica": {"regular": "Helvetica", "bold": "Helvetica-Bold", "italic": "Helvetica-Oblique"},
    "Courier": {"regular": "Courier", "bold": "Courier-Bold", "italic": "Courier-Oblique"},
}

CSS_FONT_STACKS: Dict[str, str] = {
    "Times-Roman": "'Times New Roman', Times, serif",
    "Helvetica": "Helvetica, Arial, sans-serif",
    "Courier": "'Courier New', Courier, monospace",
}


def get_pdf_style(name: str) -> PdfStyle:
    """Style by name; unknown names fall back to the page defaults."""
    return PDF_STYLES.get(name, PDF_STYLES["page"])


def font_name(font_family: str, weight: str = "regular") -> str:
    """Standard PDF font for a family and weight, Times when the family is unknown."""
    variants = FONT_VARIANTS.get(font_family, FONT_VARIANTS["Times-Roman"])
    return variants.get(weight, variants["regular"])


def css_font_stack(font_family: str) -> str:
    """CSS font-family value for a template font family."""
    return CSS_FONT_STACKS.get(font_family, f"'{font_family}', serif")
