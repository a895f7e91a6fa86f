"""Pydantic models for template rules (page, typography, layout, limits)."""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Literal, Mapping, Tuple
from pydantic import BaseModel, Field, field_serializer, field_validator


DEFAULT_MAX_ENTRIES = 100


class PageSize(str, Enum):
    """Supported page sizes."""

    LETTER = "LETTER"
    A4 = "A4"


class PageRules(BaseModel):
    """Page size and page budget."""

    size: PageSize = PageSize.LETTER
    max_pages: int = Field(1, alias="maxPages", ge=1)

    class Config:
        frozen = True
        populate_by_name = True


class TypographyRules(BaseModel):
    """Font settings, sizes in points."""

    font_family: str = Field("Times-Roman", alias="fontFamily")
    base_font_size: float = Field(10, alias="baseFontSize", gt=0)
    header_font_size: float = Field(12, alias="headerFontSize", gt=0)
    line_height: float = Field(1.4, alias="lineHeight", gt=0)

    class Config:
        frozen = True
        populate_by_name = True


class Margins(BaseModel):
    """Page margins in inches."""

    top: float = 0.5
    right: float = 0.5
    bottom: float = 0.5
    left: float = 0.5

    class Config:
        frozen = True


class LayoutRules(BaseModel):
    """Column count, section order and margins."""

    columns: Literal[1, 2] = 1
    section_order: Tuple[str, ...] = Field(
        ("experience", "projects", "skills", "education"),
        alias="sectionOrder",
    )
    margins: Margins = Field(default_factory=Margins)

    class Config:
        frozen = True
        populate_by_name = True


class LimitRules(BaseModel):
    """Content caps applied by the layout resolver."""

    max_bullets_per_entry: int = Field(4, alias="maxBulletsPerEntry", ge=0)
    max_entries_per_section: Mapping[str, int] = Field(
        default_factory=dict,
        alias="maxEntriesPerSection",
        validate_default=True,
    )

    class Config:
        frozen = True
        populate_by_name = True

    @field_validator("max_entries_per_section")
    @classmethod
    def read_only_caps(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(value))

    @field_serializer("max_entries_per_section")
    def dump_caps(self, value: Mapping[str, int]) -> Dict[str, int]:
        return dict(value)

    def max_entries_for(self, section_id: str) -> int:
        """Entry cap for a section id, 100 when the id has no explicit cap."""
        return max(0, self.max_entries_per_section.get(section_id, DEFAULT_MAX_ENTRIES))


class TemplateRules(BaseModel):
    """Complete template configuration. Never mutated after construction."""

    id: str
    page: PageRules = Field(default_factory=PageRules)
    typography: TypographyRules = Field(default_factory=TypographyRules)
    layout: LayoutRules = Field(default_factory=LayoutRules)
    limits: LimitRules = Field(default_factory=LimitRules)

    class Config:
        frozen = True
        populate_by_name = True

    def section_rank(self, section_id: str) -> int:
        """Position of a section id in the section order; unknown ids rank last."""
        order = self.layout.section_order
        if section_id in order:
            return order.index(section_id)
        return len(order)


DEFAULT_TEMPLATE_RULES = TemplateRules(
    id="standard",
    page=PageRules(size=PageSize.LETTER, max_pages=1),
    typography=TypographyRules(
        font_family="Times-Roman",
        base_font_size=10,
        header_font_size=12,
        line_height=1.4,
    ),
    layout=LayoutRules(
        columns=1,
        section_order=["experience", "projects", "skills", "education"],
        margins=Margins(top=0.5, right=0.5, bottom=0.5, left=0.5),
    ),
    limits=LimitRules(
        max_bullets_per_entry=4,
        max_entries_per_section={
            "experience": 4,
            "projects": 3,
            "education": 2,
            "skills": 1,
        },
    ),
)
