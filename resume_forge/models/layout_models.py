"""Pydantic models for the resolved page layout."""

from typing import List, Optional
from pydantic import BaseModel, Field
from resume_forge.models.ast_models import ResumeHeader, ResumeSection
from resume_forge.models.template_rules import Margins, PageSize


class LayoutMeta(BaseModel):
    """Truncation counters and height bookkeeping for a resolved layout."""

    dropped_bullets: int = Field(0, alias="droppedBullets")
    dropped_entries: int = Field(0, alias="droppedEntries")
    page_count: int = Field(1, alias="pageCount")
    used_height: float = Field(0, alias="usedHeight")
    content_height: float = Field(0, alias="contentHeight")

    class Config:
        frozen = True
        populate_by_name = True


class ResolvedLayout(BaseModel):
    """The subset of the resume that fits one page. Input of both renderers."""

    header: ResumeHeader
    sections: List[ResumeSection] = Field(default_factory=list)
    meta: LayoutMeta = Field(default_factory=LayoutMeta)
    page_size: PageSize = Field(PageSize.LETTER, alias="pageSize")
    margins: Margins = Field(default_factory=Margins)
    font_family: str = Field("Times-Roman", alias="fontFamily")

    class Config:
        frozen = True
        populate_by_name = True

    @property
    def hidden_items_notice(self) -> Optional[str]:
        """User-facing notice when entries were dropped to fit the page."""
        dropped = self.meta.dropped_entries
        if dropped <= 0:
            return None
        noun = "item" if dropped == 1 else "items"
        return f"{dropped} {noun} hidden to fit one page"
