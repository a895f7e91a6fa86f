"""Pydantic models for the canonical resume AST."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class LinkType(str, Enum):
    """Supported header link types."""

    LINKEDIN = "linkedin"
    GITHUB = "github"
    PORTFOLIO = "portfolio"
    OTHER = "other"


class ResumeLink(BaseModel):
    """Header link model. The URL is already scheme-normalized."""

    type: LinkType = LinkType.OTHER
    url: str
    label: Optional[str] = None

    class Config:
        frozen = True


class ResumeHeader(BaseModel):
    """Identity block shown at the top of the page."""

    name: str = Field(..., min_length=1)
    location: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    links: List[ResumeLink] = Field(default_factory=list)

    class Config:
        frozen = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Header name must not be blank")
        return value


class ResumeEntry(BaseModel):
    """
    One unit of content within a section.

    Every field is optional. In the ``skills`` section the ``bullets`` field
    holds the skill items of one category and ``title`` holds the category.
    """

    title: Optional[str] = None
    role: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    bullets: List[str] = Field(default_factory=list)
    tech: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class ResumeSection(BaseModel):
    """Section model. ``id`` is the join key used by template rules."""

    id: str
    title: str
    entries: List[ResumeEntry] = Field(default_factory=list)

    class Config:
        frozen = True


class ResumeAST(BaseModel):
    """Canonical resume: one header and ordered sections."""

    header: ResumeHeader
    sections: List[ResumeSection] = Field(default_factory=list)

    class Config:
        frozen = True

    def get_section(self, section_id: str) -> Optional[ResumeSection]:
        """Return the first section with the given id, if any."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None
