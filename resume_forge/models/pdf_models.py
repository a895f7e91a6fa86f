"""Pydantic models for the PDF page description."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from resume_forge.models.template_rules import PageSize


class PdfNode(BaseModel):
    """
    One page primitive.

    ``view`` nodes group children, ``text`` nodes carry a run of text and
    ``link`` nodes carry text with a target. ``style`` names an entry of the
    shared PDF style table.
    """

    kind: Literal["view", "text", "link"]
    style: str
    text: Optional[str] = None
    href: Optional[str] = None
    section_id: Optional[str] = Field(None, alias="sectionId")
    entry_index: Optional[int] = Field(None, alias="entryIndex")
    children: List["PdfNode"] = Field(default_factory=list)

    class Config:
        frozen = True
        populate_by_name = True

    def iter_text(self):
        """Yield every text run below this node in document order."""
        if self.text is not None:
            yield self.text
        for child in self.children:
            yield from child.iter_text()


PdfNode.model_rebuild()


class PdfMargins(BaseModel):
    """Page margins in points."""

    top: float
    right: float
    bottom: float
    left: float

    class Config:
        frozen = True


class PdfPage(BaseModel):
    """One page with its size in points and its top-level primitives."""

    size: PageSize
    width: float
    height: float
    margins: PdfMargins
    children: List[PdfNode] = Field(default_factory=list)

    class Config:
        frozen = True


class PdfDocument(BaseModel):
    """Print-ready page description."""

    title: str
    font_family: str = Field("Times-Roman", alias="fontFamily")
    pages: List[PdfPage] = Field(default_factory=list)

    class Config:
        frozen = True
        populate_by_name = True
