"""
Checks for the two correctness properties of the renderers.

Parity: the HTML and PDF renderings of one layout show the same entries, in
the same order, with the same titles. Determinism: rendering the same record
twice yields byte-identical PDFs.
"""

import hashlib
import logging
from typing import Any, Iterator, List, NamedTuple, Optional, Tuple
from bs4 import BeautifulSoup
from resume_forge.exceptions import RendererParityError
from resume_forge.models.layout_models import ResolvedLayout
from resume_forge.models.pdf_models import PdfDocument, PdfNode
from resume_forge.models.template_rules import DEFAULT_TEMPLATE_RULES, TemplateRules
from resume_forge.services.html_renderer import render_html
from resume_forge.services.pdf_renderer import render_pdf_document
from resume_forge.services.resume_pipeline import ResumePipeline

logger = logging.getLogger(__name__)

OutlineItem = Tuple[str, int, str]

HTML_TITLE_SELECTOR = ".entry-title, .category-name"
PDF_TITLE_STYLES = ("entry_title", "skill_category_name")


class DeterminismReport(NamedTuple):
    """Digests of two PDF renders of the same input."""

    first_digest: str
    second_digest: str

    @property
    def deterministic(self) -> bool:
        return self.first_digest == self.second_digest


def html_outline(html: str) -> List[OutlineItem]:
    """
    Ordered (section id, entry index, displayed title) tuples of an HTML rendering.

    Args:
        html: Output of the HTML renderer

    Returns:
        List[OutlineItem]: Outline in document order
    """
    soup = BeautifulSoup(html, "html.parser")
    outline = []
    for section in soup.select("[data-section-id]"):
        section_id = section["data-section-id"]
        for entry in section.select("[data-entry-index]"):
            title = entry.select_one(HTML_TITLE_SELECTOR)
            outline.append((
                section_id,
                int(entry["data-entry-index"]),
                title.get_text() if title is not None else "",
            ))
    return outline


def _walk(node: PdfNode) -> Iterator[PdfNode]:
    yield node
    for child in node.children:
        yield from _walk(child)


def pdf_outline(document: PdfDocument) -> List[OutlineItem]:
    """
    Ordered (section id, entry index, displayed title) tuples of a PDF page description.

    Args:
        document: Output of the PDF renderer

    Returns:
        List[OutlineItem]: Outline in document order
    """
    outline = []
    for page in document.pages:
        for top in page.children:
            for section in _walk(top):
                if section.section_id is None:
                    continue
                for entry in _walk(section):
                    if entry.entry_index is None:
                        continue
                    title = next(
                        (node.text for node in _walk(entry) if node.style in PDF_TITLE_STYLES),
                        "",
                    )
                    outline.append((section.section_id, entry.entry_index, title or ""))
    return outline


def verify_parity(layout: ResolvedLayout) -> List[OutlineItem]:
    """
    Render a layout with both renderers and compare their outlines.

    Args:
        layout: Resolved layout

    Returns:
        List[OutlineItem]: The shared outline

    Raises:
        RendererParityError: If the outlines differ
    """
    from_html = html_outline(render_html(layout))
    from_pdf = pdf_outline(render_pdf_document(layout))
    if from_html != from_pdf:
        raise RendererParityError(from_html, from_pdf)
    return from_html


def verify_determinism(
    record: Any,
    rules: TemplateRules = DEFAULT_TEMPLATE_RULES,
    pipeline: Optional[ResumePipeline] = None,
) -> DeterminismReport:
    """
    Render the PDF of one record twice and hash both byte streams.

    Args:
        record: Legacy resume record
        rules: Template rules
        pipeline: Pipeline to use. If None, creates a new one.

    Returns:
        DeterminismReport: SHA-256 digests of both runs
    """
    if pipeline is None:
        pipeline = ResumePipeline()

    digests = [
        hashlib.sha256(pipeline.render_pdf(record, rules)).hexdigest()
        for _ in range(2)
    ]
    report = DeterminismReport(first_digest=digests[0], second_digest=digests[1])
    if not report.deterministic:
        logger.error("PDF output is not deterministic: %s != %s", *digests)
    return report
