"""Service running the full resume pipeline: map, resolve, render."""

import logging
from typing import Any, NamedTuple, Optional
from resume_forge.models.layout_models import ResolvedLayout
from resume_forge.models.pdf_models import PdfDocument
from resume_forge.models.template_rules import DEFAULT_TEMPLATE_RULES, TemplateRules
from resume_forge.services.html_renderer import HTMLRenderer
from resume_forge.services.layout_resolver import resolve_layout
from resume_forge.services.mapper import map_to_ast
from resume_forge.services.pdf_generator import PDFGenerator
from resume_forge.services.pdf_renderer import render_pdf_document

logger = logging.getLogger(__name__)


class RenderResult(NamedTuple):
    """Everything one render request produces."""

    layout: ResolvedLayout
    html: str
    pdf_document: PdfDocument


class ResumePipeline:
    """
    Service to turn a legacy resume record into a one-page layout and its renderings.

    Holds only the renderers; every call builds its own AST and layout, so one
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        html_renderer: Optional[HTMLRenderer] = None,
        pdf_generator: Optional[PDFGenerator] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            html_renderer: HTML renderer instance. If None, creates a new one.
            pdf_generator: PDF generator instance. If None, creates a new one.
        """
        self.html_renderer = html_renderer or HTMLRenderer()
        self.pdf_generator = pdf_generator or PDFGenerator()

    def build_layout(self, record: Any, rules: TemplateRules = DEFAULT_TEMPLATE_RULES) -> ResolvedLayout:
        """
        Map a legacy record and fit it onto one page.

        Args:
            record: Legacy resume record
            rules: Template rules

        Returns:
            ResolvedLayout: The resolved layout

        Raises:
            ResumeValidationError: If the record has no header name
        """
        ast = map_to_ast(record, rules)
        layout = resolve_layout(ast, rules)
        logger.info(
            "Resolved layout for template %s: %d sections, %d entries dropped, %d bullets dropped",
            rules.id,
            len(layout.sections),
            layout.meta.dropped_entries,
            layout.meta.dropped_bullets,
        )
        return layout

    def render_html(
        self,
        record: Any,
        rules: TemplateRules = DEFAULT_TEMPLATE_RULES,
        full_document: bool = False,
    ) -> str:
        """
        Render the HTML preview of a legacy record.

        Args:
            record: Legacy resume record
            rules: Template rules
            full_document: Return a standalone page instead of the resume subtree

        Returns:
            str: HTML
        """
        layout = self.build_layout(record, rules)
        if full_document:
            return self.html_renderer.render_document(layout)
        return self.html_renderer.render(layout)

    def render_pdf(self, record: Any, rules: TemplateRules = DEFAULT_TEMPLATE_RULES) -> bytes:
        """
        Render the PDF of a legacy record.

        Args:
            record: Legacy resume record
            rules: Template rules

        Returns:
            bytes: PDF file as bytes
        """
        layout = self.build_layout(record, rules)
        return self.pdf_generator.generate_pdf(render_pdf_document(layout))

    def render(self, record: Any, rules: TemplateRules = DEFAULT_TEMPLATE_RULES) -> RenderResult:
        """
        Resolve once and render with both renderers.

        Args:
            record: Legacy resume record
            rules: Template rules

        Returns:
            RenderResult: Layout, HTML subtree and PDF page description
        """
        layout = self.build_layout(record, rules)
        return RenderResult(
            layout=layout,
            html=self.html_renderer.render(layout),
            pdf_document=render_pdf_document(layout),
        )
