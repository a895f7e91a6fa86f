"""Service for rendering a resolved layout as HTML from Jinja2 templates."""

from pathlib import Path
from typing import Optional
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from resume_forge.models.layout_models import ResolvedLayout
from resume_forge.models.template_rules import PageSize
from resume_forge.utils.template_helpers import register_jinja_filters

PAGE_CSS_SIZES = {
    PageSize.LETTER: "letter",
    PageSize.A4: "A4",
}


class HTMLRenderer:
    """Service to render the HTML preview of a resolved layout."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the HTML renderer.

        Args:
            template_dir: Directory containing Jinja2 templates. Defaults to resume_forge/templates/
        """
        if template_dir is None:
            # Package directory (parent of services)
            package_dir = Path(__file__).parent.parent
            template_dir = package_dir / "templates"

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        register_jinja_filters(self.env)

    def render(self, layout: ResolvedLayout) -> str:
        """
        Render the resume subtree (the ``resume-container`` element).

        Args:
            layout: Resolved layout

        Returns:
            str: HTML fragment
        """
        template = self.env.get_template("resume.html")
        return template.render(layout=layout)

    def render_document(self, layout: ResolvedLayout) -> str:
        """
        Render a standalone HTML page with the shared stylesheet.

        Args:
            layout: Resolved layout

        Returns:
            str: Complete HTML document
        """
        template = self.env.get_template("resume_document.html")
        return template.render(
            layout=layout,
            page_css_size=PAGE_CSS_SIZES.get(layout.page_size, "letter"),
        )


_html_renderer: Optional[HTMLRenderer] = None


def render_html(layout: ResolvedLayout) -> str:
    """Render the resume subtree with a shared renderer instance."""
    global _html_renderer
    if _html_renderer is None:
        _html_renderer = HTMLRenderer()
    return _html_renderer.render(layout)
