"""Exceptions raised at the boundaries of the resume engine."""


class ResumeValidationError(ValueError):
    """The legacy record violates the caller contract (e.g. no header name)."""


class UnknownTemplateError(LookupError):
    """No template rules are registered under the requested id."""

    def __init__(self, template_id: str, available=None):
        self.template_id = template_id
        self.available = sorted(available or [])
        message = f"Unknown template: {template_id}."
        if self.available:
            message += f" Available: {', '.join(self.available)}"
        super().__init__(message)


class RendererParityError(RuntimeError):
    """The HTML and PDF renderers produced different outlines for one layout."""

    def __init__(self, html_outline, pdf_outline):
        self.html_outline = html_outline
        self.pdf_outline = pdf_outline
        super().__init__(
            f"Renderer outlines differ: html={html_outline!r} pdf={pdf_outline!r}"
        )
