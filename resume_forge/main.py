"""FastAPI application for Resume Forge."""

import logging
from io import BytesIO
from typing import Optional
from fastapi import FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse, StreamingResponse
from resume_forge.config import get_settings
from resume_forge.exceptions import RendererParityError
from resume_forge.models.request_models import ResumeRenderRequest
from resume_forge.models.response_models import (
    ErrorResponse,
    HealthResponse,
    LayoutResponse,
    RootResponse,
    SelfTestResponse,
    TemplatesResponse,
)
from resume_forge.models.template_rules import TemplateRules
from resume_forge.services.pdf_renderer import render_pdf_document
from resume_forge.services.resume_data_loader import get_data_loader
from resume_forge.services.resume_pipeline import ResumePipeline
from resume_forge.services.template_registry import get_template_registry
from resume_forge.services.verification import verify_determinism, verify_parity
from resume_forge.utils.logging_config import setup_logging

API_VERSION = "1.0.0"

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Resume Forge API",
    description="""API that renders a structured resume onto a single printable page.

## Features

* **Canonicalization**: Accepts loosely-typed legacy resume records and normalizes them
* **Page fit**: Deterministically decides which entries and bullets fit one page
* **HTML preview**: Renders the resolved layout as an HTML page
* **PDF export**: Renders the same layout as a PDF with identical content

## Usage

1. Use `/api/v1/resume/layout` to see what fits and what was hidden
2. Use `/api/v1/resume/preview` for the HTML preview
3. Use `/api/v1/resume/pdf` to download the PDF""",
    version=API_VERSION,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    tags_metadata=[
        {
            "name": "health",
            "description": "Health check and status endpoints"
        },
        {
            "name": "resume",
            "description": "Layout resolution and rendering endpoints"
        },
        {
            "name": "templates",
            "description": "Template rules"
        }
    ]
)

# Initialize services
template_registry = get_template_registry(settings.templates_dir)
data_loader = get_data_loader()
pipeline = ResumePipeline()

RENDER_ERRORS = {
    400: {
        "description": "Bad request - Invalid resume record (e.g. missing name)",
        "model": ErrorResponse
    },
    404: {
        "description": "Not found - Unknown template",
        "model": ErrorResponse
    },
    500: {
        "description": "Internal server error",
        "model": ErrorResponse
    }
}


def _rules_for(template_id: Optional[str]) -> TemplateRules:
    return template_registry.get(template_id or settings.default_template)


def _pdf_filename(name: str) -> str:
    safe = "_".join(part for part in "".join(c if c.isalnum() else " " for c in name).split())
    return f"Resume_{safe or 'Untitled'}.pdf"


@app.get(
    "/",
    response_model=RootResponse,
    status_code=status.HTTP_200_OK,
    summary="Root endpoint",
    description="Returns API information including name and version",
    tags=["health"]
)
async def root():
    """
    Root endpoint.

    Returns basic API information including name and version.
    """
    return RootResponse(message="Resume Forge API", version=API_VERSION)


@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Checks if the API service is running and healthy",
    tags=["health"]
)
async def health():
    """
    Health check endpoint.

    Returns the health status of the API service.
    """
    return HealthResponse(status="ok")


@app.get(
    "/api/v1/templates",
    response_model=TemplatesResponse,
    status_code=status.HTTP_200_OK,
    summary="List templates",
    description="Lists the registered template rule sets",
    tags=["templates"]
)
async def list_templates():
    """List registered template ids and the default one."""
    return TemplatesResponse(templates=template_registry.ids(), default=settings.default_template)


@app.post(
    "/api/v1/resume/layout",
    response_model=LayoutResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Resolve one-page layout",
    description="""
    Maps the legacy record to the canonical resume and fits it onto one page.

    The response lists the sections and entries that fit, and counts the
    entries and bullets that were dropped.
    """,
    tags=["resume"],
    responses=RENDER_ERRORS
)
async def resolve_resume_layout(request: ResumeRenderRequest):
    """
    Resolve the one-page layout.

    **Parameters:**
    - `resume`: Legacy resume record
    - `templateId`: Template rules id (optional)

    **Returns:**
    - The resolved layout and, when entries were dropped, a notice such as
      `"2 items hidden to fit one page"`
    """
    try:
        rules = _rules_for(request.template_id)
        layout = pipeline.build_layout(request.resume, rules)
        return LayoutResponse(template_id=rules.id, layout=layout, notice=layout.hidden_items_notice)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("Layout resolution failed")
        raise HTTPException(status_code=500, detail=f"Error resolving layout: {str(e)}")


@app.post(
    "/api/v1/resume/preview",
    response_class=HTMLResponse,
    status_code=status.HTTP_200_OK,
    summary="HTML preview",
    description="Renders the resolved layout as a standalone HTML page",
    tags=["resume"],
    responses=RENDER_ERRORS
)
async def preview_resume(request: ResumeRenderRequest):
    """
    Render the HTML preview.

    **Returns:**
    - A complete HTML document; `X-Dropped-Entries` and `X-Dropped-Bullets`
      headers carry the truncation counters
    """
    try:
        rules = _rules_for(request.template_id)
        layout = pipeline.build_layout(request.resume, rules)
        html = pipeline.html_renderer.render_document(layout)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("HTML preview failed")
        raise HTTPException(status_code=500, detail=f"Error rendering preview: {str(e)}")

    return HTMLResponse(
        content=html,
        headers={
            "X-Dropped-Entries": str(layout.meta.dropped_entries),
            "X-Dropped-Bullets": str(layout.meta.dropped_bullets),
        }
    )


@app.post(
    "/api/v1/resume/pdf",
    response_class=StreamingResponse,
    status_code=status.HTTP_200_OK,
    summary="PDF export",
    description="Renders the resolved layout as a one-page PDF",
    tags=["resume"],
    responses={
        200: {
            "description": "Resume PDF file",
            "content": {
                "application/pdf": {
                    "schema": {
                        "type": "string",
                        "format": "binary"
                    }
                }
            }
        },
        **RENDER_ERRORS
    }
)
async def export_resume_pdf(request: ResumeRenderRequest):
    """
    Render the PDF.

    **Returns:**
    - PDF file as binary stream with filename `Resume_{name}.pdf`
    """
    try:
        rules = _rules_for(request.template_id)
        layout = pipeline.build_layout(request.resume, rules)
        pdf_bytes = pipeline.pdf_generator.generate_pdf(render_pdf_document(layout))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("PDF export failed")
        raise HTTPException(status_code=500, detail=f"Error generating PDF: {str(e)}")

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{_pdf_filename(layout.header.name)}"',
            "X-Dropped-Entries": str(layout.meta.dropped_entries),
            "X-Dropped-Bullets": str(layout.meta.dropped_bullets),
        }
    )


@app.get(
    "/api/v1/self-test",
    response_model=SelfTestResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Determinism and parity self-test",
    description="""
    Renders the bundled sample resume twice with the default template and
    compares the PDF digests, then checks that the HTML and PDF renderers
    show the same entries in the same order.
    """,
    tags=["health"]
)
async def self_test():
    """Run the determinism and renderer parity checks on the sample resume."""
    record = data_loader.load_sample()
    rules = _rules_for(None)
    report = verify_determinism(record, rules, pipeline)

    try:
        outline = verify_parity(pipeline.build_layout(record, rules))
        parity = True
    except RendererParityError as e:
        logger.error("Renderer parity check failed: %s", e)
        outline = e.html_outline
        parity = False

    return SelfTestResponse(
        deterministic=report.deterministic,
        first_digest=report.first_digest,
        second_digest=report.second_digest,
        parity=parity,
        entries=len(outline),
    )
