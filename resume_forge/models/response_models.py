"""Response models for API endpoints."""

from typing import List, Optional
from pydantic import BaseModel, Field
from resume_forge.models.layout_models import ResolvedLayout


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str = Field(
        ...,
        description="Error message describing what went wrong",
        example="Resume header requires a non-empty 'name'"
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(
        ...,
        description="Service status",
        example="ok"
    )


class RootResponse(BaseModel):
    """Root endpoint response model."""

    message: str = Field(
        ...,
        description="API name",
        example="Resume Forge API"
    )
    version: str = Field(
        ...,
        description="API version",
        example="1.0.0"
    )


class TemplatesResponse(BaseModel):
    """Available templates response model."""

    templates: List[str] = Field(..., description="Registered template ids", example=["compact-a4", "standard"])
    default: str = Field(..., description="Template used when a request names none", example="standard")


class LayoutResponse(BaseModel):
    """Resolved layout response model."""

    template_id: str = Field(..., alias="templateId", description="Template the layout was resolved with")
    layout: ResolvedLayout = Field(..., description="Content that fits one page, with truncation counters")
    notice: Optional[str] = Field(
        None,
        description="User-facing notice when entries were hidden to fit the page",
        example="2 items hidden to fit one page"
    )

    class Config:
        populate_by_name = True


class SelfTestResponse(BaseModel):
    """Determinism and renderer parity self-test response model."""

    deterministic: bool = Field(..., description="Both PDF renders produced identical bytes")
    first_digest: str = Field(..., alias="firstDigest", description="SHA-256 of the first PDF render")
    second_digest: str = Field(..., alias="secondDigest", description="SHA-256 of the second PDF render")
    parity: bool = Field(..., description="HTML and PDF renderers produced the same outline")
    entries: int = Field(..., description="Number of entries compared by the parity check")

    class Config:
        populate_by_name = True
