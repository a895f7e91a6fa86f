"""Request models for API endpoints."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ResumeRenderRequest(BaseModel):
    """Request model for every render endpoint."""

    resume: Dict[str, Any] = Field(
        ...,
        description="Legacy resume record: name, contact fields, links, experience, projects, education, skills. Missing or malformed lists are omitted from the output.",
        example={
            "name": "John Doe",
            "email": "john@example.com",
            "links": {"github": "github.com/johndoe"},
            "skills": [{"category": "Languages", "items": ["Go", "Rust"]}],
            "experience": [
                {
                    "company": "Tech Corp",
                    "role": "Senior Engineer",
                    "start": "2020",
                    "end": "Present",
                    "bullets": ["Led team of 5"],
                }
            ],
        },
    )
    template_id: Optional[str] = Field(
        None,
        alias="templateId",
        description="Template rules to apply. Defaults to the configured default template.",
        example="standard",
    )

    class Config:
        populate_by_name = True
