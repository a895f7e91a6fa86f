"""Shared fixtures for the resume engine tests."""

import pytest
from resume_forge.models.template_rules import DEFAULT_TEMPLATE_RULES
from resume_forge.services.resume_data_loader import ResumeDataLoader


@pytest.fixture
def rules():
    """Default template rules."""
    return DEFAULT_TEMPLATE_RULES


@pytest.fixture
def sample_record():
    """The bundled sample legacy record."""
    return ResumeDataLoader().load_sample()


@pytest.fixture
def rich_record():
    """A record that fills every section."""
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "555-0100",
        "location": "London",
        "links": {"github": "github.com/ada", "portfolio": "https://ada.dev"},
        "skills": [
            {"category": "Languages", "items": ["Go", "Rust"]},
            {"category": "Tools", "items": ["Docker"]},
        ],
        "experience": [
            {
                "company": "Analytical Engines Ltd",
                "role": "Lead Programmer",
                "startDate": "Jan 2020",
                "endDate": "Present",
                "location": "London",
                "bullets": ["Wrote the first algorithm", "Documented the engine"],
            },
            {
                "company": "Babbage & Co",
                "title": "Consultant",
                "start": "2018",
                "end": "2019",
                "description": ["Advised on notation", "Reviewed designs"],
            },
        ],
        "projects": [
            {
                "name": "Note G",
                "description": "Bernoulli number program",
                "tech": ["Punch cards"],
                "bullets": ["Computed Bernoulli numbers"],
            },
        ],
        "education": [
            {
                "institution": "Home tutoring",
                "degree": "Mathematics",
                "start": "1830",
                "end": "1835",
            },
        ],
    }
