"""Tests for PDF byte generation."""

from io import BytesIO

import pytest
from pypdf import PdfReader
from resume_forge.config import EngineSettings
from resume_forge.models.pdf_models import PdfDocument
from resume_forge.models.template_rules import TemplateRules
from resume_forge.services.layout_resolver import resolve_layout
from resume_forge.services.mapper import map_to_ast
from resume_forge.services.pdf_generator import PDFGenerator
from resume_forge.services.pdf_renderer import render_pdf_document
from resume_forge.services.resume_styles import font_name


@pytest.fixture
def generator():
    return PDFGenerator(EngineSettings())


@pytest.fixture
def sample_document(rules, sample_record):
    return render_pdf_document(resolve_layout(map_to_ast(sample_record, rules), rules))


def test_generate_pdf(generator, sample_document):
    """Test that the generator produces a one-page PDF with the resume text."""
    pdf_bytes = generator.generate_pdf(sample_document)

    assert pdf_bytes.startswith(b"%PDF")
    reader = PdfReader(BytesIO(pdf_bytes))
    assert len(reader.pages) == 1

    text = reader.pages[0].extract_text()
    assert "JOHN DOE" in text
    assert "Tech Corp" in text
    assert "Led team of 5" in text
    assert "React, TypeScript, Node.js" in text


def test_pdf_metadata(generator, sample_document):
    """Test document title and author metadata."""
    reader = PdfReader(BytesIO(generator.generate_pdf(sample_document)))

    assert reader.metadata.title == "John Doe"
    assert reader.metadata.author == "Resume Forge"


def test_pdf_bytes_are_deterministic(generator, sample_document):
    """Test that the same page description always yields the same bytes."""
    assert generator.generate_pdf(sample_document) == generator.generate_pdf(sample_document)
    assert PDFGenerator(EngineSettings()).generate_pdf(sample_document) == generator.generate_pdf(sample_document)


def test_a4_page_size(generator, sample_record):
    """Test that A4 templates produce A4 pages."""
    rules = TemplateRules(id="a4", page={"size": "A4"})
    document = render_pdf_document(resolve_layout(map_to_ast(sample_record, rules), rules))
    page = PdfReader(BytesIO(generator.generate_pdf(document))).pages[0]

    assert round(float(page.mediabox.width), 2) == 595.28
    assert round(float(page.mediabox.height), 2) == 841.89


def test_special_characters_survive(generator, rules):
    """Test that markup characters in user text are written literally."""
    record = {"name": "R&D <Lab>", "experience": [{"company": "A & B", "role": "Dev"}]}
    document = render_pdf_document(resolve_layout(map_to_ast(record, rules), rules))
    text = PdfReader(BytesIO(generator.generate_pdf(document))).pages[0].extract_text()

    assert "R&D <LAB>" in text
    assert "A & B" in text


def test_empty_document_is_rejected(generator):
    """Test that a document without pages cannot be generated."""
    with pytest.raises(ValueError, match="no pages"):
        generator.generate_pdf(PdfDocument(title="Empty"))


def test_font_variants():
    """Test font family and weight resolution to built-in fonts."""
    assert font_name("Times-Roman") == "Times-Roman"
    assert font_name("Times-Roman", "bold") == "Times-Bold"
    assert font_name("Helvetica", "bold") == "Helvetica-Bold"


def full_record():
    bullet = "Delivered a measurable improvement to a production system used by many customers every day"
    return {
        "name": "Full Record",
        "email": "full@example.com",
        "phone": "555-0199",
        "location": "Berlin",
        "links": {"linkedin": "linkedin.com/in/full", "github": "github.com/full"},
        "skills": [{"category": "Languages", "items": ["Python", "Go", "SQL"]}],
        "experience": [
            {
                "company": f"Company {i}",
                "role": "Senior Engineer",
                "start": "2019",
                "end": "2021",
                "location": "Remote",
                "bullets": [f"{bullet} ({i}.{j})" for j in range(4)],
            }
            for i in range(4)
        ],
        "projects": [
            {"name": f"Project {i}", "bullets": [bullet, bullet]}
            for i in range(3)
        ],
        "education": [
            {"institution": f"University {i}", "degree": "M.Sc.", "field": "Physics", "start": "2010", "end": "2012"}
            for i in range(2)
        ],
    }


@pytest.mark.parametrize("template", [
    TemplateRules(id="standard-copy"),
    TemplateRules(id="a4-tight", page={"size": "A4"}, layout={"margins": {"top": 0.3, "bottom": 0.3}}),
])
def test_truncated_layout_prints_on_one_page(generator, template):
    """Test that a layout the resolver had to truncate still prints on exactly one page."""
    layout = resolve_layout(map_to_ast(full_record(), template), template)
    assert layout.meta.dropped_entries > 0

    reader = PdfReader(BytesIO(generator.generate_pdf(render_pdf_document(layout))))

    assert len(reader.pages) == 1
    text = reader.pages[0].extract_text()
    assert "Company 0" in text
    assert "FULL RECORD" in text
