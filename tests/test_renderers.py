"""Tests for the HTML and PDF renderers and their parity."""

import pytest
from bs4 import BeautifulSoup
from resume_forge.exceptions import RendererParityError
from resume_forge.models.ast_models import ResumeEntry, ResumeHeader, ResumeSection
from resume_forge.models.layout_models import ResolvedLayout
from resume_forge.models.template_rules import Margins, PageSize
from resume_forge.services.html_renderer import HTMLRenderer, render_html
from resume_forge.services.layout_resolver import resolve_layout
from resume_forge.services.mapper import map_to_ast
from resume_forge.services.pdf_renderer import render_pdf_document
from resume_forge.services.verification import html_outline, pdf_outline, verify_parity
from resume_forge.utils.template_helpers import company_line, contact_items, entry_heading


def make_layout(sections, **header):
    header.setdefault("name", "Test Person")
    return ResolvedLayout(header=ResumeHeader(**header), sections=sections)


def find_nodes(node, style):
    found = [node] if node.style == style else []
    for child in node.children:
        found.extend(find_nodes(child, style))
    return found


def pdf_nodes(document, style):
    return [found for top in document.pages[0].children for found in find_nodes(top, style)]


@pytest.fixture
def rich_layout(rules, rich_record):
    return resolve_layout(map_to_ast(rich_record, rules), rules)


def test_html_structure(rich_layout):
    """Test the HTML section and entry markers and header content."""
    soup = BeautifulSoup(render_html(rich_layout), "html.parser")

    assert soup.select_one(".resume-name").get_text() == "Ada Lovelace"
    assert [s["data-section-id"] for s in soup.select("[data-section-id]")] == [
        "experience", "projects", "skills", "education",
    ]
    links = soup.select("a.resume-link")
    assert [(a.get_text(), a["href"]) for a in links] == [
        ("Github", "https://github.com/ada"),
        ("Portfolio", "https://ada.dev"),
    ]
    assert len(soup.select(".resume-contact .separator")) == 4


def test_html_escapes_text():
    """Test that user text is escaped, not interpreted."""
    layout = make_layout(
        [ResumeSection(id="experience", title="Experience", entries=[
            ResumeEntry(title="<script>alert(1)</script>", company="Babbage & Co"),
        ])],
        name="A <b>bold</b> name",
    )
    html = render_html(layout)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Babbage &amp; Co" in html
    assert "<b>bold</b>" not in html


def test_skills_rendering_in_both_media():
    """Test category and flat skills read the same in HTML and PDF."""
    layout = make_layout([ResumeSection(id="skills", title="Skills", entries=[
        ResumeEntry(title="Languages", bullets=["Go", "Rust"]),
        ResumeEntry(title="Skills", bullets=["Go", "Rust"]),
    ])])

    soup = BeautifulSoup(render_html(layout), "html.parser")
    html_lines = [
        category.get_text(" ", strip=True)
        for category in soup.select(".skills-category")
    ]
    pdf_lines = [
        " ".join(node.iter_text())
        for node in pdf_nodes(render_pdf_document(layout), "skill_category")
    ]

    assert html_lines == ["Languages: Go, Rust", "Skills: Go, Rust"]
    assert pdf_lines == html_lines


def test_skills_branch_depends_on_section_id():
    """Test that a non-skills section with bullets renders as a bullet list."""
    layout = make_layout([ResumeSection(id="projects", title="Projects", entries=[
        ResumeEntry(title="Tool", bullets=["Go", "Rust"]),
    ])])
    soup = BeautifulSoup(render_html(layout), "html.parser")

    assert soup.select(".skills-category") == []
    assert [li.get_text() for li in soup.select("li.bullet-item")] == ["Go", "Rust"]
    assert [n.text for n in pdf_nodes(render_pdf_document(layout), "bullet_content")] == ["Go", "Rust"]


@pytest.mark.parametrize("entry,expected", [
    (ResumeEntry(title="Dev", company="Acme"), "Acme"),
    (ResumeEntry(title="Dev", location="Remote"), ""),
    (ResumeEntry(title="Dev"), None),
    (ResumeEntry(title="Engineer", role="Lead", company="Acme"), "Acme - Lead"),
])
def test_subheader_conditions(entry, expected):
    """Test when the company line appears and what it says."""
    layout = make_layout([ResumeSection(id="experience", title="Experience", entries=[entry])])
    soup = BeautifulSoup(render_html(layout), "html.parser")
    html_company = soup.select_one(".entry-company")
    pdf_company = pdf_nodes(render_pdf_document(layout), "entry_company")

    if expected is None:
        assert html_company is None
        assert pdf_company == []
    else:
        assert html_company.get_text() == expected
        assert pdf_company[0].text == expected


def test_heading_falls_back_to_role_and_company():
    """Test the entry title fallbacks."""
    assert entry_heading(ResumeEntry(role="Lead", company="Acme")) == "Lead"
    assert entry_heading(ResumeEntry(company="Acme")) == "Acme"
    assert entry_heading(ResumeEntry()) == ""
    assert company_line(ResumeEntry(role="Lead", title="Eng")) == ""


def test_contact_items_order():
    """Test contact line order: location, email, phone, links."""
    header = ResumeHeader(
        name="A",
        email="a@b.c",
        location="Paris",
        links=[{"type": "github", "url": "https://github.com/a"}],
    )
    assert [item.text for item in contact_items(header)] == ["Paris", "a@b.c", "github"]


def test_pdf_document_page_geometry(rich_layout):
    """Test page size and margins in points."""
    page = render_pdf_document(rich_layout).pages[0]

    assert (page.width, page.height) == (612.0, 792.0)
    assert page.margins.top == 36
    assert page.children[0].style == "header"

    a4 = make_layout([]).model_copy(update={"page_size": PageSize.A4, "margins": Margins(top=1)})
    a4_page = render_pdf_document(a4).pages[0]
    assert (a4_page.width, a4_page.height) == (595.28, 841.89)
    assert a4_page.margins.top == 72


def test_pdf_header_contact_and_links(rich_layout):
    """Test contact nodes, separators and link targets of the PDF header."""
    document = render_pdf_document(rich_layout)
    contact = pdf_nodes(document, "header_contact")[0]

    assert [node.style for node in contact.children].count("contact_separator") == 4
    assert [(n.text, n.href) for n in contact.children if n.kind == "link"] == [
        ("Github", "https://github.com/ada"),
        ("Portfolio", "https://ada.dev"),
    ]
    assert document.title == "Ada Lovelace"


def test_outlines_match(rich_layout):
    """Test that both renderers show the same entries in the same order."""
    outline = verify_parity(rich_layout)

    assert outline == [
        ("experience", 0, "Lead Programmer"),
        ("experience", 1, "Consultant"),
        ("projects", 0, "Note G"),
        ("skills", 0, "Languages:"),
        ("education", 0, "Mathematics"),
    ]


def test_parity_holds_under_truncation(rules, rich_record):
    """Test parity on a layout that had entries and bullets dropped."""
    rich_record["experience"] = rich_record["experience"] * 5
    rich_record["experience"][0] = dict(rich_record["experience"][0], bullets=["b"] * 9)
    layout = resolve_layout(map_to_ast(rich_record, rules), rules)

    assert layout.meta.dropped_entries > 0
    assert layout.meta.dropped_bullets == 5
    assert html_outline(render_html(layout)) == pdf_outline(render_pdf_document(layout))


def test_parity_error_reports_both_outlines(rich_layout):
    """Test the mismatch error carries both outlines."""
    error = RendererParityError([("a", 0, "x")], [])

    assert error.html_outline == [("a", 0, "x")]
    assert error.pdf_outline == []
    assert "differ" in str(error)


def test_full_document_uses_page_size(rich_layout):
    """Test the standalone page declares the printed page size."""
    renderer = HTMLRenderer()
    letter = renderer.render_document(rich_layout)
    a4 = renderer.render_document(rich_layout.model_copy(update={"page_size": PageSize.A4}))

    assert "<!DOCTYPE html>" in letter
    assert "size: letter" in letter
    assert "size: A4" in a4
    assert "resume-paper--a4" in a4


def test_bullets_replace_description():
    """Test that an entry shows its bullets, and its description only when it has none."""
    layout = make_layout([ResumeSection(id="projects", title="Projects", entries=[
        ResumeEntry(title="With bullets", description="Hidden text", bullets=["Shown bullet"]),
        ResumeEntry(title="Without bullets", description="Shown text"),
    ])])
    soup = BeautifulSoup(render_html(layout), "html.parser")
    document = render_pdf_document(layout)

    first, second = soup.select(".resume-entry")
    assert first.select(".entry-description") == []
    assert [li.get_text() for li in first.select("li.bullet-item")] == ["Shown bullet"]
    assert second.select_one(".entry-description").get_text() == "Shown text"
    assert second.select("ul.resume-bullets") == []

    assert [n.text for n in pdf_nodes(document, "entry_description")] == ["Shown text"]
    assert [n.text for n in pdf_nodes(document, "bullet_content")] == ["Shown bullet"]
    assert "Hidden text" not in render_html(layout)


def test_skills_text_content_has_space_after_label():
    """Test that the plain text of a skills line matches the PDF line."""
    layout = make_layout([ResumeSection(id="skills", title="Skills", entries=[
        ResumeEntry(title="Languages", bullets=["Go", "Rust"]),
    ])])
    soup = BeautifulSoup(render_html(layout), "html.parser")
    category = soup.select_one(".skills-category")

    assert category.get_text().strip() == "Languages: Go, Rust"
    assert category.select_one(".category-name").get_text() == "Languages:"
