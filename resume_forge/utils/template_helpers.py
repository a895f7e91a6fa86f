"""
Display helpers shared by the HTML and PDF renderers.

Both renderers take every display decision from these functions so that the
same layout produces the same text, in the same order, in both media.
"""

from typing import List, NamedTuple, Optional
from jinja2 import Environment
from resume_forge.models.ast_models import ResumeEntry, ResumeHeader, ResumeSection
from resume_forge.services.resume_styles import css_font_stack

SKILLS_SECTION_ID = "skills"
CONTACT_SEPARATOR = "•"
BULLET_SYMBOL = "•"


class ContactItem(NamedTuple):
    """One item of the header contact line."""

    text: str
    href: Optional[str] = None


def contact_items(header: ResumeHeader) -> List[ContactItem]:
    """
    Contact line items in display order.

    Location, email and phone first, then one item per link labelled with the
    link label (or its type).

    Args:
        header: Resume header

    Returns:
        List[ContactItem]: Items to show, separated by ``CONTACT_SEPARATOR``
    """
    items = [
        ContactItem(value)
        for value in (header.location, header.email, header.phone)
        if value
    ]
    for link in header.links:
        items.append(ContactItem(link.label or link.type.value, link.url))
    return items


def is_skills_section(section: ResumeSection) -> bool:
    """Skills sections use the category layout; branch on the id, not the shape."""
    return section.id == SKILLS_SECTION_ID


def entry_heading(entry: ResumeEntry) -> str:
    """Text of the entry's first line."""
    return entry.title or entry.role or entry.company or ""


def has_subheader(entry: ResumeEntry) -> bool:
    """Whether the company/location line is shown."""
    return bool(entry.company or entry.location)


def company_line(entry: ResumeEntry) -> str:
    """
    Text of the subheader's left side.

    Example: company "Acme", role "Lead", title "Engineer" -> "Acme - Lead"
    """
    text = entry.company or ""
    if entry.company and entry.role and entry.title:
        text += f" - {entry.role}"
    return text


def skill_label(entry: ResumeEntry) -> str:
    """Category label of a skills entry, e.g. "Languages:"."""
    return f"{entry.title}:" if entry.title else ""


def skill_list(entry: ResumeEntry) -> str:
    """Comma-joined skill items of a skills entry."""
    return ", ".join(entry.bullets)


def register_jinja_filters(env: Environment) -> None:
    """
    Register helper functions as Jinja2 filters and globals.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters["entry_heading"] = entry_heading
    env.filters["company_line"] = company_line
    env.filters["skill_label"] = skill_label
    env.filters["skill_list"] = skill_list
    env.filters["css_font_stack"] = css_font_stack
    env.tests["skills_section"] = is_skills_section
    env.tests["with_subheader"] = has_subheader
    env.globals["contact_items"] = contact_items
    env.globals["CONTACT_SEPARATOR"] = CONTACT_SEPARATOR
