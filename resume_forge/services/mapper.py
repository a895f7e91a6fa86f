"""Service for mapping legacy resume records onto the canonical resume AST."""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ValidationError
from resume_forge.exceptions import ResumeValidationError
from resume_forge.models.ast_models import (
    LinkType,
    ResumeAST,
    ResumeEntry,
    ResumeHeader,
    ResumeLink,
    ResumeSection,
)
from resume_forge.models.template_rules import TemplateRules

logger = logging.getLogger(__name__)

SAFE_URL_PREFIXES = ("http://", "https://", "mailto:", "tel:")
DATE_SEPARATOR = " – "

SECTION_TITLES = {
    "summary": "Summary",
    "experience": "Professional Experience",
    "projects": "Projects",
    "education": "Education",
    "skills": "Skills",
}


def ensure_protocol(url: Optional[str]) -> str:
    """
    Prefix a URL with ``https://`` unless it already carries a scheme.

    Example: "github.com/x" -> "https://github.com/x"

    Args:
        url: Raw URL as typed by the user

    Returns:
        str: Normalized URL, empty string for empty input
    """
    if not url:
        return ""
    url = url.strip()
    if url.startswith(SAFE_URL_PREFIXES):
        return url
    return f"https://{url}"


def format_date_range(start: Optional[str], end: Optional[str]) -> Optional[str]:
    """
    Join start and end into a display range.

    Args:
        start: Start date text
        end: End date text

    Returns:
        Optional[str]: "start – end", whichever side exists, or None
    """
    if start and end:
        return f"{start}{DATE_SEPARATOR}{end}"
    return start or end or None


def _as_mapping(value: Any) -> Optional[Mapping]:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, Mapping):
        return value
    return None


def _text(value: Any) -> Optional[str]:
    """Scalar to display text; None and blank strings become None."""
    if value is None or isinstance(value, (list, tuple, dict)):
        return None
    text = str(value)
    return text if text.strip() else None


def _first_text(data: Mapping, *keys: str) -> Optional[str]:
    """First non-empty value among synonymous keys (``role ?? title``)."""
    for key in keys:
        text = _text(data.get(key))
        if text is not None:
            return text
    return None


def _joined_text(value: Any) -> Optional[str]:
    """Description text; lists are joined with newlines."""
    if isinstance(value, (list, tuple)):
        value = "\n".join(str(item) for item in value if item is not None)
    return _text(value)


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


def _records(value: Any, section_id: str) -> List[Mapping]:
    """Entry records of a legacy list, with null and non-object items removed."""
    if not isinstance(value, (list, tuple)):
        return []
    records = []
    for item in value:
        record = _as_mapping(item)
        if record is None:
            if item is not None:
                logger.debug("Skipping malformed %s item of type %s", section_id, type(item).__name__)
            continue
        records.append(record)
    return records


def _map_links(value: Any) -> List[ResumeLink]:
    """Header links from either the legacy mapping or a list of link objects."""
    raw_links = []
    if isinstance(value, Mapping):
        raw_links = [{"type": key, "url": url} for key, url in value.items()]
    elif isinstance(value, (list, tuple)):
        raw_links = [link for link in (_as_mapping(item) for item in value) if link is not None]

    links = []
    for raw in raw_links:
        url = ensure_protocol(_text(raw.get("url")))
        if not url:
            continue
        raw_type = _text(raw.get("type")) or LinkType.OTHER.value
        link_type = raw_type if raw_type in {t.value for t in LinkType} else LinkType.OTHER.value
        label = _text(raw.get("label")) or raw_type[:1].upper() + raw_type[1:]
        links.append(ResumeLink(type=link_type, url=url, label=label))
    return links


def _map_header(data: Mapping) -> ResumeHeader:
    name = _text(data.get("name"))
    if name is None:
        raise ResumeValidationError("Resume header requires a non-empty 'name'")
    try:
        return ResumeHeader(
            name=name,
            location=_text(data.get("location")),
            email=_text(data.get("email")),
            phone=_text(data.get("phone")),
            links=_map_links(data.get("links")),
        )
    except ValidationError as e:
        raise ResumeValidationError(f"Invalid resume header: {e}") from e


def _map_experience(item: Mapping) -> ResumeEntry:
    return ResumeEntry(
        title=_first_text(item, "role", "title"),
        company=_text(item.get("company")),
        location=_text(item.get("location")),
        date=format_date_range(
            _first_text(item, "startDate", "start"),
            _first_text(item, "endDate", "end"),
        ),
        description=_joined_text(item.get("description")),
        bullets=_string_list(item.get("bullets")),
    )


def _map_project(item: Mapping) -> ResumeEntry:
    return ResumeEntry(
        title=_text(item.get("name")),
        description=_joined_text(item.get("description")),
        tech=_string_list(item.get("tech")),
        bullets=_string_list(item.get("bullets")),
    )


def _map_education(item: Mapping) -> ResumeEntry:
    degree = _text(item.get("degree"))
    field = _text(item.get("field"))
    if degree and field:
        title = f"{degree} in {field}"
    else:
        title = degree or field
    gpa = _text(item.get("gpa"))
    return ResumeEntry(
        title=title,
        company=_text(item.get("institution")),
        date=format_date_range(
            _first_text(item, "startYear", "start"),
            _first_text(item, "endYear", "end"),
        ),
        description=f"GPA: {gpa}" if gpa else None,
    )


def _map_skills(value: Any) -> List[ResumeEntry]:
    """
    Map skills onto entries that reuse ``bullets`` for the skill items.

    A list of ``{category, items}`` objects yields one entry per category
    titled with the category; a flat list yields one entry titled "Skills".
    """
    if not isinstance(value, (list, tuple)):
        return []
    items = [item for item in value if item is not None]
    if not items:
        return []

    first = _as_mapping(items[0])
    if first is not None and "category" in first:
        entries = []
        for category in _records(items, "skills"):
            skills = _string_list(category.get("items"))
            if skills:
                entries.append(ResumeEntry(title=_text(category.get("category")), bullets=skills))
        return entries

    flat = [str(item) for item in items if _as_mapping(item) is None]
    if not flat:
        return []
    return [ResumeEntry(title="Skills", bullets=flat)]


def _section(section_id: str, entries: List[ResumeEntry]) -> Optional[ResumeSection]:
    if not entries:
        return None
    return ResumeSection(id=section_id, title=SECTION_TITLES[section_id], entries=entries)


def map_to_ast(record: Any, rules: TemplateRules) -> ResumeAST:
    """
    Build the canonical AST from a legacy resume record.

    Missing or malformed lists are omitted, null entries are filtered before
    mapping, and sections without entries are never emitted. Sections are
    sorted by the template's section order; unknown ids keep their discovery
    order at the end.

    Args:
        record: Legacy resume record (mapping or pydantic model)
        rules: Template rules providing the section order

    Returns:
        ResumeAST: Canonical resume

    Raises:
        ResumeValidationError: If the record has no usable header name
    """
    data: Dict[str, Any] = dict(_as_mapping(record) or {})
    header = _map_header(data)

    candidates = []
    summary = _joined_text(data.get("summary"))
    if summary:
        candidates.append(_section("summary", [ResumeEntry(description=summary)]))
    candidates.append(_section(
        "experience",
        [_map_experience(item) for item in _records(data.get("experience"), "experience")],
    ))
    candidates.append(_section(
        "projects",
        [_map_project(item) for item in _records(data.get("projects"), "projects")],
    ))
    candidates.append(_section(
        "education",
        [_map_education(item) for item in _records(data.get("education"), "education")],
    ))
    candidates.append(_section("skills", _map_skills(data.get("skills"))))

    sections = [section for section in candidates if section is not None]
    sections.sort(key=lambda section: rules.section_rank(section.id))
    return ResumeAST(header=header, sections=sections)
