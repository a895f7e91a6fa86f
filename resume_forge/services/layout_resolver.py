"""
Service for fitting a resume AST onto one page.

The resolver is a greedy, single-pass packer against one height budget.
Heights come from a calibrated heuristic (characters per line, fixed element
heights) rather than font metrics; the constants live in ``HeightModel`` so
they can be recalibrated without touching the control flow.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple
from resume_forge.models.ast_models import ResumeAST, ResumeEntry, ResumeSection
from resume_forge.models.layout_models import LayoutMeta, ResolvedLayout
from resume_forge.models.template_rules import PageSize, TemplateRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeightModel:
    """Height estimation constants, in points unless noted."""

    page_heights: Dict[str, float] = field(
        default_factory=lambda: {PageSize.LETTER.value: 792, PageSize.A4.value: 842}
    )
    points_per_inch: float = 72
    header_height: float = 80
    section_title_height: float = 25
    entry_margin: float = 10
    chars_per_line: int = 90


DEFAULT_HEIGHT_MODEL = HeightModel()


def page_height(rules: TemplateRules, model: HeightModel = DEFAULT_HEIGHT_MODEL) -> float:
    """Page height in points for the configured page size."""
    size = rules.page.size.value
    return model.page_heights.get(size, model.page_heights[PageSize.A4.value])


def content_height(rules: TemplateRules, model: HeightModel = DEFAULT_HEIGHT_MODEL) -> float:
    """Page height minus the top and bottom margins."""
    margins = rules.layout.margins
    return page_height(rules, model) - (margins.top + margins.bottom) * model.points_per_inch


def line_height(rules: TemplateRules) -> float:
    """Height of one text line in points."""
    return rules.typography.base_font_size * rules.typography.line_height


def cap_bullets(bullets: List[str], max_bullets: int) -> Tuple[List[str], int]:
    """
    Truncate a bullet list from the tail.

    Args:
        bullets: Bullet strings
        max_bullets: Maximum number of bullets to keep

    Returns:
        Tuple of (kept_bullets, num_removed)
    """
    kept = list(bullets[:max_bullets])
    return kept, len(bullets) - len(kept)


def estimate_entry_height(
    entry: ResumeEntry,
    rules: TemplateRules,
    model: HeightModel = DEFAULT_HEIGHT_MODEL,
) -> float:
    """
    Estimate the height of one entry as placed.

    Title line, a subheader line when company or role is present, wrapped
    bullet lines and the inter-entry margin. Bullets are counted as given;
    cap them first.
    """
    line = line_height(rules)
    height = line
    if entry.company or entry.role:
        height += line
    for bullet in entry.bullets:
        height += math.ceil(len(bullet) / model.chars_per_line) * line
    return height + model.entry_margin


def estimate_layout_height(
    layout: ResolvedLayout,
    rules: TemplateRules,
    model: HeightModel = DEFAULT_HEIGHT_MODEL,
) -> float:
    """Header, placed section titles and placed entries of a resolved layout."""
    return _placed_height(layout.sections, rules, model)


def _placed_height(sections: List[ResumeSection], rules: TemplateRules, model: HeightModel) -> float:
    total = model.header_height
    for section in sections:
        total += model.section_title_height
        total += sum(estimate_entry_height(entry, rules, model) for entry in section.entries)
    return total


def resolve_layout(
    ast: ResumeAST,
    rules: TemplateRules,
    height_model: HeightModel = DEFAULT_HEIGHT_MODEL,
) -> ResolvedLayout:
    """
    Decide which sections, entries and bullets fit on one page.

    Sections are walked in the template's section order. Per section: the
    entry cap truncates the tail, the section title height is reserved, then
    each entry has its bullets capped and is placed only if it still fits.
    An entry that does not fit is dropped and the walk continues with the
    next entry. Sections left without entries are omitted. Never raises.

    Args:
        ast: Canonical resume
        rules: Template rules
        height_model: Height estimation constants

    Returns:
        ResolvedLayout: Placed content plus truncation counters
    """
    budget = content_height(rules, height_model)
    current = height_model.header_height
    dropped_bullets = 0
    dropped_entries = 0
    resolved_sections: List[ResumeSection] = []
    visited = set()

    for section_id in rules.layout.section_order:
        if section_id in visited:
            continue
        visited.add(section_id)
        section = ast.get_section(section_id)
        if section is None:
            continue

        max_entries = rules.limits.max_entries_for(section_id)
        candidates = list(section.entries[:max_entries])
        dropped_entries += len(section.entries) - len(candidates)

        current += height_model.section_title_height
        kept: List[ResumeEntry] = []
        for entry in candidates:
            bullets, removed = cap_bullets(entry.bullets, rules.limits.max_bullets_per_entry)
            dropped_bullets += removed
            capped = entry.model_copy(update={"bullets": bullets})

            entry_height = estimate_entry_height(capped, rules, height_model)
            if current + entry_height > budget:
                dropped_entries += 1
                continue
            current += entry_height
            kept.append(capped)

        if kept:
            resolved_sections.append(section.model_copy(update={"entries": kept}))

    skipped = [section.id for section in ast.sections if section.id not in visited]
    if skipped:
        logger.debug("Sections not in section order %s: %s", rules.layout.section_order, skipped)
    if dropped_entries or dropped_bullets:
        logger.debug(
            "Template %s dropped %d entries and %d bullets to fit one page",
            rules.id, dropped_entries, dropped_bullets,
        )

    return ResolvedLayout(
        header=ast.header,
        sections=resolved_sections,
        meta=LayoutMeta(
            dropped_bullets=dropped_bullets,
            dropped_entries=dropped_entries,
            page_count=1,
            used_height=_placed_height(resolved_sections, rules, height_model),
            content_height=budget,
        ),
        page_size=rules.page.size,
        margins=rules.layout.margins,
        font_family=rules.typography.font_family,
    )
