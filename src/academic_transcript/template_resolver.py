#!/usr/bin/env python3
"""
Template Resolver
Maps a transcript template to the grade levels it covers and the years it spans
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Union

from .data_models import GradeLevel, Template

logger = logging.getLogger(__name__)

# Levels in ascending order; every template covers a suffix of this list
GRADE_LEVEL_ORDER: List[GradeLevel] = list(GradeLevel)

TEMPLATE_YEARS: Dict[Template, int] = {
    Template.G9_G12: 4,
    Template.G10_G12: 3,
    Template.G11_G12: 2,
    Template.G12: 1,
}

PROGRAM_LABELS: Dict[Template, str] = {
    Template.G9_G12: "Grades 9-12",
    Template.G10_G12: "Grades 10-12",
    Template.G11_G12: "Grades 11-12",
    Template.G12: "Grade 12",
}


@dataclass(frozen=True)
class TemplateSpan:
    """Resolved template: ordered grade levels and number of academic years"""
    template: Optional[Template]
    grade_levels: List[GradeLevel]
    years: int

    @property
    def terminal_level(self) -> GradeLevel:
        return self.grade_levels[-1]


def _coerce_template(template: Union[Template, str, None]) -> Optional[Template]:
    if isinstance(template, Template):
        return template
    try:
        return Template(template)
    except ValueError:
        return None


def resolve_template(template: Union[Template, str, None]) -> TemplateSpan:
    """
    Resolve a template into its grade levels and year span

    Unknown values resolve to the terminal level only.
    """
    resolved = _coerce_template(template)
    if resolved is None:
        logger.debug(f"Unknown template {template!r}, using {GradeLevel.G12.value} only")
        return TemplateSpan(template=None, grade_levels=[GradeLevel.G12], years=1)

    years = TEMPLATE_YEARS[resolved]
    return TemplateSpan(
        template=resolved,
        grade_levels=GRADE_LEVEL_ORDER[-years:],
        years=years,
    )


def resolve_grade_levels(template: Union[Template, str, None]) -> List[GradeLevel]:
    """Get the ordered grade levels for a template"""
    return list(resolve_template(template).grade_levels)


def academic_year_span(template: Union[Template, str, None], current_year: Optional[int] = None) -> str:
    """
    Build the academic year span ending at the current year

    Args:
        template: Transcript template
        current_year: Year the span ends (defaults to this year)

    Returns:
        Span string such as "2023-2026" for a four-year template
    """
    if current_year is None:
        current_year = date.today().year
    years = resolve_template(template).years
    start_year = current_year - years + 1
    return f"{start_year}-{current_year}"


def program_label(template: Union[Template, str, None]) -> str:
    """Get the program description printed on transcripts"""
    resolved = _coerce_template(template)
    if resolved is None:
        return "" if template is None else str(template)
    return PROGRAM_LABELS[resolved]
