#!/usr/bin/env python3
"""
Transcript View Model
Read-only projection of a finalized student into the shape rendered on
transcripts. Rebuilt from scratch on every call, never mutates the student.

Row averages here are the plain mean of both semesters, which is what the
printed transcript shows. The cell-level year average (missing semester
ignored) only feeds the overall summary.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from .data_models import (
    AcademicStatus,
    GradeLevel,
    GradeLevelTotals,
    Student,
    Subject,
    SubjectRecord,
    TranscriptSummary,
)
from .grade_calculator import (
    LETTER_BANDS,
    compute_grade_level_totals,
    compute_overall_summary,
    compute_subject_averages,
    grade_status,
    letter_band,
    round2,
)
from .record_store import initialize_records
from .template_resolver import program_label, resolve_grade_levels

logger = logging.getLogger(__name__)


def presentation_average(semester1: float, semester2: float) -> float:
    """Plain mean of both semesters, as printed on transcripts"""
    return round2((semester1 + semester2) / 2)


def _format_percent(value: float) -> str:
    if value <= 0:
        return "-"
    return f"{value:g}%"


@dataclass
class SubjectRow:
    """One printed transcript row"""
    subject: Subject
    semester1: float
    semester2: float
    average: float
    status: Optional[AcademicStatus]

    @property
    def semester1_display(self) -> str:
        return _format_percent(self.semester1)

    @property
    def semester2_display(self) -> str:
        return _format_percent(self.semester2)

    @property
    def average_display(self) -> str:
        return _format_percent(self.average)

    @property
    def status_display(self) -> str:
        return self.status.value if self.status else "-"


@dataclass
class GradeLevelSection:
    """Academic record table for a single grade level"""
    grade_level: GradeLevel
    rows: List[SubjectRow]
    totals: GradeLevelTotals

    @property
    def title(self) -> str:
        return f"{self.grade_level.value} Academic Record"


@dataclass
class GradeDistribution:
    """Subject counts per letter band"""
    a_count: int = 0
    b_count: int = 0
    c_count: int = 0
    d_count: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {"A": self.a_count, "B": self.b_count, "C": self.c_count, "D": self.d_count}


@dataclass
class TranscriptView:
    """Everything a transcript renderer needs, already derived"""
    student_id: str = ""
    name: str = ""
    gender: str = ""
    age: Optional[int] = None
    academic_years: str = ""
    program: str = ""
    template: str = ""
    subject_rows: List[SubjectRow] = field(default_factory=list)
    sections: List[GradeLevelSection] = field(default_factory=list)
    summary: TranscriptSummary = field(default_factory=TranscriptSummary)
    distribution: GradeDistribution = field(default_factory=GradeDistribution)
    generated_on: date = field(default_factory=date.today)

    @property
    def is_empty(self) -> bool:
        return not self.subject_rows

    @property
    def total_subjects(self) -> int:
        return len(self.subject_rows)


def _build_row(subject: Subject, semester1: float, semester2: float) -> SubjectRow:
    average = presentation_average(semester1, semester2)
    return SubjectRow(
        subject=subject,
        semester1=semester1,
        semester2=semester2,
        average=average,
        status=grade_status(average) if average > 0 else None,
    )


def _mean_of_entered(values: List[float]) -> float:
    entered = [value for value in values if value > 0]
    if not entered:
        return 0.0
    return round2(sum(entered) / len(entered))


def _flatten_record(record: SubjectRecord) -> SubjectRow:
    """Collapse a multi-level record into one row per subject"""
    cells = list(record.grades.values())
    return _build_row(
        record.subject,
        _mean_of_entered([cell.semester1 for cell in cells]),
        _mean_of_entered([cell.semester2 for cell in cells]),
    )


def build_distribution(rows: List[SubjectRow]) -> GradeDistribution:
    counts = {letter: 0 for _, letter in LETTER_BANDS}
    for row in rows:
        letter = letter_band(row.average)
        if letter is not None:
            counts[letter] += 1
    return GradeDistribution(
        a_count=counts["A"],
        b_count=counts["B"],
        c_count=counts["C"],
        d_count=counts["D"],
    )


def build_transcript_view(student: Optional[Student], generated_on: Optional[date] = None) -> TranscriptView:
    """
    Project a student into a transcript view

    Args:
        student: Finalized student, or None while nothing is selected
        generated_on: Date printed on the transcript (defaults to today)

    Returns:
        TranscriptView; an empty one when no student is given
    """
    generated_on = generated_on or date.today()
    if student is None:
        return TranscriptView(generated_on=generated_on)

    # Normalizes the saved grades to the catalog and template without touching them
    records = initialize_records(student)

    sections = []
    for level in resolve_grade_levels(student.template):
        rows = [
            _build_row(record.subject, record.grades[level].semester1, record.grades[level].semester2)
            for record in records
        ]
        sections.append(GradeLevelSection(
            grade_level=level,
            rows=rows,
            totals=compute_grade_level_totals(records, level),
        ))

    subject_rows = [_flatten_record(record) for record in records]
    summary = compute_overall_summary(compute_subject_averages(records))

    logger.debug(
        f"Built transcript view for {student.name}: {len(sections)} grade levels, "
        f"overall {summary.overall_average}% ({summary.status.value})"
    )

    return TranscriptView(
        student_id=student.id,
        name=student.name,
        gender=student.gender.value,
        age=student.age,
        academic_years=student.academic_years or "",
        program=program_label(student.template),
        template=student.template.value,
        subject_rows=subject_rows,
        sections=sections,
        summary=summary,
        distribution=build_distribution(subject_rows),
        generated_on=generated_on,
    )


__all__ = [
    'SubjectRow',
    'GradeLevelSection',
    'GradeDistribution',
    'TranscriptView',
    'presentation_average',
    'build_distribution',
    'build_transcript_view',
]
