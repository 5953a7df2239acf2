#!/usr/bin/env python3
"""
GRADE CALCULATOR - Year averages, totals and transcript rollups
Derives every computed number on a transcript from raw semester scores

CALCULATION TYPES:
✅ Year Average: Mean of both semesters, a missing semester is "not yet graded"
✅ Total: Semester 1 + Semester 2
✅ Grade Level Totals: Column sums per grade level plus dominant conduct
✅ Subject Average: Mean of a subject's graded year averages
✅ Overall Summary: Whole-percent average of graded subjects with status

STATUS THRESHOLDS:
>= 90 Excellent, >= 80 Good, >= 70 Satisfactory, >= 60 Pass,
otherwise Needs Improvement

EDGE CASES HANDLED:
- Both semesters 0: year average 0 (nothing entered)
- One semester 0: year average is the other semester, not half of it
- Zero-average subjects: ungraded, excluded from the overall mean
- Conduct ties: Excellent > Good > Satisfactory > Needs Improvement
- Rounding: half-up on decimal values, sums rounded once at the end

Priority: CRITICAL - Core academic calculations
Dependencies: data_models.py for type definitions, score_validator.py for input
"""

import logging
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from .data_models import (
    AcademicStatus,
    Conduct,
    GradeLevel,
    GradeLevelTotals,
    ScoreCell,
    Subject,
    SubjectRecord,
    TranscriptSummary,
)
from .score_validator import validate_score

logger = logging.getLogger(__name__)


# Evaluated top-down, first match wins
STATUS_THRESHOLDS: List[Tuple[float, AcademicStatus]] = [
    (90, AcademicStatus.EXCELLENT),
    (80, AcademicStatus.GOOD),
    (70, AcademicStatus.SATISFACTORY),
    (60, AcademicStatus.PASS),
]

LETTER_BANDS: List[Tuple[float, str]] = [
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
]


class CellField(str, Enum):
    """Editable fields of a score cell"""
    SEMESTER1 = "semester1"
    SEMESTER2 = "semester2"
    CONDUCT = "conduct"


class CellAddressError(LookupError):
    """Raised when an update addresses a subject or grade level that does not exist"""


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero at a decimal place (no banker's rounding)"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round2(value: float) -> float:
    return round_half_up(value, 2)


def compute_year_avg(sem1: float, sem2: float) -> float:
    """
    Calculate a year average from two semester scores

    A zero semester counts as not yet graded: with one semester entered the
    year average is that semester's score.
    """
    if sem1 == 0 and sem2 == 0:
        return 0.0
    if sem1 == 0:
        return round2(sem2)
    if sem2 == 0:
        return round2(sem1)
    return round2((sem1 + sem2) / 2)


def compute_total(sem1: float, sem2: float) -> float:
    """Calculate the semester total, no zero special-casing"""
    return round2(sem1 + sem2)


def refresh_cell(cell: ScoreCell) -> ScoreCell:
    """Recompute the derived fields of a cell from its semesters"""
    cell.year_avg = compute_year_avg(cell.semester1, cell.semester2)
    cell.total = compute_total(cell.semester1, cell.semester2)
    return cell


def grade_status(average: float) -> AcademicStatus:
    """Map an average to its status label"""
    for threshold, status in STATUS_THRESHOLDS:
        if average >= threshold:
            return status
    return AcademicStatus.NEEDS_IMPROVEMENT


def letter_band(average: float) -> Optional[str]:
    """Map an average to its distribution band (A-D), None below 60"""
    for threshold, letter in LETTER_BANDS:
        if average >= threshold:
            return letter
    return None


def _locate_record(records: List[SubjectRecord], subject: Union[int, Subject, str]) -> SubjectRecord:
    if isinstance(subject, int) and not isinstance(subject, bool):
        if 0 <= subject < len(records):
            return records[subject]
        raise CellAddressError(f"Invalid subject index: {subject}")

    try:
        wanted = subject if isinstance(subject, Subject) else Subject(subject)
    except ValueError:
        raise CellAddressError(f"Unknown subject: {subject!r}") from None

    for record in records:
        if record.subject == wanted:
            return record
    raise CellAddressError(f"Subject not on record: {wanted.value}")


def _locate_cell(
    records: List[SubjectRecord],
    subject: Union[int, Subject, str],
    grade_level: Union[GradeLevel, str],
) -> ScoreCell:
    record = _locate_record(records, subject)

    try:
        level = grade_level if isinstance(grade_level, GradeLevel) else GradeLevel(grade_level)
    except ValueError:
        raise CellAddressError(f"Unknown grade level: {grade_level!r}") from None

    cell = record.cell(level)
    if cell is None:
        raise CellAddressError(
            f"Grade level {level.value} is not on the {record.subject.value} record"
        )
    return cell


def update_cell(
    records: List[SubjectRecord],
    subject: Union[int, Subject, str],
    grade_level: Union[GradeLevel, str],
    field: Union[CellField, str],
    value,
) -> ScoreCell:
    """
    Apply one validated edit to a score cell

    Args:
        records: Subject records being edited
        subject: Index into records, or the Subject itself
        grade_level: Grade level of the cell
        field: semester1, semester2 or conduct
        value: Raw input for semesters, a conduct rating for conduct

    Returns:
        The updated ScoreCell

    Raises:
        CellAddressError: subject or grade level is not on the records
        ValueError: unknown field name or conduct rating
    """
    try:
        cell = _locate_cell(records, subject, grade_level)
    except CellAddressError as e:
        logger.error(f"❌ Rejected update of {field!r}: {e}")
        raise

    try:
        field = CellField(field)
    except ValueError:
        logger.error(f"❌ Rejected update: unknown cell field {field!r}")
        raise ValueError(f"Unknown cell field: {field!r}") from None

    if field is CellField.CONDUCT:
        try:
            cell.conduct = Conduct(value)
        except ValueError as e:
            logger.error(f"❌ Rejected update of {field.value!r}: {e}")
            raise
        return cell

    setattr(cell, field.value, validate_score(value))
    return refresh_cell(cell)


def compute_grade_level_totals(records: Iterable[SubjectRecord], grade_level: GradeLevel) -> GradeLevelTotals:
    """
    Calculate column totals for one grade level

    Sums are rounded once at the end. The dominant conduct is the most frequent
    rating; ties go to the rating declared first in Conduct.
    """
    semester1 = semester2 = year_avg = total = 0.0
    conduct_counts: Counter = Counter()
    subject_count = 0

    for record in records:
        cell = record.cell(grade_level)
        if cell is None:
            continue
        semester1 += cell.semester1
        semester2 += cell.semester2
        year_avg += cell.year_avg
        total += cell.total
        conduct_counts[Conduct(cell.conduct)] += 1
        subject_count += 1

    dominant = None
    if subject_count:
        # max() keeps the first of equal counts, so declaration order breaks ties
        dominant = max(Conduct, key=lambda conduct: conduct_counts[conduct])

    return GradeLevelTotals(
        grade_level=grade_level,
        semester1=round2(semester1),
        semester2=round2(semester2),
        year_avg=round2(year_avg),
        total=round2(total),
        conduct=dominant,
        subject_count=subject_count,
    )


def compute_subject_average(record: SubjectRecord) -> float:
    """Mean of a subject's non-zero year averages across its grade levels"""
    graded = [cell.year_avg for cell in record.grades.values() if cell.year_avg > 0]
    if not graded:
        return 0.0
    return round2(sum(graded) / len(graded))


def compute_subject_averages(records: Iterable[SubjectRecord]) -> List[float]:
    return [compute_subject_average(record) for record in records]


def compute_overall_summary(subject_averages: Iterable[float]) -> TranscriptSummary:
    """
    Roll subject averages up into the transcript headline

    Zero averages are ungraded subjects and are left out of the mean. The
    result is a whole percent.
    """
    graded = [average for average in subject_averages if average > 0]
    if not graded:
        return TranscriptSummary(
            overall_average=0,
            status=grade_status(0),
            graded_subjects=0,
        )

    overall = int(round_half_up(sum(graded) / len(graded), 0))
    return TranscriptSummary(
        overall_average=overall,
        status=grade_status(overall),
        graded_subjects=len(graded),
    )
