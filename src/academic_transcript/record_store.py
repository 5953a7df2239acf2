#!/usr/bin/env python3
"""
GRADE RECORD STORE - Authoritative subject records for the student being edited

RECORD LIFECYCLE:
✅ Initialize: Fixed subject catalog x template grade levels, seeded from saved grades
✅ Apply: Validated cell edits through the grade calculator
✅ Change Template: Destructive re-initialization from the current records
✅ Snapshot: Updated Student value handed back for persistence

Re-initialization replaces the store contents outright; nothing from the
previous record set is merged back in.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .data_models import (
    SUBJECT_CATALOG,
    GradeLevel,
    GradeLevelTotals,
    ScoreCell,
    Student,
    Subject,
    SubjectRecord,
    Template,
    TranscriptSummary,
)
from .grade_calculator import (
    CellField,
    compute_grade_level_totals,
    compute_overall_summary,
    compute_subject_averages,
    refresh_cell,
    update_cell,
)
from .template_resolver import academic_year_span, resolve_grade_levels

logger = logging.getLogger(__name__)


@dataclass
class CellUpdate:
    """One raw edit coming from the input layer"""
    subject: Union[int, Subject, str]
    grade_level: Union[GradeLevel, str]
    field: Union[CellField, str]
    value: Any


def initialize_records(student: Optional[Student]) -> List[SubjectRecord]:
    """
    Build the subject records for a student's template

    Every catalog subject gets exactly the template's grade levels. Cells for
    levels the saved grades already hold are copied over; the rest start empty.
    """
    if student is None:
        return []

    grade_levels = resolve_grade_levels(student.template)
    records = []

    for subject in SUBJECT_CATALOG:
        saved = student.find_record(subject)
        grades: Dict[GradeLevel, ScoreCell] = {}

        for level in grade_levels:
            saved_cell = saved.cell(level) if saved else None
            if saved_cell is not None:
                grades[level] = refresh_cell(saved_cell.model_copy(deep=True))
            else:
                grades[level] = ScoreCell()

        records.append(SubjectRecord(subject=subject, grades=grades))

    return records


class GradeRecordStore:
    """In-memory subject records for one editing session"""

    def __init__(self, student: Optional[Student] = None):
        self.student: Optional[Student] = None
        self.records: List[SubjectRecord] = []
        if student is not None:
            self.initialize(student)

    @property
    def is_loaded(self) -> bool:
        return self.student is not None

    @property
    def grade_levels(self) -> List[GradeLevel]:
        if self.student is None:
            return []
        return resolve_grade_levels(self.student.template)

    def initialize(self, student: Optional[Student]) -> List[SubjectRecord]:
        """Replace the store contents with records for a student"""
        if student is None:
            logger.info("No student selected, record store is empty")
            self.student = None
            self.records = []
            return self.records

        self.student = student.model_copy(deep=True)
        self.records = initialize_records(self.student)
        logger.info(
            f"📊 Initialized {len(self.records)} subject records for {student.name} "
            f"({student.template.value}: {', '.join(level.value for level in self.grade_levels)})"
        )
        return self.records

    def change_template(self, template: Union[Template, str]) -> List[SubjectRecord]:
        """
        Switch the student to another template

        Levels outside the new template are discarded for good; switching back
        later brings them back empty.
        """
        current = self.snapshot()
        if current is None:
            logger.warning("⚠️ Template change ignored: no student selected")
            return self.records

        template = Template(template)
        updated = current.model_copy(
            update={"template": template, "academic_years": academic_year_span(template)}
        )
        return self.initialize(updated)

    def apply(self, update: CellUpdate) -> ScoreCell:
        """Apply a raw edit; address errors propagate and leave records untouched"""
        return update_cell(
            self.records,
            update.subject,
            update.grade_level,
            update.field,
            update.value,
        )

    def snapshot(self) -> Optional[Student]:
        """Get the student with the current records merged in, other fields as saved"""
        if self.student is None:
            return None
        return self.student.model_copy(
            update={"grades": [record.model_copy(deep=True) for record in self.records]},
            deep=True,
        )

    def level_totals(self, grade_level: Union[GradeLevel, str]) -> GradeLevelTotals:
        return compute_grade_level_totals(self.records, GradeLevel(grade_level))

    def all_level_totals(self) -> Dict[GradeLevel, GradeLevelTotals]:
        return {level: self.level_totals(level) for level in self.grade_levels}

    def summary(self) -> TranscriptSummary:
        return compute_overall_summary(compute_subject_averages(self.records))
