#!/usr/bin/env python3
"""
DATA PROCESSOR - Student roster loading, saving and grade sheet export
Load and validate the saved student roster for transcript generation

DATA SOURCES:
✅ students.json - Student identity, template and per-grade-level score cells
✅ Grade sheet CSV export - One row per subject and grade level

VALIDATION STRATEGY:
1. Schema Validation: Every roster entry must parse as a Student
2. Uniqueness: Student IDs must not repeat
3. Data Quality Checks: Subjects or grade levels that fall outside the template

Priority: CRITICAL - Persistence boundary for all student records
Dependencies: pandas for grade sheets, pydantic for type-safe validation
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from pydantic import TypeAdapter, ValidationError

from .data_models import Student
from .template_resolver import resolve_grade_levels

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ROSTER_FILENAME = "students.json"

GRADE_SHEET_COLUMNS = [
    "Student ID",
    "Name",
    "Template",
    "Subject",
    "Grade Level",
    "Semester 1",
    "Semester 2",
    "Year Avg",
    "Total",
    "Conduct",
]

_roster_adapter = TypeAdapter(List[Student])


class StudentDataProcessor:
    """Load, validate and save the student roster"""

    def __init__(self, data_dir: Optional[Path] = None):
        if data_dir is None:
            self.data_dir = Path(__file__).resolve().parents[2] / "data"
        else:
            self.data_dir = Path(data_dir)

        self.students: Dict[str, Student] = {}

        # Validation results
        self.validation_errors: List[str] = []
        self.validation_warnings: List[str] = []

    @property
    def roster_path(self) -> Path:
        return self.data_dir / ROSTER_FILENAME

    def load_all_data(self) -> bool:
        """Load the student roster with validation"""

        logger.info("🔍 LOADING STUDENT ROSTER")
        logger.info("=" * 60)

        self.students = {}
        self.validation_errors = []
        self.validation_warnings = []

        file_path = self.roster_path
        if not file_path.exists():
            self.validation_warnings.append(f"No roster at {file_path} - starting empty")
            logger.warning(f"  ⚠️ No roster found at {file_path} - starting with an empty roster")
            return True

        try:
            logger.info(f"📊 Loading students from: {file_path}")
            students = _roster_adapter.validate_json(file_path.read_bytes())
        except ValidationError as e:
            self.validation_errors.append(f"Roster failed validation: {e.error_count()} errors")
            for error in e.errors():
                location = ".".join(str(part) for part in error["loc"])
                self.validation_errors.append(f"  {location}: {error['msg']}")
            logger.error(f"  ❌ Failed to load roster: {e.error_count()} validation errors")
            return False
        except OSError as e:
            self.validation_errors.append(f"Failed to read roster: {e}")
            logger.error(f"  ❌ Failed to read roster: {e}")
            return False

        for student in students:
            if student.id in self.students:
                self.validation_warnings.append(f"Duplicate student ID {student.id} - keeping last entry")
            self.students[student.id] = student
            self._validate_student_quality(student)

        logger.info(f"  ✅ Loaded {len(self.students)} student records")
        return True

    def _validate_student_quality(self, student: Student):
        """Flag saved grades that the student's template will not show"""
        template_levels = set(resolve_grade_levels(student.template))
        seen_subjects = set()

        for record in student.grades:
            if record.subject in seen_subjects:
                self.validation_warnings.append(
                    f"[{student.id}] {student.name}: duplicate {record.subject.value} record ignored"
                )
            seen_subjects.add(record.subject)

            extra_levels = [level.value for level in record.grades if level not in template_levels]
            if extra_levels:
                self.validation_warnings.append(
                    f"[{student.id}] {student.name}: {record.subject.value} has levels outside "
                    f"{student.template.value}: {extra_levels}"
                )

    def save_all_data(self) -> Path:
        """Write the roster back to disk"""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        payload = [student.model_dump(mode="json") for student in self.students.values()]
        self.roster_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"💾 Saved {len(payload)} students to {self.roster_path}")
        return self.roster_path

    def get_all_student_ids(self) -> List[str]:
        return list(self.students.keys())

    def get_student(self, student_id: str) -> Optional[Student]:
        return self.students.get(str(student_id))

    def upsert_student(self, student: Student) -> Student:
        """Insert a new student or replace the saved one with the same ID"""
        action = "Updated" if student.id in self.students else "Added"
        self.students[student.id] = student
        logger.info(f"  ✅ {action} student {student.id} ({student.name})")
        return student

    def remove_student(self, student_id: str) -> bool:
        removed = self.students.pop(str(student_id), None)
        if removed is None:
            logger.warning(f"  ⚠️ Student {student_id} not found - nothing removed")
            return False
        logger.info(f"  🗑️ Removed student {student_id} ({removed.name})")
        return True

    def grades_dataframe(self, student: Student) -> pd.DataFrame:
        """Flatten a student's score cells into a grade sheet"""
        rows = []
        for record in student.grades:
            for level, cell in record.grades.items():
                rows.append({
                    "Student ID": student.id,
                    "Name": student.name,
                    "Template": student.template.value,
                    "Subject": record.subject.value,
                    "Grade Level": level.value,
                    "Semester 1": cell.semester1,
                    "Semester 2": cell.semester2,
                    "Year Avg": cell.year_avg,
                    "Total": cell.total,
                    "Conduct": cell.conduct.value,
                })
        return pd.DataFrame(rows, columns=GRADE_SHEET_COLUMNS)

    def export_grades_csv(self, student: Student, output_path: Optional[Path] = None) -> Path:
        """Export a student's grade sheet to CSV"""
        if output_path is None:
            safe_name = "_".join(student.name.split())
            output_path = self.data_dir / "exports" / f"{student.id}_{safe_name}_grades.csv"
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        grade_sheet = self.grades_dataframe(student)
        grade_sheet.to_csv(output_path, index=False, encoding="utf-8-sig")
        logger.info(f"📄 Exported {len(grade_sheet)} grade rows for {student.name} to {output_path}")
        return output_path

    def generate_validation_report(self) -> str:
        """Generate a readable validation report"""
        lines = [
            "📋 ROSTER VALIDATION REPORT",
            "=" * 60,
            f"Students loaded: {len(self.students)}",
            f"Errors: {len(self.validation_errors)}",
            f"Warnings: {len(self.validation_warnings)}",
        ]

        if self.validation_errors:
            lines.append("")
            lines.append("❌ ERRORS:")
            lines.extend(f"  {error}" for error in self.validation_errors)

        if self.validation_warnings:
            lines.append("")
            lines.append("⚠️ WARNINGS:")
            lines.extend(f"  {warning}" for warning in self.validation_warnings)

        if not self.validation_errors and not self.validation_warnings:
            lines.append("")
            lines.append("✅ No issues found")

        return "\n".join(lines)
