#!/usr/bin/env python3
"""
DATA MODELS - Pydantic schemas for student grade records
Type-safe data structures for students, subject records and derived totals

COMPREHENSIVE DATA VALIDATION:
✅ Student Details: Identity, gender, age, transcript template
✅ Score Cells: Two semester scores per subject and grade level
✅ Subject Records: Fixed subject catalog, template-sized grade levels
✅ Derived Results: Grade level totals and overall transcript summary

VALIDATION RULES:
- Semester scores must be 0-100 (0 means "not entered")
- Conduct must be one of the four conduct ratings
- Student names must not be blank
- Age must be 1-100
- Subjects, grade levels and templates are closed enumerations

Priority: CRITICAL - Foundation for all grade processing
Dependencies: Pydantic for validation
"""

from typing import Optional, List, Dict
from uuid import uuid4
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Subject(str, Enum):
    """Subject catalog - declaration order is the transcript order"""
    AMHARIC = "Amharic"
    ENGLISH = "English"
    MATHEMATICS = "Mathematics"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"
    GEOGRAPHY = "Geography"
    HISTORY = "History"
    CIVICS = "Civics"
    ECONOMICS = "Economics"
    AGRICULTURE = "Agriculture"
    HPE = "HPE"
    ICT = "ICT"


class GradeLevel(str, Enum):
    """Grade levels covered by transcripts, G12 is the terminal level"""
    G9 = "G9"
    G10 = "G10"
    G11 = "G11"
    G12 = "G12"


class Template(str, Enum):
    """Transcript templates - each covers a contiguous run of levels ending at G12"""
    G9_G12 = "G9-G12"
    G10_G12 = "G10-G12"
    G11_G12 = "G11-G12"
    G12 = "G12"


class Conduct(str, Enum):
    """Conduct ratings, highest priority first"""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    SATISFACTORY = "Satisfactory"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class AcademicStatus(str, Enum):
    """Status labels produced by the average threshold table"""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    SATISFACTORY = "Satisfactory"
    PASS = "Pass"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


SUBJECT_CATALOG: List[Subject] = list(Subject)
DEFAULT_CONDUCT = Conduct.GOOD
MIN_SCORE = 0.0
MAX_SCORE = 100.0


class ScoreCell(BaseModel):
    """Scores for one subject at one grade level"""

    semester1: float = Field(0.0, ge=MIN_SCORE, le=MAX_SCORE, description="First semester score (0 = not entered)")
    semester2: float = Field(0.0, ge=MIN_SCORE, le=MAX_SCORE, description="Second semester score (0 = not entered)")
    year_avg: float = Field(0.0, ge=0.0, description="Derived year average")
    total: float = Field(0.0, ge=0.0, description="Derived semester total")
    conduct: Conduct = Field(DEFAULT_CONDUCT, description="Conduct rating")

    @property
    def is_graded(self) -> bool:
        """Check if either semester has a score"""
        return self.semester1 > 0 or self.semester2 > 0


class SubjectRecord(BaseModel):
    """One subject with a score cell for each grade level of the template"""

    subject: Subject = Field(..., description="Catalog subject")
    grades: Dict[GradeLevel, ScoreCell] = Field(default_factory=dict, description="Cells keyed by grade level")

    @property
    def grade_levels(self) -> List[GradeLevel]:
        return list(self.grades.keys())

    def cell(self, grade_level: GradeLevel) -> Optional[ScoreCell]:
        """Get the cell for a grade level, None if the level is not on this record"""
        return self.grades.get(grade_level)


class Student(BaseModel):
    """Student identity plus the subject records of their transcript"""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Unique student identifier")
    name: str = Field(..., description="Student full name")
    gender: Gender = Field(..., description="Student gender")
    age: int = Field(..., ge=1, le=100, description="Student age")
    template: Template = Field(Template.G9_G12, description="Transcript template")
    academic_years: Optional[str] = Field(None, description="Academic year span, e.g. '2023-2026'")
    grades: List[SubjectRecord] = Field(default_factory=list, description="Subject records in catalog order")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Reject blank names"""
        v = v.strip()
        if not v:
            raise ValueError("Student name must not be blank")
        return v

    @field_validator("id")
    @classmethod
    def validate_id(cls, v):
        if not str(v).strip():
            raise ValueError("Student id must not be blank")
        return str(v).strip()

    def model_post_init(self, __context) -> None:
        if self.academic_years is None:
            # Deferred import: the resolver depends on this module's enums
            from .template_resolver import academic_year_span

            self.academic_years = academic_year_span(self.template)

    def find_record(self, subject: Subject) -> Optional[SubjectRecord]:
        """Get the first saved record for a subject"""
        for record in self.grades:
            if record.subject == subject:
                return record
        return None


class GradeLevelTotals(BaseModel):
    """Column totals for one grade level across all subjects"""

    grade_level: GradeLevel
    semester1: float = Field(0.0, description="Sum of first semester scores")
    semester2: float = Field(0.0, description="Sum of second semester scores")
    year_avg: float = Field(0.0, description="Sum of year averages")
    total: float = Field(0.0, description="Sum of totals")
    conduct: Optional[Conduct] = Field(None, description="Most frequent conduct rating")
    subject_count: int = Field(0, ge=0, description="Subjects counted at this level")


class TranscriptSummary(BaseModel):
    """Headline average and status for a transcript"""

    overall_average: int = Field(0, ge=0, le=100, description="Whole-percent overall average")
    status: AcademicStatus = Field(AcademicStatus.NEEDS_IMPROVEMENT, description="Status from threshold table")
    graded_subjects: int = Field(0, ge=0, description="Subjects with a non-zero average")


# Export all models
__all__ = [
    'Subject',
    'GradeLevel',
    'Template',
    'Conduct',
    'AcademicStatus',
    'Gender',
    'SUBJECT_CATALOG',
    'DEFAULT_CONDUCT',
    'MIN_SCORE',
    'MAX_SCORE',
    'ScoreCell',
    'SubjectRecord',
    'Student',
    'GradeLevelTotals',
    'TranscriptSummary',
]
