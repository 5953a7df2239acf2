"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Student factories for each template
- Graded students with saved score cells
- Temporary data and output directories
"""

import pytest

from academic_transcript.data_models import (
    SUBJECT_CATALOG,
    Conduct,
    Gender,
    GradeLevel,
    ScoreCell,
    Student,
    Subject,
    SubjectRecord,
    Template,
)
from academic_transcript.record_store import initialize_records


@pytest.fixture
def make_student():
    """Factory for students with no saved grades"""

    def _make_student(template=Template.G12, student_id="S-1001", name="Abebe Kebede", grades=None):
        return Student(
            id=student_id,
            name=name,
            gender=Gender.MALE,
            age=17,
            template=template,
            grades=grades or [],
        )

    return _make_student


@pytest.fixture
def g12_student(make_student):
    """Single-year student, nothing entered yet"""
    return make_student(Template.G12)


@pytest.fixture
def blank_g12_records(g12_student):
    """Fresh subject records for a G12 student"""
    return initialize_records(g12_student)


@pytest.fixture
def four_year_student(make_student):
    """G9-G12 student with Mathematics and Physics graded at every level"""
    math_cells = {
        GradeLevel.G9: ScoreCell(semester1=70, semester2=74, year_avg=72, total=144),
        GradeLevel.G10: ScoreCell(semester1=80, semester2=0, year_avg=80, total=80),
        GradeLevel.G11: ScoreCell(semester1=88, semester2=92, year_avg=90, total=180, conduct=Conduct.EXCELLENT),
        GradeLevel.G12: ScoreCell(semester1=95, semester2=97, year_avg=96, total=192),
    }
    physics_cells = {
        GradeLevel.G9: ScoreCell(semester1=60, semester2=64, year_avg=62, total=124),
        GradeLevel.G10: ScoreCell(),
        GradeLevel.G11: ScoreCell(semester1=75, semester2=85, year_avg=80, total=160),
        GradeLevel.G12: ScoreCell(semester1=0, semester2=90, year_avg=90, total=90),
    }
    return make_student(
        Template.G9_G12,
        student_id="S-2002",
        name="Hanna Tesfaye",
        grades=[
            SubjectRecord(subject=Subject.MATHEMATICS, grades=math_cells),
            SubjectRecord(subject=Subject.PHYSICS, grades=physics_cells),
        ],
    )


@pytest.fixture
def subject_index():
    """Position of a subject in the catalog"""
    return {subject: index for index, subject in enumerate(SUBJECT_CATALOG)}
