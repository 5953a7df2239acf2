"""
Academic transcript records: grade entry, aggregation and transcript output
"""

from .data_models import (
    SUBJECT_CATALOG,
    AcademicStatus,
    Conduct,
    Gender,
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
    CellAddressError,
    CellField,
    compute_grade_level_totals,
    compute_overall_summary,
    compute_total,
    compute_year_avg,
    update_cell,
)
from .record_store import CellUpdate, GradeRecordStore, initialize_records
from .score_validator import validate_score
from .template_resolver import academic_year_span, resolve_grade_levels, resolve_template
from .transcript_view import TranscriptView, build_transcript_view

__version__ = "0.3.0"

__all__ = [
    'SUBJECT_CATALOG',
    'AcademicStatus',
    'Conduct',
    'Gender',
    'GradeLevel',
    'GradeLevelTotals',
    'ScoreCell',
    'Student',
    'Subject',
    'SubjectRecord',
    'Template',
    'TranscriptSummary',
    'CellAddressError',
    'CellField',
    'compute_grade_level_totals',
    'compute_overall_summary',
    'compute_total',
    'compute_year_avg',
    'update_cell',
    'CellUpdate',
    'GradeRecordStore',
    'initialize_records',
    'validate_score',
    'academic_year_span',
    'resolve_grade_levels',
    'resolve_template',
    'TranscriptView',
    'build_transcript_view',
]
