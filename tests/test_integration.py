#!/usr/bin/env python3
"""
INTEGRATION TEST - End-to-end grade entry and transcript generation
Test complete workflow from an empty roster to rendered transcripts

TEST FLOW:
1. Register a student and initialize the record store
2. Enter scores and conduct through cell updates
3. Change template and confirm the destructive re-initialization
4. Persist the snapshot and reload the roster
5. Build the transcript view and render HTML
6. Batch-generate transcripts into per-template folders

Priority: HIGH - Validates core functionality
"""

import importlib.util
from datetime import date
from pathlib import Path

import pytest

from academic_transcript import (
    AcademicStatus,
    CellAddressError,
    CellUpdate,
    Conduct,
    Gender,
    GradeLevel,
    GradeRecordStore,
    Student,
    Subject,
    Template,
    build_transcript_view,
)
from academic_transcript.data_processor import StudentDataProcessor
from academic_transcript.transcript_generator import TranscriptGenerator

BATCH_SCRIPT = Path(__file__).parent.parent / "scripts" / "batch_generate.py"


def _load_batch_module():
    spec = importlib.util.spec_from_file_location("batch_generate", BATCH_SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_end_to_end_grade_entry(tmp_path):
    """Test complete grade entry workflow for one student"""

    # Step 1: Register the student
    processor = StudentDataProcessor(tmp_path / "data")
    assert processor.load_all_data()

    student = Student(id="S-3003", name="Liya Girma", gender=Gender.FEMALE, age=18, template=Template.G11_G12)
    store = GradeRecordStore(student)
    assert store.grade_levels == [GradeLevel.G11, GradeLevel.G12]

    # Step 2: Enter scores
    edits = [
        (Subject.MATHEMATICS, GradeLevel.G11, "semester1", "88"),
        (Subject.MATHEMATICS, GradeLevel.G11, "semester2", "92"),
        (Subject.MATHEMATICS, GradeLevel.G12, "semester1", "150"),
        (Subject.MATHEMATICS, GradeLevel.G12, "semester2", "94"),
        (Subject.CHEMISTRY, GradeLevel.G12, "semester1", "71.5"),
        (Subject.CHEMISTRY, GradeLevel.G12, "conduct", "Excellent"),
    ]
    for subject, level, field, value in edits:
        store.apply(CellUpdate(subject, level, field, value))

    with pytest.raises(CellAddressError):
        store.apply(CellUpdate(Subject.MATHEMATICS, GradeLevel.G9, "semester1", "80"))

    g12 = store.level_totals(GradeLevel.G12)
    assert g12.semester1 == 171.5
    # 97 + 71.5
    assert g12.year_avg == 168.5
    assert g12.conduct == Conduct.GOOD

    # Step 3: Shrink to G12 only; G11 scores are discarded
    store.change_template(Template.G12)
    math = store.snapshot().find_record(Subject.MATHEMATICS)
    assert list(math.grades) == [GradeLevel.G12]
    assert math.grades[GradeLevel.G12].year_avg == 97.0

    # Step 4: Persist and reload
    processor.upsert_student(store.snapshot())
    processor.save_all_data()

    reloaded = StudentDataProcessor(tmp_path / "data")
    assert reloaded.load_all_data()
    saved = reloaded.get_student("S-3003")
    assert saved.template == Template.G12
    assert saved.academic_years == f"{date.today().year}-{date.today().year}"

    # Step 5: View and render
    view = build_transcript_view(saved, generated_on=date(2026, 6, 30))
    # Mathematics 97, Chemistry 71.5
    assert view.summary.overall_average == 84
    assert view.summary.status == AcademicStatus.GOOD
    assert view.distribution.a_count == 1

    generator = TranscriptGenerator(project_root=tmp_path, output_dir=tmp_path / "output")
    path = generator.generate_transcript(saved, generated_on=date(2026, 6, 30))
    html = path.read_text(encoding="utf-8")
    assert "Liya Girma" in html
    assert "G12 Academic Record" in html
    assert "G11 Academic Record" not in html
    assert "84%" in html


def test_batch_generation(tmp_path, four_year_student, g12_student):
    """Test batch generation writes one transcript per student into template folders"""
    batch = _load_batch_module()

    processor = StudentDataProcessor(tmp_path / "data")
    processor.upsert_student(four_year_student)
    processor.upsert_student(g12_student)
    processor.save_all_data()

    output_base = tmp_path / "transcripts"
    assert batch.main([str(tmp_path / "data"), str(output_base)]) == 0

    assert (output_base / "G9-G12" / "S-2002_Hanna_Tesfaye_transcript.html").exists()
    assert (output_base / "G12" / "S-1001_Abebe_Kebede_transcript.html").exists()
    assert sorted(path.name for path in output_base.iterdir()) == sorted(t.value for t in Template)


def test_batch_results(tmp_path, four_year_student):
    batch = _load_batch_module()

    processor = StudentDataProcessor(tmp_path)
    processor.upsert_student(four_year_student)
    folders = batch.setup_output_folders(tmp_path / "out")
    generator = TranscriptGenerator(project_root=tmp_path, output_dir=tmp_path / "out")

    results = batch.generate_all_transcripts(processor, generator, folders, progress=False)

    assert len(results) == 1
    assert results[0].success
    assert results[0].template == "G9-G12"
    assert results[0].error is None
