#!/usr/bin/env python3
"""
BATCH TRANSCRIPT GENERATOR
Generates transcripts for every student in the roster, organized by template.

Output structure:
<output>/
├── G9-G12/
├── G10-G12/
├── G11-G12/
└── G12/

Naming: <id>_<Name>_transcript.html
"""

import sys
from pathlib import Path
from dataclasses import dataclass
from typing import List, Dict, Optional

from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from academic_transcript.data_models import Template
from academic_transcript.data_processor import StudentDataProcessor
from academic_transcript.transcript_generator import TranscriptGenerator, transcript_filename


@dataclass
class GenerationResult:
    student_id: str
    student_name: str
    template: str
    success: bool
    output_path: Optional[str]
    error: Optional[str]


def setup_output_folders(base_path: Path) -> Dict[Template, Path]:
    """Create one output folder per template and return their paths."""
    folders = {}

    for template in Template:
        template_folder = base_path / template.value
        template_folder.mkdir(parents=True, exist_ok=True)
        folders[template] = template_folder

    return folders


def generate_all_transcripts(
    processor: StudentDataProcessor,
    generator: TranscriptGenerator,
    output_folders: Dict[Template, Path],
    progress: bool = True
) -> List[GenerationResult]:
    """Generate transcripts for all students, organized by template."""
    import logging

    # Reduce logging verbosity during batch
    logging.getLogger('academic_transcript.transcript_generator').setLevel(logging.WARNING)

    results = []
    students = list(processor.students.values())

    iterator = tqdm(students, desc="Generating", unit="transcript") if progress else students

    for student in iterator:
        output_path = output_folders[student.template] / transcript_filename(student)

        try:
            generator.generate_transcript(student, output_filename=str(output_path))
            results.append(GenerationResult(
                student_id=student.id,
                student_name=student.name,
                template=student.template.value,
                success=True,
                output_path=str(output_path),
                error=None
            ))
        except (OSError, ValueError) as e:
            results.append(GenerationResult(
                student_id=student.id,
                student_name=student.name,
                template=student.template.value,
                success=False,
                output_path=None,
                error=str(e)
            ))
            if progress:
                tqdm.write(f"  ❌ Failed {student.id}: {str(e)[:50]}")

    return results


def print_summary(results: List[GenerationResult], output_base: Path):
    """Print generation summary."""
    success = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    print("\n" + "="*70)
    print("BATCH GENERATION SUMMARY")
    print("="*70)

    print(f"\n✅ Successful: {len(success)}")
    print(f"❌ Failed: {len(failed)}")

    print("\nBy Template:")
    for template in Template:
        template_success = len([r for r in success if r.template == template.value])
        template_failed = len([r for r in failed if r.template == template.value])
        print(f"  {template.value}: {template_success} generated, {template_failed} failed")

    if failed:
        print("\n❌ FAILED TRANSCRIPTS:")
        print("-"*50)
        for r in failed:
            print(f"  [{r.student_id}] {r.student_name}")
            print(f"      Error: {r.error}")

    print(f"\n📁 Output: {output_base}")
    print("="*70)


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv
    data_dir = Path(argv[0]).expanduser() if len(argv) > 0 else None
    output_base = Path(argv[1]).expanduser() if len(argv) > 1 else Path.cwd() / "output" / "transcripts"

    print("="*70)
    print("BATCH TRANSCRIPT GENERATOR")
    print("="*70)

    print("\n📊 Loading student roster...")
    processor = StudentDataProcessor(data_dir)
    if not processor.load_all_data():
        print(processor.generate_validation_report())
        print("❌ Failed to load data!")
        return 1

    if processor.validation_warnings:
        print(f"   ⚠️  {len(processor.validation_warnings)} warnings")
        for warning in processor.validation_warnings:
            print(f"   {warning}")

    print(f"\n📁 Creating output structure: {output_base}")
    output_folders = setup_output_folders(output_base)

    generator = TranscriptGenerator(output_dir=output_base)

    print("\n🚀 Starting batch generation...")
    results = generate_all_transcripts(processor, generator, output_folders, progress=True)

    print_summary(results, output_base)

    failed_count = len([r for r in results if not r.success])
    if failed_count > 0:
        print(f"\n⚠️  {failed_count} transcripts failed - review errors above")
        return 1
    else:
        print("\n✅ All transcripts generated successfully!")
        return 0


if __name__ == "__main__":
    sys.exit(main())
