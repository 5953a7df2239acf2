#!/usr/bin/env python3
"""
Simple wrapper to generate a transcript for a given student ID
Usage: python3 generate_transcript.py <student_id> <output_dir> [data_dir]
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

print(f"Starting transcript generation...")
print(f"  Student ID: {sys.argv[1] if len(sys.argv) > 1 else 'MISSING'}")
print(f"  Output Dir: {sys.argv[2] if len(sys.argv) > 2 else 'MISSING'}")

if len(sys.argv) < 3:
    print("ERROR: Missing arguments")
    print("Usage: python3 generate_transcript.py <student_id> <output_dir> [data_dir]")
    sys.exit(1)

student_id = sys.argv[1]
output_dir = Path(sys.argv[2]).expanduser()
data_dir = Path(sys.argv[3]).expanduser() if len(sys.argv) > 3 else None

# Import after adding to path
from academic_transcript.data_processor import StudentDataProcessor
from academic_transcript.transcript_generator import TranscriptGenerator

print("Loading student roster...")
processor = StudentDataProcessor(data_dir)
if not processor.load_all_data():
    print(processor.generate_validation_report())
    sys.exit(1)

student = processor.get_student(student_id)
if student is None:
    print(f"ERROR: Student {student_id} not found")
    sys.exit(1)

print(f"Generating transcript for {student.name}...")
generator = TranscriptGenerator(output_dir=output_dir)
output_path = generator.generate_transcript(student)

print(f"\n✅ SUCCESS!")
print(f"Transcript saved to: {output_path}")
