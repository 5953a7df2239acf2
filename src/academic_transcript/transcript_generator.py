#!/usr/bin/env python3
"""
TRANSCRIPT GENERATOR - HTML transcript rendering engine
Render printable transcripts from student grade records

GENERATION PROCESS:
1. Build the transcript view (averages, totals, summary, distribution)
2. Render the Jinja2 template with the view
3. Save the HTML document to the output directory

FEATURES:
✅ One academic record table per grade level with a totals row
✅ Academic summary with overall average and status
✅ Grade distribution by letter band
✅ Landscape print styles

Priority: HIGH - Transcript output
Dependencies: Jinja2, transcript_view
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .data_models import Student
from .transcript_view import build_transcript_view

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PACKAGE_TEMPLATES_DIR = Path(__file__).parent / "templates"
TRANSCRIPT_TEMPLATE = "transcript.html"


def transcript_filename(student: Student) -> str:
    """Build '<id>_<Name>_transcript.html' from the student"""
    safe_name = "_".join(part.replace("/", "-") for part in student.name.split())
    return f"{student.id}_{safe_name}_transcript.html"


class TranscriptGenerator:
    """Generate printable HTML transcripts"""

    def __init__(
        self,
        project_root: Optional[Path] = None,
        templates_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
    ):
        """
        Initialize transcript generator

        Args:
            project_root: Path to project root directory
            templates_dir: Override for the template directory
            output_dir: Override for the output directory
        """
        if project_root is None:
            self.project_root = Path(__file__).resolve().parents[2]
        else:
            self.project_root = Path(project_root)

        self.templates_dir = Path(templates_dir) if templates_dir else PACKAGE_TEMPLATES_DIR
        self.output_dir = Path(output_dir) if output_dir else self.project_root / "output"

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )

        def score_filter(value):
            if not value or value <= 0:
                return "-"
            return f"{value:.2f}"

        self.env.filters["score"] = score_filter

        logger.info(f"Transcript generator initialized")
        logger.info(f"Templates: {self.templates_dir}")
        logger.info(f"Output: {self.output_dir}")

    def render_html(self, student: Optional[Student], generated_on: Optional[date] = None) -> str:
        """
        Render the transcript markup for a student

        Raises:
            ValueError: if no student is given
        """
        if student is None:
            raise ValueError("No student selected")

        view = build_transcript_view(student, generated_on=generated_on)
        template = self.env.get_template(TRANSCRIPT_TEMPLATE)
        return template.render(view=view)

    def generate_transcript(
        self,
        student: Optional[Student],
        output_filename: Optional[str] = None,
        generated_on: Optional[date] = None,
    ) -> Path:
        """
        Generate the transcript HTML file for a single student

        Args:
            student: Student to render
            output_filename: Custom filename or path (optional)
            generated_on: Date printed in the footer (defaults to today)

        Returns:
            Path to the generated HTML file
        """
        if student is None:
            raise ValueError("No student selected")

        logger.info(f"📄 Generating transcript for student {student.id} ({student.name})")

        html = self.render_html(student, generated_on=generated_on)

        if output_filename:
            output_path = Path(output_filename)
            if not output_path.is_absolute() and output_path.parent == Path("."):
                output_path = self.output_dir / output_path
        else:
            output_path = self.output_dir / transcript_filename(student)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")

        logger.info(f"✅ Transcript saved to {output_path}")
        return output_path
