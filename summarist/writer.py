"""Output writing — serialize a summary and its insights to txt/pdf/doc files.

Each format is attempted independently.  A failure in one format is recorded
in the returned ``WrittenFile`` list and does not prevent (or roll back) the
others.
"""

import logging
from pathlib import Path
from typing import Mapping, Protocol
from xml.sax.saxutils import escape

import docx
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from summarist.models import InsightReport, OutputRequest, WriteError, WrittenFile
from summarist.renderer import insight_items, render_text

logger = logging.getLogger(__name__)


class DocumentWriter(Protocol):
    """Writes one output format.  ``suffix`` includes the leading dot."""

    suffix: str

    def write(self, path: Path, summary: str, report: InsightReport) -> None: ...


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


class TextWriter:
    suffix = ".txt"

    def write(self, path: Path, summary: str, report: InsightReport) -> None:
        try:
            path.write_text(render_text(summary, report), encoding="utf-8")
        except OSError as e:
            raise WriteError(f"Failed to write {path}: {e}") from e


class PdfWriter:
    """Paginated PDF via reportlab platypus."""

    suffix = ".pdf"

    def write(self, path: Path, summary: str, report: InsightReport) -> None:
        try:
            doc = SimpleDocTemplate(str(path), pagesize=letter)
            doc.build(self._story(summary, report))
        except Exception as e:
            raise WriteError(f"Failed to write {path}: {e}") from e

    def _story(self, summary: str, report: InsightReport) -> list:
        styles = getSampleStyleSheet()
        heading_style = ParagraphStyle(
            "SummaryHeading",
            parent=styles["Heading2"],
            fontSize=16,
            spaceAfter=10,
        )
        body_style = ParagraphStyle(
            "SummaryBody",
            parent=styles["BodyText"],
            fontSize=12,
            spaceAfter=6,
        )

        story = [Paragraph("Summary:", heading_style)]
        for block in _paragraphs(summary):
            story.append(Paragraph(escape(block), body_style))
        story.append(Spacer(1, 0.2 * inch))
        story.append(Paragraph("Insights:", heading_style))
        for label, value in insight_items(report):
            story.append(Paragraph(f"&bull; {escape(label)}: {escape(value)}", body_style))
        return story


class DocxWriter:
    """Word document via python-docx."""

    suffix = ".docx"

    def write(self, path: Path, summary: str, report: InsightReport) -> None:
        # python-docx rejects control characters while building, not only on save.
        try:
            document = docx.Document()
            document.add_heading("Summary", level=1)
            for block in _paragraphs(summary):
                document.add_paragraph(block)
            document.add_heading("Insights", level=1)
            for label, value in insight_items(report):
                document.add_paragraph(f"{label}: {value}", style="List Bullet")
            document.save(str(path))
        except Exception as e:
            raise WriteError(f"Failed to write {path}: {e}") from e


def default_writers() -> dict[str, DocumentWriter]:
    return {"txt": TextWriter(), "pdf": PdfWriter(), "doc": DocxWriter()}


def _paragraphs(text: str) -> list[str]:
    """Split on blank lines, keeping single line breaks inside a block."""
    blocks = [b.strip() for b in text.replace("\r\n", "\n").split("\n\n")]
    return [b for b in blocks if b] or [""]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def write_outputs(
    request: OutputRequest,
    summary: str,
    report: InsightReport,
    writers: Mapping[str, DocumentWriter] | None = None,
) -> list[WrittenFile]:
    """Write every format named by ``request`` and report each outcome.

    Returns:
        One ``WrittenFile`` per attempted format, in write order.
    """
    writers = writers if writers is not None else default_writers()
    results: list[WrittenFile] = []

    for fmt in request.formats():
        writer = writers[fmt]
        path = request.output_dir / f"{request.filename_base}{writer.suffix}"
        try:
            request.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error = WriteError(f"Failed to create {request.output_dir}: {e}")
            logger.error("%s", error)
            results.append(WrittenFile(format=fmt, path=path, ok=False, error=str(error)))
            continue
        try:
            writer.write(path, summary, report)
        except WriteError as e:
            logger.error("%s", e)
            results.append(WrittenFile(format=fmt, path=path, ok=False, error=str(e)))
            continue
        logger.info("Written: %s", path)
        results.append(WrittenFile(format=fmt, path=path, ok=True))

    return results


_EMAIL_PREFERENCE = ("doc", "pdf", "txt")


def preferred_attachment(written: list[WrittenFile]) -> Path | None:
    """Pick the file to email: the Word document, else the PDF, else the text."""
    ok = {w.format: w.path for w in written if w.ok}
    for fmt in _EMAIL_PREFERENCE:
        if fmt in ok:
            return ok[fmt]
    return None
