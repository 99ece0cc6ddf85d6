"""Render a summary and its InsightReport as a human-readable text block.

No file I/O is performed here — ``writer.py`` decides where the returned
string (or the section list, for rich formats) ends up.
"""

from typing import Sequence

from summarist.models import InsightReport


def _render_list(items: Sequence[str]) -> str:
    return ", ".join(items) if items else "none"


def insight_items(report: InsightReport) -> list[tuple[str, str]]:
    """Ordered ``(label, value)`` pairs shared by every output format."""
    return [
        ("Sentiment Score", str(report.score)),
        ("Overall Sentiment", report.overall_sentiment),
        ("Positive Words", _render_list(report.positive)),
        ("Negative Words", _render_list(report.negative)),
        ("Keywords", _render_list(report.keywords)),
        ("Word Count", str(report.word_count)),
    ]


def render_text(summary: str, report: InsightReport) -> str:
    """Plain-text rendering used for ``.txt`` output."""
    insights = "\n".join(f"- {label}: {value}" for label, value in insight_items(report))
    return f"Summary:\n{summary.strip()}\n\nInsights:\n{insights}\n"
