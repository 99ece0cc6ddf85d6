"""Shared pytest fixtures and fakes for the summarist test suite."""

import logging
from pathlib import Path

import pytest

from summarist.insights import SentimentResult
from summarist.models import AuthError, DeliveryError, InsightReport, WriteError


# ---------------------------------------------------------------------------
# Logger isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_summarist_logger():
    """Clear the summarist logger between tests.

    Tests that call ``main()`` trigger ``setup_logging()``, which attaches
    handlers and sets ``propagate=False``.  Without this fixture the state
    leaks into subsequent tests and breaks ``caplog`` capture.
    """
    logger = logging.getLogger("summarist")
    for h in logger.handlers[:]:
        try:
            h.close()
        except Exception:
            pass
        logger.removeHandler(h)
    logger.propagate = True
    yield
    for h in logger.handlers[:]:
        try:
            h.close()
        except Exception:
            pass
        logger.removeHandler(h)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Fakes for the narrow interfaces
# ---------------------------------------------------------------------------

SAMPLE_SUMMARY = "The new product is great. Customers love the battery life."

SMALL_LEXICON = {
    "love": 3.2,
    "great": 3.1,
    "good": 1.9,
    "bad": -2.5,
    "terrible": -2.1,
    "hate": -2.7,
}


class FakeGenerator:
    """Returns a fixed reply and records every prompt."""

    def __init__(self, reply: str = SAMPLE_SUMMARY, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeScorer:
    def __init__(self, comparative: float = 0.5) -> None:
        self.comparative = comparative

    def score(self, text: str) -> SentimentResult:
        return SentimentResult(
            score=round(self.comparative * 10),
            comparative=self.comparative,
            positive=["great"] if self.comparative > 0 else [],
            negative=["bad"] if self.comparative < 0 else [],
        )


class FakeKeywords:
    def extract(self, text: str) -> list[str]:
        return ["product", "battery life"]


class FakeWriter:
    """Records writes; raises ``WriteError`` when ``fail`` is set."""

    def __init__(self, suffix: str, fail: bool = False) -> None:
        self.suffix = suffix
        self.fail = fail
        self.paths: list[Path] = []

    def write(self, path: Path, summary: str, report: InsightReport) -> None:
        if self.fail:
            raise WriteError(f"Failed to write {path}: permission denied")
        path.write_text(summary, encoding="utf-8")
        self.paths.append(path)


class FakeMailSender:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.sent: list[tuple[Path, str]] = []

    def send(self, file_path: Path, recipient: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((file_path, recipient))


class FailingMailSender(FakeMailSender):
    def __init__(self, auth: bool = False) -> None:
        super().__init__(
            AuthError("bad credentials") if auth else DeliveryError("connection refused")
        )


@pytest.fixture
def sample_report() -> InsightReport:
    return InsightReport(
        score=6,
        comparative=0.6,
        positive=["great", "love"],
        negative=[],
        overall_sentiment="Positive",
        keywords=["The new product", "Customers", "the battery life"],
        word_count=10,
    )


@pytest.fixture
def fake_writers() -> dict[str, FakeWriter]:
    return {"txt": FakeWriter(".txt"), "pdf": FakeWriter(".pdf"), "doc": FakeWriter(".docx")}
