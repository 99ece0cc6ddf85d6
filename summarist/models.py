"""Pydantic value objects, dataclass Config, and exceptions for Summarist.

The session workflow passes only a handful of values between components:
the generated summary text, the ``InsightReport`` derived from it, and the
``OutputRequest`` describing a save.  Everything here is transient; nothing
outlives the process.
"""

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

SentimentLabel = Literal["Positive", "Negative", "Neutral"]
"""Overall sentiment classification of a summary."""

OutputFormat = Literal["txt", "pdf", "doc", "all"]
"""Formats accepted at the save prompt."""

ContentKind = Literal["text", "file"]
"""How the user supplied the content: typed at the prompt or as a file path."""

_FORMAT_ALIASES: dict[str, str] = {"text": "txt", "docx": "doc"}


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


class SessionState(enum.Enum):
    """States of the interactive session controller."""

    MAIN_MENU = "main_menu"
    AWAITING_TEXT = "awaiting_text"
    AWAITING_FILE = "awaiting_file"
    AWAITING_SAVE_DECISION = "awaiting_save_decision"
    AWAITING_FORMAT = "awaiting_format"
    AWAITING_EMAIL_DECISION = "awaiting_email_decision"
    AWAITING_EMAIL_ADDRESS = "awaiting_email_address"
    AWAITING_RETURN_DECISION = "awaiting_return_decision"
    EXITING = "exiting"


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------


class InsightReport(BaseModel):
    """Sentiment and keyword summary computed from generated text.

    ``score`` is the rounded sum of lexicon valences; ``comparative`` is the
    unrounded sum divided by the token count and decides
    ``overall_sentiment``.
    """

    model_config = ConfigDict(frozen=True)

    score: int
    comparative: float
    positive: list[str] = Field(default_factory=list)
    negative: list[str] = Field(default_factory=list)
    overall_sentiment: SentimentLabel
    keywords: list[str] = Field(default_factory=list)
    word_count: int = 0


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputRequest(BaseModel):
    """A single save operation: which format(s) and where."""

    model_config = ConfigDict(frozen=True)

    format: OutputFormat
    filename_base: str = "summary_output"
    output_dir: Path = Path(".")

    @classmethod
    def parse(
        cls,
        raw: str,
        filename_base: str = "summary_output",
        output_dir: Path = Path("."),
    ) -> "OutputRequest":
        """Build a request from user input such as ``" PDF "`` or ``"text"``.

        Raises:
            UnsupportedFormat: if the input names no known format.
        """
        normalized = raw.strip().lower()
        normalized = _FORMAT_ALIASES.get(normalized, normalized)
        if normalized not in ("txt", "pdf", "doc", "all"):
            raise UnsupportedFormat(
                f"Unsupported output format {raw.strip()!r}; choose txt, pdf, doc or all."
            )
        return cls(format=normalized, filename_base=filename_base, output_dir=output_dir)

    def formats(self) -> list[str]:
        """Expand ``all`` into the concrete formats, in write order."""
        if self.format == "all":
            return ["txt", "pdf", "doc"]
        return [self.format]


class WrittenFile(BaseModel):
    """Outcome of writing one format during a save."""

    format: str
    path: Path
    ok: bool
    error: str | None = None


# ---------------------------------------------------------------------------
# Config (dataclass — not pydantic; holds runtime settings)
# ---------------------------------------------------------------------------


@dataclass
class Config:
    """Runtime configuration for a Summarist session.

    All fields correspond to CLI flags.  The generation parameters are fixed
    by default to the values the assistant persona was tuned with.

    Attributes:
        base_url:          OpenAI-compatible API base URL.  Defaults to the
                           Gemini OpenAI-compatible endpoint.
        model:             Model identifier passed to the API.
        api_key:           API key for the generation service.  ``None`` means
                           the key is read from ``GEMINI_API_KEY``.
        temperature:       Sampling temperature.
        top_p:             Nucleus sampling mass.
        top_k:             Top-k sampling cutoff (sent as an extra body field).
        max_output_tokens: Maximum tokens the model may generate per call.
        timeout_s:         Seconds before a generation call is abandoned.
        extractor:         PDF text extraction strategy: ``auto`` (docling with
                           pypdf fallback), ``docling`` or ``pypdf``.
        output_dir:        Directory the save step writes into.
        filename_base:     Stem of every saved file.
        smtp_host:         Mail server host.
        smtp_port:         Mail server SSL port.
        verbose:           If True, log at DEBUG level.
    """

    base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    model: str = "gemini-2.0-flash"
    api_key: str | None = None
    temperature: float = 1.0
    top_p: float = 0.95
    top_k: int = 40
    max_output_tokens: int = 8192
    timeout_s: int = 120
    extractor: Literal["auto", "docling", "pypdf"] = "auto"
    output_dir: Path = Path(".")
    filename_base: str = "summary_output"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    verbose: bool = False


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SummaristError(Exception):
    """Base class for every error the session reports to the user."""


class ConfigError(SummaristError):
    """Raised when a required credential is missing at startup."""


class UnsupportedFormat(SummaristError):
    """Raised for an input file extension or output format that is not handled."""


class FileNotFound(SummaristError):
    """Raised when an input path does not exist."""


class ReadError(SummaristError):
    """Raised when an input path exists but cannot be read."""


class ExtractionError(SummaristError):
    """Raised when a format parser fails or yields no text."""


class GenerationError(SummaristError):
    """Raised when the text-generation call fails or returns nothing usable."""


class WriteError(SummaristError):
    """Raised when an output file cannot be written."""


class AuthError(SummaristError):
    """Raised when the mail transport rejects (or lacks) credentials."""


class DeliveryError(SummaristError):
    """Raised when the mail transport fails to deliver a message."""
