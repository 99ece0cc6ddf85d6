"""Content extraction — turns typed input or a document file into plain text.

File input is dispatched on its (case-insensitive) extension:

* ``pdf``        — docling, with pypdf as fallback (see ``extractor`` option)
* ``doc``/``docx`` — python-docx paragraph text
* ``txt``        — read as UTF-8

Any other extension raises ``UnsupportedFormat`` before the filesystem is
touched.
"""

import logging
from pathlib import Path
from typing import Callable

from docling.document_converter import DocumentConverter
from docx import Document
from pypdf import PdfReader

from summarist.models import (
    ContentKind,
    ExtractionError,
    FileNotFound,
    ReadError,
    UnsupportedFormat,
)

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("pdf", "doc", "docx", "txt")


def extract_content(source: str, kind: ContentKind, extractor: str = "auto") -> str:
    """Return the plain text for ``source``.

    Args:
        source:    The typed text (``kind == "text"``) or a file path.
        kind:      ``"text"`` or ``"file"``.
        extractor: PDF strategy: ``auto``, ``docling`` or ``pypdf``.

    Raises:
        UnsupportedFormat: unknown file extension.
        FileNotFound:      the path does not exist.
        ReadError:         the path exists but cannot be read.
        ExtractionError:   the format parser failed or produced no text.
    """
    if kind == "text":
        return source
    if kind != "file":
        raise ValueError(f"Invalid content type: {kind!r}")

    path = Path(source.strip().strip('"').strip("'")).expanduser()
    strategy = select_strategy(path)

    if not path.exists():
        raise FileNotFound(f"File not found: {path}")
    if not path.is_file():
        raise ReadError(f"Not a readable file: {path}")

    logger.info("Extracting text from %s", path.name)
    text = strategy(path, extractor)
    if not text.strip():
        raise ExtractionError(f"No text could be extracted from {path}")
    logger.info("Extraction complete: %s chars", f"{len(text):,}")
    return text


def select_strategy(path: Path) -> Callable[[Path, str], str]:
    """Pick the extraction function for ``path`` by extension.

    Raises:
        UnsupportedFormat: if the extension is not one of
            ``SUPPORTED_EXTENSIONS``.
    """
    # Path(".pdf").suffix is empty; a bare dotfile name is still its extension.
    ext = path.name.rsplit(".", 1)[-1].lower() if "." in path.name else ""
    try:
        return _STRATEGIES[ext]
    except KeyError:
        raise UnsupportedFormat(
            "Unsupported file format. Please provide a PDF, DOC/DOCX, or TXT file."
        ) from None


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def _read_txt(path: Path, extractor: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Failed to read {path}: {e}") from e


def _read_word(path: Path, extractor: str) -> str:
    _check_readable(path)
    try:
        document = Document(str(path))
    except Exception as e:
        raise ExtractionError(f"Failed to parse {path}: {e}") from e
    return "\n".join(p.text for p in document.paragraphs).strip()


def _read_pdf(path: Path, extractor: str) -> str:
    _check_readable(path)
    if extractor == "docling":
        return _run_docling(path)
    if extractor == "pypdf":
        return _extract_text_with_pypdf(path)
    return _run_docling_with_fallback(path)


_STRATEGIES: dict[str, Callable[[Path, str], str]] = {
    "pdf": _read_pdf,
    "doc": _read_word,
    "docx": _read_word,
    "txt": _read_txt,
}


def _check_readable(path: Path) -> None:
    """Open the file once so permission problems surface as ``ReadError``."""
    try:
        with path.open("rb") as fh:
            fh.read(1)
    except OSError as e:
        raise ReadError(f"Failed to read {path}: {e}") from e


# ---------------------------------------------------------------------------
# PDF backends
# ---------------------------------------------------------------------------


def _run_docling_with_fallback(path: Path) -> str:
    """Run docling, then fall back to pypdf text extraction on failure."""
    try:
        return _run_docling(path)
    except ExtractionError as docling_exc:
        logger.warning(
            "Docling parse failed for %s; attempting pypdf fallback: %s",
            path.name,
            docling_exc,
        )
        try:
            text = _extract_text_with_pypdf(path)
        except ExtractionError as fallback_exc:
            root_cause = docling_exc.__cause__ or docling_exc
            raise ExtractionError(
                f"Failed to parse {path}: docling and pypdf fallback failed ({fallback_exc})"
            ) from root_cause

        logger.warning(
            "Using pypdf fallback text extraction for %s (%s chars)",
            path.name,
            f"{len(text):,}",
        )
        return text


def _run_docling(path: Path) -> str:
    """Run docling on *path* and return the full markdown string.

    Raises:
        ExtractionError: wrapping any exception raised by docling.
    """
    try:
        converter = DocumentConverter()
        result = converter.convert(str(path))
        return result.document.export_to_markdown()
    except Exception as e:
        raise ExtractionError(f"Failed to parse {path}: {e}") from e


def _extract_text_with_pypdf(path: Path) -> str:
    """Extract text with pypdf."""
    try:
        reader = PdfReader(str(path))
        pages: list[str] = []
        for page in reader.pages:
            pages.append(page.extract_text() or "")
        text = "\n\n".join(pages).strip()
        if not text:
            raise ExtractionError(f"Failed to parse {path}: pypdf extracted empty text")
        return text
    except ExtractionError:
        raise
    except Exception as e:
        raise ExtractionError(f"Failed to parse {path}: pypdf error: {e}") from e
