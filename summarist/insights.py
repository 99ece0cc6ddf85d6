"""Insight reporting — sentiment and keywords derived from a generated summary.

Two narrow interfaces keep the session testable:

* ``SentimentScorer.score(text) -> SentimentResult`` — lexicon-based scoring;
  the default implementation uses NLTK's VADER word lexicon.
* ``KeywordExtractor.extract(text) -> list[str]`` — noun-phrase keywords;
  the default implementation uses spaCy noun chunks.

``build_report`` combines both into an immutable ``InsightReport``.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping, Protocol

import nltk
import spacy
from nltk.sentiment.vader import SentimentIntensityAnalyzer

from summarist.models import ConfigError, InsightReport, SentimentLabel

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z][a-z'\-]*")

SPACY_MODEL_NAME = "en_core_web_sm"


@dataclass(frozen=True)
class SentimentResult:
    """Raw output of a ``SentimentScorer``."""

    score: int
    comparative: float
    positive: list[str] = field(default_factory=list)
    negative: list[str] = field(default_factory=list)


class SentimentScorer(Protocol):
    def score(self, text: str) -> SentimentResult: ...


class KeywordExtractor(Protocol):
    def extract(self, text: str) -> list[str]: ...


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify(comparative: float) -> SentimentLabel:
    """Map a comparative score to a label: >0 Positive, <0 Negative, else Neutral."""
    if comparative > 0:
        return "Positive"
    if comparative < 0:
        return "Negative"
    return "Neutral"


def build_report(
    summary: str, scorer: SentimentScorer, extractor: KeywordExtractor
) -> InsightReport:
    """Score ``summary`` and extract its keywords."""
    sentiment = scorer.score(summary)
    keywords = extractor.extract(summary)
    report = InsightReport(
        score=sentiment.score,
        comparative=sentiment.comparative,
        positive=list(sentiment.positive),
        negative=list(sentiment.negative),
        overall_sentiment=classify(sentiment.comparative),
        keywords=list(keywords),
        word_count=len(summary.split()),
    )
    logger.debug(
        "Insights: score=%d comparative=%.3f label=%s keywords=%d",
        report.score,
        report.comparative,
        report.overall_sentiment,
        len(report.keywords),
    )
    return report


def format_insights(report: InsightReport) -> list[str]:
    """Console lines describing ``report``."""
    return [
        "Insights:",
        f"Summary Word Count: {report.word_count}",
        f"Sentiment Score: {report.score}",
        f"Positive Words: {', '.join(report.positive)}",
        f"Negative Words: {', '.join(report.negative)}",
        f"Overall Sentiment: {report.overall_sentiment}",
        f"Keywords: {', '.join(report.keywords)}",
    ]


# ---------------------------------------------------------------------------
# Sentiment
# ---------------------------------------------------------------------------


class LexiconSentimentScorer:
    """Word-lexicon sentiment scorer.

    Each lower-cased word token found in the lexicon contributes its valence.
    ``score`` is the rounded total; ``comparative`` is the total divided by
    the number of tokens.

    Args:
        lexicon: Word → valence mapping.  Defaults to NLTK's VADER lexicon,
                 downloaded on first use if missing.
    """

    def __init__(self, lexicon: Mapping[str, float] | None = None) -> None:
        self.lexicon = lexicon if lexicon is not None else _load_vader_lexicon()

    def score(self, text: str) -> SentimentResult:
        tokens = tokenize(text)
        total = 0.0
        positive: list[str] = []
        negative: list[str] = []
        for token in tokens:
            valence = self.lexicon.get(token)
            if valence is None:
                continue
            total += valence
            if valence > 0:
                positive.append(token)
            elif valence < 0:
                negative.append(token)
        comparative = total / len(tokens) if tokens else 0.0
        return SentimentResult(
            score=round(total),
            comparative=comparative,
            positive=positive,
            negative=negative,
        )


def tokenize(text: str) -> list[str]:
    """Lower-cased word tokens; punctuation and digits are dropped."""
    return _TOKEN_RE.findall(text.lower())


def _load_vader_lexicon() -> dict[str, float]:
    try:
        analyzer = SentimentIntensityAnalyzer()
    except LookupError:
        logger.info("Downloading NLTK vader_lexicon...")
        nltk.download("vader_lexicon", quiet=True)
        try:
            analyzer = SentimentIntensityAnalyzer()
        except LookupError as e:
            raise ConfigError(
                "NLTK vader_lexicon is not available; run "
                "`python -m nltk.downloader vader_lexicon`."
            ) from e
    return dict(analyzer.lexicon)


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------


class SpacyKeywordExtractor:
    """Noun-phrase keyword extractor backed by a spaCy pipeline.

    Keywords are the document's noun chunks, whitespace-normalized and
    de-duplicated case-insensitively in order of first appearance.
    """

    def __init__(self, nlp=None, model_name: str = SPACY_MODEL_NAME) -> None:
        self._nlp = nlp if nlp is not None else _load_spacy_model(model_name)

    def extract(self, text: str) -> list[str]:
        if not text.strip():
            return []
        doc = self._nlp(text)
        seen: set[str] = set()
        keywords: list[str] = []
        for chunk in doc.noun_chunks:
            phrase = " ".join(chunk.text.split())
            key = phrase.lower()
            if not phrase or key in seen:
                continue
            seen.add(key)
            keywords.append(phrase)
        return keywords


def _load_spacy_model(model_name: str):
    try:
        return spacy.load(model_name)
    except OSError as e:
        raise ConfigError(
            f"spaCy model {model_name!r} is not installed; run "
            f"`python -m spacy download {model_name}`."
        ) from e
