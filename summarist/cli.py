"""Command-line entry point for the Summarist interactive assistant.

Entry point: ``summarist`` (configured in ``pyproject.toml``).

Usage:
    summarist [options]

Key options:
    --model, --base-url, --extractor, --output-dir, --timeout,
    --verbose/--no-verbose, --log-file, --smtp-host, --smtp-port.

Secrets come from the environment (a ``.env`` file is loaded first):
``GEMINI_API_KEY`` is required at startup; ``EMAIL_USER`` / ``EMAIL_PASS``
are read only when an email is sent.
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from summarist.insights import LexiconSentimentScorer, SpacyKeywordExtractor
from summarist.llm import create_client
from summarist.log import setup_logging
from summarist.models import Config, ConfigError
from summarist.notifier import SmtpMailSender
from summarist.session import Session, SessionController

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return parsed


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Parse CLI arguments, validate credentials, and run one session."""
    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args()

    if args.log_file:
        log_file = Path(args.log_file)
    else:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path("logs") / f"run_{ts}.log"
    setup_logging(verbose=args.verbose, log_file=log_file)

    config = Config(
        base_url=args.base_url,
        model=args.model,
        timeout_s=args.timeout,
        extractor=args.extractor,
        output_dir=Path(args.output_dir),
        smtp_host=args.smtp_host,
        smtp_port=args.smtp_port,
        verbose=args.verbose,
    )

    try:
        controller = build_controller(config)
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    controller.run()


def build_controller(config: Config) -> SessionController:
    """Construct the session and its collaborators.

    Raises:
        ConfigError: if the API key or an analysis resource is missing.
    """
    generator = create_client(config)
    scorer = LexiconSentimentScorer()
    keyword_extractor = SpacyKeywordExtractor()
    session = Session(generator=generator)
    return SessionController(
        session,
        scorer=scorer,
        keyword_extractor=keyword_extractor,
        mail_sender=SmtpMailSender(host=config.smtp_host, port=config.smtp_port),
        config=config,
    )


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="summarist",
        description=(
            "Interactive summarization assistant: summarize text or PDF/DOCX/TXT "
            "files, review sentiment and keywords, save and email the result."
        ),
    )

    _default_model = os.environ.get("SUMMARIST_MODEL", "gemini-2.0-flash")
    parser.add_argument(
        "--model",
        metavar="MODEL",
        default=_default_model,
        help=f"Model identifier (default: SUMMARIST_MODEL env var, currently {_default_model!r}).",
    )
    parser.add_argument(
        "--base-url",
        metavar="URL",
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        help="OpenAI-compatible API base URL (default: Gemini OpenAI-compatible endpoint).",
    )
    parser.add_argument(
        "--extractor",
        choices=["auto", "docling", "pypdf"],
        default="auto",
        help="PDF extraction backend strategy (default: auto).",
    )
    parser.add_argument(
        "--output-dir",
        metavar="DIR",
        default=".",
        help="Directory for saved summaries (default: current directory).",
    )
    parser.add_argument(
        "--timeout",
        metavar="S",
        type=_positive_int,
        default=120,
        help="Generation call timeout in seconds (default: 120).",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Enable DEBUG-level logging on stderr (default: off).",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        default=None,
        help="Write log output to FILE (default: logs/run_TIMESTAMP.log).",
    )
    parser.add_argument(
        "--smtp-host",
        metavar="HOST",
        default="smtp.gmail.com",
        help="SMTP server used for email delivery (default: smtp.gmail.com).",
    )
    parser.add_argument(
        "--smtp-port",
        metavar="PORT",
        type=_positive_int,
        default=465,
        help="SMTP SSL port (default: 465).",
    )

    return parser


if __name__ == "__main__":
    main()
