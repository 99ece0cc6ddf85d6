"""Interactive session — the menu-driven summarization workflow.

The workflow is an explicit finite state machine.  ``SessionController``
exposes two operations:

* ``prompt()``      — the text to show for the current state;
* ``handle(line)``  — consume one line submitted by the user and transition.

``run()`` drives the loop by reading one line per prompt until the session
reaches ``SessionState.EXITING``.  All I/O goes through the ``Session``
(``read_line`` / ``write``), so tests drive the controller with scripted
input and collect the output.

Transitions
-----------
MAIN_MENU
    ``1`` → AWAITING_TEXT, ``2`` → AWAITING_FILE,
    ``3`` → help, then AWAITING_RETURN_DECISION, ``4`` → EXITING,
    anything else → invalid-choice message, stays in MAIN_MENU.
AWAITING_TEXT / AWAITING_FILE
    summary produced → AWAITING_SAVE_DECISION; error → AWAITING_RETURN_DECISION.
AWAITING_SAVE_DECISION
    ``yes`` → AWAITING_FORMAT, else → AWAITING_RETURN_DECISION.
AWAITING_FORMAT
    files written → AWAITING_EMAIL_DECISION (nothing written →
    AWAITING_RETURN_DECISION); unknown format re-prompts.
AWAITING_EMAIL_DECISION
    ``yes`` → AWAITING_EMAIL_ADDRESS, else → AWAITING_RETURN_DECISION.
AWAITING_EMAIL_ADDRESS
    send (failure is reported, never fatal) → AWAITING_RETURN_DECISION.
AWAITING_RETURN_DECISION
    ``yes`` → MAIN_MENU, else → EXITING.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

from summarist.extractor import extract_content
from summarist.insights import (
    KeywordExtractor,
    SentimentScorer,
    build_report,
    format_insights,
)
from summarist.llm import TextGenerator, summarize
from summarist.models import (
    Config,
    ContentKind,
    InsightReport,
    OutputRequest,
    SessionState,
    SummaristError,
    UnsupportedFormat,
    WrittenFile,
)
from summarist.notifier import MailSender, deliver
from summarist.prompts import FAREWELL_TEXT, HELP_TEXT, MENU_TEXT
from summarist.writer import DocumentWriter, preferred_attachment, write_outputs

logger = logging.getLogger(__name__)

_PROMPTS: dict[SessionState, str] = {
    SessionState.MAIN_MENU: MENU_TEXT,
    SessionState.AWAITING_TEXT: "\nEnter the text to summarize: ",
    SessionState.AWAITING_FILE: "\nEnter the file path (PDF, DOC/DOCX, TXT) to summarize: ",
    SessionState.AWAITING_SAVE_DECISION: "\nDo you want to save the summary? (yes/no): ",
    SessionState.AWAITING_FORMAT: "\nEnter the output file format (txt/pdf/doc/all): ",
    SessionState.AWAITING_EMAIL_DECISION: "\nDo you want to send the summary by email? (yes/no): ",
    SessionState.AWAITING_EMAIL_ADDRESS: "\nEnter the recipient's email address: ",
    SessionState.AWAITING_RETURN_DECISION: "\nReturn to the main menu? (yes/no): ",
}


def _is_yes(line: str) -> bool:
    return line.strip().lower() == "yes"


@dataclass
class Session:
    """State of one interactive run, created once at process start."""

    generator: TextGenerator
    read_line: Callable[[str], str] = input
    write: Callable[[str], None] = print
    state: SessionState = SessionState.MAIN_MENU
    last_summary: str | None = None
    last_report: InsightReport | None = None
    last_written: list[WrittenFile] = field(default_factory=list)


class SessionController:
    """Routes user input through extraction, summarization, saving and email."""

    def __init__(
        self,
        session: Session,
        scorer: SentimentScorer,
        keyword_extractor: KeywordExtractor,
        mail_sender: MailSender,
        config: Config | None = None,
        writers: Mapping[str, DocumentWriter] | None = None,
    ) -> None:
        self.session = session
        self.scorer = scorer
        self.keyword_extractor = keyword_extractor
        self.mail_sender = mail_sender
        self.config = config or Config()
        self.writers = writers
        self._handlers: dict[SessionState, Callable[[str], None]] = {
            SessionState.MAIN_MENU: self._on_menu,
            SessionState.AWAITING_TEXT: self._on_text,
            SessionState.AWAITING_FILE: self._on_file,
            SessionState.AWAITING_SAVE_DECISION: self._on_save_decision,
            SessionState.AWAITING_FORMAT: self._on_format,
            SessionState.AWAITING_EMAIL_DECISION: self._on_email_decision,
            SessionState.AWAITING_EMAIL_ADDRESS: self._on_email_address,
            SessionState.AWAITING_RETURN_DECISION: self._on_return_decision,
        }

    @property
    def state(self) -> SessionState:
        return self.session.state

    # ------------------------------------------------------------------
    # Event interface
    # ------------------------------------------------------------------

    def prompt(self) -> str:
        return _PROMPTS.get(self.state, "")

    def handle(self, line: str) -> SessionState:
        """Consume one submitted line and return the resulting state."""
        if self.state is SessionState.EXITING:
            return self.state
        handler = self._handlers[self.state]
        handler(line)
        return self.state

    def run(self) -> None:
        """Read and handle lines until the session exits."""
        logger.info("Session started")
        while self.state is not SessionState.EXITING:
            try:
                line = self.session.read_line(self.prompt())
                self.handle(line)
            except (EOFError, KeyboardInterrupt):
                logger.info("Input closed in state %s", self.state.name)
                self._exit()
                break
        logger.info("Session ended")

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _on_menu(self, line: str) -> None:
        choice = line.strip()
        if choice == "1":
            self._goto(SessionState.AWAITING_TEXT)
        elif choice == "2":
            self._goto(SessionState.AWAITING_FILE)
        elif choice == "3":
            self.session.write(HELP_TEXT)
            self._goto(SessionState.AWAITING_RETURN_DECISION)
        elif choice == "4":
            self._exit()
        else:
            self.session.write("Invalid choice, please select again.")

    def _on_text(self, line: str) -> None:
        self._summarize(line, "text")

    def _on_file(self, line: str) -> None:
        self._summarize(line, "file")

    def _summarize(self, source: str, kind: ContentKind) -> None:
        write = self.session.write
        try:
            if kind == "file":
                write("\nExtracting text from the file...")
            content = extract_content(source, kind, extractor=self.config.extractor)
            write("\nGenerating summary, please wait...")
            summary = summarize(self.session.generator, content, kind)
            report = build_report(summary, self.scorer, self.keyword_extractor)
        except SummaristError as e:
            logger.error("Summarization failed: %s", e)
            write("\nError while summarizing:")
            write(str(e))
            self._goto(SessionState.AWAITING_RETURN_DECISION)
            return

        self.session.last_summary = summary
        self.session.last_report = report
        self.session.last_written = []

        write("\nSummary Generated:\n")
        write(summary)
        write("")
        for insight_line in format_insights(report):
            write(insight_line)
        self._goto(SessionState.AWAITING_SAVE_DECISION)

    def _on_save_decision(self, line: str) -> None:
        if _is_yes(line):
            self._goto(SessionState.AWAITING_FORMAT)
        else:
            self._goto(SessionState.AWAITING_RETURN_DECISION)

    def _on_format(self, line: str) -> None:
        try:
            request = OutputRequest.parse(
                line,
                filename_base=self.config.filename_base,
                output_dir=self.config.output_dir,
            )
        except UnsupportedFormat as e:
            self.session.write(str(e))
            return

        assert self.session.last_summary is not None
        assert self.session.last_report is not None
        written = write_outputs(
            request,
            self.session.last_summary,
            self.session.last_report,
            writers=self.writers,
        )
        self.session.last_written = written
        for result in written:
            if result.ok:
                self.session.write(f"Summary saved as '{result.path}'.")
            else:
                self.session.write(f"Error saving {result.format} output: {result.error}")

        if any(result.ok for result in written):
            self._goto(SessionState.AWAITING_EMAIL_DECISION)
        else:
            self._goto(SessionState.AWAITING_RETURN_DECISION)

    def _on_email_decision(self, line: str) -> None:
        if _is_yes(line):
            self._goto(SessionState.AWAITING_EMAIL_ADDRESS)
        else:
            self._goto(SessionState.AWAITING_RETURN_DECISION)

    def _on_email_address(self, line: str) -> None:
        recipient = line.strip()
        attachment = preferred_attachment(self.session.last_written)
        if attachment is None:
            self.session.write("No saved file to send.")
        elif deliver(self.mail_sender, attachment, recipient):
            self.session.write(f"Summary sent to {recipient}.")
        else:
            self.session.write("Error sending email; see the log for details.")
        self._goto(SessionState.AWAITING_RETURN_DECISION)

    def _on_return_decision(self, line: str) -> None:
        if _is_yes(line):
            self._goto(SessionState.MAIN_MENU)
        else:
            self._exit()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _goto(self, state: SessionState) -> None:
        logger.debug("State %s -> %s", self.state.name, state.name)
        self.session.state = state

    def _exit(self) -> None:
        self.session.write(FAREWELL_TEXT)
        self._goto(SessionState.EXITING)
