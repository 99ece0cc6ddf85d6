"""Prompt builders and fixed console texts.

The generation service is stateless: every call carries the persona as the
system instruction and the full content in the user prompt.
"""

from summarist.models import ContentKind

SYSTEM_INSTRUCTION = (
    "You are an AI assistant specializing in summarization and insights."
)

_PROMPT_PREFIX: dict[str, str] = {
    "text": "Summarize the following text:",
    "file": "Summarize the following content extracted from a file:",
}


def build_summary_prompt(content: str, kind: ContentKind) -> str:
    """Build the user prompt for one summarization request.

    Args:
        content: The text typed by the user or extracted from a file.
        kind:    ``"text"`` or ``"file"``; only changes the lead-in sentence.
    """
    try:
        prefix = _PROMPT_PREFIX[kind]
    except KeyError:
        raise ValueError(f"Invalid content type: {kind!r}") from None
    return f"{prefix}\n\n{content}"


MENU_TEXT = """\
==============================
        AI Summarizer
==============================

Welcome to the Summarist CLI!
Choose an option:

1. Summarize text
2. Summarize a file
3. Help
4. Exit

Enter your choice: """

HELP_TEXT = """\
Welcome to the Summarist CLI! Here's how to use it:

1. Summarize Text:
   - Type or paste text, and Summarist will summarize it.
     Example: 'Summarist helps simplify documents.'

2. Summarize a File:
   - Provide a file path (PDF, DOC/DOCX, TXT). Example: './research_paper.pdf'

3. Save Output:
   - Save your summary as txt, pdf, doc or all of them. Example: 'pdf'

4. Sentiment Analysis:
   - Every summary is scored for tone.
     Example: 'Fantastic job!' is reported as Positive.

5. Extract Keywords:
   - Noun phrases are listed as keywords.
     Example: 'Summarist is a great tool.' lists 'Summarist, a great tool'

6. Email:
   - After saving, a file can be sent as an attachment.
     Set EMAIL_USER and EMAIL_PASS in your environment or .env file.

Run 'summarist --help' for command-line options.

Enjoy using Summarist!"""

FAREWELL_TEXT = "\nThank you for using Summarist CLI. Have a great day!"
