"""
summarist — interactive command-line summarization assistant.

Summarizes typed text or PDF/DOCX/TXT files with a hosted LLM, reports
sentiment and keywords, saves the result as text/PDF/Word files and can
email a saved file.
"""

__version__ = "0.1.0"
