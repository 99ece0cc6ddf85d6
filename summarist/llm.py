"""Text-generation client — wraps the openai SDK.

Any OpenAI-compatible backend works; the default configuration targets the
Gemini OpenAI-compatible endpoint.  The session only depends on the narrow
``TextGenerator`` protocol (``generate(prompt) -> str``), so tests substitute
a fake without touching the network.
"""

import logging
import os
import time
from typing import Protocol

import openai as _openai

from summarist.models import Config, ConfigError, ContentKind, GenerationError
from summarist.prompts import SYSTEM_INSTRUCTION, build_summary_prompt

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that turns a prompt into generated text."""

    def generate(self, prompt: str) -> str: ...


# ---------------------------------------------------------------------------
# Client wrapper
# ---------------------------------------------------------------------------


class GenerativeClient:
    """OpenAI-compatible chat client with fixed generation parameters.

    Attributes:
        model:    The model identifier passed to every completion request.
        base_url: The backend the client talks to.
    """

    def __init__(
        self,
        model: str,
        base_url: str,
        api_key: str,
        system_instruction: str = SYSTEM_INSTRUCTION,
        temperature: float = 1.0,
        top_p: float = 0.95,
        top_k: int = 40,
        max_output_tokens: int = 8192,
        timeout_s: int = 120,
    ) -> None:
        self.model = model
        self.base_url = base_url
        self.system_instruction = system_instruction
        self.temperature = temperature
        self.top_p = top_p
        self.top_k = top_k
        self.max_output_tokens = max_output_tokens
        self.timeout_s = timeout_s
        self._client = _openai.OpenAI(base_url=base_url, api_key=api_key)

    def generate(self, prompt: str) -> str:
        """Send one chat completion request and return the reply text.

        Raises:
            GenerationError: on any transport, quota or API failure, or when
                the response carries no text.
        """
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self.system_instruction},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                top_p=self.top_p,
                max_tokens=self.max_output_tokens,
                # Relies on the Gemini OpenAI-compatible endpoint accepting response_format
                # "text" and the top_k field that extra_body merges into the request JSON;
                # backends that reject top_k must be given a different base_url.
                response_format={"type": "text"},
                extra_body={"top_k": self.top_k},
                timeout=self.timeout_s,
            )
        except Exception as exc:
            raise GenerationError(f"Generation request failed: {exc}") from exc

        try:
            text = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise GenerationError(f"Malformed generation response: {exc}") from exc
        if not text or not text.strip():
            raise GenerationError("Generation service returned an empty response")
        return text


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def create_client(config: Config) -> GenerativeClient:
    """Create a client from configuration.

    API key resolution order:
        1. ``config.api_key`` (explicit)
        2. ``GEMINI_API_KEY`` environment variable

    Raises:
        ConfigError: if neither source provides a key.
    """
    api_key = config.api_key or os.environ.get("GEMINI_API_KEY")
    if not api_key:
        raise ConfigError("GEMINI_API_KEY is not set in the environment or .env file.")

    return GenerativeClient(
        model=config.model,
        base_url=config.base_url,
        api_key=api_key,
        temperature=config.temperature,
        top_p=config.top_p,
        top_k=config.top_k,
        max_output_tokens=config.max_output_tokens,
        timeout_s=config.timeout_s,
    )


def summarize(generator: TextGenerator, content: str, kind: ContentKind) -> str:
    """Summarize ``content`` and return the generated text.

    Failures are not retried; the caller reports them and moves on.

    Raises:
        GenerationError: if the generator fails or returns nothing usable.
    """
    prompt = build_summary_prompt(content, kind)
    logger.info(
        "Requesting summary (%s chars, ~%s tokens)",
        f"{len(prompt):,}",
        f"{len(prompt) // 4:,}",
    )
    t0 = time.monotonic()
    try:
        text = generator.generate(prompt)
    except GenerationError:
        raise
    except Exception as exc:
        raise GenerationError(f"Generation failed: {exc}") from exc
    elapsed = time.monotonic() - t0

    if not isinstance(text, str) or not text.strip():
        raise GenerationError("Generation service returned an empty response")
    logger.info("Summary received (%.1fs, %s chars)", elapsed, f"{len(text):,}")
    return text.strip()
