"""AI chemistry tutor built on a text generation backend.

The tutor only needs something with a ``generate(prompt) -> str`` method.
:class:`GeminiGenerator` talks to the Gemini REST API; tests pass fakes.
"""

from __future__ import annotations

import logging
import re
import time
import unicodedata
from typing import Any, Callable, Optional, Protocol

import httpx

from orgreact.config import Settings
from orgreact.errors import TutorError
from orgreact.retry import linear_backoff, retry

logger = logging.getLogger(__name__)

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_ASCII = re.compile(r"[^\x00-\x7F]")
_WHITESPACE = re.compile(r"\s+")

TUTOR_PROMPT = """
You are ChemAI, a friendly and knowledgeable chemistry tutor. Whether the student asks about specific reactions or just wants to chat about chemistry, engage them appropriately.

If the question is chemistry-related, provide:
1. Clear explanation
2. Relevant examples
3. Related concepts
4. Practice tips

If it's a casual greeting or conversation:
1. Respond warmly
2. Share an interesting chemistry fact
3. Encourage learning about chemistry

Student's message: {question}

Format the response in markdown for better readability.
"""

EXPLANATION_PROMPT = """
As an organic chemistry expert, explain the following reaction or concept:
{query}

Please provide:
1. Step-by-step mechanism
2. Required conditions
3. Key considerations
4. Common mistakes to avoid
5. Real-world applications

Format the response in markdown for better readability.
"""


def sanitize_text(text: str) -> str:
    """Strip accents and non-ASCII characters and collapse whitespace."""
    text = unicodedata.normalize("NFKD", text)
    text = _COMBINING_MARKS.sub("", text)
    text = _NON_ASCII.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def build_tutor_prompt(question: str) -> str:
    return sanitize_text(TUTOR_PROMPT.format(question=question))


def build_explanation_prompt(query: str) -> str:
    return sanitize_text(EXPLANATION_PROMPT.format(query=query))


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        """Return the model's text response to ``prompt``."""
        ...


class GeminiGenerator:
    """Text generation through the Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-pro",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def generate(self, prompt: str) -> str:
        r = self._client.post(
            f"/models/{self.model}:generateContent",
            headers={"x-goog-api-key": self.api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )
        r.raise_for_status()
        return _response_text(r.json())

    def close(self) -> None:
        self._client.close()


def _response_text(payload: dict[str, Any]) -> str:
    candidates = payload.get("candidates") or []
    if not candidates:
        raise ValueError("Model returned no candidates")
    parts = candidates[0].get("content", {}).get("parts", [])
    return "".join(part.get("text", "") for part in parts)


class AITutor:
    """Prompt construction plus retried calls to a text generator."""

    def __init__(
        self,
        generator: TextGenerator,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.generator = generator
        self._retry = retry(
            max_retries=max_retries,
            delay=linear_backoff(retry_delay),
            sleep=sleep,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["AITutor"]:
        """Build a Gemini-backed tutor, or return None when no API key is configured."""
        if not settings.gemini_api_key:
            logger.warning("No Gemini API key configured; AI tutor disabled")
            return None
        generator = GeminiGenerator(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.request_timeout,
        )
        return cls(
            generator,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
        )

    def close(self) -> None:
        close = getattr(self.generator, "close", None)
        if close is not None:
            close()

    def tutor_response(self, question: str) -> str:
        return self._ask(build_tutor_prompt(question), "Failed to get AI tutor response")

    def reaction_explanation(self, query: str) -> str:
        return self._ask(build_explanation_prompt(query), "Failed to get reaction explanation")

    def _ask(self, prompt: str, failure: str) -> str:
        def attempt() -> str:
            try:
                return self.generator.generate(prompt)
            except Exception as exc:
                logger.error("%s: %s", failure, exc)
                raise TutorError(failure) from exc

        return self._retry(attempt)()
