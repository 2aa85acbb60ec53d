"""OpenAI-backed cell translator."""

import asyncio
import logging
from typing import Optional

from openai import OpenAI

from ..errors import CellTranslationError
from ..languages import language_name
from .base import CellTranslator

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a direct spreadsheet-cell translator. ONLY translate the exact text provided. "
    "Do not add ANY formatting, explanations, or extra words. Keep punctuation, numbers, "
    "and special characters exactly as they appear in the original."
)


class OpenAITranslator(CellTranslator):
    """Translates cells with the OpenAI chat completions API."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        timeout: float = 90.0,
        max_retries: int = 3,
        client: Optional[OpenAI] = None
    ):
        """Initialize the OpenAI translator.

        Args:
            api_key: OpenAI API key
            model: OpenAI model to use
            timeout: Request timeout in seconds
            max_retries: Retries after a failed request, with exponential backoff
            client: Pre-built client, mainly for tests
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_retries = max_retries
        self.client = client or OpenAI(api_key=api_key, timeout=timeout)

    def _messages(self, text: str, target_language: str):
        language = language_name(target_language) or target_language
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": (
                    f"Translate this text to {language} "
                    f"(provide ONLY the direct translation without ANY additional text): {text}"
                )
            }
        ]

    def _complete(self, text: str, target_language: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=self._messages(text, target_language),
            temperature=0.1
        )
        content = response.choices[0].message.content
        if content is None:
            raise CellTranslationError("empty response from OpenAI")
        return content.strip()

    async def translate(self, text: str, target_language: str) -> str:
        if not isinstance(text, str) or not text.strip():
            return text

        for attempt in range(self.max_retries + 1):
            try:
                return await asyncio.to_thread(self._complete, text, target_language)
            except Exception as e:
                if attempt < self.max_retries:
                    delay = 2 ** attempt  # Exponential backoff
                    logger.warning(
                        f"Translation attempt {attempt+1} for '{text[:50]}' failed: {e}. Retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"Translation failed after {self.max_retries+1} attempts: {e}")
                    raise CellTranslationError(
                        f"OpenAI translation failed for '{text[:50]}': {e}"
                    ) from e
