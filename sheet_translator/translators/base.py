"""Base class for cell translators."""

from abc import ABC, abstractmethod
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)


class CellTranslator(ABC):
    """Abstract base class for anything that can translate a single cell text."""

    name = "base"

    @abstractmethod
    async def translate(self, text: str, target_language: str) -> str:
        """Translate a single text.

        Args:
            text: Text to translate
            target_language: Target-language code (see ``languages.SUPPORTED_LANGUAGES``)

        Returns:
            Translated text

        Raises:
            CellTranslationError: If the text could not be translated
        """

    async def translate_batch(self, texts: List[str], target_language: str) -> Dict[str, str]:
        """Translate several texts one after another.

        Args:
            texts: Texts to translate
            target_language: Target-language code

        Returns:
            Dict mapping original texts to translations
        """
        results = {}
        for text in texts:
            if text in results:
                continue
            results[text] = await self.translate(text, target_language)
        return results
