"""Cell translators: the capability of translating one text into a target language."""

from .base import CellTranslator
from .dictionary import DEFAULT_DICTIONARY, DictionaryTranslator, restore_case
from .openai_translator import OpenAITranslator

__all__ = [
    "CellTranslator",
    "DEFAULT_DICTIONARY",
    "DictionaryTranslator",
    "OpenAITranslator",
    "restore_case",
]
