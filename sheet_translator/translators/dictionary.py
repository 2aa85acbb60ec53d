"""Dictionary-lookup translator.

Stands in for a real translation service: a small word table is consulted
for the whole text, then word by word. The table is keyed by word only, so
every target language receives the same output; unknown words pass through
unchanged. Both are intended behavior.
"""

import asyncio
import logging
from typing import Dict, Mapping, Optional

from .base import CellTranslator

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY: Dict[str, str] = {
    "hello": "你好",
    "world": "世界",
    "welcome": "欢迎",
    "excel": "表格",
    "translate": "翻译",
    "file": "文件",
    "upload": "上传",
    "download": "下载",
    "success": "成功",
    "error": "错误",
    "processing": "处理中",
    "english": "英语",
    "chinese": "中文",
    "french": "法语",
    "spanish": "西班牙语",
    "german": "德语",
    "japanese": "日语",
    "korean": "韩语",
    "russian": "俄语",
    "italian": "意大利语",
    "portuguese": "葡萄牙语",
}


def restore_case(original: str, translated: str) -> str:
    """Carry the casing pattern of ``original`` over to ``translated``.

    Fully upper-case input gives fully upper-case output; a capitalized first
    character capitalizes the first character of the output; anything else is
    left as is.

    Args:
        original: Source text
        translated: Text produced by the lookup

    Returns:
        Re-cased translation
    """
    if original == original.upper():
        return translated.upper()
    if original[:1] == original[:1].upper():
        return translated[:1].upper() + translated[1:]
    return translated


class DictionaryTranslator(CellTranslator):
    """Word-table translator with simulated network latency."""

    name = "dictionary"

    def __init__(self, dictionary: Optional[Mapping[str, str]] = None, latency: float = 0.3):
        """Initialize the translator.

        Args:
            dictionary: Word table; defaults to ``DEFAULT_DICTIONARY``. Keys are
                lower-cased on load.
            latency: Seconds to wait before every translation
        """
        source = DEFAULT_DICTIONARY if dictionary is None else dictionary
        self.dictionary = {key.lower(): value for key, value in source.items()}
        self.latency = latency

    async def translate(self, text: str, target_language: str) -> str:
        if self.latency:
            await asyncio.sleep(self.latency)
        return self.lookup(text)

    def lookup(self, text: str) -> str:
        """Translate without the simulated delay."""
        if not text or not isinstance(text, str):
            return text

        lowered = text.lower()
        if lowered in self.dictionary:
            return self.dictionary[lowered]

        words = [self.dictionary.get(word, word) for word in lowered.split()]
        return restore_case(text, " ".join(words))
