"""Supported target languages."""

import re
from typing import Dict, List, Optional

SUPPORTED_LANGUAGES = (
    ("english", "English"),
    ("chinese", "中文"),
    ("french", "Français"),
    ("spanish", "Español"),
    ("german", "Deutsch"),
    ("japanese", "日本語"),
    ("korean", "한국어"),
    ("russian", "Русский"),
    ("italian", "Italiano"),
    ("portuguese", "Português"),
)

DEFAULT_TARGET_LANGUAGE = "chinese"

# Header-less columns get keys like __EMPTY, __EMPTY_1, ...
PLACEHOLDER_PREFIX = "__EMPTY"
_PLACEHOLDER_RE = re.compile(r"^__EMPTY(?:_(\d+))?$")


def get_supported_languages() -> List[Dict[str, str]]:
    """Return the supported languages as ``{"code", "name"}`` dicts."""
    return [{"code": code, "name": name} for code, name in SUPPORTED_LANGUAGES]


def is_supported_language(code: str) -> bool:
    return code in dict(SUPPORTED_LANGUAGES)


def language_name(code: str) -> Optional[str]:
    return dict(SUPPORTED_LANGUAGES).get(code)


def placeholder_key(position: int) -> str:
    """Key for the ``position``-th (0-based) header-less column."""
    return PLACEHOLDER_PREFIX if position == 0 else f"{PLACEHOLDER_PREFIX}_{position}"


def display_name(key: str) -> str:
    """Friendly label for a language group key.

    Placeholder keys become "Language 1", "Language 2", ...; anything else is
    returned unchanged.
    """
    match = _PLACEHOLDER_RE.match(key)
    if not match:
        return key
    position = int(match.group(1) or 0)
    return f"Language {position + 1}"
