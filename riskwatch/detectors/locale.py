"""Lexical locale classifier — ordered function-word patterns, first match wins."""

from __future__ import annotations

import re

DEFAULT_LOCALE = "en"

# Checked in this order; the first pattern that matches decides the locale.
LOCALE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("en", re.compile(r"\b(the|and|or|but|in|on|at|to|for|of|with|by)\b", re.IGNORECASE)),
    ("es", re.compile(r"\b(el|la|y|o|pero|en|a|para|de|con|por)\b", re.IGNORECASE)),
    ("fr", re.compile(r"\b(le|la|et|ou|mais|dans|à|pour|de|avec|par)\b", re.IGNORECASE)),
    ("de", re.compile(r"\b(der|die|das|und|oder|aber|in|an|zu|für|von|mit)\b", re.IGNORECASE)),
    ("zh", re.compile("[\u4e00-\u9fff]")),
)

SUPPORTED_LOCALES: frozenset[str] = frozenset(tag for tag, _ in LOCALE_PATTERNS)


def detect_locale(text: str, default: str = DEFAULT_LOCALE) -> str:
    """Map free text to a locale tag, or *default* when nothing matches."""
    for tag, pattern in LOCALE_PATTERNS:
        if pattern.search(text):
            return tag
    return default
