"""Text matching utilities for pattern and keyword detection."""

import re
from typing import Iterable, List, Pattern

_WHITESPACE = re.compile(r"\s+")


def _contains_patterns(text: str, patterns: Iterable[Pattern]) -> bool:
    """Check if text matches any of the compiled regex patterns."""
    return any(pattern.search(text) for pattern in patterns)


def _normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _word_count(text: str) -> int:
    return len(text.split())


def _split_tokens(text: str) -> List[str]:
    return text.lower().split()
