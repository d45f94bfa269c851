"""Detection functions for language, intent, service type, and contact-flow cues."""

from typing import Optional

from .text_match import _contains_patterns, _normalize_whitespace, _split_tokens, _word_count
from ..constants import (
    DEFAULT_LANGUAGE,
    INTENT_GENERAL,
    MIN_KEYWORD_TOKEN_LENGTH,
    STOP_WORDS,
)
from ..patterns import (
    AFFIRMATION_PATTERN,
    ARABIC_SCRIPT_PATTERN,
    CONTACT_REQUEST_PATTERN,
    CONTACT_SOLICITATION_PATTERN,
    DATA_REQUEST_PATTERN,
    FRENCH_WORD_PATTERN,
    GREETING_EXACT_PATTERN,
    GREETING_PATTERN,
    INTENT_PATTERNS,
    NEGATION_PATTERN,
    SERVICE_PATTERNS,
)
from ..state import IntentMatch


def detect_language(text: str) -> str:
    """Classify the message as ar, fr, or en; Arabic script wins, English is the fallback."""
    if ARABIC_SCRIPT_PATTERN.search(text):
        return "ar"
    if FRENCH_WORD_PATTERN.search(text):
        return "fr"
    return DEFAULT_LANGUAGE


def extract_intent(text: str) -> IntentMatch:
    """
    Classify a message into a single intent and pull out its keyword.

    Patterns are tried in their declared priority order and the first match wins.
    The specific keyword (group 2) is preferred over the trigger word (group 1).
    Without a match the intent is "general" and the keyword is the message minus
    short tokens and stop words.
    """
    for intent, pattern in INTENT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        specific = match.group(2) if pattern.groups >= 2 else None
        keyword = specific or match.group(1) or match.group(0)
        return IntentMatch(intent=intent, keyword=_normalize_whitespace(keyword))

    tokens = [
        token
        for token in _split_tokens(text)
        if len(token) >= MIN_KEYWORD_TOKEN_LENGTH and token not in STOP_WORDS
    ]
    return IntentMatch(intent=INTENT_GENERAL, keyword=" ".join(tokens))


def detect_service_type(text: str) -> Optional[str]:
    """Return the first catalog service with any matching pattern, or None."""
    for service, patterns in SERVICE_PATTERNS:
        if _contains_patterns(text, patterns):
            return service
    return None


def detect_greeting(text: str, *, max_words: int = 3) -> bool:
    """
    Detect a short greeting.

    With max_words > 0 a greeting word within a message of at most max_words words qualifies;
    with max_words == 0 the whole trimmed message must be a greeting.
    """
    if max_words <= 0:
        return bool(GREETING_EXACT_PATTERN.fullmatch(text))
    return bool(GREETING_PATTERN.search(text)) and _word_count(text) <= max_words


def detect_data_request(text: str) -> bool:
    """Detect loose catalog nouns ("show", "portfolio", "services", ...) outside structured intents."""
    return bool(DATA_REQUEST_PATTERN.search(text))


def detect_affirmation(text: str) -> bool:
    """Detect an explicit yes; any negation word in the message cancels it ("not sure", "pas d'accord")."""
    if NEGATION_PATTERN.search(text):
        return False
    return bool(AFFIRMATION_PATTERN.search(text))


def detect_contact_solicitation(text: str) -> bool:
    """Detect an assistant turn that asked for contact details or offered a proposal."""
    return bool(CONTACT_SOLICITATION_PATTERN.search(text))


def detect_contact_request(text: str) -> bool:
    """Detect a user asking how to contact or reach the team."""
    return bool(CONTACT_REQUEST_PATTERN.search(text))
