"""Service catalog shaping for the /services endpoint."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from chatbot.constants import (
    DEFAULT_SERVICE_DESCRIPTIONS,
    DEFAULT_SERVICE_EMOJI,
    SERVICE_CATALOG,
    SERVICE_EMOJIS,
)

from .formatter import _localized


def emoji_for(name: str) -> str:
    """First substring hit in the name->emoji table wins."""
    lowered = name.lower()
    for fragment, emoji in SERVICE_EMOJIS:
        if fragment in lowered:
            return emoji
    return DEFAULT_SERVICE_EMOJI


def default_services() -> List[Dict[str, str]]:
    return [
        {"name": name, "description": DEFAULT_SERVICE_DESCRIPTIONS.get(name, ""), "emoji": emoji_for(name)}
        for name in SERVICE_CATALOG
    ]


def services_from_pricing(section: Optional[Dict[str, Any]], language: str = "en") -> List[Dict[str, str]]:
    """Simplify pricing cards into {name, description, emoji}; empty when the section has no named cards."""
    if not isinstance(section, dict):
        return []
    services = []
    for card in section.get("cards") or []:
        if not isinstance(card, dict):
            continue
        name = _localized(card.get("title"), language)
        if not name:
            continue
        services.append(
            {
                "name": name,
                "description": _localized(card.get("subtitle"), language),
                "emoji": emoji_for(name),
            }
        )
    return services
