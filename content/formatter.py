"""Turn content-store records into plain-text context blocks for the generation prompt."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from chatbot.constants import (
    CONTENT_TRUNCATE_CHARS,
    INTENT_PRICING,
    INTENT_TEAM,
)


def _localized(value: Any, language: str) -> str:
    """Pick the detected-language value, falling back to English."""
    if isinstance(value, dict):
        picked = value.get(language) or value.get("en") or ""
        return picked if isinstance(picked, str) else str(picked)
    if value is None:
        return ""
    return str(value)


def _localized_list(value: Any, language: str) -> List[Any]:
    if isinstance(value, dict):
        picked = value.get(language) or value.get("en") or []
        return list(picked) if isinstance(picked, list) else []
    if isinstance(value, list):
        return value
    return []


def _truncate(text: str, limit: int = CONTENT_TRUNCATE_CHARS) -> str:
    cleaned = text.strip()
    if len(cleaned) <= limit:
        return cleaned
    return f"{cleaned[:limit].rstrip()}..."


def _portable_text(value: Any, language: str) -> str:
    """Flatten portable-text blocks (or a plain localized string) to text."""
    if isinstance(value, dict):
        value = value.get(language) or value.get("en")
    if isinstance(value, str):
        return value.strip()
    if not isinstance(value, list):
        return ""
    paragraphs = []
    for block in value:
        if not isinstance(block, dict) or block.get("_type") != "block":
            continue
        text = "".join(child.get("text", "") for child in block.get("children") or [] if isinstance(child, dict))
        if text:
            paragraphs.append(text)
    return "\n".join(paragraphs)


def _info_lines(items: Any, language: str) -> List[str]:
    lines = []
    for item in items if isinstance(items, list) else []:
        if not isinstance(item, dict):
            continue
        label = _localized(item.get("label"), language)
        value = _localized(item.get("value"), language)
        if label and value:
            lines.append(f"  • {label}: {value}")
    return lines


def format_projects(projects: Optional[Sequence[Dict[str, Any]]], language: str) -> Optional[str]:
    if not projects:
        return None

    blocks = []
    for index, project in enumerate(projects, start=1):
        lines = [
            f"--- Project {index} ---",
            f"Title: {_localized(project.get('title'), language) or 'N/A'}",
            f"Category: {_localized(project.get('category'), language) or 'N/A'}",
            f"Description: {_localized(project.get('description'), language) or 'N/A'}",
        ]
        if project.get("featured"):
            lines.append("Status: Featured Project ⭐")
        if project.get("projectId"):
            lines.append(f"Project ID: {project['projectId']}")

        details = project.get("projectDetails") or {}
        features = _localized_list(details.get("features"), language)
        if features:
            lines.append("Key Features:")
            lines.extend(f"  ✓ {feature}" for feature in features)
        info = _info_lines(details.get("info"), language)
        if info:
            lines.append("Project Information:")
            lines.extend(info)
        tags = [str(tag) for tag in details.get("tags") or [] if tag]
        if tags:
            lines.append(f"Tags: {', '.join(tags)}")
        content = _portable_text(details.get("content"), language)
        if content:
            lines.append(f"Content:\n{_truncate(content)}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def _card_names(card: Dict[str, Any]) -> List[str]:
    names = []
    for key in ("title", "subtitle"):
        value = card.get(key)
        if isinstance(value, dict):
            names.extend(str(text) for text in value.values() if text)
        elif value:
            names.append(str(value))
    return names


def filter_cards_for_service(
    cards: Sequence[Dict[str, Any]], service_type: Optional[str]
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Split pricing cards into (matching, others) for a detected service.

    Exact title/subtitle match first, then case-insensitive substring in either direction.
    No service, or no match at all, keeps every card.
    """
    cards = list(cards)
    if not service_type:
        return cards, []

    matched = [card for card in cards if service_type in _card_names(card)]
    if not matched:
        wanted = service_type.lower()
        matched = [
            card
            for card in cards
            if any(wanted in name.lower() or name.lower() in wanted for name in _card_names(card))
        ]
    if not matched:
        return cards, []
    others = [card for card in cards if card not in matched]
    return matched, others


def _price_line(card: Dict[str, Any], language: str) -> Optional[str]:
    price = _localized(card.get("price"), language)
    if not price:
        return None
    parts = [price, _localized(card.get("currency"), language), _localized(card.get("period"), language)]
    return "Price: " + " ".join(part for part in parts if part)


def format_pricing(
    section: Optional[Dict[str, Any]], language: str, service_type: Optional[str] = None
) -> Optional[str]:
    if not section:
        return None
    cards = section.get("cards") or []
    if not cards:
        return None

    selected, others = filter_cards_for_service(cards, service_type)
    lines = []
    title = _localized(section.get("title"), language)
    if title:
        lines.append(f"Pricing: {title}")
    subtitle = _localized(section.get("subtitle"), language)
    if subtitle:
        lines.append(subtitle)

    for index, card in enumerate(selected, start=1):
        lines.append(f"\n--- Package {index} ---")
        lines.append(f"Service: {_localized(card.get('title'), language) or 'N/A'}")
        card_subtitle = _localized(card.get("subtitle"), language)
        if card_subtitle:
            lines.append(f"Summary: {card_subtitle}")
        price = _price_line(card, language)
        if price:
            lines.append(price)
        if card.get("popular"):
            lines.append("Most popular ⭐")
        features = _localized_list(card.get("features"), language)
        if features:
            lines.append("Includes:")
            lines.extend(f"  ✓ {feature}" for feature in features)

    if others:
        names = [_localized(card.get("title"), language) for card in others]
        lines.append(f"\nOther available services: {', '.join(name for name in names if name)}")
    return "\n".join(lines).strip()


def format_team(section: Optional[Dict[str, Any]], language: str) -> Optional[str]:
    if not section:
        return None

    lines = []
    title = _localized(section.get("title"), language)
    if title:
        lines.append(f"About: {title}")
    subtitle = _localized(section.get("subtitle"), language)
    if subtitle:
        lines.append(subtitle)
    content = _portable_text(section.get("content"), language)
    if content:
        lines.append(f"Content:\n{_truncate(content)}")
    info = _info_lines(section.get("info"), language)
    if info:
        lines.append("Key Facts:")
        lines.extend(info)
    members = [member for member in section.get("members") or [] if isinstance(member, dict)]
    if members:
        lines.append("Team:")
        for member in members:
            name = _localized(member.get("name"), language)
            role = _localized(member.get("role"), language)
            if name:
                lines.append(f"  • {name}" + (f" ({role})" if role else ""))
    return "\n".join(lines) if lines else None


def format_content(intent: str, result: Any, language: str, service_type: Optional[str] = None) -> Optional[str]:
    """Dispatch on the query shape the intent produced."""
    if intent == INTENT_PRICING:
        return format_pricing(result if isinstance(result, dict) else None, language, service_type)
    if intent == INTENT_TEAM:
        return format_team(result if isinstance(result, dict) else None, language)
    return format_projects(result if isinstance(result, list) else None, language)
