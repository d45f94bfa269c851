"""Parameterized GROQ query builder mapping (intent, keyword, language) to content-store queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from chatbot.constants import (
    CATEGORY_LIMIT,
    FEATURED_LIMIT,
    GENERAL_LIMIT,
    INTENT_CATEGORY,
    INTENT_DETAILS,
    INTENT_EXAMPLES,
    INTENT_FEATURED,
    INTENT_LIST_ALL,
    INTENT_PRICING,
    INTENT_SEARCH,
    INTENT_SERVICES,
    INTENT_TEAM,
    LANGUAGES,
    LIST_LIMIT,
    SEARCH_LIMIT,
)

PROJECT_PROJECTION = """{
  title,
  description,
  category,
  featured,
  projectId,
  "slug": slug.current,
  "imageUrl": image.asset->url
}"""

DETAILED_PROJECT_PROJECTION = """{
  title,
  description,
  category,
  featured,
  projectId,
  "slug": slug.current,
  "imageUrl": image.asset->url,
  "mainImageUrl": mainImage.asset->url,
  projectDetails {
    content,
    features,
    info,
    tags
  }
}"""

PRICING_QUERY = """*[_type == "pricingSection"][0] {
  title,
  subtitle,
  "cards": cards[] {
    title,
    subtitle,
    price,
    currency,
    period,
    popular,
    features,
    ctaText
  }
}"""

TEAM_QUERY = """*[_type == "aboutSection"][0] {
  title,
  subtitle,
  content,
  info[] {
    label,
    value
  },
  "members": team[] {
    name,
    role,
    bio
  }
}"""

PROJECT_COUNT_QUERY = 'count(*[_type == "project"])'

ORDERING = "order(order asc, _createdAt desc)"


@dataclass(frozen=True)
class GroqQuery:
    """A GROQ expression plus the parameters bound to it; user text only ever travels in params."""

    query: str
    params: Dict[str, str] = field(default_factory=dict)

    def param_items(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(sorted(self.params.items()))


def _language_order(language: str) -> Tuple[str, ...]:
    """Detected language first, then the remaining languages in their fixed order."""
    others = tuple(code for code in ("en", "fr", "ar") if code != language)
    return (language,) + others if language in LANGUAGES else ("en", "fr", "ar")


def _match_clauses(fields: Tuple[str, ...], language: str) -> str:
    clauses = [f"{name}.{code} match $pattern" for name in fields for code in _language_order(language)]
    return " ||\n    ".join(clauses)


def _clean_keyword(keyword: str) -> str:
    return " ".join(keyword.replace("*", " ").split())


def _project_list(limit: int, *, featured_only: bool = False, detailed: bool = False) -> str:
    condition = '_type == "project"'
    if featured_only:
        condition += " && featured == true"
    projection = DETAILED_PROJECT_PROJECTION if detailed else PROJECT_PROJECTION
    return f"*[{condition}] | {ORDERING} [0...{limit}] {projection}"


def build_query(intent: str, keyword: str, language: str) -> GroqQuery:
    """
    Map an intent to a bounded content-store query.

    The keyword is bound as the $pattern parameter and never spliced into the query text,
    so identical inputs always yield identical queries.
    """

    cleaned = _clean_keyword(keyword or "")

    if intent == INTENT_PRICING:
        return GroqQuery(PRICING_QUERY)
    if intent == INTENT_TEAM:
        return GroqQuery(TEAM_QUERY)
    if intent in (INTENT_LIST_ALL, INTENT_SERVICES):
        return GroqQuery(_project_list(LIST_LIMIT))
    if intent in (INTENT_FEATURED, INTENT_EXAMPLES):
        return GroqQuery(_project_list(FEATURED_LIMIT, featured_only=True, detailed=True))

    if intent == INTENT_CATEGORY and cleaned:
        query = (
            f'*[_type == "project" && (\n    {_match_clauses(("category",), language)}\n  )]'
            f" | {ORDERING} [0...{CATEGORY_LIMIT}] {DETAILED_PROJECT_PROJECTION}"
        )
        return GroqQuery(query, {"pattern": f"*{cleaned}*"})

    if intent in (INTENT_DETAILS, INTENT_SEARCH) and cleaned:
        clauses = _match_clauses(("title", "description", "category"), language)
        query = (
            f'*[_type == "project" && (\n    {clauses} ||\n    projectId match $pattern ||\n'
            f"    projectDetails.tags[] match $pattern\n  )]"
            f" | {ORDERING} [0...{SEARCH_LIMIT}] {DETAILED_PROJECT_PROJECTION}"
        )
        return GroqQuery(query, {"pattern": f"*{cleaned}*"})

    return GroqQuery(_project_list(GENERAL_LIMIT))
