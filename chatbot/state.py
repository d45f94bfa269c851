"""Dataclasses for per-turn classification, conversation signals, and stage decisions."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class IntentMatch:
    """Result of intent extraction: one intent plus its keyword (possibly empty)."""

    intent: str
    keyword: str = ""


@dataclass(frozen=True)
class ConversationSignals:
    """Sticky topic cues collected from every user message seen so far."""

    mentioned_project_type: bool = False
    mentioned_features: bool = False
    mentioned_budget: bool = False
    mentioned_timeline: bool = False
    mentioned_goals: bool = False

    @property
    def any_detail(self) -> bool:
        return (
            self.mentioned_project_type
            or self.mentioned_features
            or self.mentioned_budget
            or self.mentioned_timeline
            or self.mentioned_goals
        )

    def details_collected(self, *, merge_budget_timeline: bool = False) -> int:
        if merge_budget_timeline:
            flags = [
                self.mentioned_project_type,
                self.mentioned_features,
                self.mentioned_budget or self.mentioned_timeline,
                self.mentioned_goals,
            ]
        else:
            flags = [
                self.mentioned_project_type,
                self.mentioned_features,
                self.mentioned_budget,
                self.mentioned_timeline,
                self.mentioned_goals,
            ]
        return sum(1 for flag in flags if flag)


@dataclass(frozen=True)
class StagePolicy:
    """Tunable thresholds for the stage resolver."""

    details_threshold: int = 2
    greeting_max_words: int = 3
    merge_budget_timeline: bool = False


@dataclass(frozen=True)
class StageDecision:
    """What the resolver decided for this turn."""

    needs_content_fetch: bool
    prompt_template: str
    stage_label: str
    user_agreed: bool = False


@dataclass
class TurnResult:
    """Reply plus the metadata block returned to the caller."""

    reply: str
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class FetchedContent:
    """Formatted content-store data for a single turn."""

    kind: str
    text: Optional[str] = None
    records: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def has_content(self) -> bool:
        return bool(self.text)
