"""Conversation signal collection and the conversation-stage resolver."""

from typing import Iterable, Mapping, Optional, Sequence, Tuple

from .constants import (
    DATA_INTENTS,
    INTENT_PRICING,
    INTENT_SERVICES,
    INTENT_TEAM,
    STAGE_ASK_PERMISSION,
    STAGE_AWAITING_CONFIRMATION,
    STAGE_DISCOVERY,
    STAGE_GREETING,
    STAGE_PRICING_INFO,
    STAGE_READY_FOR_CONTACT,
    STAGE_SHOWING_INFO,
    STAGE_SHOWING_PROJECTS,
    STAGE_TEAM_INFO,
    TEMPLATE_ASK_BUDGET_TIMELINE,
    TEMPLATE_ASK_FEATURES,
    TEMPLATE_ASK_PERMISSION,
    TEMPLATE_ASK_PROJECT_TYPE,
    TEMPLATE_AWAITING_CONFIRMATION,
    TEMPLATE_CONTACT_READY,
    TEMPLATE_GREETING,
    TEMPLATE_KEEP_DISCOVERING,
    TEMPLATE_NO_MATCH,
    TEMPLATE_PRICING_UNAVAILABLE,
    TEMPLATE_SHOW_PRICING,
    TEMPLATE_SHOW_PROJECTS,
    TEMPLATE_SHOW_SERVICES,
    TEMPLATE_SHOW_TEAM,
)
from .detection.detectors import (
    detect_affirmation,
    detect_contact_request,
    detect_contact_solicitation,
    detect_data_request,
    detect_greeting,
)
from .detection.text_match import _contains_patterns
from .patterns import (
    BUDGET_PATTERNS,
    FEATURE_PATTERNS,
    GOAL_PATTERNS,
    PROJECT_TYPE_PATTERNS,
    TIMELINE_PATTERNS,
)
from .state import ConversationSignals, StageDecision, StagePolicy

Message = Mapping[str, str]


def collect_signals(messages: Iterable[Message]) -> ConversationSignals:
    """
    Scan every user message for project-type, feature, budget, timeline, and goal cues.

    Signals are sticky: one matching message anywhere in the conversation keeps the
    signal on, so appending messages can only turn signals on.
    Assistant turns are skipped; their questions would otherwise echo the topics back.
    """

    project_type = features = budget = timeline = goals = False
    for message in messages:
        if message.get("role") != "user":
            continue
        text = message.get("content") or ""
        project_type = project_type or _contains_patterns(text, PROJECT_TYPE_PATTERNS)
        features = features or _contains_patterns(text, FEATURE_PATTERNS)
        budget = budget or _contains_patterns(text, BUDGET_PATTERNS)
        timeline = timeline or _contains_patterns(text, TIMELINE_PATTERNS)
        goals = goals or _contains_patterns(text, GOAL_PATTERNS)

    return ConversationSignals(
        mentioned_project_type=project_type,
        mentioned_features=features,
        mentioned_budget=budget,
        mentioned_timeline=timeline,
        mentioned_goals=goals,
    )


def previous_assistant_message(history: Sequence[Message]) -> Optional[str]:
    """Return the content of the most recent assistant turn, if any."""
    for message in reversed(history):
        if message.get("role") == "assistant":
            return message.get("content") or ""
    return None


def is_greeting_turn(history: Sequence[Message], message: str, *, policy: StagePolicy) -> bool:
    return not history and detect_greeting(message, max_words=policy.greeting_max_words)


def agreed_after_solicitation(history: Sequence[Message], message: str) -> bool:
    """True only when the latest assistant turn asked for contact details and the user said yes."""
    previous = previous_assistant_message(history)
    if previous is None or not detect_contact_solicitation(previous):
        return False
    return detect_affirmation(message)


def wants_contact(history: Sequence[Message], message: str, signals: ConversationSignals) -> bool:
    if agreed_after_solicitation(history, message):
        return True
    return detect_contact_request(message) and signals.any_detail


def needs_content_fetch(
    history: Sequence[Message],
    message: str,
    intent: str,
    *,
    signals: Optional[ConversationSignals] = None,
    policy: Optional[StagePolicy] = None,
) -> bool:
    """
    A structured data intent or a loose catalog noun asks for content.

    Never on an opening greeting, and never when the turn opens the contact form;
    "yes, have your team contact me" mentions the team but is not a team lookup.
    """
    policy = policy or StagePolicy()
    if is_greeting_turn(history, message, policy=policy):
        return False
    if signals is None:
        signals = collect_signals([*history, {"role": "user", "content": message}])
    if wants_contact(history, message, signals):
        return False
    return intent in DATA_INTENTS or detect_data_request(message)


def pick_discovery_template(signals: ConversationSignals) -> str:
    """Return the single most useful clarifying question based on the missing signals."""

    if not signals.mentioned_project_type:
        return TEMPLATE_ASK_PROJECT_TYPE
    if not signals.mentioned_features:
        return TEMPLATE_ASK_FEATURES
    if not (signals.mentioned_budget and signals.mentioned_timeline):
        return TEMPLATE_ASK_BUDGET_TIMELINE
    return TEMPLATE_KEEP_DISCOVERING


def _content_template(intent: str) -> Tuple[str, str]:
    if intent == INTENT_PRICING:
        return TEMPLATE_SHOW_PRICING, STAGE_PRICING_INFO
    if intent == INTENT_TEAM:
        return TEMPLATE_SHOW_TEAM, STAGE_TEAM_INFO
    if intent == INTENT_SERVICES:
        return TEMPLATE_SHOW_SERVICES, STAGE_SHOWING_INFO
    return TEMPLATE_SHOW_PROJECTS, STAGE_SHOWING_PROJECTS


def resolve_stage(
    history: Sequence[Message],
    message: str,
    *,
    intent: str,
    has_content: bool,
    signals: ConversationSignals,
    policy: Optional[StagePolicy] = None,
) -> StageDecision:
    """
    Decide the content fetch, prompt template, and stage label for one turn.

    Rules are evaluated in priority order and the first one that applies wins:
    1. opening greeting, never fetches content
    2. user affirms right after the assistant solicited contact details
    3. user asks how to get in touch once at least one detail is known
    4. data request, with its found / pricing-missing / nothing-found variants
    5. enough details collected, so ask permission before collecting contact details
    6. progressive discovery, one clarifying question per turn

    The contact rules sit above the data rule so a contact message that happens to
    mention the team or a quote still opens the contact form.
    user_agreed is only reported for an affirmation that answers a contact solicitation.
    The result depends only on the arguments; nothing is stored between turns.
    """

    policy = policy or StagePolicy()
    user_agreed = agreed_after_solicitation(history, message)

    if is_greeting_turn(history, message, policy=policy):
        return StageDecision(False, TEMPLATE_GREETING, STAGE_GREETING, user_agreed)

    if user_agreed:
        return StageDecision(False, TEMPLATE_CONTACT_READY, STAGE_READY_FOR_CONTACT, user_agreed)

    if detect_contact_request(message) and signals.any_detail:
        return StageDecision(False, TEMPLATE_CONTACT_READY, STAGE_READY_FOR_CONTACT, user_agreed)

    if needs_content_fetch(history, message, intent, signals=signals, policy=policy):
        if has_content:
            template, stage = _content_template(intent)
        elif intent == INTENT_PRICING:
            template, stage = TEMPLATE_PRICING_UNAVAILABLE, STAGE_PRICING_INFO
        else:
            template, stage = TEMPLATE_NO_MATCH, STAGE_DISCOVERY
        return StageDecision(True, template, stage, user_agreed)

    details = signals.details_collected(merge_budget_timeline=policy.merge_budget_timeline)
    if details >= policy.details_threshold:
        previous = previous_assistant_message(history)
        if previous is not None and detect_contact_solicitation(previous):
            return StageDecision(False, TEMPLATE_AWAITING_CONFIRMATION, STAGE_AWAITING_CONFIRMATION, user_agreed)
        return StageDecision(False, TEMPLATE_ASK_PERMISSION, STAGE_ASK_PERMISSION, user_agreed)

    return StageDecision(False, pick_discovery_template(signals), STAGE_DISCOVERY, user_agreed)
