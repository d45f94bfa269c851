"""Stateless turn orchestrator tying classification, content, stage resolution and generation together."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from content.formatter import format_content
from content.query import build_query
from content.store import ContentStore
from prompts.prompt import (
    SUMMARY_SYSTEM_PROMPT,
    build_summary_prompt,
    build_system_prompt,
    build_turn_prompt,
    render_history,
)

from .config import AppConfig
from .constants import (
    DEFAULT_LANGUAGE,
    EMPTY_MESSAGE_REPLIES,
    INTENT_PRICING,
    INTENT_TEAM,
    STAGE_ASK_PERMISSION,
)
from .detection.detectors import detect_language, detect_service_type, extract_intent
from .errors import GenerationError
from .generation import TextGenerator
from .inference import collect_signals, needs_content_fetch, resolve_stage
from .state import FetchedContent, StagePolicy, TurnResult

logger = logging.getLogger(__name__)

Conversation = Union[Sequence[Mapping[str, Any]], str, None]

FALLBACK_SUMMARY_MESSAGES = 5
NO_SUMMARY_TEXT = "No conversation summary provided."


def _clean_history(history: Optional[Sequence[Mapping[str, Any]]]) -> List[Dict[str, str]]:
    cleaned = []
    for message in history or []:
        role = message.get("role")
        content = message.get("content")
        if role not in ("user", "assistant") or not isinstance(content, str):
            continue
        cleaned.append({"role": role, "content": content})
    return cleaned


class ChatAgent:
    """Runs one chat turn from the full client-supplied history; nothing is kept between calls."""

    def __init__(
        self,
        generator: TextGenerator,
        content_store: Optional[ContentStore] = None,
        *,
        policy: Optional[StagePolicy] = None,
        history_window: int = 8,
        company_name: str = "Symloop",
    ) -> None:
        self.generator = generator
        self.content_store = content_store
        self.policy = policy or StagePolicy()
        self.history_window = history_window
        self.company_name = company_name

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        content_store: Optional[ContentStore] = None,
        generator: Optional[TextGenerator] = None,
    ) -> "ChatAgent":
        return cls(
            generator or TextGenerator.from_config(config),
            content_store or ContentStore.from_config(config),
            policy=config.stage_policy,
            history_window=config.history_window,
            company_name=config.company_name,
        )

    def respond(self, message: str, history: Optional[Sequence[Mapping[str, Any]]] = None) -> TurnResult:
        """
        Produce the reply and stage metadata for one user message.

        Raises:
            GenerationError: If the generation service fails; content-store failures never raise.
        """

        text = (message or "").strip()
        if not text:
            return TurnResult(EMPTY_MESSAGE_REPLIES[DEFAULT_LANGUAGE])

        history = _clean_history(history)
        language = detect_language(text)
        match = extract_intent(text)
        service_type = detect_service_type(text)
        signals = collect_signals([*history, {"role": "user", "content": text}])

        content = FetchedContent(kind=match.intent)
        if needs_content_fetch(history, text, match.intent, signals=signals, policy=self.policy):
            content = self._fetch_content(match.intent, match.keyword, language, service_type)

        decision = resolve_stage(
            history,
            text,
            intent=match.intent,
            has_content=content.has_content,
            signals=signals,
            policy=self.policy,
        )
        details = signals.details_collected(merge_budget_timeline=self.policy.merge_budget_timeline)
        logger.info(
            f"Turn: language={language} intent={match.intent} keyword={match.keyword!r} "
            f"service={service_type} stage={decision.stage_label} details={details}"
        )

        window = history[-self.history_window :] if self.history_window > 0 else []
        reply = self.generator.generate(
            build_system_prompt(language, self.company_name),
            build_turn_prompt(
                decision.prompt_template,
                text,
                window,
                content=content.text,
                service_type=service_type,
            ),
        )

        is_project_data = match.intent not in (INTENT_PRICING, INTENT_TEAM)
        metadata = {
            "language": language,
            "intent": match.intent,
            "detectedService": service_type,
            "projectsFound": len(content.records) if is_project_data else 0,
            "hasPricingData": match.intent == INTENT_PRICING and content.has_content,
            "hasTeamData": match.intent == INTENT_TEAM and content.has_content,
            "conversationStage": decision.stage_label,
            "detailsCollected": details,
            "userAgreed": decision.user_agreed,
            "askedForContactPermission": decision.stage_label == STAGE_ASK_PERMISSION,
        }
        return TurnResult(reply, metadata)

    def _fetch_content(self, intent: str, keyword: str, language: str, service_type: Optional[str]) -> FetchedContent:
        if self.content_store is None or not self.content_store.configured:
            logger.warning("Content store is not configured; answering without data.")
            return FetchedContent(kind=intent)

        result = self.content_store.fetch(build_query(intent, keyword, language))
        if isinstance(result, list):
            records = [record for record in result if isinstance(record, dict)]
        elif isinstance(result, dict):
            records = [result]
        else:
            records = []
        logger.info(f"Content store returned {len(records)} record(s) for intent={intent}")
        return FetchedContent(kind=intent, text=format_content(intent, result, language, service_type), records=records)

    def summarize_contact(self, conversation: Conversation, *, selected_service: Optional[str] = None) -> str:
        """Ask the generation service for a needs summary, falling back to the last user messages."""

        transcript = conversation_transcript(conversation)
        if not transcript:
            return NO_SUMMARY_TEXT
        try:
            return self.generator.generate(
                SUMMARY_SYSTEM_PROMPT,
                build_summary_prompt(transcript, selected_service),
                temperature=0.3,
                max_tokens=300,
            )
        except GenerationError as exc:
            logger.warning(f"Summary generation failed, using fallback summary: {exc.message}")
            return fallback_summary(conversation)


def conversation_transcript(conversation: Conversation) -> str:
    if conversation is None:
        return ""
    if isinstance(conversation, str):
        return conversation.strip()
    return render_history(_clean_history(conversation))


def fallback_summary(conversation: Conversation) -> str:
    """Deterministic summary: the most recent user messages as bullet points."""
    if isinstance(conversation, str):
        return conversation.strip() or NO_SUMMARY_TEXT
    user_messages = [message["content"].strip() for message in _clean_history(conversation) if message["role"] == "user"]
    user_messages = [text for text in user_messages if text]
    if not user_messages:
        return NO_SUMMARY_TEXT
    return "\n".join(f"- {text}" for text in user_messages[-FALLBACK_SUMMARY_MESSAGES:])


def format_contact_notification(
    name: str,
    email: str,
    phone: str,
    summary: str,
    *,
    selected_service: Optional[str] = None,
) -> str:
    lines = [
        "🆕 New contact request",
        f"👤 Name: {name}",
        f"📧 Email: {email}",
        f"📱 Phone: {phone}",
    ]
    if selected_service:
        lines.append(f"🛠 Service: {selected_service}")
    lines.append("")
    lines.append("📝 Summary:")
    lines.append(summary)
    return "\n".join(lines)
