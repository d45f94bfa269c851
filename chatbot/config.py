"""Configuration helpers shared by the API, the CLI, and the turn orchestrator."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from .state import StagePolicy

load_dotenv()

SANITY_URL_TEMPLATE = "https://{project_id}.api.sanity.io/v{api_version}/data/query/{dataset}"
TELEGRAM_API_URL = "https://api.telegram.org"


def _coerce_int(value: Optional[str], fallback: int) -> int:
    try:
        return int(value) if value is not None else fallback
    except ValueError:
        return fallback


def _coerce_float(value: Optional[str], fallback: float) -> float:
    try:
        return float(value) if value is not None else fallback
    except ValueError:
        return fallback


def _coerce_bool(value: Optional[str], fallback: bool) -> bool:
    if value is None:
        return fallback
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _split_origins(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ("*",)
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


@dataclass(frozen=True)
class AppConfig:
    """Holds runtime settings, built once at start-up and passed to every collaborator."""

    sanity_project_id: Optional[str] = None
    sanity_dataset: str = "production"
    sanity_api_version: str = "2021-10-21"
    sanity_api_url_override: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    chat_model: str = "mistralai/mistral-7b-instruct"
    temperature: float = 0.6
    max_tokens: int = 200
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    request_timeout_seconds: float = 15.0
    port: int = 3001
    log_level: str = "INFO"
    allowed_origins: Tuple[str, ...] = ("*",)
    history_window: int = 8
    max_message_length: int = 4000
    company_name: str = "Symloop"
    chat_rate_limit: str = "30/minute"
    contact_rate_limit: str = "10/hour"
    stage_policy: StagePolicy = StagePolicy()

    @property
    def sanity_api_url(self) -> Optional[str]:
        if self.sanity_api_url_override:
            return self.sanity_api_url_override
        if not self.sanity_project_id or not self.sanity_dataset:
            return None
        return SANITY_URL_TEMPLATE.format(
            project_id=self.sanity_project_id,
            api_version=self.sanity_api_version.lstrip("v"),
            dataset=self.sanity_dataset,
        )


def load_app_config() -> AppConfig:
    """Load configuration from .env with safe defaults; missing credentials never raise."""

    stage_policy = StagePolicy(
        details_threshold=_coerce_int(os.getenv("DETAILS_THRESHOLD"), 2),
        greeting_max_words=_coerce_int(os.getenv("GREETING_MAX_WORDS"), 3),
        merge_budget_timeline=_coerce_bool(os.getenv("MERGE_BUDGET_TIMELINE"), False),
    )

    return AppConfig(
        sanity_project_id=os.getenv("SANITY_PROJECT_ID"),
        sanity_dataset=os.getenv("SANITY_DATASET", "production"),
        sanity_api_version=os.getenv("SANITY_API_VERSION", "2021-10-21"),
        sanity_api_url_override=os.getenv("SANITY_API_URL"),
        openrouter_api_key=os.getenv("OPENROUTER_API_KEY"),
        openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
        chat_model=os.getenv("OPENROUTER_MODEL", "mistralai/mistral-7b-instruct"),
        temperature=_coerce_float(os.getenv("GENERATION_TEMPERATURE"), 0.6),
        max_tokens=_coerce_int(os.getenv("GENERATION_MAX_TOKENS"), 200),
        telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN"),
        telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID"),
        request_timeout_seconds=_coerce_float(os.getenv("REQUEST_TIMEOUT_SECONDS"), 15.0),
        port=_coerce_int(os.getenv("PORT"), 3001),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS")),
        history_window=_coerce_int(os.getenv("HISTORY_WINDOW"), 8),
        max_message_length=_coerce_int(os.getenv("MAX_MESSAGE_LENGTH"), 4000),
        company_name=os.getenv("COMPANY_NAME", "Symloop"),
        chat_rate_limit=f"{_coerce_int(os.getenv('RATE_LIMIT_CHAT_PER_MINUTE'), 30)}/minute",
        contact_rate_limit=f"{_coerce_int(os.getenv('RATE_LIMIT_CONTACT_PER_HOUR'), 10)}/hour",
        stage_policy=stage_policy,
    )
