"""FastAPI backend that exposes the chat assistant, contact intake, and service catalog over HTTP."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from chatbot.agent import ChatAgent, format_contact_notification
from chatbot.config import AppConfig, load_app_config
from chatbot.constants import CONTACT_RECEIVED_MESSAGE, DEFAULT_LANGUAGE, ERROR_REPLIES
from chatbot.detection.detectors import detect_language
from chatbot.diagnostics import run_content_sanity_check
from chatbot.errors import GenerationError
from chatbot.generation import TextGenerator
from chatbot.notifier import TelegramNotifier
from content.catalog import default_services, services_from_pricing
from content.query import PRICING_QUERY, GroqQuery
from content.store import ContentStore

from .middleware.rate_limit import build_limiter, rate_limit_exceeded_handler
from .models import (
    ChatRequest,
    ChatResponse,
    ContactRequest,
    ContactResponse,
    HealthResponse,
    ServicesResponse,
)

logger = logging.getLogger(__name__)

REQUIRED_CONTACT_FIELDS = ("name", "email", "phone")


def _error_reply(message: str) -> JSONResponse:
    language = detect_language(message) if message and message.strip() else DEFAULT_LANGUAGE
    return JSONResponse(status_code=500, content={"reply": ERROR_REPLIES[language], "metadata": None})


def create_app(
    config: Optional[AppConfig] = None,
    *,
    content_store: Optional[ContentStore] = None,
    generator: Optional[TextGenerator] = None,
    notifier: Optional[TelegramNotifier] = None,
    run_diagnostics: bool = False,
) -> FastAPI:
    """Build the application; collaborators default to the ones described by the configuration."""

    config = config or load_app_config()
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    content_store = content_store or ContentStore.from_config(config)
    notifier = notifier or TelegramNotifier.from_config(config)
    agent = ChatAgent.from_config(config, content_store=content_store, generator=generator)

    if run_diagnostics:
        run_content_sanity_check(content_store)
    if not notifier.configured:
        logger.warning("Telegram credentials missing; contact submissions will not be forwarded.")

    limiter = build_limiter()
    app = FastAPI(title=f"{config.company_name} Chat Assistant API", version="0.1.0")
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.allowed_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/chat", response_model=ChatResponse)
    @limiter.limit(config.chat_rate_limit)
    def chat(request: Request, payload: ChatRequest):
        if len(payload.message) > config.max_message_length:
            raise HTTPException(
                status_code=400,
                detail=f"Message too long. Maximum {config.max_message_length} characters allowed.",
            )

        history = [message.model_dump() for message in payload.conversationHistory]
        try:
            result = agent.respond(payload.message, history)
        except GenerationError as exc:
            logger.error(f"Chat turn failed: {exc.error_code} {exc.message} {exc.details}")
            return _error_reply(payload.message)
        except Exception:
            logger.exception("Unexpected error while handling chat turn")
            return _error_reply(payload.message)
        return ChatResponse(reply=result.reply, metadata=result.metadata)

    @app.post("/contact", response_model=ContactResponse)
    @limiter.limit(config.contact_rate_limit)
    def contact(request: Request, payload: ContactRequest):
        missing = [name for name in REQUIRED_CONTACT_FIELDS if not (getattr(payload, name) or "").strip()]
        if missing:
            return JSONResponse(
                status_code=400,
                content={"success": False, "message": f"Missing required fields: {', '.join(missing)}"},
            )

        conversation = payload.conversationSummary
        if isinstance(conversation, list):
            conversation = [message.model_dump() for message in conversation]
            logger.info(f"New contact submission from {payload.name} ({len(conversation)} messages)")
        else:
            logger.info(f"New contact submission from {payload.name} (text summary)")

        summary = agent.summarize_contact(conversation, selected_service=payload.selectedService)
        notification = format_contact_notification(
            payload.name.strip(),
            payload.email.strip(),
            payload.phone.strip(),
            summary,
            selected_service=payload.selectedService,
        )
        sent = notifier.notify(notification)
        if not sent:
            logger.warning(f"Contact from {payload.name} was received but not forwarded")
        return ContactResponse(success=True, message=CONTACT_RECEIVED_MESSAGE, notificationSent=sent)

    @app.get("/health", response_model=HealthResponse)
    def health_check() -> HealthResponse:
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
            sanityConnected=content_store.configured,
            telegramConfigured=notifier.configured,
        )

    @app.get("/services", response_model=ServicesResponse)
    def list_services() -> ServicesResponse:
        if content_store.configured:
            services = services_from_pricing(content_store.fetch(GroqQuery(PRICING_QUERY)))
            if services:
                return ServicesResponse(services=services, source="content_store")
        return ServicesResponse(services=default_services(), source="default")

    return app


def build_server_app() -> FastAPI:
    """uvicorn factory for the served process; importing this module builds nothing."""
    return create_app(run_diagnostics=True)
