"""Telegram bot notifier used to forward contact-form submissions."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .config import TELEGRAM_API_URL, AppConfig
from .errors import NotificationError

logger = logging.getLogger(__name__)

TELEGRAM_MESSAGE_LIMIT = 4096


class TelegramNotifier:
    """Delivers plain-text messages to a single Telegram chat."""

    def __init__(
        self,
        bot_token: Optional[str],
        chat_id: Optional[str],
        *,
        timeout: float = 15.0,
        client: Optional[httpx.Client] = None,
        api_url: str = TELEGRAM_API_URL,
    ) -> None:
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_url = api_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: AppConfig) -> "TelegramNotifier":
        return cls(config.telegram_bot_token, config.telegram_chat_id, timeout=config.request_timeout_seconds)

    @property
    def configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    def notify(self, message: str) -> bool:
        """Send the message; return whether Telegram accepted it. Failures are logged, never raised."""
        if not self.configured:
            logger.warning("Telegram is not configured; skipping notification.")
            return False
        try:
            self._send(message[:TELEGRAM_MESSAGE_LIMIT])
        except NotificationError as exc:
            logger.error(f"Telegram notification failed: {exc.message} {exc.details}")
            return False
        logger.info("Telegram notification delivered")
        return True

    def _send(self, text: str) -> None:
        url = f"{self.api_url}/bot{self.bot_token}/sendMessage"
        payload = {"chat_id": self.chat_id, "text": text, "disable_web_page_preview": True}
        try:
            response = self.client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError("Telegram request failed", details={"error": str(exc)}) from exc

        if response.status_code >= 400:
            raise NotificationError(
                "Telegram rejected the message",
                details={"status": response.status_code, "body": response.text[:200]},
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise NotificationError("Telegram returned malformed JSON") from exc
        if not body.get("ok", False):
            raise NotificationError("Telegram reported failure", details={"description": body.get("description")})
