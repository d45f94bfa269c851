"""HTTP client for the headless content store's GROQ query endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from chatbot.config import AppConfig
from chatbot.errors import ContentStoreError

from .query import GroqQuery

logger = logging.getLogger(__name__)


class ContentStore:
    """Runs GROQ queries against the content store with a bounded timeout and no retries."""

    def __init__(
        self,
        api_url: Optional[str],
        *,
        timeout: float = 15.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_url = api_url
        self.client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: AppConfig) -> "ContentStore":
        return cls(config.sanity_api_url, timeout=config.request_timeout_seconds)

    @property
    def configured(self) -> bool:
        return bool(self.api_url)

    @staticmethod
    def _request_params(groq: GroqQuery) -> Dict[str, str]:
        params = {"query": groq.query}
        for name, value in groq.param_items():
            params[f"${name}"] = json.dumps(value, ensure_ascii=False)
        return params

    def query(self, groq: GroqQuery) -> Any:
        """Return the `result` payload or raise ContentStoreError."""
        if not self.api_url:
            raise ContentStoreError("Content store is not configured")

        logger.debug(f"GROQ query: {groq.query[:100]}... params={groq.params}")
        try:
            response = self.client.get(self.api_url, params=self._request_params(groq))
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as exc:
            raise ContentStoreError("Content store timed out", details={"error": str(exc)}) from exc
        except httpx.HTTPError as exc:
            raise ContentStoreError("Content store request failed", details={"error": str(exc)}) from exc
        except ValueError as exc:
            raise ContentStoreError("Content store returned malformed JSON") from exc

        if not isinstance(body, dict) or "result" not in body:
            raise ContentStoreError("Content store response has no result", details={"body": str(body)[:200]})
        return body["result"]

    def fetch(self, groq: GroqQuery) -> Any:
        """Like query(), but degrades every failure to None so the conversation can carry on."""
        try:
            return self.query(groq)
        except ContentStoreError as exc:
            logger.warning(f"Content store unavailable, continuing without data: {exc.message} {exc.details}")
            return None
