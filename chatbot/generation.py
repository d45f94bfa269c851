"""Text-generation collaborator backed by an OpenAI-compatible chat completions API."""

from __future__ import annotations

import logging
from typing import List, Optional

from openai import OpenAI, OpenAIError

from .config import AppConfig
from .constants import GENERATION_STOP_SEQUENCES
from .errors import GenerationError

logger = logging.getLogger(__name__)


class TextGenerator:
    """Sends one system + one user message and returns the completion text."""

    def __init__(
        self,
        client: Optional[OpenAI],
        model: str,
        *,
        temperature: float = 0.6,
        max_tokens: int = 200,
        stop: Optional[List[str]] = None,
    ) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.stop = list(GENERATION_STOP_SEQUENCES) if stop is None else stop

    @classmethod
    def from_config(cls, config: AppConfig) -> "TextGenerator":
        client = None
        if config.openrouter_api_key:
            client = OpenAI(
                api_key=config.openrouter_api_key,
                base_url=config.openrouter_base_url,
                timeout=config.request_timeout_seconds,
                max_retries=0,
            )
        else:
            logger.warning("OPENROUTER_API_KEY is not set; chat replies will fail until it is configured.")
        return cls(client, config.chat_model, temperature=config.temperature, max_tokens=config.max_tokens)

    @property
    def configured(self) -> bool:
        return self.client is not None

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        if not self.configured:
            raise GenerationError("Generation service is not configured")

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature if temperature is None else temperature,
                max_tokens=self.max_tokens if max_tokens is None else max_tokens,
                stop=self.stop,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except OpenAIError as exc:
            logger.error(f"Generation request failed: {exc}")
            raise GenerationError("Generation request failed", details={"upstream": str(exc)}) from exc

        if not completion.choices:
            raise GenerationError("Generation service returned no choices")
        content = completion.choices[0].message.content or ""
        reply = content.strip()
        if not reply:
            raise GenerationError("Generation service returned an empty reply")
        return reply
