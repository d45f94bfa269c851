"""Exception taxonomy for collaborator failures."""

from typing import Any, Dict, Optional


class AssistantError(Exception):
    """Base exception carrying a machine-readable code and optional details."""

    def __init__(self, message: str, error_code: str = "ASSISTANT_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ContentStoreError(AssistantError):
    """Content store unreachable, timed out, or returned an unusable payload."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONTENT_STORE_ERROR", details)


class GenerationError(AssistantError):
    """Text-generation service failed or returned nothing."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "GENERATION_ERROR", details)


class NotificationError(AssistantError):
    """Notification delivery failed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NOTIFICATION_ERROR", details)
