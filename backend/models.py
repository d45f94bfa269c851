"""Pydantic schemas for the FastAPI backend."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"] = Field(..., description="Who sent the message.")
    content: str = Field(..., description="Message text.")


class ChatRequest(BaseModel):
    message: str = Field("", description="User message text.")
    conversationHistory: List[ChatMessage] = Field(
        default_factory=list, description="Earlier turns, oldest first, resent by the client on every call."
    )


class ChatResponse(BaseModel):
    reply: str = Field(..., description="Assistant reply.")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Classification and conversation-stage details.")


class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    conversationSummary: Union[List[ChatMessage], str, None] = Field(
        None, description="Conversation messages or a free-text summary."
    )
    selectedService: Optional[str] = None


class ContactResponse(BaseModel):
    success: bool
    message: str
    notificationSent: Optional[bool] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    sanityConnected: bool
    telegramConfigured: bool


class ServiceItem(BaseModel):
    name: str
    description: str = ""
    emoji: str


class ServicesResponse(BaseModel):
    services: List[ServiceItem]
    source: Literal["content_store", "default"]
