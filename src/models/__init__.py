"""Pydantic models for relay requests, responses and provider payloads.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Role-tagged message sent to the provider
    - ChatRequest: Incoming text relay payload
    - ReplyResponse: Outgoing relay body ({"reply": ...})
    - CompletionResponse / FileObject: Expected provider response shapes
"""

from src.models.schemas import (
    ChatMessage,
    ChatRequest,
    CompletionResponse,
    FileObject,
    ReplyResponse,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "CompletionResponse",
    "FileObject",
    "ReplyResponse",
]
