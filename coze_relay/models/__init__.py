"""Pydantic models for API requests, responses and upstream payloads.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatRequest: Incoming chat request payload
    - UpstreamMessage: Chat turn forwarded to Coze
    - SSEEvent: Decoded upstream stream record
    - ChatAnswer: Outgoing assembled answer
    - UploadResponse: Uploaded file identifier
    - ErrorResponse: Error body
"""

from coze_relay.models.schemas import (
    ChatAnswer,
    ChatRequest,
    ErrorResponse,
    SSEEvent,
    UploadResponse,
    UpstreamMessage,
)

__all__ = [
    "ChatAnswer",
    "ChatRequest",
    "ErrorResponse",
    "SSEEvent",
    "UploadResponse",
    "UpstreamMessage",
]
