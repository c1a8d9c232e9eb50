import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_IMAGE_PROMPT = "Analyze this image"


class UpstreamMessage(BaseModel):
    """A single chat turn sent to the Coze platform.

    Attributes:
        role: Speaker of the turn. The relay only ever sends user turns.
        content_type: "text" for plain queries, "object_string" for
            multimodal content encoded as a JSON array.
        content: The query text or the JSON-encoded content parts.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["user"] = "user"
    content_type: Literal["text", "object_string"]
    content: str

    @classmethod
    def text(cls, query: str) -> "UpstreamMessage":
        """Build a plain text message."""
        return cls(content_type="text", content=query)

    @classmethod
    def with_image(cls, query: str, file_id: str) -> "UpstreamMessage":
        """Build a text + image message referencing a previously uploaded file."""
        parts = [
            {"type": "text", "text": query or DEFAULT_IMAGE_PROMPT},
            {"type": "image", "file_id": file_id},
        ]
        return cls(
            content_type="object_string",
            content=json.dumps(parts, ensure_ascii=False, separators=(",", ":")),
        )


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        query: User's question. May be blank only when an image is attached.
        user: Optional upstream user identifier.
        file_id: Optional identifier returned by a previous upload.
    """

    query: str
    user: str | None = None
    file_id: str | None = None

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, v: str) -> str:
        """Strip whitespace from query before validation."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("user", "file_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty optional identifiers as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def require_query_or_image(self) -> "ChatRequest":
        """Reject a blank query unless an image carries the request."""
        if not self.query and not self.file_id:
            raise ValueError("query must not be empty")
        return self

    def to_upstream_messages(self) -> list[UpstreamMessage]:
        """Build the additional_messages list for the Coze chat call."""
        if self.file_id:
            return [UpstreamMessage.with_image(self.query, self.file_id)]
        return [UpstreamMessage.text(self.query)]


class SSEEvent(BaseModel):
    """One decoded SSE record.

    Attributes:
        event_type: Value of the most recent ``event:`` line ("" if none yet).
        payload: Parsed JSON value of the ``data:`` line.
    """

    model_config = ConfigDict(frozen=True)

    event_type: str
    payload: Any


class ChatAnswer(BaseModel):
    """Assembled answer returned to the browser.

    Attributes:
        answer: Final answer text or a human-readable diagnostic.
        events: Every decoded upstream event, kept for debugging.
    """

    answer: str
    events: list[SSEEvent] = Field(default_factory=list)


class UploadResponse(BaseModel):
    """Response after forwarding a file to the Coze platform.

    Attributes:
        file_id: Identifier assigned by the platform.
        url: Optional file URL ("" when the platform returns none).
    """

    file_id: str
    url: str = ""


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint."""

    error: str
