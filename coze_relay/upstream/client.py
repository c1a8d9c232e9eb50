"""Coze platform client for file upload and streamed chat.

The client holds configuration only. Each call opens its own
``httpx.AsyncClient`` and makes exactly one attempt; nothing is retried.
Chat responses are streamed by the platform but read to completion
before being returned, so callers always see the full SSE body.
"""

import logging
from typing import Any

import httpx

from coze_relay.models.schemas import UploadResponse, UpstreamMessage
from coze_relay.upstream.config import UpstreamConfig, get_upstream_config
from coze_relay.upstream.errors import (
    UpstreamError,
    UpstreamStatusError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)


class CozeClient:
    """Thin async wrapper around the two Coze endpoints the relay uses."""

    def __init__(
        self,
        config: UpstreamConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional upstream configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, used to fake the platform.
        """
        self._config = config or get_upstream_config()
        self._transport = transport

    @property
    def config(self) -> UpstreamConfig:
        return self._config

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport)

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._config.api_key}"}

    async def upload_file(
        self,
        content: bytes,
        filename: str,
        content_type: str,
    ) -> UploadResponse:
        """Upload a file and return the identifier the platform assigned.

        Args:
            content: Raw file bytes.
            filename: Original filename, forwarded to the platform.
            content_type: MIME type of the file.

        Returns:
            UploadResponse with file_id and (possibly empty) url.

        Raises:
            UpstreamTransportError: The platform could not be reached.
            UpstreamStatusError: The platform answered with a non-success status.
            UpstreamError: The body is not JSON or carries a non-zero code.
        """
        logger.info(
            f"Uploading to Coze: {self._config.upload_url} ({filename}, {len(content)} bytes)"
        )

        async with self._http_client() as client:
            try:
                response = await client.post(
                    self._config.upload_url,
                    headers=self._auth_headers(),
                    files={"file": (filename, content, content_type)},
                )
            except httpx.RequestError as e:
                logger.error(f"Coze upload request failed: {e}")
                raise UpstreamTransportError(f"Coze upload request failed: {e}") from e

        if not response.is_success:
            logger.error(f"Coze upload error: {response.status_code} {response.text}")
            raise UpstreamStatusError(response.status_code, response.text)

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            logger.error(f"Coze upload returned non-JSON body: {response.text[:500]}")
            raise UpstreamError("Coze upload returned an invalid response") from e

        logger.debug(f"Coze upload response: {data}")

        if not isinstance(data, dict) or data.get("code") != 0:
            msg = data.get("msg", "unknown error") if isinstance(data, dict) else "unknown error"
            logger.error(f"Coze upload failed: {data}")
            raise UpstreamError(f"Coze upload failed: {msg}")

        file_data = data.get("data") or {}
        file_id = file_data.get("id")
        if not file_id:
            raise UpstreamError("Coze upload failed: response carries no file id")

        return UploadResponse(file_id=str(file_id), url=file_data.get("url") or "")

    async def send_chat(
        self,
        bot_id: str,
        user_id: str,
        messages: list[UpstreamMessage],
    ) -> str:
        """Start a streamed chat and return the complete SSE body.

        Args:
            bot_id: Bot that should answer.
            user_id: Platform user the conversation belongs to.
            messages: Turns to append to the conversation.

        Returns:
            The full response body as text.

        Raises:
            UpstreamTransportError: The platform could not be reached.
            UpstreamStatusError: The platform answered with a non-success status.
        """
        request_body = {
            "bot_id": bot_id,
            "user_id": user_id,
            "additional_messages": [m.model_dump() for m in messages],
            "stream": True,
            "auto_save_history": True,
        }
        logger.info(f"Calling Coze chat API (streaming): {self._config.chat_url}")
        logger.debug(f"Chat request body: {request_body}")

        async with self._http_client() as client:
            try:
                response = await client.post(
                    self._config.chat_url,
                    headers=self._auth_headers(),
                    json=request_body,
                )
            except httpx.RequestError as e:
                logger.error(f"Coze chat request failed: {e}")
                raise UpstreamTransportError(f"Coze chat request failed: {e}") from e

        if not response.is_success:
            logger.error(f"Coze API error: {response.status_code} {response.text}")
            raise UpstreamStatusError(response.status_code, response.text)

        text = response.text
        logger.info(f"Stream finished. Response length: {len(text)}")
        return text


# Module-level singleton instance
_coze_client: CozeClient | None = None


def get_coze_client() -> CozeClient:
    """Get or create the global Coze client.

    Returns:
        The CozeClient instance.
    """
    global _coze_client
    if _coze_client is None:
        _coze_client = CozeClient()
    return _coze_client
