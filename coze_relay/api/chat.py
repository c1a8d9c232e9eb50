"""Chat endpoint.

Forwards a query (and optional image reference) to the Coze platform,
waits for the streamed reply to finish, and returns one assembled answer.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from coze_relay.models.schemas import ChatAnswer, ChatRequest, ErrorResponse
from coze_relay.parsing.answer import assemble_answer
from coze_relay.upstream.client import CozeClient, get_coze_client
from coze_relay.upstream.errors import UpstreamError, UpstreamStatusError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatAnswer,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request: ChatRequest,
    client: CozeClient = Depends(get_coze_client),
) -> ChatAnswer | Response:
    """Relay a chat query and return the assembled answer.

    Upstream logical failures (rejected token, exhausted quota) come back
    as a normal answer containing a diagnostic. A non-success HTTP status
    from the platform is relayed as-is.

    Args:
        request: Query, optional user id and optional uploaded file id.
        client: Coze client.

    Returns:
        ChatAnswer, or the platform's own error response.
    """
    logger.info(
        f"Received chat request: query={request.query!r} "
        f"user={request.user!r} file_id={request.file_id!r}"
    )

    user_id = request.user or client.config.default_user_id

    try:
        raw_body = await client.send_chat(
            bot_id=client.config.bot_id,
            user_id=user_id,
            messages=request.to_upstream_messages(),
        )
    except UpstreamStatusError as e:
        return Response(content=e.text, status_code=e.status_code, media_type="text/plain")
    except UpstreamError as e:
        logger.error(f"Chat relay failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    return assemble_answer(raw_body, request.query)
