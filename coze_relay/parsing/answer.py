"""Answer assembly from a decoded Coze chat stream.

Rules, applied in order:

1. A body that is a single JSON object with a non-zero ``code`` is an
   upstream rejection (bad token, unknown bot). It short-circuits into a
   demo-mode diagnostic and the SSE decoder never runs.
2. ``conversation.message.delta`` answer fragments are concatenated.
3. ``conversation.message.completed`` only fills the answer when no delta
   produced content, since it restates the full message.
4. ``conversation.chat.failed`` with a non-zero error code replaces
   whatever was assembled so far.
5. An answer that is still empty becomes ``NO_RESPONSE``.
"""

import logging
from typing import Any

from coze_relay.models.schemas import ChatAnswer, SSEEvent
from coze_relay.parsing.sse import decode_events, parse_json

logger = logging.getLogger(__name__)

MESSAGE_DELTA = "conversation.message.delta"
MESSAGE_COMPLETED = "conversation.message.completed"
CHAT_FAILED = "conversation.chat.failed"

ANSWER_TYPE = "answer"
NO_RESPONSE = "No response generated"


def demo_mode_answer(code: Any, msg: Any, query: str) -> str:
    """Diagnostic shown when the platform rejects the whole request."""
    return (
        "**[System notice: demo mode]**\n\n"
        f"The Coze API call failed (code: {code}, message: {msg}).\n\n"
        "The reply below is placeholder content:\n\n"
        f'For your question **"{query}"** the assistant would normally answer '
        "from its knowledge base. Check that `COZE_API_KEY` and `COZE_BOT_ID` "
        "are set correctly in the server's `.env` file."
    )


def chat_failed_answer(code: Any, msg: Any) -> str:
    """Diagnostic shown when the platform aborts a chat mid-stream."""
    return (
        "**[System notice: service limited]**\n\n"
        f"The Coze API returned an error (code: {code}): {msg}\n\n"
        "This usually means the account balance is insufficient or the quota "
        "is exhausted. Check the status of your Coze account."
    )


def mend_surrogates(text: str) -> str:
    """Rejoin UTF-16 surrogate halves and replace any that stay unpaired.

    JSON \\u escapes let the platform split an emoji across two deltas, so
    each half decodes to a lone surrogate that UTF-8 cannot encode.
    """
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


def _mend_payload(value: Any) -> Any:
    if isinstance(value, str):
        return mend_surrogates(value)
    if isinstance(value, list):
        return [_mend_payload(item) for item in value]
    if isinstance(value, dict):
        return {mend_surrogates(str(k)): _mend_payload(v) for k, v in value.items()}
    return value


def detect_error_body(raw_body: str) -> dict[str, Any] | None:
    """Return the error object if the body is a bare JSON rejection.

    Args:
        raw_body: Raw upstream response body.

    Returns:
        The parsed object when it carries a truthy, non-zero ``code``,
        otherwise None.
    """
    stripped = raw_body.strip()
    if not stripped.startswith("{"):
        return None

    try:
        parsed = parse_json(stripped)
    except ValueError:
        # Not a single JSON document, let the SSE decoder handle it
        return None

    if isinstance(parsed, dict) and parsed.get("code"):
        return parsed
    return None


def _apply_event(answer: str, event: SSEEvent) -> str:
    payload = event.payload
    if not isinstance(payload, dict):
        return answer

    if event.event_type == MESSAGE_DELTA:
        content = payload.get("content")
        if payload.get("type") == ANSWER_TYPE and content:
            return answer + str(content)

    elif event.event_type == MESSAGE_COMPLETED:
        if payload.get("type") == ANSWER_TYPE and not answer:
            return str(payload.get("content") or "")

    elif event.event_type == CHAT_FAILED:
        last_error = payload.get("last_error")
        if isinstance(last_error, dict) and last_error.get("code") != 0:
            logger.warning(f"Coze chat failed: {last_error}")
            return chat_failed_answer(last_error.get("code"), last_error.get("msg"))

    return answer


def assemble_events(events: list[SSEEvent]) -> str:
    """Fold decoded events into the final answer text.

    Args:
        events: Decoded events in stream order.

    Returns:
        The assembled answer, a diagnostic, or ``NO_RESPONSE``.
    """
    answer = ""
    for event in events:
        answer = _apply_event(answer, event)
    return answer or NO_RESPONSE


def assemble_answer(raw_body: str, query: str) -> ChatAnswer:
    """Turn a complete upstream chat body into a ChatAnswer.

    Args:
        raw_body: Full response body returned by the chat endpoint.
        query: The user's original query, quoted in demo-mode diagnostics.

    Returns:
        ChatAnswer whose answer is never empty.
    """
    error_body = detect_error_body(raw_body)
    if error_body is not None:
        logger.error(f"Coze API error response: {error_body}")
        return ChatAnswer(
            answer=mend_surrogates(
                demo_mode_answer(error_body.get("code"), error_body.get("msg"), query)
            ),
        )

    events = decode_events(raw_body)
    answer = mend_surrogates(assemble_events(events))
    logger.debug(f"Final answer ({len(events)} events): {answer}")
    return ChatAnswer(
        answer=answer,
        events=[
            SSEEvent(event_type=e.event_type, payload=_mend_payload(e.payload)) for e in events
        ],
    )
