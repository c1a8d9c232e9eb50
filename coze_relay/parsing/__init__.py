"""Chat stream parsing.

Transforms the platform's buffered SSE body into a single answer.

Responsibilities:
    - SSE line decoding into (event type, JSON payload) records
    - Answer assembly from delta, completed and failed events
    - Diagnostic text for upstream rejections
"""

from coze_relay.parsing.answer import NO_RESPONSE, assemble_answer, assemble_events
from coze_relay.parsing.sse import decode_events

__all__ = ["NO_RESPONSE", "assemble_answer", "assemble_events", "decode_events"]
