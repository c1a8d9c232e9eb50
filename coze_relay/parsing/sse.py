"""Server-Sent Events decoding for Coze chat responses.

The platform frames each record as one ``event:`` line followed by one or
more ``data:`` lines holding JSON. The event type stays in effect until the
next ``event:`` line, so it is attached to every ``data:`` line after it.
"""

import json
import logging
from typing import Any

from coze_relay.models.schemas import SSEEvent

logger = logging.getLogger(__name__)

EVENT_PREFIX = "event:"
DATA_PREFIX = "data:"


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(data: str) -> Any:
    """Parse strict JSON; NaN and Infinity raise ValueError."""
    return json.loads(data, parse_constant=_reject_constant)


def decode_events(text: str) -> list[SSEEvent]:
    """Decode a complete SSE body into events.

    Lines that are neither ``event:`` nor ``data:`` (blank separators,
    comments, ids) are ignored. A ``data:`` line whose value is not valid
    JSON, such as a keep-alive, is skipped without aborting the decode.

    Args:
        text: Raw response body.

    Returns:
        Events in stream order.
    """
    event_type = ""
    events: list[SSEEvent] = []

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if line.startswith(EVENT_PREFIX):
            event_type = line[len(EVENT_PREFIX):].strip()
        elif line.startswith(DATA_PREFIX):
            data = line[len(DATA_PREFIX):].strip()
            try:
                payload = parse_json(data)
            except ValueError:
                logger.debug(f"Skipping undecodable data line: {data[:200]!r}")
                continue
            events.append(SSEEvent(event_type=event_type, payload=payload))

    return events
