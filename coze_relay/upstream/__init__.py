"""Coze platform access.

Keeps the bearer credential on the server and exposes the two calls the
gateway needs: file upload and streamed chat.
"""

from coze_relay.upstream.client import CozeClient, get_coze_client
from coze_relay.upstream.config import UpstreamConfig, get_upstream_config
from coze_relay.upstream.errors import (
    UpstreamError,
    UpstreamStatusError,
    UpstreamTransportError,
)

__all__ = [
    "CozeClient",
    "UpstreamConfig",
    "UpstreamError",
    "UpstreamStatusError",
    "UpstreamTransportError",
    "get_coze_client",
    "get_upstream_config",
]
