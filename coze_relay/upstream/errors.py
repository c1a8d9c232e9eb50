"""Errors raised while talking to the Coze platform."""


class UpstreamError(Exception):
    """Raised when the platform rejects a request or returns an unusable body."""

    pass


class UpstreamTransportError(UpstreamError):
    """Raised when the platform cannot be reached."""

    pass


class UpstreamStatusError(UpstreamTransportError):
    """Raised when the platform answers with a non-success HTTP status.

    Attributes:
        status_code: HTTP status returned by the platform.
        text: Raw response body, relayed to the caller unchanged.
    """

    def __init__(self, status_code: int, text: str) -> None:
        super().__init__(f"Coze API error {status_code}: {text}")
        self.status_code = status_code
        self.text = text
