"""Upstream configuration with environment variable loading.

Pydantic-based configuration for the Coze platform client.
Credentials are not validated up front; a missing key surfaces as an
authentication failure from the platform at request time.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_BASE = "https://api.coze.cn"
UPLOAD_PATH = "/v1/files/upload"
CHAT_PATH = "/v3/chat"


class UpstreamConfig(BaseModel):
    """Configuration for the Coze platform client.

    Attributes:
        api_key: Bearer credential for the platform.
        bot_id: Identifier of the bot that answers chat requests.
        base_url: Platform API base URL.
        default_user_id: User identifier sent when the client supplies none.
        timeout: Seconds to wait for an upstream response, stream included.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("COZE_API_KEY", ""),
        description="Bearer credential for the Coze API",
    )
    bot_id: str = Field(
        default_factory=lambda: os.getenv("COZE_BOT_ID", ""),
        description="Coze bot identifier",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("COZE_API_BASE", DEFAULT_API_BASE),
        description="Coze API base URL",
    )
    default_user_id: str = Field(
        default_factory=lambda: os.getenv("COZE_DEFAULT_USER", "user_123"),
        min_length=1,
        description="User id used when the request carries none",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("COZE_TIMEOUT", "120")),
        gt=0.0,
        description="Upstream request timeout in seconds",
    )

    @field_validator("api_key", "bot_id")
    @classmethod
    def strip_credentials(cls, v: str) -> str:
        """Strip stray whitespace picked up from .env files."""
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Drop trailing slashes so endpoint paths join cleanly."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("COZE_API_BASE must not be empty")
        return v

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}{UPLOAD_PATH}"

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}{CHAT_PATH}"


def get_upstream_config() -> UpstreamConfig:
    """Create upstream configuration from environment.

    Returns:
        Configured UpstreamConfig instance.
    """
    return UpstreamConfig()
