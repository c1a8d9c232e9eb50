"""Coze Relay - credential-hiding chat gateway for the Coze platform.

Combines FastAPI for the HTTP gateway, httpx for upstream calls,
NiceGUI for the browser client, and Pydantic for data validation.

Components:
    - api: HTTP endpoints for image upload and chat
    - upstream: Coze platform client and configuration
    - parsing: SSE decoding and answer assembly
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
