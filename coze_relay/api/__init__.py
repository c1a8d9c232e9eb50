"""FastAPI endpoints for the Coze relay.

Endpoints:
    - GET /health: Service health status
    - POST /upload: Forward an image to Coze, returns its file_id
    - POST /chat: Relay a query and return the assembled answer
"""

from coze_relay.api.app import create_app

__all__ = ["create_app"]
