"""Integration tests for the FastAPI gateway.

Exercises /upload and /chat end to end through ASGITransport, with the
Coze platform faked at the httpx transport layer.
"""
