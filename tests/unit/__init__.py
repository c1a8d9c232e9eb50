"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: SSE decoding and answer assembly
    - upstream/: Configuration and the Coze client
    - models/: Pydantic validation and message building
    - ui/: HTTP helpers behind the chat page
"""
