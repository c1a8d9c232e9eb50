"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with markdown answers
    - Image attachment through the relay's upload endpoint
    - Thinking indicator while the relay waits on Coze

Contains minimal business logic. Delegates all operations to the API.
"""
