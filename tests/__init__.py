"""Test package for Coze Relay.

Structure:
    - unit/: Decoder, assembler, config, client, schema and UI helper tests
    - integration/: HTTP endpoint tests against a fake Coze platform

The Coze platform is replaced by an httpx MockTransport; nothing here
needs network access or credentials.
Leverages pytest with pytest-check for soft assertions.
"""
