"""Main application entry point.

Runs the FastAPI relay with the NiceGUI chat page mounted on the same
server. Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

DEFAULT_PORT = "3000"


def run_server() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles /upload, /chat and /health; NiceGUI serves the page at /.
    """
    import uvicorn
    from nicegui import ui

    from coze_relay.api.app import create_app
    from coze_relay.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Coze Assistant",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "coze-relay-secret"),
    )

    port = int(os.getenv("PORT", DEFAULT_PORT))
    logger.info(f"Server running at http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    if not os.getenv("COZE_API_KEY"):
        logger.warning("COZE_API_KEY is not set; upstream calls will fail authentication")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    """Application entry point."""
    run_server()


if __name__ == "__main__":
    main()
