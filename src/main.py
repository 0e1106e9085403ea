"""Main application entry point.

Runs the relay API (port 8000) with the NiceGUI chat page mounted on it.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run_integrated() -> None:
    """Serve the relay API and the chat page from one server.

    The relay configuration is read once here and handed to the app;
    request handlers never consult the environment themselves.
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.relay.config import get_relay_config
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    app = create_app(get_relay_config())

    ui.run_with(
        app,
        title="Kimi Assistant",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "kimi-assistant-secret"),
    )

    logger.info(f"Chat UI available at http://localhost:{port}/")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def run_separate() -> None:
    """Run the relay API and the NiceGUI page as separate servers.

    API on PORT (default 8000), UI on port 8080. The UI process inherits
    PORT, so its default relay URL points at the API.
    """
    import asyncio
    import subprocess

    api_port = os.getenv("PORT", "8000")

    async def run_servers() -> None:
        logger.info(f"Starting relay API on http://localhost:{api_port}")
        logger.info("Starting chat UI on http://localhost:8080")

        api_proc = subprocess.Popen(
            [
                sys.executable,
                "-m",
                "uvicorn",
                "src.api.app:app",
                "--host",
                os.getenv("HOST", "0.0.0.0"),
                "--port",
                api_port,
            ]
        )
        ui_proc = subprocess.Popen(
            [sys.executable, "-c", "from src.ui.chat_page import main; main()"]
        )

        try:
            while api_proc.poll() is None and ui_proc.poll() is None:
                await asyncio.sleep(1)
        except asyncio.CancelledError:
            logger.info("Shutting down servers...")
        finally:
            for proc in (api_proc, ui_proc):
                proc.terminate()
                proc.wait()

    try:
        asyncio.run(run_servers())
    except KeyboardInterrupt:
        logger.info("Interrupted")


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run the API and the UI on different ports.
    Default is integrated mode (both on port 8000).
    """
    configure_logging()
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Kimi Assistant in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
