"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handlers and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.chat import router as chat_router
from src.api.errors import register_error_handlers
from src.api.files import router as files_router
from src.relay.config import RelayConfig, get_relay_config
from src.relay.kimi import KimiClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Kimi Assistant API...")
    if not app.state.kimi_client.config.has_api_key:
        logger.warning("MOONSHOT_API_KEY is not set; provider calls will fail authentication")
    yield
    # Shutdown
    logger.info("Shutting down Kimi Assistant API...")
    await app.state.kimi_client.aclose()


def create_app(
    config: RelayConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Relay configuration. Loaded from environment if omitted.
        http_client: Optional httpx client for provider calls.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Kimi Assistant API",
        description=(
            "Relay between the company chat UI and the Moonshot Kimi API. "
            "Forwards text questions and uploaded documents to the provider "
            "and returns the generated reply."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.kimi_client = KimiClient(config or get_relay_config(), http_client)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    register_error_handlers(application)
    application.include_router(chat_router)
    application.include_router(files_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "kimi-assistant"}

    return application


_app: FastAPI | None = None


def __getattr__(name: str) -> FastAPI:
    """Build the module-level ``app`` on first access.

    Lets ``uvicorn src.api.app:app`` serve a default app without every
    import opening a provider client.
    """
    global _app
    if name != "app":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    if _app is None:
        _app = create_app()
    return _app
