"""FastAPI dependencies shared by the relay routers."""

from fastapi import Request

from src.relay.kimi import KimiClient


def get_kimi_client(request: Request) -> KimiClient:
    """Return the provider client created with the application."""
    return request.app.state.kimi_client
