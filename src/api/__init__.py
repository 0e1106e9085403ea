"""FastAPI endpoints for the Kimi assistant.

Relay routes between the chat UI and the Moonshot provider API.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Text question relay
    - POST /api/files: File upload + question relay
"""

from src.api.app import create_app

__all__ = ["create_app"]
