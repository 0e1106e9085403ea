"""Kimi Assistant - company chatbot relayed to the Moonshot Kimi API.

Combines FastAPI for the relay endpoints, httpx for provider calls,
NiceGUI for the chat page, and Pydantic for configuration and validation.

Components:
    - api: Text and file relay endpoints
    - relay: Provider client, configuration and error taxonomy
    - ui: Chat page, session state and reply formatting
    - models: Request/response and provider payload schemas
"""

__version__ = "0.1.0"
