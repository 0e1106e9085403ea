"""Provider relay logic for the Moonshot (Kimi) API.

Responsibilities:
    - Relay configuration loaded once from the environment
    - Chat completion and file upload calls over httpx
    - Provider response shape checks
    - A small provider error taxonomy for the HTTP layer to translate

Maintains clean separation from the HTTP layer.
"""

from src.relay.config import RelayConfig, get_relay_config
from src.relay.kimi import KimiClient

__all__ = ["KimiClient", "RelayConfig", "get_relay_config"]
