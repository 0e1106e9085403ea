"""Test package for Kimi Assistant.

Structure:
    - unit/: Config, provider client, formatter and session controller
    - integration/: Relay endpoints through the full FastAPI app

The provider is never contacted: conftest wires an httpx.MockTransport in
place of the network. Leverages pytest with pytest-check for soft assertions.
"""
