"""Integration tests for the relay endpoints working as a system.

Coverage:
    - Text relay: validation, provider round trip, error mapping
    - File relay: upload-then-ask sequencing, defaults, error mapping
    - App surface: health check, CORS, method handling

Requests go through httpx ASGITransport into the real app; only the
provider's transport is replaced.
"""
