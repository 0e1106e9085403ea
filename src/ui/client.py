"""HTTP client used by the chat UI to reach the relay endpoints."""

import os

import httpx

def default_api_base_url() -> str:
    """Relay URL from ``API_BASE_URL``, else localhost on ``PORT`` (8000)."""
    return os.getenv("API_BASE_URL") or f"http://localhost:{os.getenv('PORT', '8000')}"


class RelayApiClient:
    """Posts user input to ``/api/chat`` and ``/api/files``.

    Responses are read for their ``reply`` field whatever the status code,
    since the relay puts its fixed error messages there too. Transport
    failures (``httpx.HTTPError``) and non-JSON bodies (``ValueError``)
    propagate to the caller.
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or default_api_base_url()).rstrip("/")
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            transport=self._transport,
            timeout=None,
        )

    @staticmethod
    def _reply(response: httpx.Response) -> str:
        data = response.json()
        reply = data.get("reply") if isinstance(data, dict) else None
        return reply if isinstance(reply, str) else ""

    async def send_text(self, message: str) -> str:
        async with self._client() as client:
            response = await client.post("/api/chat", json={"message": message})
        return self._reply(response)

    async def send_file(
        self,
        filename: str,
        content: bytes,
        content_type: str | None,
        question: str,
    ) -> str:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        async with self._client() as client:
            response = await client.post(
                "/api/files",
                files=files,
                data={"question": question},
            )
        return self._reply(response)
