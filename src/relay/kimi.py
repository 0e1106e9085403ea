"""Moonshot (Kimi) provider client.

Wraps the two provider endpoints the relay needs:

1. ``POST /chat/completions`` - the shared completion primitive used by both
   relay endpoints. One blocking round trip, no retry, no streaming.
2. ``POST /files`` - stores an uploaded document and returns its identifier,
   which a follow-up completion references inside ``<file>`` tags.

Every failure surfaces as a ``ProviderError`` subclass so the HTTP layer can
translate it without knowing about httpx or the provider's payloads.
"""

import logging

import httpx
from pydantic import ValidationError

from src.models.schemas import ChatMessage, CompletionResponse, FileObject
from src.relay.config import RelayConfig
from src.relay.errors import (
    CompletionFailed,
    MalformedProviderResponse,
    ProviderUnavailable,
    UploadFailed,
)

logger = logging.getLogger(__name__)


class KimiClient:
    """Async client for the Moonshot chat and file endpoints.

    Holds one pooled ``httpx.AsyncClient`` for the lifetime of the
    application. The API key comes from the ``RelayConfig`` given at
    construction and is never re-read from the environment.
    """

    def __init__(
        self,
        config: RelayConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider client.

        Args:
            config: Relay configuration (API key, base URL, model).
            http_client: Optional pre-built client, e.g. with a mock
                transport in tests. Created from config when omitted.
        """
        self._config = config
        self._http = http_client or httpx.AsyncClient(timeout=config.timeout)

    @property
    def config(self) -> RelayConfig:
        return self._config

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._config.api_key}"}

    def _url(self, path: str) -> str:
        return f"{self._config.base_url}/{path.lstrip('/')}"

    async def aclose(self) -> None:
        """Release pooled connections."""
        await self._http.aclose()

    async def create_chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
    ) -> str:
        """Run one chat completion and return the first choice's text.

        Args:
            messages: Ordered role-tagged messages.
            model: Model to use (defaults to the configured model).

        Returns:
            Content of the first choice's message.

        Raises:
            CompletionFailed: Provider returned a non-success status.
            MalformedProviderResponse: Response lacks choices or content.
            ProviderUnavailable: Provider could not be reached.
        """
        payload = {
            "model": model or self._config.model_name,
            "messages": [m.model_dump() for m in messages],
            "temperature": self._config.temperature,
        }

        try:
            response = await self._http.post(
                self._url("chat/completions"),
                headers=self._auth_headers(),
                json=payload,
            )
        except httpx.RequestError as e:
            raise ProviderUnavailable(f"Completion request failed: {e}") from e

        if not response.is_success:
            raise CompletionFailed(response.status_code, response.text)

        try:
            completion = CompletionResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedProviderResponse(
                f"Unexpected completion payload: {e}"
            ) from e

        return completion.choices[0].message.content

    async def upload_file(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """Store a file with the provider and return its identifier.

        Args:
            filename: Original file name.
            content: Raw file bytes.
            content_type: MIME type reported by the client, if any.

        Returns:
            Provider file identifier.

        Raises:
            UploadFailed: Provider returned a non-success status.
            MalformedProviderResponse: Response has no file id.
            ProviderUnavailable: Provider could not be reached.
        """
        files = {
            "file": (filename, content, content_type or "application/octet-stream")
        }
        data = {"purpose": self._config.file_purpose}

        try:
            response = await self._http.post(
                self._url("files"),
                headers=self._auth_headers(),
                files=files,
                data=data,
            )
        except httpx.RequestError as e:
            raise ProviderUnavailable(f"File upload request failed: {e}") from e

        if not response.is_success:
            raise UploadFailed(response.status_code, response.text)

        try:
            file_object = FileObject.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedProviderResponse(f"Unexpected file payload: {e}") from e

        logger.info(f"Uploaded {filename} ({len(content)} bytes) as {file_object.id}")
        return file_object.id
