"""Chat session state for one browser page.

Holds the message log, the staged file and the loading flag. Kept free of
NiceGUI so the send flow can be exercised without a browser.
"""

import base64
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

import httpx

from src.relay.prompts import DEFAULT_FILE_QUESTION
from src.ui.client import RelayApiClient
from src.ui.formatting import format_answer

logger = logging.getLogger(__name__)

NETWORK_ERROR_REPLY = "❌ Network error"
NO_REPLY = "No reply"
FILE_READ_FAILED = "File read failed"


def _now() -> str:
    return datetime.now().strftime("%H:%M")


def image_preview(content: bytes, content_type: str | None) -> str | None:
    """Return a data URL for image content, None for anything else."""
    if not content_type or not content_type.startswith("image/"):
        return None
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


@dataclass(frozen=True)
class AttachedFile:
    name: str
    preview: str | None = None


@dataclass(frozen=True)
class Message:
    """One entry of the conversation log. Never mutated once appended."""

    role: Literal["user", "assistant"]
    text: str
    file: AttachedFile | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    time: str = field(default_factory=_now)


@dataclass
class StagedFile:
    """A file picked or dropped but not yet sent."""

    name: str
    content: bytes
    content_type: str | None = None
    preview: str | None = None

    @property
    def is_image(self) -> bool:
        return self.preview is not None


class ChatSession:
    """Manages chat state for a user session."""

    def __init__(self, client: RelayApiClient | None = None) -> None:
        self.messages: list[Message] = []
        self.staged: StagedFile | None = None
        self.loading: bool = False
        self._client = client or RelayApiClient()

    def stage_file(self, name: str, content: bytes, content_type: str | None = None) -> StagedFile:
        """Stage a file for the next send, replacing any previous one."""
        self.staged = StagedFile(
            name=name,
            content=content,
            content_type=content_type,
            preview=image_preview(content, content_type),
        )
        return self.staged

    def clear_staged_file(self) -> None:
        self.staged = None

    def reset(self) -> None:
        """Start a new conversation."""
        self.messages.clear()
        self.staged = None

    def can_send(self, text: str) -> bool:
        return not self.loading and (bool(text.strip()) or self.staged is not None)

    async def send(
        self,
        text: str,
        on_pending: Callable[[], None] | None = None,
    ) -> bool:
        """Send the input text and/or staged file, then record the reply.

        Args:
            text: Current content of the input field.
            on_pending: Called once the user message is appended, before
                the relay round trip starts.

        Returns:
            False when there was nothing to send or a send is in progress.
        """
        if not self.can_send(text):
            return False

        # Blank input counts as no text, but real text is relayed as typed
        if not text.strip():
            text = ""
        self.loading = True
        staged = self.staged
        try:
            self.messages.append(
                Message(
                    role="user",
                    text=text or f"📄 {staged.name}",
                    file=AttachedFile(staged.name, staged.preview) if staged else None,
                )
            )
            if on_pending is not None:
                on_pending()
            reply = await self._relay(text, staged)
            self.messages.append(Message(role="assistant", text=format_answer(reply)))
        finally:
            self.staged = None
            self.loading = False
        return True

    async def _relay(self, text: str, staged: StagedFile | None) -> str:
        try:
            if staged is not None:
                reply = await self._client.send_file(
                    staged.name,
                    staged.content,
                    staged.content_type,
                    question=text or DEFAULT_FILE_QUESTION,
                )
                return reply or FILE_READ_FAILED
            reply = await self._client.send_text(text)
            return reply or NO_REPLY
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Relay request failed: {e}")
            return NETWORK_ERROR_REPLY
