from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """A single role-tagged message sent to the provider.

    Attributes:
        role: The speaker identifier (system, user, or assistant).
        content: The message text.
    """

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Request payload for the text relay endpoint.

    Attributes:
        message: User's question or prompt. Must be a non-empty string.
    """

    message: StrictStr = Field(..., min_length=1)


class ReplyResponse(BaseModel):
    """Body returned by both relay endpoints, on success and on failure."""

    reply: str


# Provider response shapes. Only the fields the relay reads are declared;
# everything else the provider sends is ignored.


class CompletionMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str | None = None
    content: str


class CompletionChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    message: CompletionMessage


class CompletionResponse(BaseModel):
    """Chat completion result from ``POST /chat/completions``."""

    model_config = ConfigDict(extra="ignore")

    choices: list[CompletionChoice] = Field(..., min_length=1)


class FileObject(BaseModel):
    """Stored file descriptor from ``POST /files``."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    filename: str | None = None
    purpose: str | None = None
