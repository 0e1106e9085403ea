"""Unit tests for the chat session controller.

The relay API is stood in for by an httpx.MockTransport behind a real
RelayApiClient, so the UI's request encoding is exercised too.
"""

import json
import os
from unittest.mock import patch

import httpx
import pytest
import pytest_check as check

from src.relay.prompts import DEFAULT_FILE_QUESTION
from src.ui.client import RelayApiClient, default_api_base_url
from src.ui.session import (
    FILE_READ_FAILED,
    NETWORK_ERROR_REPLY,
    NO_REPLY,
    ChatSession,
    image_preview,
)


class RelayStub:
    """Records relay calls and answers with a fixed status and body."""

    def __init__(self, status_code: int = 200, body: dict | str | None = None) -> None:
        self.status_code = status_code
        self.body = {"reply": "Hi there"} if body is None else body
        self.requests: list[httpx.Request] = []
        self.fail_with: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if isinstance(self.body, dict):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def relay() -> RelayStub:
    return RelayStub()


@pytest.fixture
def session(relay: RelayStub) -> ChatSession:
    client = RelayApiClient("http://relay.test", transport=httpx.MockTransport(relay.handler))
    return ChatSession(client)


class TestSendGuard:
    async def test_empty_input_without_file_does_nothing(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        sent = await session.send("")

        check.is_false(sent)
        check.equal(session.messages, [])
        check.equal(relay.requests, [])

    async def test_whitespace_input_without_file_does_nothing(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        assert await session.send("   \n") is False
        assert relay.requests == []

    async def test_send_refused_while_loading(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        session.loading = True

        assert await session.send("Hello") is False
        assert relay.requests == []


class TestTextSend:
    async def test_appends_user_then_formatted_assistant(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        relay.body = {"reply": "**Hi** there"}

        sent = await session.send("Hello")

        check.is_true(sent)
        check.equal([m.role for m in session.messages], ["user", "assistant"])
        check.equal(session.messages[0].text, "Hello")
        check.is_none(session.messages[0].file)
        check.equal(session.messages[1].text, "<strong>Hi</strong> there")
        check.equal(relay.paths(), ["/api/chat"])
        check.equal(json.loads(relay.requests[0].content), {"message": "Hello"})

    async def test_loading_flag_cleared_after_send(self, session: ChatSession) -> None:
        seen: list[bool] = []

        await session.send("Hello", on_pending=lambda: seen.append(session.loading))

        check.equal(seen, [True])
        check.is_false(session.loading)

    async def test_empty_reply_falls_back(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        relay.body = {"reply": ""}

        await session.send("Hello")

        assert session.messages[-1].text == NO_REPLY

    async def test_server_error_reply_is_shown(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        relay.status_code = 500
        relay.body = {"reply": "Server error"}

        await session.send("Hello")

        assert session.messages[-1].text == "Server error"

    async def test_connection_error_becomes_placeholder(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        relay.fail_with = httpx.ConnectError("refused")

        await session.send("Hello")

        check.equal(session.messages[-1].role, "assistant")
        check.equal(session.messages[-1].text, NETWORK_ERROR_REPLY)
        check.is_false(session.loading)

    async def test_non_json_reply_becomes_placeholder(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        relay.body = "Bad Gateway"
        relay.status_code = 502

        await session.send("Hello")

        assert session.messages[-1].text == NETWORK_ERROR_REPLY

    async def test_text_relayed_and_shown_as_typed(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        text = "    def f():\n        return 1\n"

        await session.send(text)

        check.equal(session.messages[0].text, text)
        check.equal(json.loads(relay.requests[0].content), {"message": text})

    async def test_message_ids_unique_and_ordered(self, session: ChatSession) -> None:
        await session.send("one")
        await session.send("two")

        ids = [m.id for m in session.messages]
        check.equal(len(set(ids)), 4)
        check.equal(
            [m.text for m in session.messages if m.role == "user"],
            ["one", "two"],
        )


class TestFileSend:
    async def test_file_only_uses_placeholder_and_default_question(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        session.stage_file("report.pdf", b"%PDF-1.4", "application/pdf")

        await session.send("")

        user = session.messages[0]
        check.equal(user.text, "📄 report.pdf")
        check.equal(user.file.name, "report.pdf")
        check.is_none(user.file.preview)
        check.equal(relay.paths(), ["/api/files"])
        body = relay.requests[0].content
        check.is_in(b'filename="report.pdf"', body)
        check.is_in(DEFAULT_FILE_QUESTION.encode(), body)

    async def test_text_with_file_is_the_question(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        session.stage_file("notes.txt", b"hello", "text/plain")

        await session.send("Summarize")

        check.equal(session.messages[0].text, "Summarize")
        check.is_in(b"Summarize", relay.requests[0].content)
        check.equal(relay.paths(), ["/api/files"])

    async def test_blank_text_with_file_counts_as_no_text(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        session.stage_file("notes.txt", b"hello", "text/plain")

        await session.send("  \n")

        check.equal(session.messages[0].text, "📄 notes.txt")
        check.is_in(DEFAULT_FILE_QUESTION.encode(), relay.requests[0].content)

    async def test_staged_file_cleared_after_send(self, session: ChatSession) -> None:
        session.stage_file("notes.txt", b"hello", "text/plain")

        await session.send("")

        assert session.staged is None

    async def test_empty_file_reply_falls_back(
        self, session: ChatSession, relay: RelayStub
    ) -> None:
        relay.body = {}
        session.stage_file("notes.txt", b"hello", "text/plain")

        await session.send("")

        assert session.messages[-1].text == FILE_READ_FAILED

    async def test_image_preview_carried_on_message(self, session: ChatSession) -> None:
        session.stage_file("cat.png", b"\x89PNG", "image/png")

        await session.send("What is this?")

        preview = session.messages[0].file.preview
        assert preview is not None and preview.startswith("data:image/png;base64,")


class TestStaging:
    def test_image_gets_preview(self, session: ChatSession) -> None:
        staged = session.stage_file("cat.jpg", b"\xff\xd8\xff", "image/jpeg")

        check.is_true(staged.is_image)
        check.equal(staged.preview, "data:image/jpeg;base64,/9j/")

    def test_non_image_has_no_preview(self, session: ChatSession) -> None:
        staged = session.stage_file("data.csv", b"a,b", "text/csv")

        check.is_false(staged.is_image)
        check.is_none(staged.preview)

    def test_restaging_replaces_file(self, session: ChatSession) -> None:
        session.stage_file("a.txt", b"a", "text/plain")
        session.stage_file("b.txt", b"b", "text/plain")

        assert session.staged.name == "b.txt"

    def test_missing_content_type_has_no_preview(self) -> None:
        assert image_preview(b"abc", None) is None


class TestReset:
    async def test_reset_clears_messages_and_staged_file(self, session: ChatSession) -> None:
        await session.send("Hello")
        session.stage_file("a.txt", b"a", "text/plain")

        session.reset()

        check.equal(session.messages, [])
        check.is_none(session.staged)


class TestRelayApiClientBaseUrl:
    def test_explicit_api_base_url_wins(self) -> None:
        with patch.dict(os.environ, {"API_BASE_URL": "http://api.test:9000", "PORT": "7000"}):
            assert default_api_base_url() == "http://api.test:9000"

    def test_falls_back_to_port(self) -> None:
        with patch.dict(os.environ, {"PORT": "7000"}):
            os.environ.pop("API_BASE_URL", None)
            assert default_api_base_url() == "http://localhost:7000"

    def test_default_port(self) -> None:
        with patch.dict(os.environ):
            os.environ.pop("API_BASE_URL", None)
            os.environ.pop("PORT", None)
            assert default_api_base_url() == "http://localhost:8000"

    async def test_client_resolves_url_at_construction(self, relay: RelayStub) -> None:
        with patch.dict(os.environ, {"PORT": "7000"}):
            os.environ.pop("API_BASE_URL", None)
            client = RelayApiClient(transport=httpx.MockTransport(relay.handler))

        await client.send_text("Hello")

        assert str(relay.requests[0].url) == "http://localhost:7000/api/chat"
