"""File relay endpoint.

Two sequential provider calls: store the uploaded file, then ask about it
in a completion that references the returned file id. Neither call is
retried, and a file stored in step 1 is not removed when step 2 fails.
"""

import logging

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from src.api.dependencies import get_kimi_client
from src.api.errors import FileChatFailed, FileTooLarge, NoFileUploaded, UploadRejected
from src.models.schemas import ChatMessage, ReplyResponse
from src.relay.errors import ProviderError
from src.relay.kimi import KimiClient
from src.relay.prompts import DEFAULT_FILE_QUESTION, FILE_SYSTEM_PROMPT, file_question

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


async def _read_form(request: Request) -> FormData:
    """Parse the multipart body.

    Raises:
        NoFileUploaded: Body is not a parseable form (e.g. missing boundary).
    """
    try:
        return await request.form()
    except (HTTPException, MultiPartException) as e:
        logger.info(f"Rejected unparseable form body: {e}")
        raise NoFileUploaded() from e


def _validate_upload(file: object) -> UploadFile:
    """Ensure the ``file`` form field holds an actual file part.

    Raises:
        NoFileUploaded: Field is absent, a plain string, or has no filename.
    """
    if not isinstance(file, UploadFile) or not file.filename:
        raise NoFileUploaded()
    return file


async def _read_and_validate_size(file: UploadFile, max_bytes: int) -> bytes:
    """Read file content and validate size.

    Raises:
        FileTooLarge: File exceeds the configured limit.
    """
    content = await file.read()

    if len(content) > max_bytes:
        size_mb = len(content) / (1024 * 1024)
        logger.warning(f"Rejected {file.filename}: {size_mb:.1f}MB exceeds limit")
        raise FileTooLarge()

    return content


def _resolve_question(question: object) -> str:
    if isinstance(question, str) and question.strip():
        return question
    return DEFAULT_FILE_QUESTION


@router.post(
    "/files",
    response_model=ReplyResponse,
    responses={
        400: {"model": ReplyResponse},
        413: {"model": ReplyResponse},
        500: {"model": ReplyResponse},
    },
)
async def file_relay(
    request: Request,
    kimi: KimiClient = Depends(get_kimi_client),
) -> ReplyResponse:
    """Upload a file to Kimi and ask a question about it.

    Accepts multipart ``file`` and optional ``question`` fields.

    Raises:
        400: No file in the request.
        413: File exceeds the configured upload limit.
        500: Upload or the follow-up completion failed.
    """
    form = await _read_form(request)
    try:
        file = _validate_upload(form.get("file"))
        question = _resolve_question(form.get("question"))
        content = await _read_and_validate_size(file, kimi.config.max_upload_bytes)
    finally:
        await form.close()

    # Step 1: store the file with the provider
    try:
        file_id = await kimi.upload_file(file.filename, content, file.content_type)
    except ProviderError as e:
        logger.error(f"Upload of {file.filename} failed: {e}")
        raise UploadRejected() from e

    # Step 2: ask about it
    messages = [
        ChatMessage(role="system", content=FILE_SYSTEM_PROMPT),
        ChatMessage(role="user", content=file_question(question, file_id)),
    ]
    try:
        reply = await kimi.create_chat_completion(messages)
    except ProviderError as e:
        logger.error(f"File chat for {file_id} failed: {e}")
        # TODO: delete the orphaned upload via DELETE /files/{file_id} once
        # provider-side expiry of extracted files is confirmed.
        logger.warning(f"Uploaded file {file_id} left on provider after failed chat")
        raise FileChatFailed() from e

    return ReplyResponse(reply=reply)
