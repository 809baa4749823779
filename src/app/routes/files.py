"""
Files Routes: 목록 페이지 + 업로드.

- GET /        → 업로드 폼 + 파일 목록 + 접속 QR 코드
- POST /upload → 첫 번째 'file' 파트 저장 후 / 로 303 redirect
- GET /files/<name> → main.py에서 StaticFiles로 mount

업로드 계약:
- 'file' 파트가 여러 개면 첫 번째만 저장, 나머지는 무시
- 'file' 파트가 없으면 400 (MALFORMED_UPLOAD)
- 파일명이 비어 있거나 없으면 (텍스트 필드로 온 경우 포함) 저장 없이 redirect
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.datastructures import UploadFile

from src.app.context import get_context
from src.app.services.listing import render_listing_page
from src.core.files import ingest_upload, snapshot_directory
from src.domain.constants import UPLOAD_FIELD_NAME
from src.domain.errors import (
    DirectoryUnavailableError,
    FiledropError,
    InvalidFilenameError,
    MalformedUploadError,
    StorageWriteError,
    TemplateDocumentError,
    UndefinedVariableError,
    UploadTooLargeError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# 도메인 에러 → HTTP 상태 코드
ERROR_STATUS: dict[type[FiledropError], int] = {
    MalformedUploadError: 400,
    InvalidFilenameError: 400,
    UploadTooLargeError: 413,
    DirectoryUnavailableError: 500,
    StorageWriteError: 500,
    UndefinedVariableError: 500,
    TemplateDocumentError: 500,
}


def to_http_exception(error: FiledropError) -> HTTPException:
    """FiledropError → HTTPException (detail: code + message)."""
    status_code = ERROR_STATUS.get(type(error), 500)
    if status_code >= 500:
        logger.error("Request failed: %s", error)
    return HTTPException(
        status_code=status_code,
        detail={"code": error.code, "message": str(error)},
    )


# =============================================================================
# Page Routes (HTML)
# =============================================================================

@router.get("/", response_class=HTMLResponse)
async def listing_page(request: Request) -> HTMLResponse:
    """파일 목록 화면."""
    context = get_context(request)

    try:
        files = snapshot_directory(context.drop_dir)
        content = render_listing_page(
            context.template_source.load(),
            files,
            context.endpoints,
        )
    except FiledropError as e:
        raise to_http_exception(e) from e

    return HTMLResponse(content=content)


# =============================================================================
# Upload
# =============================================================================

@router.post("/upload")
async def upload_file(request: Request) -> RedirectResponse:
    """
    파일 업로드.

    Starlette가 파트를 SpooledTemporaryFile로 받아두고,
    ingest_upload가 청크 단위로 드롭 디렉터리에 복사한다.
    """
    context = get_context(request)
    settings = context.settings

    form = await request.form()
    try:
        parts = form.getlist(UPLOAD_FIELD_NAME)
        if not parts:
            raise MalformedUploadError(field=UPLOAD_FIELD_NAME)

        if len(parts) > 1:
            logger.info(
                "Ignoring %d extra '%s' parts", len(parts) - 1, UPLOAD_FIELD_NAME
            )

        upload = parts[0]
        if isinstance(upload, UploadFile):
            ingest_upload(
                context.drop_dir,
                upload.filename,
                upload.file,
                chunk_size=settings.chunk_size,
                max_bytes=settings.max_upload_bytes,
            )
        else:
            # filename 없는 파트는 텍스트 필드로 파싱됨 → 빈 파일명과 동일하게 무시
            logger.debug("Ignoring '%s' part without filename", UPLOAD_FIELD_NAME)
    except FiledropError as e:
        raise to_http_exception(e) from e
    finally:
        await form.close()

    return RedirectResponse(url="/", status_code=303)
