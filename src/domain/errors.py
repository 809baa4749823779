"""
Error definitions for filedrop.

규칙:
- 조용한 실패 금지 → 템플릿 변수 누락은 빈 문자열로 대체하지 않고 에러
- 빈 파일명 업로드는 에러가 아님 (무시)
- 인터페이스별 탐색 실패는 로그만 남기고 계속
"""

from typing import Any


class FiledropError(Exception):
    """
    filedrop 도메인 에러 기본 클래스.

    Usage:
        raise DirectoryUnavailableError(path=str(drop_dir), cause=str(e))
    """

    code = "FILEDROP_ERROR"

    def __init__(self, code: str | None = None, **context: Any) -> None:
        if code is not None:
            self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Template ===
    UNDEFINED_VARIABLE = "UNDEFINED_VARIABLE"
    TEMPLATE_DOCUMENT_INVALID = "TEMPLATE_DOCUMENT_INVALID"

    # === Storage ===
    DIRECTORY_UNAVAILABLE = "DIRECTORY_UNAVAILABLE"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"

    # === Upload ===
    MALFORMED_UPLOAD = "MALFORMED_UPLOAD"
    INVALID_FILENAME = "INVALID_FILENAME"
    UPLOAD_TOO_LARGE = "UPLOAD_TOO_LARGE"


# =============================================================================
# Concrete Errors
# =============================================================================

class UndefinedVariableError(FiledropError):
    """템플릿이 참조하는 변수가 bindings에 없음 (프로그래머 에러)."""

    code = ErrorCodes.UNDEFINED_VARIABLE

    def __init__(self, name: str, **context: Any) -> None:
        self.name = name
        super().__init__(variable=name, **context)


class TemplateDocumentError(FiledropError):
    """템플릿 문서의 구성이 기대와 다름 (세그먼트 수 불일치 등)."""

    code = ErrorCodes.TEMPLATE_DOCUMENT_INVALID


class DirectoryUnavailableError(FiledropError):
    """드롭 디렉터리를 읽을 수 없음 (삭제됨, 권한 없음 등)."""

    code = ErrorCodes.DIRECTORY_UNAVAILABLE


class MalformedUploadError(FiledropError):
    """업로드 요청에 'file' 파트가 없음."""

    code = ErrorCodes.MALFORMED_UPLOAD


class InvalidFilenameError(FiledropError):
    """경로 구분자나 '..'가 포함된 파일명."""

    code = ErrorCodes.INVALID_FILENAME


class UploadTooLargeError(FiledropError):
    """업로드 크기가 max_upload_bytes 초과."""

    code = ErrorCodes.UPLOAD_TOO_LARGE


class StorageWriteError(FiledropError):
    """업로드 파일을 드롭 디렉터리에 쓰지 못함 (디스크 가득 참 등)."""

    code = ErrorCodes.STORAGE_WRITE_FAILED
