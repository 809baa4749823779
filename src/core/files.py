"""
드롭 디렉터리: 목록 스냅샷 + 업로드 저장.

규칙:
- 스냅샷은 일반 파일만, 이름 오름차순, 요청마다 재계산
- 스캔 도중 사라졌거나 stat 불가한 파일은 skip (전체 실패 아님)
- UTF-8이 아닌 파일명은 U+FFFD로 치환해 표시
- 디렉터리 자체를 못 읽으면 DirectoryUnavailableError (빈 목록으로 취급 금지)
- 파일명 없음/빈 문자열 업로드는 조용히 무시
- 경로 구분자, '..' 포함 파일명은 거부 (InvalidFilenameError)
- 동일 파일명 동시 업로드는 파일시스템에 맡김 (락 없음, 덮어쓰기)
"""

import errno
import logging
import os
from pathlib import Path
from typing import BinaryIO

from src.domain.constants import DEFAULT_CHUNK_SIZE, KIB, MIB
from src.domain.errors import (
    DirectoryUnavailableError,
    InvalidFilenameError,
    StorageWriteError,
    UploadTooLargeError,
)
from src.domain.schemas import FileEntry

logger = logging.getLogger(__name__)

FORBIDDEN_FILENAME_CHARS = set("/\\\x00")
FORBIDDEN_FILENAMES = {".", ".."}

# open()이 파일명 때문에 실패하는 경우 (클라이언트 에러)
FILENAME_ERRNOS = {errno.EISDIR, errno.ENAMETOOLONG}


# =============================================================================
# Drop Directory
# =============================================================================

def prepare_drop_dir(drop_dir: Path) -> Path:
    """없으면 생성 후 정규화된 절대 경로 반환 (시작 시 한 번)."""
    drop_dir.mkdir(parents=True, exist_ok=True)
    return drop_dir.resolve()


# =============================================================================
# Snapshot
# =============================================================================

def format_size(size: int) -> str:
    """
    사람이 읽기 쉬운 크기 표시 (근사값).

    - 1024 미만: "123 B"
    - 1024² 미만: "1.50 KiB"
    - 그 외: "1.50 MiB"
    """
    if size < KIB:
        return f"{size} B"
    if size < MIB:
        return f"{size / KIB:.2f} KiB"
    return f"{size / MIB:.2f} MiB"


def display_name(name: str) -> str:
    """UTF-8이 아닌 파일명 (surrogate escape) → U+FFFD로 치환한 표시용 이름."""
    return os.fsencode(name).decode("utf-8", "replace")


def snapshot_directory(directory: Path) -> list[FileEntry]:
    """
    드롭 디렉터리의 일반 파일 목록.

    Args:
        directory: 드롭 디렉터리

    Returns:
        이름 오름차순 FileEntry 목록

    Raises:
        DirectoryUnavailableError: 디렉터리를 읽을 수 없음
    """
    entries: list[FileEntry] = []
    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                try:
                    if not dir_entry.is_file(follow_symlinks=False):
                        continue
                    size = dir_entry.stat(follow_symlinks=False).st_size
                except FileNotFoundError:
                    # 스캔과 stat 사이에 삭제됨
                    continue
                except OSError as e:
                    logger.warning("Skipping %r: %s", dir_entry.name, e)
                    continue
                name = display_name(dir_entry.name)
                entries.append(FileEntry(name=name, size=size, size_label=format_size(size)))
    except OSError as e:
        raise DirectoryUnavailableError(path=str(directory), cause=str(e)) from e

    entries.sort(key=lambda entry: entry.name)
    return entries


# =============================================================================
# Upload
# =============================================================================

def validate_filename(filename: str) -> None:
    """
    업로드 파일명 검증.

    규칙:
    - '/', '\\', NUL 금지
    - '.', '..' 금지

    Raises:
        InvalidFilenameError
    """
    found_forbidden = set(filename) & FORBIDDEN_FILENAME_CHARS
    if found_forbidden or filename in FORBIDDEN_FILENAMES:
        raise InvalidFilenameError(filename=filename)


def _remove_partial(target: Path) -> None:
    try:
        target.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove partial upload %s: %s", target, e)


def ingest_upload(
    drop_dir: Path,
    filename: str | None,
    stream: BinaryIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    max_bytes: int | None = None,
) -> Path | None:
    """
    업로드 스트림을 드롭 디렉터리에 저장.

    청크 단위 복사 → 업로드 크기와 무관하게 메모리 사용량 고정.

    Args:
        drop_dir: 드롭 디렉터리
        filename: 클라이언트가 보낸 파일명 (None/빈 문자열이면 무시)
        stream: 읽기 가능한 바이너리 스트림
        chunk_size: 복사 청크 크기
        max_bytes: 최대 크기 (None이면 무제한)

    Returns:
        저장된 경로, 무시된 경우 None

    Raises:
        InvalidFilenameError: 파일명 정책 위반, 디렉터리와 이름 충돌, 너무 긴 이름
        UploadTooLargeError: max_bytes 초과 (부분 파일은 삭제됨)
        StorageWriteError: 그 외 쓰기 실패 (부분 파일은 삭제됨)
    """
    if not filename:
        logger.debug("Ignoring upload without filename")
        return None

    validate_filename(filename)
    target = drop_dir / filename

    written = 0
    try:
        with open(target, "wb") as f:
            for chunk in iter(lambda: stream.read(chunk_size), b""):
                written += len(chunk)
                if max_bytes is not None and written > max_bytes:
                    break
                f.write(chunk)
    except OSError as e:
        if e.errno in FILENAME_ERRNOS:
            # 같은 이름의 디렉터리, NAME_MAX 초과 → 생성된 파일 없음
            raise InvalidFilenameError(filename=filename, cause=str(e)) from e
        _remove_partial(target)
        raise StorageWriteError(path=str(target), cause=str(e)) from e

    if max_bytes is not None and written > max_bytes:
        _remove_partial(target)
        raise UploadTooLargeError(filename=filename, max_bytes=max_bytes)

    logger.info("Uploaded %s", target)
    return target
