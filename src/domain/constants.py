"""
Domain Constants: filedrop 전역 상수.

기본 포트, 업로드 제한, 템플릿 문서 구성 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Server
# =============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000

# =============================================================================
# Storage (드롭 디렉터리)
# =============================================================================
# 기본 위치: <tempdir>/filedrop

DROP_DIR_NAME = "filedrop"
FILES_URL_PREFIX = "/files"

# =============================================================================
# Upload
# =============================================================================

UPLOAD_FIELD_NAME = "file"
DEFAULT_MAX_UPLOAD_BYTES = 512 * 1024 * 1024  # 512 MiB
DEFAULT_CHUNK_SIZE = 64 * 1024  # 64 KiB

# =============================================================================
# Size Labels
# =============================================================================

KIB = 1024
MIB = 1024 * 1024

# =============================================================================
# Templates
# =============================================================================
# 템플릿 문서 세그먼트 순서 (--- 구분):
# page / file_row / empty_row / endpoint_row

TEMPLATE_SOURCE_EMBEDDED = "embedded"
TEMPLATE_SOURCE_FILESYSTEM = "filesystem"
TEMPLATE_SOURCES = (TEMPLATE_SOURCE_EMBEDDED, TEMPLATE_SOURCE_FILESYSTEM)

PAGE_TEMPLATE_NAMES = ("page", "file_row", "empty_row", "endpoint_row")

# =============================================================================
# Endpoint Discovery
# =============================================================================

DEFAULT_QR_SIZE = 200
