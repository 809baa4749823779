"""
Core layer: 페이지에 들어갈 데이터를 만드는 모듈.

역할:
- network: 인터페이스 탐색, 접속 URL, QR 코드
- files: 드롭 디렉터리 스냅샷, 업로드 저장
"""

from .files import (
    format_size,
    ingest_upload,
    prepare_drop_dir,
    snapshot_directory,
    validate_filename,
)
from .network import (
    build_url,
    discover_endpoints,
    list_interfaces,
    public_endpoints,
    render_qr_svg,
)

__all__ = [
    # files
    "format_size",
    "snapshot_directory",
    "prepare_drop_dir",
    "validate_filename",
    "ingest_upload",
    # network
    "list_interfaces",
    "build_url",
    "render_qr_svg",
    "discover_endpoints",
    "public_endpoints",
]
