"""
목록 페이지 조립: 파일 스냅샷 + 엔드포인트 → HTML.
"""

from collections.abc import Iterable
from urllib.parse import quote

from src.core.network import public_endpoints
from src.domain.schemas import FileEntry, ListenEndpoint
from src.templates.source import PageTemplates


def file_row_bindings(entry: FileEntry) -> dict[str, str]:
    """file_row 템플릿 변수."""
    return {
        "name": entry.name,
        "href": quote(entry.name),
        "size_label": entry.size_label,
    }


def endpoint_row_bindings(endpoint: ListenEndpoint) -> dict[str, str]:
    """endpoint_row 템플릿 변수 (qr_svg는 raw 삽입)."""
    return {
        "url": endpoint.url,
        "qr_svg": endpoint.qr_svg,
    }


def render_listing_page(
    templates: PageTemplates,
    files: list[FileEntry],
    endpoints: Iterable[ListenEndpoint],
) -> str:
    """
    목록 페이지 렌더링.

    - 파일이 없으면 empty_row 한 번
    - loopback 엔드포인트는 제외 (다른 기기에서 스캔해도 의미 없음)

    Raises:
        UndefinedVariableError: 템플릿과 bindings 불일치
    """
    if files:
        file_rows = templates.file_row.render_many(file_row_bindings(f) for f in files)
    else:
        file_rows = templates.empty_row.render({})

    endpoint_rows = templates.endpoint_row.render_many(
        endpoint_row_bindings(e) for e in public_endpoints(endpoints)
    )

    return templates.page.render({
        "file_count": str(len(files)),
        "file_rows": file_rows,
        "endpoint_rows": endpoint_rows,
    })
