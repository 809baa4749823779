"""
Application Services.

역할:
- listing: 파일 스냅샷 + 엔드포인트 → 목록 페이지 HTML
"""

from .listing import render_listing_page

__all__ = [
    "render_listing_page",
]
