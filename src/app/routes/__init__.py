"""
FastAPI Routes.

페이지 라우트 (HTML) + 업로드
"""

from . import files

__all__ = ["files"]
