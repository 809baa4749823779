"""
템플릿 소스: 내장 문서 또는 파일시스템 경로.

설정 templates.source:
- embedded   → 패키지에 포함된 page.html을 시작 시 한 번 컴파일 (이후 공유)
- filesystem → 지정 경로를 요청마다 다시 읽고 컴파일 (개발용, 편집 즉시 반영)
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from src.domain.constants import (
    PAGE_TEMPLATE_NAMES,
    TEMPLATE_SOURCE_EMBEDDED,
    TEMPLATE_SOURCE_FILESYSTEM,
    TEMPLATE_SOURCES,
)
from src.domain.errors import TemplateDocumentError
from src.templates.engine import CompiledTemplate, split_templates

logger = logging.getLogger(__name__)

EMBEDDED_TEMPLATE_PATH = Path(__file__).parent / "page.html"


@dataclass(frozen=True)
class PageTemplates:
    """목록 페이지를 구성하는 이름 붙은 템플릿 묶음."""
    page: CompiledTemplate
    file_row: CompiledTemplate
    empty_row: CompiledTemplate
    endpoint_row: CompiledTemplate


def parse_page_templates(text: str, origin: str = "<string>") -> PageTemplates:
    """
    문서 텍스트 → PageTemplates.

    Args:
        text: '---'로 구분된 템플릿 문서
        origin: 에러 메시지용 출처 (파일 경로 등)

    Raises:
        TemplateDocumentError: 세그먼트 수가 PAGE_TEMPLATE_NAMES와 다름
    """
    segments = split_templates(text)
    if len(segments) != len(PAGE_TEMPLATE_NAMES):
        raise TemplateDocumentError(
            origin=origin,
            expected=len(PAGE_TEMPLATE_NAMES),
            found=len(segments),
        )
    return PageTemplates(**dict(zip(PAGE_TEMPLATE_NAMES, segments)))


class TemplateSource:
    """설정에 따라 PageTemplates를 제공."""

    def __init__(self, mode: str = TEMPLATE_SOURCE_EMBEDDED, path: Path | None = None):
        if mode not in TEMPLATE_SOURCES:
            raise ValueError(f"Unknown template source: {mode!r}")
        if mode == TEMPLATE_SOURCE_FILESYSTEM and path is None:
            raise ValueError("Template source 'filesystem' requires a template path")

        self.mode = mode
        self.path = path
        self._cached: PageTemplates | None = None

        if mode == TEMPLATE_SOURCE_EMBEDDED:
            self._cached = parse_page_templates(
                EMBEDDED_TEMPLATE_PATH.read_text(encoding="utf-8"),
                origin=str(EMBEDDED_TEMPLATE_PATH),
            )

    def load(self) -> PageTemplates:
        """현재 PageTemplates 반환 (filesystem 모드는 매번 재컴파일)."""
        if self._cached is not None:
            return self._cached

        if self.path is None:
            raise TemplateDocumentError(origin="<filesystem>", cause="template path is not set")
        logger.debug("Reloading templates from %s", self.path)
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateDocumentError(origin=str(self.path), cause=str(e)) from e
        return parse_page_templates(text, origin=str(self.path))
