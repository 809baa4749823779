"""
Templates: 텍스트 템플릿 엔진 + 페이지 템플릿 소스.

주의: 폴더 구분
- src/templates/engine.py → 컴파일/렌더 코드
- src/templates/page.html → 내장 템플릿 문서 (데이터)
"""

from .engine import CompiledTemplate, Placeholder, compile_template, split_templates
from .source import PageTemplates, TemplateSource, parse_page_templates

__all__ = [
    # engine
    "CompiledTemplate",
    "Placeholder",
    "compile_template",
    "split_templates",
    # source
    "PageTemplates",
    "TemplateSource",
    "parse_page_templates",
]
