"""
최소 텍스트 템플릿 엔진.

문법:
- {name}  → HTML escape 후 삽입
- @{name} → 그대로 삽입 (escape 없음)
- name은 [a-zA-Z0-9_]+
- 여러 템플릿을 한 문서에 넣을 때는 '---' 한 줄로 구분

컴파일은 한 번, 렌더는 요청마다:
- 컴파일 시 마커를 제거하고 (offset, name, escape)를 기록
- 렌더 시 리터럴 구간을 복사하면서 offset 위치에 값을 삽입 (재스캔 없음)

조건문/반복문 없음. 반복 구간은 호출자가 render_many로 행을 만들고
상위 템플릿의 @{...} 자리에 넣는다.
"""

import html
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from src.domain.errors import UndefinedVariableError

PLACEHOLDER_PATTERN = re.compile(r"(@)?\{([a-zA-Z0-9_]+)\}")
SEPARATOR_PATTERN = re.compile(r"^---$", re.MULTILINE)


@dataclass(frozen=True)
class Placeholder:
    """치환 지점. offset은 마커가 제거된 리터럴 텍스트 기준 위치."""
    offset: int
    name: str
    escape: bool


@dataclass(frozen=True)
class CompiledTemplate:
    """
    렌더 준비가 끝난 템플릿 (불변, 동시 렌더 공유 가능).

    placeholders는 offset 오름차순. 같은 offset끼리는 제거된 순서를 유지한다.
    """
    text: str
    placeholders: tuple[Placeholder, ...] = ()

    def render(self, bindings: Mapping[str, str]) -> str:
        """
        bindings로 템플릿 렌더링.

        Args:
            bindings: {변수명: 값}

        Returns:
            렌더링된 문자열

        Raises:
            UndefinedVariableError: 템플릿 변수가 bindings에 없음
        """
        if not self.placeholders:
            return self.text

        parts: list[str] = []
        cursor = 0
        for placeholder in self.placeholders:
            try:
                value = bindings[placeholder.name]
            except KeyError:
                raise UndefinedVariableError(placeholder.name) from None

            parts.append(self.text[cursor:placeholder.offset])
            parts.append(html.escape(value) if placeholder.escape else value)
            cursor = placeholder.offset
        parts.append(self.text[cursor:])
        return "".join(parts)

    def render_many(self, bindings_list: Iterable[Mapping[str, str]]) -> str:
        """bindings마다 한 번씩 렌더링 후 구분자 없이 이어붙임."""
        return "".join(self.render(bindings) for bindings in bindings_list)

    @property
    def variable_names(self) -> set[str]:
        """템플릿이 참조하는 변수명 집합."""
        return {p.name for p in self.placeholders}


def compile_template(text: str) -> CompiledTemplate:
    """
    텍스트를 CompiledTemplate으로 컴파일.

    가장 앞의 마커를 제거하고 처음부터 다시 스캔하는 과정을 마커가
    없을 때까지 반복한다. 제거로 인해 새로 드러난 마커도 함께 처리된다.
    알 수 없는 문법은 에러 없이 그대로 남는다.

    Args:
        text: 원본 템플릿 텍스트

    Returns:
        CompiledTemplate
    """
    found: list[Placeholder] = []
    match = PLACEHOLDER_PATTERN.search(text)
    while match is not None:
        found.append(
            Placeholder(
                offset=match.start(),
                name=match.group(2),
                escape=match.group(1) is None,
            )
        )
        text = text[:match.start()] + text[match.end():]
        match = PLACEHOLDER_PATTERN.search(text)

    # sorted()는 stable → 같은 offset은 제거 순서 유지
    placeholders = tuple(sorted(found, key=lambda p: p.offset))
    return CompiledTemplate(text=text, placeholders=placeholders)


def split_templates(text: str) -> list[CompiledTemplate]:
    """'---' 한 줄로 구분된 문서를 세그먼트별로 컴파일 (순서 유지)."""
    return [compile_template(segment) for segment in SEPARATOR_PATTERN.split(text)]
