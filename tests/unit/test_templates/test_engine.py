"""
test_engine.py - 템플릿 엔진 테스트

DoD:
- placeholder 없는 텍스트는 그대로
- {name}은 escape, @{name}은 raw
- 변수 누락 → UndefinedVariableError (빈 문자열 대체 금지)
- render_many = 개별 render의 연결
- '---' 분할 후 각 템플릿은 독립
"""

import pytest

from src.domain.errors import ErrorCodes, UndefinedVariableError
from src.templates.engine import (
    CompiledTemplate,
    Placeholder,
    compile_template,
    split_templates,
)

# =============================================================================
# compile_template
# =============================================================================


class TestCompileTemplate:
    """compile_template 함수 테스트."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "plain text",
            "<html><body>no markers</body></html>",
            "css { color: red; }",
            "curly {not a name} and @ sign",
            "한글 텍스트",
        ],
    )
    def test_no_placeholders_roundtrip(self, text):
        """마커 없는 텍스트 → 렌더 결과 동일."""
        template = compile_template(text)

        assert template.placeholders == ()
        assert template.render({}) == text

    def test_markers_removed_from_text(self):
        """마커는 리터럴에서 제거되고 offset 기록."""
        template = compile_template("Hi {name}, @{html}!")

        assert template.text == "Hi , !"
        assert template.placeholders == (
            Placeholder(offset=3, name="name", escape=True),
            Placeholder(offset=5, name="html", escape=False),
        )

    def test_offsets_ascending(self):
        """placeholder는 offset 오름차순."""
        template = compile_template("{a}x{b}y{c}")

        offsets = [p.offset for p in template.placeholders]
        assert offsets == sorted(offsets)
        assert [p.name for p in template.placeholders] == ["a", "b", "c"]

    def test_adjacent_placeholders_keep_order(self):
        """같은 offset의 마커는 원래 순서대로 렌더."""
        template = compile_template("{a}{b}@{c}")

        assert template.render({"a": "1", "b": "2", "c": "3"}) == "123"

    def test_invalid_names_left_verbatim(self):
        """허용되지 않는 이름은 그대로 남음."""
        template = compile_template("{with-dash} {ok} {}")

        assert template.variable_names == {"ok"}
        assert template.render({"ok": "v"}) == "{with-dash} v {}"

    def test_revealed_marker_is_compiled(self):
        """마커 제거로 새로 드러난 마커도 처리."""
        template = compile_template("{na{x}me}")

        assert template.text == ""
        assert template.variable_names == {"x", "name"}
        assert template.render({"x": "X", "name": "N"}) == "NX"

    def test_template_is_immutable(self):
        """CompiledTemplate은 frozen."""
        template = compile_template("{a}")

        with pytest.raises(AttributeError):
            template.text = "changed"  # type: ignore[misc]


# =============================================================================
# render
# =============================================================================


class TestRender:
    """CompiledTemplate.render 테스트."""

    def test_escaped_placeholder(self):
        """{name} → HTML escape."""
        template = compile_template("Hi {name}!")

        assert template.render({"name": "<b>"}) == "Hi &lt;b&gt;!"

    def test_raw_placeholder(self):
        """@{name} → escape 없음."""
        template = compile_template("Hi @{name}!")

        assert template.render({"name": "<b>"}) == "Hi <b>!"

    def test_escapes_quotes_and_ampersand(self):
        """& " ' 모두 escape."""
        template = compile_template('<a title="{t}">')

        rendered = template.render({"t": "a&b \"c\" 'd'"})

        assert "&amp;" in rendered
        assert "&quot;" in rendered
        assert "'" not in rendered.replace("&#x27;", "")

    def test_same_variable_multiple_times(self):
        """동일 변수 여러 번 사용."""
        template = compile_template('<a href="{url}">{url}</a>')

        assert template.render({"url": "x"}) == '<a href="x">x</a>'

    def test_extra_bindings_ignored(self):
        """사용하지 않는 binding은 무시."""
        template = compile_template("{a}")

        assert template.render({"a": "1", "unused": "2"}) == "1"

    def test_values_are_not_rescanned(self):
        """삽입된 값 안의 마커는 치환되지 않음."""
        template = compile_template("@{a}")

        assert template.render({"a": "{b}"}) == "{b}"

    @pytest.mark.parametrize(
        "text,bindings,missing",
        [
            ("{x}", {}, "x"),
            ("@{x}", {"y": "1"}, "x"),
            ("{a} {b}", {"a": "1"}, "b"),
        ],
    )
    def test_undefined_variable_raises(self, text, bindings, missing):
        """변수 누락 → UndefinedVariableError."""
        template = compile_template(text)

        with pytest.raises(UndefinedVariableError) as exc_info:
            template.render(bindings)

        assert exc_info.value.name == missing
        assert exc_info.value.code == ErrorCodes.UNDEFINED_VARIABLE

    def test_render_does_not_mutate_template(self):
        """렌더 후에도 템플릿 재사용 가능."""
        template = compile_template("[{v}]")

        assert template.render({"v": "1"}) == "[1]"
        assert template.render({"v": "2"}) == "[2]"
        assert template.text == "[]"


# =============================================================================
# render_many
# =============================================================================


class TestRenderMany:
    """CompiledTemplate.render_many 테스트."""

    def test_empty_sequence(self):
        """빈 시퀀스 → 빈 문자열."""
        template = compile_template("<li>{name}</li>")

        assert template.render_many([]) == ""

    @pytest.mark.parametrize("n", [1, 2, 5])
    def test_concatenation_of_single_renders(self, n):
        """n개 → 개별 render n번의 연결."""
        template = compile_template("<li>{name}</li>")
        bindings = [{"name": f"item{i}"} for i in range(n)]

        expected = "".join(template.render(b) for b in bindings)

        assert template.render_many(bindings) == expected

    def test_accepts_generator(self):
        """generator 입력, 순서 유지."""
        template = compile_template("{n},")

        rendered = template.render_many({"n": str(i)} for i in range(3))

        assert rendered == "0,1,2,"

    def test_missing_variable_in_any_row_raises(self):
        """행 하나라도 누락 → 에러."""
        template = compile_template("{n}")

        with pytest.raises(UndefinedVariableError):
            template.render_many([{"n": "1"}, {}])


# =============================================================================
# split_templates
# =============================================================================


class TestSplitTemplates:
    """split_templates 함수 테스트."""

    def test_two_segments_independent(self):
        """'A\\n---\\nB' → 독립된 템플릿 2개."""
        first, second = split_templates("A {x}\n---\nB {y}")

        assert first.render({"x": "1"}) == "A 1\n"
        assert second.render({"y": "2"}) == "\nB 2"

    def test_no_separator_single_template(self):
        """구분자 없음 → 템플릿 1개."""
        templates = split_templates("only {one}")

        assert len(templates) == 1
        assert isinstance(templates[0], CompiledTemplate)

    def test_separator_must_be_whole_line(self):
        """'----'나 'a---'는 구분자가 아님."""
        templates = split_templates("a---\n----\nb")

        assert len(templates) == 1

    def test_order_preserved(self):
        """세그먼트 순서 유지."""
        templates = split_templates("1\n---\n2\n---\n3")

        assert [t.render({}).strip() for t in templates] == ["1", "2", "3"]
