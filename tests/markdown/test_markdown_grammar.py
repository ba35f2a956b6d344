import pytest

from typing import Any

from recipe_md.errors import StructureError
from recipe_md.markdown import parse_markdown
from recipe_md.markdown.common import block_children
from recipe_md.markdown.grammar import (
    text_runs,
    expect_text,
    expect_children,
    expect_list,
    get_heading,
    get_text_from_paragraph,
)


def parse_one(source: str) -> Any:
    (node,) = block_children(parse_markdown(source))
    return node


class TestExpectChildren:
    def test_valid(self) -> None:
        node = parse_one("- a\n- b\n\n- c\n")
        children = expect_children(node, 3)
        assert len(children) == 3

    def test_wrong_number(self) -> None:
        node = parse_one("- a\n- b\n")
        with pytest.raises(StructureError) as excinfo:
            expect_children(node, 3)
        assert "Expected list to have 3 children, but got 2" in str(excinfo.value)
        assert excinfo.value.position is not None
        assert excinfo.value.position.line == 1

    def test_no_children(self) -> None:
        paragraph = parse_one("Hello")
        (text,) = paragraph.children
        with pytest.raises(StructureError, match="cannot have children"):
            expect_children(text, 1)


class TestGetHeading:
    @pytest.mark.parametrize(
        "source, level",
        [
            ("# Title", 1),
            ("## Title", 2),
            ("### Title", 3),
            ("Title\n===\n", 1),
            ("Title\n---\n", 2),
        ],
    )
    def test_valid(self, source: str, level: int) -> None:
        assert get_heading(parse_one(source), level) == "Title"
        assert get_heading(parse_one(source), level, "Title") == "Title"

    def test_not_a_heading(self) -> None:
        with pytest.raises(StructureError, match="but got paragraph"):
            get_heading(parse_one("Title"), 1)
        with pytest.raises(StructureError, match="heading 'Ingredients'"):
            get_heading(parse_one("- Title"), 2, "Ingredients")

    def test_wrong_level(self) -> None:
        with pytest.raises(StructureError, match="level 2, but got level 3"):
            get_heading(parse_one("### Title"), 2)

    def test_wrong_text(self) -> None:
        with pytest.raises(StructureError, match="but got 'Ingredientz'"):
            get_heading(parse_one("## Ingredientz"), 2, "Ingredients")

    def test_not_text(self) -> None:
        with pytest.raises(StructureError):
            get_heading(parse_one("# *Title*"), 1)
        with pytest.raises(StructureError):
            get_heading(parse_one("# Title *foo*"), 1)


class TestGetTextFromParagraph:
    def test_valid(self) -> None:
        assert get_text_from_paragraph(parse_one("Hello, world")) == "Hello, world"

    def test_not_a_paragraph(self) -> None:
        with pytest.raises(StructureError, match="Expected paragraph"):
            get_text_from_paragraph(parse_one("# Hello"))

    def test_not_text(self) -> None:
        with pytest.raises(StructureError):
            get_text_from_paragraph(parse_one("Hello *world*"))
        with pytest.raises(StructureError):
            get_text_from_paragraph(parse_one("*Hello*"))


class TestExpectList:
    def test_valid(self) -> None:
        items = expect_list(parse_one("- a\n- b\n"), "ingredients")
        assert len(items) == 2

    def test_not_a_list(self) -> None:
        with pytest.raises(StructureError, match="Expected ingredients list"):
            expect_list(parse_one("Hello"), "ingredients")


class TestTextRuns:
    def test_merges_text(self) -> None:
        paragraph = parse_one("Salt &amp;\npepper \\*to taste\\*")
        assert text_runs(paragraph.children) == ["Salt &\npepper *to taste*"]

    def test_other_elements_kept(self) -> None:
        paragraph = parse_one("Add *salt*\nand *pepper*")
        runs = text_runs(paragraph.children)
        assert len(runs) == 4
        assert runs[0] == "Add "
        assert not isinstance(runs[1], str)
        assert runs[2] == "\nand "
        assert not isinstance(runs[3], str)

    def test_hard_line_break_is_not_text(self) -> None:
        paragraph = parse_one("Salt\\\npepper")
        runs = text_runs(paragraph.children)
        assert len(runs) == 3
        assert not isinstance(runs[1], str)


class TestExpectText:
    def test_wrapped_paragraph(self) -> None:
        assert get_text_from_paragraph(parse_one("Milk,\n50 mL")) == "Milk,\n50 mL"

    def test_heading_with_escapes(self) -> None:
        assert get_heading(parse_one("# Fish \\& chips"), 1) == "Fish & chips"

    def test_inline_element(self) -> None:
        (emphasis,) = parse_one("*Hello*").children
        assert expect_text(emphasis) == "Hello"

    def test_context(self) -> None:
        paragraph = parse_one("Foo\nBar *Baz `qux`*")
        emphasis = paragraph.children[-1]
        with pytest.raises(StructureError, match="but got codespan") as excinfo:
            expect_text(emphasis, context=paragraph)
        assert excinfo.value.position is not None
        assert excinfo.value.position.line == 1
