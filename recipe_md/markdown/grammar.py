"""
Structural assertions used to check the shape of a recipe document. Each
either returns the part of the element of interest or throws a
:py:exc:`~recipe_md.errors.StructureError` pointing at the offending element.
"""

from typing import Any, List, Optional, Sequence

import html

from marko import block, inline

from recipe_md.errors import StructureError

from recipe_md.markdown.common import HEADINGS, block_children, describe


def inline_text(node: Any) -> Optional[str]:
    """
    The text of an inline element which stands for plain text, or None for
    any other element. Raw text has its HTML entities decoded (as marko's
    HTML renderer does), backslash escapes give the escaped character and
    soft line breaks give a newline.
    """
    if isinstance(node, inline.RawText):
        return html.unescape(str(node.children))
    elif isinstance(node, inline.Literal):
        return str(node.children)
    elif isinstance(node, inline.LineBreak) and node.soft:
        return "\n"
    else:
        return None


def text_runs(nodes: Sequence[Any]) -> List[Any]:
    """
    Merge each run of consecutive plain text inline elements (see
    :py:func:`inline_text`) into a single :py:class:`str`. All other elements
    are passed through unchanged.
    """
    runs: List[Any] = []
    for node in nodes:
        text = inline_text(node)
        if text is None:
            runs.append(node)
        elif runs and isinstance(runs[-1], str):
            runs[-1] += text
        else:
            runs.append(text)
    return runs


def expect_text(node: Any, allow_empty: bool = False, context: Any = None) -> str:
    """
    Check that an element's inline children are just text, returning it. Any
    error points at ``context`` if given (e.g. the paragraph enclosing an
    inline element), otherwise the element itself.
    """
    if context is None:
        context = node

    runs = text_runs(node.children)
    for run in runs:
        if not isinstance(run, str):
            raise StructureError(
                f"Expected {describe(node)} to contain only text, "
                f"but got {describe(run)}",
                context,
            )

    if not runs:
        if allow_empty:
            return ""
        raise StructureError(f"Expected {describe(node)} to contain text", context)

    (text,) = runs
    return str(text)


def expect_children(node: Any, num: int) -> Sequence[Any]:
    """
    Check that an element has exactly ``num`` (non blank line) children,
    returning them.
    """
    if not isinstance(getattr(node, "children", None), list):
        raise StructureError(f"A {describe(node)} cannot have children", node)

    children = block_children(node)
    if len(children) != num:
        raise StructureError(
            f"Expected {describe(node)} to have {num} "
            f"child{'ren' if num != 1 else ''}, but got {len(children)}",
            node,
        )
    return children


def get_heading(node: Any, level: int, expected_text: Optional[str] = None) -> str:
    """
    Check that an element is a heading at the given level containing just
    text (which, if given, must be ``expected_text``). Returns the heading
    text.
    """
    if not isinstance(node, HEADINGS):
        if expected_text is not None:
            raise StructureError(
                f"Expected level {level} heading '{expected_text}', "
                f"but got {describe(node)}",
                node,
            )
        raise StructureError(
            f"Expected level {level} heading, but got {describe(node)}", node
        )

    if node.level != level:
        raise StructureError(
            f"Expected heading at level {level}, but got level {node.level}", node
        )

    text = expect_text(node)
    if expected_text is not None and text != expected_text:
        raise StructureError(
            f"Expected heading '{expected_text}', but got '{text}'", node
        )

    return text


def get_text_from_paragraph(node: Any) -> str:
    """
    Check that an element is a paragraph containing just text, returning
    that text.
    """
    if not isinstance(node, block.Paragraph):
        raise StructureError(f"Expected paragraph, but got {describe(node)}", node)

    return expect_text(node)


def expect_list(node: Any, what: str) -> Sequence[Any]:
    """Check that an element is a list, returning its items."""
    if not isinstance(node, block.List):
        raise StructureError(f"Expected {what} list, but got {describe(node)}", node)
    return block_children(node)
