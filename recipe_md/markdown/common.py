"""
A :py:mod:`marko` extension adding the block elements needed to parse recipe
documents: source position logging on structural elements and YAML
frontmatter.
"""

from typing import Any, Optional, Sequence

import re

from marko import block
from marko.helpers import MarkoExtension

from recipe_md.errors import SourcePosition


def parse_logging_pos(cls: Any, parse: Any, source: Any) -> Any:
    """
    Run a :py:mod:`marko.block` element's 'parse' classmethod, logging the
    source offset where parsing commenced ('pos' in marko terminology) in the
    :py:attr:`pos` attribute of the resulting element.
    """
    pos = source.pos
    parsed = parse(source)
    # NB: Some elements return the information needed to construct the
    # element rather than the element itself (in which case marko would
    # construct it).
    element = parsed if isinstance(parsed, block.BlockElement) else cls(parsed)
    element.pos = pos
    return element


# NB: marko registers an overriding element under the name of its first base
# class, so the marko element must come first.


class Heading(block.Heading):
    """Adds 'pos' attribute."""

    override = True

    pos: int

    @classmethod
    def parse(cls, source: Any) -> Any:
        return parse_logging_pos(cls, super().parse, source)


class List(block.List):
    """Adds 'pos' attribute."""

    override = True

    pos: int

    @classmethod
    def parse(cls, source: Any) -> Any:
        return parse_logging_pos(cls, super().parse, source)


class Paragraph(block.Paragraph):
    """Adds 'pos' attribute (also to Setext headings)."""

    override = True

    pos: int

    @classmethod
    def parse(cls, source: Any) -> Any:
        return parse_logging_pos(cls, super().parse, source)


class FrontMatter(block.BlockElement):
    """
    A block of YAML at the very start of the document delimited by ``---``
    lines, for example::

        ---
        tags:
          - "#dessert"
        ---
    """

    priority = 10

    pattern = re.compile(
        r"---[ \t]*\n(?P<yaml>.*?)^---[ \t]*$\n?",
        flags=re.DOTALL | re.MULTILINE,
    )

    pos: int

    position: Optional[SourcePosition]

    yaml: str
    """The (unparsed) YAML source."""

    def __init__(self, match: "re.Match[str]") -> None:
        self.yaml = match["yaml"]
        self.children = []

    @classmethod
    def match(cls, source: Any) -> bool:
        return source.pos == 0 and source.expect_re(cls.pattern) is not None

    @classmethod
    def parse(cls, source: Any) -> "FrontMatter":
        match = source.match
        source.consume()
        element = cls(match)
        element.pos = 0
        return element


RECIPE_MARKDOWN = MarkoExtension(elements=[Heading, List, Paragraph, FrontMatter])
"""The :py:mod:`marko` extension for parsing recipe documents."""


HEADINGS = (block.Heading, block.SetextHeading)
"""Both ATX ('# Foo') and Setext ('Foo\\n===') heading element types."""


def block_children(element: Any) -> Sequence[Any]:
    """
    The children of a block element, less any blank lines (which marko
    includes as elements).
    """
    return [
        child
        for child in element.children
        if not isinstance(child, block.BlankLine)
    ]


def describe(element: Any) -> str:
    """A short human readable description of a markdown element."""
    if isinstance(element, HEADINGS):
        return f"level {element.level} heading"
    elif isinstance(element, FrontMatter):
        return "frontmatter"
    else:
        return type(element).__name__.lower()


def record_positions(
    element: Any, source: str, parent_position: Optional[SourcePosition] = None
) -> None:
    """
    Convert the 'pos' offsets logged during parsing into a
    :py:class:`~recipe_md.errors.SourcePosition` 'position' attribute on every
    element. Elements without a logged offset take the position of their first
    positioned child or, failing that, their parent.
    """
    pos: Optional[int] = getattr(element, "pos", None)
    if pos is not None:
        position: Optional[SourcePosition] = SourcePosition.from_offset(source, pos)
    else:
        position = parent_position

    children = getattr(element, "children", None)
    if isinstance(children, list):
        for child in children:
            record_positions(child, source, position)
        if pos is None:
            for child in children:
                if getattr(child, "pos", None) is not None:
                    position = child.position
                    break

    element.position = position
