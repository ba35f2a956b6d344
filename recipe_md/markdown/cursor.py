"""
.. autoclass:: ASTCursor
    :members:
"""

from typing import Any, Optional, Sequence

from recipe_md.errors import UnexpectedEndOfDocumentError

from recipe_md.markdown.common import HEADINGS


class ASTCursor:
    """
    A forward-only cursor over a sequence of (block) markdown elements. Once
    consumed, an element is never revisited.
    """

    _nodes: Sequence[Any]
    _index: int

    def __init__(self, nodes: Sequence[Any]) -> None:
        self._nodes = nodes
        self._index = 0

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._nodes)

    def peek(self) -> Optional[Any]:
        """The element at the cursor, without consuming it (None at the end)."""
        if self.exhausted:
            return None
        return self._nodes[self._index]

    def next(self) -> Any:
        """
        Consume and return the element at the cursor. Throws an
        :py:exc:`~recipe_md.errors.UnexpectedEndOfDocumentError` when no
        elements remain.
        """
        if self.exhausted:
            raise UnexpectedEndOfDocumentError()
        node = self._nodes[self._index]
        self._index += 1
        return node

    def consume_to_next_heading(self, level: int) -> Sequence[Any]:
        """
        Consume and return all elements up to (but not including) the next
        heading of the given level. If there is no such heading, all remaining
        elements are consumed.
        """
        start = self._index
        while not self.exhausted:
            node = self._nodes[self._index]
            if isinstance(node, HEADINGS) and node.level == level:
                break
            self._index += 1
        return self._nodes[start : self._index]

    def remaining(self) -> Sequence[Any]:
        """All elements not yet consumed (without consuming them)."""
        return self._nodes[self._index :]
