"""
All failures encountered while parsing a recipe are reported as a
:py:exc:`RecipeParseError` (or one of its subclasses). When cast to
:py:class:`str`, errors with a known source position take the form:

.. code:: text

    At line 7 column 1:
        - Milk, 50 mL, 2 cups
        ^
    Ingredient 'Milk, 50 mL, 2 cups' has an invalid quantity '50 mL, 2 cups'

Errors without a known position (e.g. those raised while parsing an isolated
string) are rendered as just their message.

.. autoclass:: SourcePosition
    :members:

.. autoexception:: RecipeParseError

.. autoexception:: StructureError

.. autoexception:: UnexpectedEndOfDocumentError

.. autoexception:: InvalidAmountError

.. autoexception:: InvalidUnitError

.. autoexception:: IngredientSyntaxError

.. autoexception:: InvalidTimerError

.. autoexception:: MetadataError
"""

from typing import Any, Optional, NamedTuple

from dataclasses import dataclass

from peggie.error_message_generation import (
    offset_to_line_and_column,
    extract_line,
    format_error_message,
)


__all__ = [
    "SourcePosition",
    "RecipeParseError",
    "StructureError",
    "UnexpectedEndOfDocumentError",
    "InvalidAmountError",
    "InvalidUnitError",
    "IngredientSyntaxError",
    "InvalidTimerError",
    "MetadataError",
]


class SourcePosition(NamedTuple):
    """A location within a recipe document."""

    line: int
    column: int
    """1-based line and column numbers."""

    snippet: str
    """The full source line the position refers to."""

    @classmethod
    def from_offset(cls, source: str, offset: int) -> "SourcePosition":
        line, column = offset_to_line_and_column(source, offset)
        return cls(line, column, extract_line(source, line))


@dataclass
class RecipeParseError(ValueError):
    """Base type for all recipe parsing errors."""

    message: str

    position: Optional[SourcePosition] = None
    """
    The location of the cause of the problem in the recipe document, if
    known.
    """

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        else:
            return format_error_message(
                self.position.line,
                self.position.column,
                self.position.snippet,
                self.message,
            )

    def with_position(self, position: Optional[SourcePosition]) -> "RecipeParseError":
        """
        Attach a position to this error, unless it already has one. Returns
        the error itself, ready to be re-raised.
        """
        if self.position is None:
            self.position = position
        return self


class StructureError(RecipeParseError):
    """
    Thrown when the markdown document does not have the shape of a recipe
    (e.g. a heading is missing, out of order or a node of the wrong kind was
    found).
    """

    def __init__(self, message: str, node: Any = None) -> None:
        super().__init__(message, getattr(node, "position", None))


class UnexpectedEndOfDocumentError(StructureError):
    """Thrown when the document ends before a required section."""

    def __init__(self) -> None:
        super().__init__("Unexpected end of document")


class InvalidAmountError(RecipeParseError):
    """
    Thrown when the numerical part of a quantity is not a valid decimal
    number.
    """

    amount: str
    """The offending amount text."""

    cause: Optional[ValueError]
    """The underlying number parsing failure (None if the amount is empty)."""

    def __init__(self, amount: str, cause: Optional[ValueError] = None) -> None:
        if cause is None:
            message = "Expected an amount"
        else:
            message = f"Invalid amount {amount!r} ({cause})"
        super().__init__(message)
        self.amount = amount
        self.cause = cause


class InvalidUnitError(RecipeParseError):
    """
    Thrown when a quantity's unit is not part of the family of units required
    in that context (e.g. a timer given in grams).
    """

    unit: str
    """The offending unit text."""

    family: str
    """The name of the family of units which was expected."""

    def __init__(self, unit: str, family: str) -> None:
        super().__init__(f"Invalid unit {unit!r}, expected a {family} unit")
        self.unit = unit
        self.family = family


class IngredientSyntaxError(RecipeParseError):
    """
    Thrown when an ingredient line does not follow the
    ``<name>[, <quantity>[/<quantity>]*][(<info>)][| <alternative>]*`` syntax.
    """

    text: str
    """The ingredient text which could not be parsed."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class InvalidTimerError(RecipeParseError):
    """
    Thrown when the text of a timer in a step (written in **strong emphasis**)
    is not a time quantity.
    """

    text: str
    """The timer text which could not be parsed."""

    cause: RecipeParseError
    """
    Why the text is not a time quantity: an :py:exc:`InvalidAmountError` or
    an :py:exc:`InvalidUnitError`.
    """

    def __init__(
        self,
        text: str,
        cause: RecipeParseError,
        position: Optional[SourcePosition] = None,
    ) -> None:
        super().__init__(
            f"Expected time information but got {text!r} ({cause.message})", position
        )
        self.text = text
        self.cause = cause


class MetadataError(RecipeParseError):
    """Thrown when the YAML frontmatter of a recipe is invalid."""
