"""
Quantities are written as an amount followed by an optional unit, e.g.
``50 mL``, ``1.5kg`` or ``3``. The amount runs up to the first letter (or
``°`` symbol) and the remainder is the unit name (see
:py:mod:`recipe_md.units`).

.. autoclass:: Quantity
    :members:

.. autoclass:: QuantityOf
    :members:
"""

from typing import cast, Generic, Tuple, Type, TypeVar

from dataclasses import dataclass

from recipe_md.errors import InvalidAmountError, InvalidUnitError
from recipe_md.number_parser import number, format_number
from recipe_md.units import (
    Unit,
    UnitFamily,
    decode_unit,
    sanitize,
    unit_symbol,
)


__all__ = [
    "split_quantity",
    "parse_amount",
    "Quantity",
    "QuantityOf",
]


def split_quantity(text: str) -> Tuple[str, str]:
    """
    Split a quantity into its amount and unit parts (both stripped of
    surrounding whitespace). The unit part is empty if no unit was given.
    """
    text = text.strip()
    for i, char in enumerate(text):
        if char.isalpha() or char == "°":
            return (text[:i].rstrip(), text[i:])
    return (text, "")


def parse_amount(amount: str) -> float:
    """
    Parse the amount part of a quantity, throwing an
    :py:exc:`~recipe_md.errors.InvalidAmountError` on failure.
    """
    if not amount:
        raise InvalidAmountError(amount)
    try:
        return number(amount)
    except ValueError as e:
        raise InvalidAmountError(amount, e) from e


@dataclass(frozen=True)
class Quantity:
    """An amount of something, in any unit."""

    unit: Unit
    amount: float

    @classmethod
    def from_str(cls, text: str) -> "Quantity":
        """
        Parse a quantity, e.g. "50 mL".

        Raises
        ======
        recipe_md.errors.InvalidAmountError
            If the amount is missing or not a valid number.
        """
        amount, unit = split_quantity(text)
        return cls(decode_unit(unit), parse_amount(amount))

    def sanitize(self) -> "Quantity":
        """Convert this quantity into the base unit of its family."""
        unit, amount = sanitize(self.unit, self.amount)
        return Quantity(unit, amount)

    def __str__(self) -> str:
        return f"{format_number(self.amount)}{unit_symbol(self.unit)}"


F = TypeVar("F", bound=UnitFamily)


@dataclass(frozen=True)
class QuantityOf(Generic[F]):
    """
    An amount of something, in a unit which must come from a specific unit
    family, e.g. a ``QuantityOf[Time]``.
    """

    unit: F
    amount: float

    @classmethod
    def from_str(cls, family: Type[F], text: str) -> "QuantityOf[F]":
        """
        Parse a quantity whose unit must belong to the given family, e.g.
        ``QuantityOf.from_str(Time, "10 minutes")``.

        Raises
        ======
        recipe_md.errors.InvalidAmountError
            If the amount is missing or not a valid number.
        recipe_md.errors.InvalidUnitError
            If the unit is not a member of the given family.
        """
        amount, unit = split_quantity(text)
        parsed_amount = parse_amount(amount)
        try:
            parsed_unit = cast(F, family.decode(unit))
        except ValueError as e:
            raise InvalidUnitError(unit, family.__name__.lower()) from e
        return cls(parsed_unit, parsed_amount)

    def to_quantity(self) -> Quantity:
        return Quantity(cast(Unit, self.unit), self.amount)

    def sanitize(self) -> "QuantityOf[F]":
        """
        Convert this quantity into the base unit of its family (which is
        always in the same family).
        """
        unit, amount = sanitize(cast(Unit, self.unit), self.amount)
        return QuantityOf(cast(F, unit), amount)

    def __str__(self) -> str:
        return str(self.to_quantity())
