"""
Recipes understand a small, fixed set of cooking-related units, grouped into
families of related units:

* :py:class:`Nominal`: no unit at all (e.g. "3 lemons")
* :py:class:`Mass`: g, kg, oz, lbs
* :py:class:`Volume`: ml, cl, l, tsp, tbsp, fl oz, cup, gal
* :py:class:`Distance`: mm, cm, in
* :py:class:`Temperature`: °C, °F
* :py:class:`Time`: seconds, minutes, hours

Unit names are matched case-insensitively. Any unit name which isn't
recognised is kept verbatim as a :py:class:`Custom` unit (e.g. 'bunch' or
'cloves').

.. note::

    Conversions are deliberately approximate (e.g. one ounce is 28 grams)
    since they are only used to give cooks a sensible metric equivalent.

Internal API
------------

.. autoclass:: UnitFamily
    :members:

.. autoclass:: Custom

.. autofunction:: decode_unit

.. autofunction:: sanitize

.. autofunction:: family_of
"""

from typing import cast, Optional, Union, Tuple, Type, Mapping

from dataclasses import dataclass

from enum import Enum


__all__ = [
    "UnitFamily",
    "Nominal",
    "Mass",
    "Volume",
    "Distance",
    "Temperature",
    "Time",
    "Custom",
    "Unit",
    "FAMILIES",
    "decode_unit",
    "sanitize",
    "family_of",
    "unit_symbol",
]


class UnitFamily(Enum):
    """
    Base class for the enumerations of units in each family. The value of
    each member is the tuple of (lower case) names that unit may be written
    as, the first being its canonical symbol.
    """

    @property
    def names(self) -> Tuple[str, ...]:
        return cast(Tuple[str, ...], self.value)

    @property
    def symbol(self) -> str:
        return self.names[0]

    def __contains__(self, name: str) -> bool:
        """Check if a unit name matches this unit."""
        return name.strip().lower() in self.names

    @classmethod
    def decode(cls, name: str) -> "UnitFamily":
        """
        Find the unit in this family with the given name. Throws a
        :py:exc:`ValueError` if no unit in this family matches.
        """
        for unit in cls:
            if name in unit:
                return unit
        raise ValueError(f"{name!r} is not a {cls.__name__.lower()} unit")


class Nominal(UnitFamily):
    """A unit-less quantity (e.g. a count of things)."""

    nominal = ("",)


class Mass(UnitFamily):
    gram = ("g",)
    kilogram = ("kg",)
    ounce = ("oz",)
    pound = ("lbs",)


class Volume(UnitFamily):
    milliliter = ("ml",)
    centiliter = ("cl",)
    liter = ("l",)
    teaspoon = ("tsp",)
    tablespoon = ("tbsp",)
    fluid_ounce = ("fl oz", "fl. oz.")
    cup = ("cup",)
    gallon = ("gal",)


class Distance(UnitFamily):
    millimeter = ("mm",)
    centimeter = ("cm",)
    inch = ("in",)


class Temperature(UnitFamily):
    celsius = ("°c", "c")
    fahrenheit = ("°f", "f")


class Time(UnitFamily):
    second = ("s", "sec", "sec.", "second", "seconds")
    minute = ("min", "min.", "minute", "minutes")
    hour = ("h", "hour", "hours")


@dataclass(frozen=True)
class Custom:
    """A unit which is not part of any known family (e.g. 'bunch')."""

    name: str


Unit = Union[Nominal, Mass, Volume, Distance, Temperature, Time, Custom]

FAMILIES: Tuple[Type[UnitFamily], ...] = (
    Nominal,
    Mass,
    Volume,
    Distance,
    Temperature,
    Time,
)
"""The known unit families, in the order units are looked up."""


_LINEAR_CONVERSIONS: Mapping[UnitFamily, Tuple[UnitFamily, float]] = {
    Mass.ounce: (Mass.gram, 28.0),
    Mass.pound: (Mass.gram, 450.0),
    Volume.teaspoon: (Volume.milliliter, 5.0),
    Volume.tablespoon: (Volume.milliliter, 15.0),
    Volume.cup: (Volume.milliliter, 240.0),
    # Halfway between US and UK conventions. For more precision, use a better
    # unit.
    Volume.fluid_ounce: (Volume.milliliter, 29.0),
    Volume.gallon: (Volume.liter, 3.785),
    Distance.inch: (Distance.centimeter, 2.5),
}
"""Multiplicative conversions from non-base units into their base unit."""


def decode_unit(name: str) -> Unit:
    """
    Decode a unit name, trying each of the :py:data:`FAMILIES` in turn. An
    empty name is :py:attr:`Nominal.nominal`. Names which are not recognised
    by any family are returned as a :py:class:`Custom` unit.
    """
    for family in FAMILIES:
        try:
            return cast(Unit, family.decode(name))
        except ValueError:
            continue
    return Custom(name.strip())


def sanitize(unit: Unit, amount: float) -> Tuple[Unit, float]:
    """
    Convert an amount in the given unit into the base unit of its family
    (e.g. ounces into grams). Units which are already base units (along with
    :py:class:`Custom` and :py:class:`Nominal` units) are returned unchanged.
    """
    if unit is Temperature.fahrenheit:
        return (Temperature.celsius, (amount - 32.0) * 5.0 / 9.0)
    elif isinstance(unit, UnitFamily) and unit in _LINEAR_CONVERSIONS:
        base, factor = _LINEAR_CONVERSIONS[unit]
        return (cast(Unit, base), amount * factor)
    else:
        return (unit, amount)


def family_of(unit: Unit) -> Optional[Type[UnitFamily]]:
    """Get the family a unit belongs to (None for :py:class:`Custom` units)."""
    if isinstance(unit, UnitFamily):
        return type(unit)
    else:
        return None


def unit_symbol(unit: Unit) -> str:
    """The canonical way to write a unit (empty for nominal units)."""
    if isinstance(unit, Custom):
        return unit.name
    else:
        return unit.symbol
