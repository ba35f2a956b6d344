"""
The recipe markdown format has changed slightly over time. The variations
accepted by the parser are selected using a :py:class:`Dialect`:

.. autoclass:: Dialect
    :members:

.. autodata:: DEFAULT_DIALECT

.. autodata:: LEGACY_DIALECT
"""

from dataclasses import dataclass


__all__ = [
    "Dialect",
    "DEFAULT_DIALECT",
    "LEGACY_DIALECT",
]


@dataclass(frozen=True)
class Dialect:
    """Configures the grammar accepted by the recipe parser."""

    ingredients_heading: str = "Ingredients"
    """The text of the level 2 heading introducing the ingredients."""

    instructions_heading: str = "Instructions"
    """The text of the level 2 heading introducing the instructions."""

    allow_size_redefinition: bool = True
    """
    If True, a ``size | <name>`` metadata entry may be given more than once,
    the last one taking effect. If False, doing so is an error.
    """


DEFAULT_DIALECT = Dialect()
"""The current recipe format."""

LEGACY_DIALECT = Dialect(instructions_heading="Steps")
"""The original recipe format, where instructions were headed 'Steps'."""
