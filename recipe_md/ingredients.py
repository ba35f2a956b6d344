"""
The ingredients section of a recipe is a bulleted list with one ingredient
per item, optionally split into named groups using level 3 headings:

.. code:: markdown

    ## Ingredients

    ### Sauce
    - Chopped tomatoes, 400 g
    - Basil, 1 bunch (fresh)

    ### Pasta
    - Spaghetti, 150g | Linguine, 150g

Each ingredient is written::

    <name>[, <quantity>[/ <alt quantity>]*][ (<info>)]

for example ``Milk, 250 ml / 1 cup (whole)``. Several interchangeable
ingredients may be given on one line, separated by ``|``.

.. autoclass:: Ingredient
    :members:

.. autoclass:: IngredientOptions
    :members:

.. autoclass:: Ingredients

.. autoclass:: IngredientList

.. autoclass:: IngredientGroup

.. autoclass:: IngredientGroups

.. autofunction:: parse_ingredients
"""

from typing import Any, List, Optional, Sequence, Tuple

from dataclasses import dataclass

import logging

from recipe_md.errors import (
    RecipeParseError,
    IngredientSyntaxError,
    StructureError,
)
from recipe_md.quantity import Quantity
from recipe_md.markdown.common import describe
from recipe_md.markdown.grammar import (
    expect_children,
    expect_list,
    get_heading,
    get_text_from_paragraph,
)


__all__ = [
    "Ingredient",
    "IngredientOptions",
    "Ingredients",
    "IngredientList",
    "IngredientGroup",
    "IngredientGroups",
    "parse_ingredients",
]


logger = logging.getLogger(__name__)


ALTERNATIVE_SEPARATOR = "|"
QUANTITY_SEPARATOR = ","
ALT_QUANTITY_SEPARATOR = "/"
INFO_START = "("
INFO_END = ")"

DELIMITERS = (
    QUANTITY_SEPARATOR,
    ALTERNATIVE_SEPARATOR,
    ALT_QUANTITY_SEPARATOR,
    INFO_START,
    INFO_END,
)
"""Characters which may not appear in an ingredient name or quantity."""


def _find_delimiter(text: str, delimiters: Sequence[str]) -> Optional[str]:
    for delimiter in delimiters:
        if delimiter in text:
            return delimiter
    return None


@dataclass(frozen=True)
class Ingredient:
    """A single ingredient."""

    name: str

    quantity: Optional[Quantity] = None
    """The amount of the ingredient, if given."""

    alt_quantities: Optional[Tuple[Quantity, ...]] = None
    """
    Equivalent quantities in other units (e.g. '1 cup' for '250 ml'), if
    given.
    """

    info: Optional[str] = None
    """Free-text information about the ingredient (e.g. 'finely chopped')."""

    @classmethod
    def from_str(cls, text: str) -> "Ingredient":
        """
        Parse an ingredient, e.g. "Milk, 250 ml / 1 cup (whole)".

        Raises
        ======
        recipe_md.errors.IngredientSyntaxError
        """
        original_text = text
        text = text.strip()

        info: Optional[str] = None
        if text.endswith(INFO_END):
            info_start = text.rfind(INFO_START)
            if info_start < 0:
                raise IngredientSyntaxError(
                    f"Unmatched {INFO_END!r} in ingredient {original_text!r}",
                    original_text,
                )
            info = text[info_start + len(INFO_START) : -len(INFO_END)].strip()
            text = text[:info_start]
            delimiter = _find_delimiter(
                info, (ALTERNATIVE_SEPARATOR, INFO_START, INFO_END)
            )
            if delimiter is not None:
                raise IngredientSyntaxError(
                    f"Ingredient information {info!r} must not contain {delimiter!r}",
                    original_text,
                )

        quantity: Optional[Quantity] = None
        alt_quantities: Optional[List[Quantity]] = None
        name, comma, quantities = text.partition(QUANTITY_SEPARATOR)
        if comma:
            for i, segment in enumerate(quantities.split(ALT_QUANTITY_SEPARATOR)):
                parsed = cls._parse_quantity(segment, original_text)
                if i == 0:
                    quantity = parsed
                elif alt_quantities is None:
                    alt_quantities = [parsed]
                else:
                    alt_quantities.append(parsed)

        name = name.strip()
        if not name:
            raise IngredientSyntaxError(
                f"Ingredient {original_text!r} has no name", original_text
            )
        delimiter = _find_delimiter(name, DELIMITERS)
        if delimiter is not None:
            raise IngredientSyntaxError(
                f"Ingredient name {name!r} must not contain {delimiter!r}",
                original_text,
            )

        return cls(
            name,
            quantity,
            tuple(alt_quantities) if alt_quantities is not None else None,
            info,
        )

    @staticmethod
    def _parse_quantity(segment: str, text: str) -> Quantity:
        segment = segment.strip()
        delimiter = _find_delimiter(segment, DELIMITERS)
        if delimiter is not None:
            raise IngredientSyntaxError(
                f"Quantity {segment!r} in ingredient {text!r} "
                f"must not contain {delimiter!r}",
                text,
            )
        try:
            return Quantity.from_str(segment)
        except RecipeParseError as e:
            raise IngredientSyntaxError(
                f"Invalid quantity {segment!r} in ingredient {text!r}: {e.message}",
                text,
            ) from e


@dataclass(frozen=True)
class IngredientOptions:
    """
    One line of the ingredients list: an ingredient and, optionally, some
    alternatives which may be used instead.
    """

    primary: Ingredient

    alternatives: Optional[Tuple[Ingredient, ...]] = None
    """Ingredients which may be used instead of the primary one, if any."""

    @classmethod
    def from_str(cls, text: str) -> "IngredientOptions":
        """
        Parse an ingredient line, e.g. "Butter, 50g | Margarine, 50g".

        Raises
        ======
        recipe_md.errors.IngredientSyntaxError
        """
        primary, separator, rest = text.partition(ALTERNATIVE_SEPARATOR)
        if not separator:
            return cls(Ingredient.from_str(primary))
        return cls(
            Ingredient.from_str(primary),
            tuple(
                Ingredient.from_str(alternative)
                for alternative in rest.split(ALTERNATIVE_SEPARATOR)
            ),
        )


class Ingredients:
    """
    Base class for the ingredients of a recipe: either an
    :py:class:`IngredientList` or :py:class:`IngredientGroups`.
    """


@dataclass(frozen=True)
class IngredientList(Ingredients):
    """A single, ungrouped list of ingredients."""

    ingredients: Tuple[IngredientOptions, ...] = ()


@dataclass(frozen=True)
class IngredientGroup:
    """A named group of ingredients (e.g. 'For the sauce')."""

    name: str
    ingredients: Tuple[IngredientOptions, ...]


@dataclass(frozen=True)
class IngredientGroups(Ingredients):
    """A list of named groups of ingredients."""

    groups: Tuple[IngredientGroup, ...]


def parse_ingredient_item(node: Any) -> IngredientOptions:
    """Parse a list item containing a single ingredient line."""
    (paragraph,) = expect_children(node, 1)
    text = get_text_from_paragraph(paragraph)
    try:
        return IngredientOptions.from_str(text)
    except RecipeParseError as e:
        raise e.with_position(paragraph.position)


def parse_ingredient_list(node: Any) -> Tuple[IngredientOptions, ...]:
    return tuple(
        parse_ingredient_item(item) for item in expect_list(node, "ingredients")
    )


def parse_ingredient_group(heading: Any, node: Any) -> IngredientGroup:
    return IngredientGroup(get_heading(heading, 3), parse_ingredient_list(node))


def parse_ingredients(nodes: Sequence[Any]) -> Ingredients:
    """
    Parse the contents of the ingredients section: either nothing, a single
    list, or a series of level 3 headings each followed by a list.

    Raises
    ======
    recipe_md.errors.RecipeParseError
    """
    if len(nodes) == 0:
        return IngredientList()
    elif len(nodes) == 1:
        return IngredientList(parse_ingredient_list(nodes[0]))

    groups = []
    for i in range(0, len(nodes), 2):
        if i + 1 == len(nodes):
            raise StructureError(
                f"Malformed ingredient group: {describe(nodes[i])} "
                f"not followed by an ingredients list",
                nodes[i],
            )
        groups.append(parse_ingredient_group(nodes[i], nodes[i + 1]))

    logger.debug("Parsed %d ingredient group(s)", len(groups))

    return IngredientGroups(tuple(groups))
