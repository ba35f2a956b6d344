r"""
A recipe document is a markdown file of the following form:

.. code:: markdown

    ---
    tags:
      - "#pasta"
    quantity: 2 portions
    ---

    # Spaghetti in tomato sauce

    ## Ingredients

    - Spaghetti, 150 g
    - Chopped tomatoes, 400 g
    - Basil, 1 bunch (fresh) | Dried basil, 1 tsp

    ## Instructions

    - Boil the *spaghetti* for **10 minutes**
    - Make the sauce
        - Heat the *chopped tomatoes*
        - Stir in the *basil*

The (optional) YAML frontmatter is described in :py:mod:`recipe_md.metadata`,
the ingredients section in :py:mod:`recipe_md.ingredients` and the
instructions section in :py:mod:`recipe_md.instructions`.

Recipe documents are parsed using:

.. autofunction:: parse_recipe

Which produces a :py:class:`Recipe`:

.. autoclass:: Recipe
    :members:
"""

from dataclasses import dataclass, field

import logging

from recipe_md.dialect import Dialect, DEFAULT_DIALECT
from recipe_md.errors import StructureError
from recipe_md.metadata import Metadata
from recipe_md.ingredients import Ingredients, IngredientList, parse_ingredients
from recipe_md.instructions import Instructions, parse_instructions
from recipe_md.markdown import parse_markdown
from recipe_md.markdown.common import FrontMatter, block_children, describe
from recipe_md.markdown.cursor import ASTCursor
from recipe_md.markdown.grammar import get_heading


__all__ = [
    "Recipe",
    "parse_recipe",
]


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recipe:
    """A parsed recipe."""

    name: str
    """The recipe's name, given by its level 1 heading."""

    metadata: Metadata = field(default_factory=Metadata)
    ingredients: Ingredients = field(default_factory=IngredientList)
    instructions: Instructions = field(default_factory=Instructions)

    @classmethod
    def parse(
        cls, markdown_source: str, dialect: Dialect = DEFAULT_DIALECT
    ) -> "Recipe":
        """
        Parse a recipe document.

        Raises
        ======
        recipe_md.errors.RecipeParseError
            On the first problem found in the document.
        """
        nodes = block_children(parse_markdown(markdown_source))
        if not nodes:
            raise StructureError("Empty document")

        cursor = ASTCursor(nodes)

        metadata = Metadata()
        front_matter = cursor.peek()
        if isinstance(front_matter, FrontMatter):
            cursor.next()
            metadata = Metadata.from_yaml(
                front_matter.yaml,
                front_matter.position,
                dialect.allow_size_redefinition,
            )

        name = get_heading(cursor.next(), 1)

        get_heading(cursor.next(), 2, dialect.ingredients_heading)
        ingredients = parse_ingredients(cursor.consume_to_next_heading(2))

        get_heading(cursor.next(), 2, dialect.instructions_heading)
        instructions = parse_instructions(cursor.consume_to_next_heading(2))

        leftover = cursor.remaining()
        if leftover:
            raise StructureError(
                f"Unexpected {describe(leftover[0])} after the "
                f"{dialect.instructions_heading!r} section",
                leftover[0],
            )

        logger.debug(
            "Parsed recipe %r with %d step(s)", name, len(instructions.steps)
        )

        return cls(name, metadata, ingredients, instructions)


def parse_recipe(markdown_source: str, dialect: Dialect = DEFAULT_DIALECT) -> Recipe:
    """
    Parse a recipe document, producing a :py:class:`Recipe`. Throws a
    :py:exc:`~recipe_md.errors.RecipeParseError` describing the first problem
    found in the document, if any.
    """
    return Recipe.parse(markdown_source, dialect)
