"""
The instructions section of a recipe is a (possibly nested) bulleted list of
steps. Nested lists give the sub-steps of a step. Within a step, ingredients
may be referred to using *emphasis* and timers given using **strong
emphasis**:

.. code:: markdown

    ## Instructions

    - Make the sauce
        - Fry the *onions* for **5 minutes**
        - Add the *tomatoes*
    - Boil the *spaghetti*

.. autoclass:: Instructions
    :members:

.. autoclass:: Step
    :members:

.. autoclass:: TextElem

.. autoclass:: Text

.. autoclass:: IngredientRef

.. autoclass:: Timer

.. autofunction:: parse_instructions
"""

from typing import Any, Sequence, Tuple

from dataclasses import dataclass

from marko import block, inline

from recipe_md.errors import InvalidTimerError, RecipeParseError, StructureError
from recipe_md.quantity import QuantityOf
from recipe_md.units import Time
from recipe_md.markdown.common import block_children, describe
from recipe_md.markdown.grammar import expect_list, expect_text, text_runs


__all__ = [
    "TextElem",
    "Text",
    "IngredientRef",
    "Timer",
    "Step",
    "Instructions",
    "parse_instructions",
]


@dataclass(frozen=True)
class TextElem:
    """Base class for the parts of a step's description."""


@dataclass(frozen=True)
class Text(TextElem):
    """Plain text."""

    text: str


@dataclass(frozen=True)
class IngredientRef(TextElem):
    """A reference to an ingredient (written in *emphasis*)."""

    name: str


@dataclass(frozen=True)
class Timer(TextElem):
    """A period of time (written in **strong emphasis**)."""

    duration: QuantityOf[Time]


def parse_text_elem(node: Any, paragraph: Any) -> TextElem:
    """Parse a (non plain text) inline element of a step description."""
    if isinstance(node, inline.Emphasis):
        return IngredientRef(expect_text(node, allow_empty=True, context=paragraph))
    elif isinstance(node, inline.StrongEmphasis):
        text = expect_text(node, allow_empty=True, context=paragraph)
        try:
            return Timer(QuantityOf.from_str(Time, text))
        except RecipeParseError as e:
            raise InvalidTimerError(text, e, paragraph.position) from e
    else:
        raise StructureError(
            f"Unsupported element in step: {describe(node)}", paragraph
        )


def parse_description(node: Any) -> Tuple[TextElem, ...]:
    if not isinstance(node, block.Paragraph):
        raise StructureError(
            f"Expected step description paragraph, but got {describe(node)}", node
        )
    return tuple(
        Text(run) if isinstance(run, str) else parse_text_elem(run, node)
        for run in text_runs(node.children)
    )


@dataclass(frozen=True)
class Step:
    """A step in a recipe, possibly with sub-steps."""

    description: Tuple[TextElem, ...] = ()
    substeps: Tuple["Step", ...] = ()

    @classmethod
    def from_list_item(cls, node: Any) -> "Step":
        """
        Parse a list item consisting of (optionally) a paragraph describing
        the step followed by (optionally) a list of sub-steps.
        """
        children = block_children(node)
        if len(children) == 0:
            return cls()
        elif len(children) == 1:
            return cls(parse_description(children[0]))
        elif len(children) == 2:
            return cls(parse_description(children[0]), parse_steps(children[1]))
        else:
            raise StructureError(
                f"Too many elements in step, expected at most 2 "
                f"but got {len(children)}",
                children[2],
            )


def parse_steps(node: Any) -> Tuple[Step, ...]:
    return tuple(Step.from_list_item(item) for item in expect_list(node, "steps"))


@dataclass(frozen=True)
class Instructions:
    """The instructions for a recipe."""

    steps: Tuple[Step, ...] = ()


def parse_instructions(nodes: Sequence[Any]) -> Instructions:
    """
    Parse the contents of the instructions section: either nothing or a
    single list of steps.

    Raises
    ======
    recipe_md.errors.RecipeParseError
    """
    if len(nodes) == 0:
        return Instructions()
    elif len(nodes) > 1:
        raise StructureError(
            f"Expected a single list of steps, but got {describe(nodes[1])} "
            f"after the list",
            nodes[1],
        )
    return Instructions(parse_steps(nodes[0]))
