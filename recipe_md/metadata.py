"""
Recipes may start with YAML frontmatter giving extra metadata about the
recipe, for example:

.. code:: markdown

    ---
    tags:
      - "#dessert"
      - "#baking/cakes"
    quantity: 12 cupcakes
    size | tin: 20cm°
    source: Grandma
    ---

The following keys are understood:

``tags``
    A list of tags, each starting with a ``#`` followed by letters, numbers,
    ``/``, ``-`` or ``_``. (NB: tags must be quoted since ``#`` otherwise
    starts a YAML comment.)

``quantity``
    The overall quantity the recipe makes (e.g. ``12 cupcakes`` or ``1 l``).

``size | <name>``
    The size of some named piece of equipment (e.g. a tin). A trailing ``°``
    indicates a diameter.

Any other key is kept verbatim (its value must be a string).

.. autoclass:: Metadata
    :members:

.. autoclass:: SizeInfo
    :members:

.. autoclass:: UnitModifier
    :members:
"""

from typing import (
    Any,
    Dict,
    List,
    Mapping,
    MutableMapping,
    NamedTuple,
    Optional,
    Tuple,
)

import re

from dataclasses import dataclass, field

from enum import Enum, auto

import logging

import yaml

from peggie.error_message_generation import extract_line

from recipe_md.errors import RecipeParseError, MetadataError, SourcePosition
from recipe_md.quantity import Quantity, QuantityOf
from recipe_md.units import Distance, Nominal


__all__ = [
    "UnitModifier",
    "SizeInfo",
    "Metadata",
]


logger = logging.getLogger(__name__)


TAGS = "tags"
QUANTITY = "quantity"
SIZE_PREFIX = "size | "

RADIAL_DISTANCE_MARKER = "°"

DEFAULT_QUANTITY = Quantity(Nominal.nominal, 1.0)

tag_pattern = re.compile(r"#[\w/-]*")


class MetadataEntry(NamedTuple):
    key: Any
    value: Any

    line: int
    """The (0-based) line number of the key in the YAML source."""


class YAMLMapping(List[MetadataEntry]):
    """
    A YAML mapping, loaded as a list of entries so that repeated keys are not
    silently discarded.
    """


class FrontMatterLoader(yaml.SafeLoader):
    """A safe YAML loader which loads mappings as :py:class:`YAMLMapping`."""


def _construct_mapping(
    loader: FrontMatterLoader, node: yaml.MappingNode
) -> YAMLMapping:
    loader.flatten_mapping(node)
    return YAMLMapping(
        MetadataEntry(
            loader.construct_object(key_node, deep=True),
            loader.construct_object(value_node, deep=True),
            key_node.start_mark.line,
        )
        for key_node, value_node in node.value
    )


FrontMatterLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping
)


class UnitModifier(Enum):
    """Modifies the meaning of a size's unit."""

    radial_distance = auto()
    """The size is a diameter (e.g. of a round tin)."""


@dataclass(frozen=True)
class SizeInfo:
    """The size of a piece of equipment."""

    quantity: QuantityOf[Distance]
    modifier: Optional[UnitModifier] = None

    @classmethod
    def from_str(cls, text: str) -> "SizeInfo":
        """
        Parse a size, e.g. "20cm" or "20cm°" (a 20cm diameter). Throws a
        :py:exc:`~recipe_md.errors.MetadataError` on failure.
        """
        text = text.strip()
        modifier: Optional[UnitModifier] = None
        if text.endswith(RADIAL_DISTANCE_MARKER):
            text = text[: -len(RADIAL_DISTANCE_MARKER)]
            modifier = UnitModifier.radial_distance

        try:
            quantity = QuantityOf.from_str(Distance, text)
        except RecipeParseError as e:
            raise MetadataError(f"Failed to parse size {text!r}: {e.message}") from e

        return cls(quantity, modifier)


def get_tag(tag: str) -> str:
    """Validate a tag, returning it without its leading '#'."""
    if not tag.startswith("#"):
        raise MetadataError(f"Tag {tag!r} must start with a '#' character")
    if tag_pattern.fullmatch(tag) is None:
        raise MetadataError(f"Tag {tag!r} contains forbidden characters")
    return tag[1:]


def parse_tags(value: Any, tags: List[str]) -> None:
    if not isinstance(value, list):
        raise MetadataError(f"Expected a list under {TAGS!r}")
    for tag in value:
        if not isinstance(tag, str):
            raise MetadataError(f"Expected tag to be a string, got {tag!r}")
        tags.append(get_tag(tag))


def parse_quantity(value: Any) -> Quantity:
    if not isinstance(value, str):
        raise MetadataError(f"Expected a string under {QUANTITY!r}")
    try:
        return Quantity.from_str(value)
    except RecipeParseError as e:
        raise MetadataError(f"Invalid quantity {value!r}: {e.message}") from e


def parse_size(
    name: str,
    value: Any,
    sizes: MutableMapping[str, SizeInfo],
    allow_redefinition: bool = True,
) -> None:
    if not name:
        raise MetadataError("A sized object must have a name")
    if not isinstance(value, str):
        raise MetadataError(f"Expected a string size for {name!r}")
    if not allow_redefinition and name in sizes:
        raise MetadataError(f"Size of {name!r} given more than once")
    sizes[name] = SizeInfo.from_str(value)


def parse_other(key: str, value: Any, others: MutableMapping[str, str]) -> None:
    if not isinstance(value, str):
        raise MetadataError(
            f"Expected a string value for {key!r} "
            f"(only string values are supported for unknown keys)"
        )
    if key in others:
        raise MetadataError(f"Duplicate metadata key {key!r}")
    others[key] = value


@dataclass(frozen=True)
class Metadata:
    """Metadata about a recipe, given in its YAML frontmatter."""

    tags: Tuple[str, ...] = ()
    """The tags (without their leading '#') in the order given."""

    quantity: Quantity = DEFAULT_QUANTITY
    """The overall quantity the recipe makes."""

    sizes: Mapping[str, SizeInfo] = field(default_factory=dict)
    """The sizes of named equipment."""

    others: Mapping[str, str] = field(default_factory=dict)
    """All other metadata entries."""

    @classmethod
    def from_yaml(
        cls,
        yaml_source: str,
        position: Optional[SourcePosition] = None,
        allow_size_redefinition: bool = True,
    ) -> "Metadata":
        """
        Parse the YAML source of a frontmatter block. If the position of the
        frontmatter's opening '---' is given, errors are reported relative to
        it.

        Raises
        ======
        recipe_md.errors.MetadataError
        """

        def yaml_position(line: int, column: int) -> Optional[SourcePosition]:
            if position is None:
                return None
            return SourcePosition(
                position.line + 1 + line,
                column + 1,
                extract_line(yaml_source, line + 1),
            )

        try:
            documents = list(yaml.load_all(yaml_source, Loader=FrontMatterLoader))
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            raise MetadataError(
                f"Invalid YAML in frontmatter ({getattr(e, 'problem', None) or e})",
                (
                    yaml_position(mark.line, mark.column)
                    if mark is not None
                    else position
                ),
            ) from e

        if len(documents) != 1:
            raise MetadataError(
                "Expected a single YAML document in frontmatter", position
            )
        (mapping,) = documents
        if not isinstance(mapping, YAMLMapping):
            raise MetadataError(
                "Expected frontmatter to contain a mapping", position
            )

        tags: List[str] = []
        quantity = DEFAULT_QUANTITY
        sizes: Dict[str, SizeInfo] = {}
        others: Dict[str, str] = {}

        for key, value, line in mapping:
            try:
                if not isinstance(key, str):
                    raise MetadataError(f"Expected string key, got {key!r}")
                elif key == TAGS:
                    parse_tags(value, tags)
                elif key == QUANTITY:
                    quantity = parse_quantity(value)
                elif key.startswith(SIZE_PREFIX):
                    parse_size(
                        key[len(SIZE_PREFIX) :].strip(),
                        value,
                        sizes,
                        allow_size_redefinition,
                    )
                else:
                    parse_other(key, value, others)
            except MetadataError as e:
                raise e.with_position(yaml_position(line, 0))

        logger.debug(
            "Parsed metadata with %d tag(s), %d size(s) and %d other key(s)",
            len(tags),
            len(sizes),
            len(others),
        )

        return cls(tuple(tags), quantity, sizes, others)
