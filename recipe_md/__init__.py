"""
Parse recipes written in a constrained dialect of markdown into a typed,
validated model (see :py:mod:`recipe_md.recipe`).
"""

from recipe_md.version import __version__

from recipe_md.dialect import Dialect, DEFAULT_DIALECT, LEGACY_DIALECT
from recipe_md.errors import RecipeParseError
from recipe_md.recipe import Recipe, parse_recipe
