# Configuration file for the Sphinx documentation builder.

# -- Path setup --------------------------------------------------------------

import os
import sys

sys.path.insert(0, os.path.abspath("../.."))


# -- Project information -----------------------------------------------------

project = "Recipe Markdown"

from recipe_md import __version__  # noqa: E402

release = __version__


# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "numpydoc",
]

templates_path = []

exclude_patterns = []

numpydoc_show_class_members = False

autodoc_member_order = "bysource"

intersphinx_mapping = {
    "python": ("http://docs.python.org/3", None),
    "peggie": ("https://peggie.readthedocs.io/en/latest/", None),
    "marko": ("https://marko-py.readthedocs.io/en/latest/", None),
}


# -- Options for HTML output -------------------------------------------------

html_theme = "nature"
