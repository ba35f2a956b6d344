"""
Recipe documents are parsed into a markdown AST by the :py:mod:`marko`
markdown parser (with a small extension, see
:py:mod:`recipe_md.markdown.common`) and then consumed, block by block, by the
recipe parser.

.. autofunction:: parse_markdown

The AST is walked using an :py:class:`~recipe_md.markdown.cursor.ASTCursor`
and checked using the structural assertions in
:py:mod:`recipe_md.markdown.grammar`.
"""

from marko import Markdown, block

from recipe_md.markdown.common import RECIPE_MARKDOWN, record_positions


def parse_markdown(markdown_source: str) -> block.Document:
    """
    Parse a markdown document into a :py:mod:`marko` AST. Every element is
    given a 'position' attribute giving its
    :py:class:`~recipe_md.errors.SourcePosition` (or None, if unknown).
    """
    document = Markdown(extensions=[RECIPE_MARKDOWN]).parse(markdown_source)
    record_positions(document, markdown_source)
    return document
