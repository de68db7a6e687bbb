"""Splice comment nodes into function nodes and into source text."""
from typing import Optional

from docgen_mcp.core.logging import get_logger
from docgen_mcp.features.documentation.adapters import get_adapter
from docgen_mcp.models.documentation import FunctionNode
from docgen_mcp.models.syntax import SyntaxNode

logger = get_logger(__name__)


def insert_comment(function: FunctionNode, text: str) -> Optional[SyntaxNode]:
    """Insert a comment built from ``text`` as the first child of ``function``.

    The comment node is fully built before the tree is touched, and the
    children list is replaced in one assignment, so the tree is either
    updated or left as it was.

    Args:
        function: Function to document
        text: Final comment text

    Returns:
        The inserted comment node, or None when the language has no comment support
    """
    comment = get_adapter(function.language).build_comment(text)
    if comment is None:
        logger.info("comment_not_supported", language=function.language.value)
        return None

    target = function.node
    # Zero-width at the function start
    comment.start_byte = comment.end_byte = target.start_byte
    comment.start_point = comment.end_point = target.start_point
    comment.parent = target

    target.children = [comment, *target.children]
    return comment


def apply_comment_to_source(source: str, function_node: SyntaxNode, comment_text: str) -> str:
    """Return ``source`` with ``comment_text`` placed just before the function.

    Each comment line gets the indentation of the function's first line, and
    lines are joined with the line ending the source already uses.

    Args:
        source: Original source text the tree was parsed from
        function_node: Function definition node
        comment_text: Comment to insert

    Returns:
        Updated source text
    """
    data = source.encode("utf-8")
    start = function_node.start_byte
    line_start = data.rfind(b"\n", 0, start) + 1
    prefix = data[line_start:start]
    indent = prefix[: len(prefix) - len(prefix.lstrip())].decode("utf-8")

    newline = "\r\n" if "\r\n" in source else "\n"
    block = (newline + indent).join(comment_text.splitlines())
    if prefix.strip():
        # Function does not start its line
        insertion = newline + indent + block + newline + indent
    else:
        insertion = block + newline + indent

    return (data[:start] + insertion.encode("utf-8") + data[start:]).decode("utf-8")
