"""Build SyntaxNode trees from source text with tree-sitter."""

from pathlib import Path
from typing import Optional, cast

from tree_sitter import TreeCursor
from tree_sitter_language_pack import SupportedLanguage, get_parser

from docgen_mcp.core.logging import get_logger
from docgen_mcp.features.parsing.languages import normalize_language, resolve_language
from docgen_mcp.models.syntax import SyntaxNode

logger = get_logger(__name__)


def _convert(cursor: TreeCursor, source_bytes: bytes, language: str) -> SyntaxNode:
    node = cursor.node
    converted = SyntaxNode(
        kind=node.type,
        language=language,
        text=source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace"),
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        start_point=(node.start_point[0], node.start_point[1]),
        end_point=(node.end_point[0], node.end_point[1]),
        field_name=cursor.field_name,
        named=node.is_named,
    )

    if cursor.goto_first_child():
        while True:
            converted.append_child(_convert(cursor, source_bytes, language))
            if not cursor.goto_next_sibling():
                break
        cursor.goto_parent()

    return converted


def parse_source(source: str, language: str) -> SyntaxNode:
    """Parse source text into a SyntaxNode tree.

    Args:
        source: Source code
        language: Language name or alias (java, kotlin)

    Returns:
        Root node of the tree

    Raises:
        UnsupportedLanguageError: If the language has no adapter
    """
    resolved = normalize_language(language)
    parser = get_parser(cast(SupportedLanguage, resolved))
    source_bytes = source.encode("utf-8")
    tree = parser.parse(source_bytes)

    root = _convert(tree.walk(), source_bytes, resolved)
    logger.debug("source_parsed", language=resolved, size=len(source_bytes), has_error=tree.root_node.has_error)
    return root


def parse_file(path: str, language: Optional[str] = None) -> SyntaxNode:
    file_path = Path(path)
    resolved = resolve_language(language, file_path)

    try:
        source = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_source(source, resolved)


def node_at(root: SyntaxNode, row: int, column: int) -> SyntaxNode:
    """Return the deepest node whose span contains (row, column).

    Args:
        root: Tree to search
        row: 0-indexed row
        column: 0-indexed column

    Returns:
        Deepest containing node, or ``root`` when nothing narrower matches
    """
    node = root
    while True:
        for child in node.children:
            if child.contains_point(row, column):
                node = child
                break
        else:
            return node
