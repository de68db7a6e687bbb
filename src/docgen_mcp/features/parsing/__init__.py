"""Source parsing feature module.

This module provides:
- Language resolution from names, aliases and file extensions
- Parsing source text into SyntaxNode trees with tree-sitter
- Cursor lookup of the deepest node at a position
"""

from .languages import detect_language_from_path, normalize_language, resolve_language
from .tree_builder import node_at, parse_file, parse_source

__all__ = [
    "detect_language_from_path",
    "normalize_language",
    "resolve_language",
    "node_at",
    "parse_file",
    "parse_source",
]
