"""MCP tool definitions for function documentation.

This module registers MCP tools for:
- check_documentation_available: Whether a function encloses a cursor position
- generate_function_doc: Write a documentation comment for that function
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional

import sentry_sdk
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from docgen_mcp.core.config import get_config
from docgen_mcp.core.logging import get_logger
from docgen_mcp.features.documentation.signature import extract_signature
from docgen_mcp.features.documentation.insertion import apply_comment_to_source
from docgen_mcp.features.documentation.service import document_function, locate_function
from docgen_mcp.features.parsing.languages import resolve_language
from docgen_mcp.features.parsing.tree_builder import node_at, parse_source
from docgen_mcp.models.config import DocGenConfig
from docgen_mcp.models.syntax import SyntaxNode


def _byte_column(source: str, row: int, column: int) -> int:
    """Convert a 0-indexed character column on ``row`` to tree-sitter's byte column."""
    lines = source.split("\n")
    text = lines[row] if row < len(lines) else ""
    return len(text[:column].encode("utf-8")) + max(0, column - len(text))


def _read_source(path: Path) -> str:
    # newline="" keeps CRLF endings intact
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_source(path: Path, source: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(source)


def _load_cursor_node(file_path: str, line: int, column: int, language: str) -> tuple[str, SyntaxNode]:
    """Read and parse ``file_path`` and return its source and the node at the cursor.

    ``line`` and ``column`` are 1-indexed; ``column`` counts characters.
    """
    if line < 1 or column < 1:
        raise ValueError("line and column are 1-indexed and must be positive")
    path = Path(file_path)
    resolved = resolve_language(language, path)
    source = _read_source(path)
    root = parse_source(source, resolved)
    row = line - 1
    return source, node_at(root, row, _byte_column(source, row, column - 1))


# =============================================================================
# Tool Implementations
# =============================================================================


def check_documentation_available_tool(
    file_path: str,
    line: int,
    column: int,
    language: str = "auto",
) -> Dict[str, Any]:
    """
    Check whether a documentation comment can be generated at a cursor position.

    Args:
        file_path: Source file (absolute path)
        line: Cursor line (1-indexed)
        column: Cursor column (1-indexed)
        language: Programming language (java, kotlin) or 'auto' to use the file extension

    Returns:
        Dictionary containing:
        - available: True if a function encloses the cursor
        - function_name: Name of that function, or None
        - language: Resolved language
    """
    logger = get_logger("tool.check_documentation_available")
    logger.info("tool_invoked", tool="check_documentation_available", file_path=file_path, line=line, column=column)

    try:
        _, node = _load_cursor_node(file_path, line, column, language)
        function = locate_function(node)
        function_name: Optional[str] = None
        if function is not None:
            function_name = extract_signature(function).name

        return {
            "available": function is not None,
            "function_name": function_name,
            "language": node.language,
        }
    except Exception as e:
        logger.error("tool_failed", tool="check_documentation_available", error=str(e)[:200])
        sentry_sdk.capture_exception(e)
        raise


def generate_function_doc_tool(
    file_path: str,
    line: int,
    column: int,
    language: str = "auto",
    dry_run: bool = True,
    config: Optional[DocGenConfig] = None,
) -> Dict[str, Any]:
    """
    Generate a documentation comment for the function enclosing a cursor position.

    The comment is produced by the stub generator, or by the completion service
    when OPENAI_ENABLED is set, and inserted directly above the function.

    Args:
        file_path: Source file (absolute path)
        line: Cursor line (1-indexed)
        column: Cursor column (1-indexed)
        language: Programming language (java, kotlin) or 'auto' to use the file extension
        dry_run: If True, only return the updated source without writing the file
        config: Pipeline configuration (active configuration by default)

    Returns:
        Dictionary containing:
        - function_name: Documented function, or None when nothing was found
        - mode: 'stub' or 'completion'
        - comment: Inserted comment text
        - updated_source: Source with the comment applied
        - file_modified: True if the file was written

    Example usage:
        result = generate_function_doc(
            file_path="/path/to/Calculator.java",
            line=12,
            column=9,
            dry_run=True
        )
        print(result["comment"])
    """
    logger = get_logger("tool.generate_function_doc")
    start_time = time.time()
    active_config = config or get_config()

    logger.info(
        "tool_invoked",
        tool="generate_function_doc",
        file_path=file_path,
        line=line,
        column=column,
        mode=active_config.mode.value,
        dry_run=dry_run,
    )

    try:
        source, node = _load_cursor_node(file_path, line, column, language)
        doc = document_function(node, active_config)

        if doc is None:
            logger.info("tool_completed", tool="generate_function_doc", documented=False)
            return {
                "function_name": None,
                "mode": active_config.mode.value,
                "comment": None,
                "updated_source": source,
                "file_modified": False,
            }

        function_node = doc.node.parent
        if function_node is None:
            raise RuntimeError("Inserted comment has no parent function node")
        updated_source = apply_comment_to_source(source, function_node, doc.text)

        file_modified = False
        if not dry_run:
            _write_source(Path(file_path), updated_source)
            file_modified = True

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="generate_function_doc",
            execution_time_seconds=round(execution_time, 3),
            function_name=doc.function_name,
            file_modified=file_modified,
        )

        return {
            "function_name": doc.function_name,
            "mode": doc.mode.value,
            "comment": doc.text,
            "updated_source": updated_source,
            "file_modified": file_modified,
        }

    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="generate_function_doc",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
        )
        sentry_sdk.capture_exception(e)
        raise


# =============================================================================
# MCP Registration
# =============================================================================


def _create_mcp_field_definitions() -> Dict[str, Dict[str, Any]]:
    """Create field definitions for documentation tools."""
    return {
        "check_documentation_available": {
            "file_path": Field(description="Source file (absolute path)"),
            "line": Field(description="Cursor line (1-indexed)"),
            "column": Field(description="Cursor column (1-indexed)"),
            "language": Field(default="auto", description="Programming language (java, kotlin, auto)"),
        },
        "generate_function_doc": {
            "file_path": Field(description="Source file (absolute path)"),
            "line": Field(description="Cursor line (1-indexed)"),
            "column": Field(description="Cursor column (1-indexed)"),
            "language": Field(default="auto", description="Programming language (java, kotlin, auto)"),
            "dry_run": Field(default=True, description="If True, only preview the updated source"),
        },
    }


def register_documentation_tools(mcp: FastMCP) -> None:
    """Register all documentation feature tools with MCP server.

    Args:
        mcp: FastMCP server instance
    """
    fields = _create_mcp_field_definitions()

    @mcp.tool()
    def check_documentation_available(
        file_path: str = fields["check_documentation_available"]["file_path"],
        line: int = fields["check_documentation_available"]["line"],
        column: int = fields["check_documentation_available"]["column"],
        language: str = fields["check_documentation_available"]["language"],
    ) -> Dict[str, Any]:
        """Check whether a function encloses the cursor position."""
        return check_documentation_available_tool(
            file_path=file_path,
            line=line,
            column=column,
            language=language,
        )

    @mcp.tool()
    def generate_function_doc(
        file_path: str = fields["generate_function_doc"]["file_path"],
        line: int = fields["generate_function_doc"]["line"],
        column: int = fields["generate_function_doc"]["column"],
        language: str = fields["generate_function_doc"]["language"],
        dry_run: bool = fields["generate_function_doc"]["dry_run"],
    ) -> Dict[str, Any]:
        """Generate a documentation comment for the function at the cursor."""
        return generate_function_doc_tool(
            file_path=file_path,
            line=line,
            column=column,
            language=language,
            dry_run=dry_run,
        )
