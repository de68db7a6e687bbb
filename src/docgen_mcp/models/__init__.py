"""Data models for docgen-mcp."""

from docgen_mcp.models.config import DocGenConfig, GenerationMode
from docgen_mcp.models.documentation import (
    CompletionChoice,
    CompletionRequest,
    CompletionResponse,
    DocComment,
    FunctionNode,
    FunctionSignature,
    ParameterInfo,
)
from docgen_mcp.models.syntax import LanguageKind, SyntaxNode

__all__ = [
    # Config
    "DocGenConfig",
    "GenerationMode",
    # Syntax
    "LanguageKind",
    "SyntaxNode",
    # Documentation
    "CompletionChoice",
    "CompletionRequest",
    "CompletionResponse",
    "DocComment",
    "FunctionNode",
    "FunctionSignature",
    "ParameterInfo",
]
