"""Documentation comment feature module.

This module provides:
- Language adapters for Java and Kotlin function nodes
- Locating the function that encloses a cursor node
- Stub and completion-backed comment generation
- Inserting the comment into the syntax tree and the source text
"""

from .adapters import JavaAdapter, KotlinAdapter, LanguageAdapter, NullLanguageAdapter, adapter_for, get_adapter
from .completion import CompletionClient, build_completion_request, documentation_dialect
from .extractor import extract_comment
from .insertion import apply_comment_to_source, insert_comment
from .locator import find_enclosing_function
from .service import document_function, generate_doc_text, is_available, locate_function
from .signature import extract_signature
from .stub_generator import generate_stub_doc

__all__ = [
    "LanguageAdapter",
    "JavaAdapter",
    "KotlinAdapter",
    "NullLanguageAdapter",
    "adapter_for",
    "get_adapter",
    "find_enclosing_function",
    "extract_signature",
    "generate_stub_doc",
    "build_completion_request",
    "documentation_dialect",
    "CompletionClient",
    "extract_comment",
    "insert_comment",
    "apply_comment_to_source",
    "locate_function",
    "is_available",
    "generate_doc_text",
    "document_function",
]
