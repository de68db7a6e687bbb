"""Language adapters.

Each supported language gets one adapter implementing the same capability set:
recognize function nodes, extract their signature, and build a comment node
from text. Languages without an adapter resolve to ``NullLanguageAdapter``,
whose capabilities all report "unsupported".
"""
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, List, Optional

from docgen_mcp.constants import CommentTokens
from docgen_mcp.core.exceptions import SignatureExtractionError
from docgen_mcp.core.logging import get_logger
from docgen_mcp.models.documentation import FunctionNode, FunctionSignature, ParameterInfo
from docgen_mcp.models.syntax import LanguageKind, SyntaxNode

logger = get_logger(__name__)

# Substitute for names and types the grammar did not provide
MISSING_TOKEN = "_"


def _text_or_missing(node: Optional[SyntaxNode]) -> str:
    if node is None or not node.text.strip():
        return MISSING_TOKEN
    return node.text.strip()


def normalize_comment_text(text: str) -> str:
    """Make sure ``text`` is a single closed /** ... */ block.

    Text that already is a block is kept as is; anything else (including the
    extractor sentinel) is wrapped.
    """
    stripped = text.strip()
    if (
        stripped.startswith(CommentTokens.OPEN)
        and stripped.endswith(CommentTokens.CLOSE)
        and len(stripped) >= len(CommentTokens.OPEN) + len(CommentTokens.CLOSE)
        and CommentTokens.CLOSE not in stripped[len(CommentTokens.OPEN):-len(CommentTokens.CLOSE)]
    ):
        return stripped
    body = stripped.replace(CommentTokens.CLOSE, "* /")
    return f"{CommentTokens.OPEN} {body} {CommentTokens.CLOSE}"


class LanguageAdapter(ABC):
    """Capability set for one language variant."""

    language: LanguageKind = LanguageKind.OTHER
    function_kinds: FrozenSet[str] = frozenset()
    comment_kind: str = ""
    no_value_type: str = ""

    def is_function_node(self, node: SyntaxNode) -> bool:
        return node.kind in self.function_kinds

    def as_function(self, node: SyntaxNode) -> Optional[FunctionNode]:
        """Wrap ``node`` as a FunctionNode if this adapter recognizes it."""
        if not self.is_function_node(node):
            return None
        return FunctionNode(language=self.language, node=node)

    def signature_of(self, function: FunctionNode) -> FunctionSignature:
        """Extract the signature of a function recognized by this adapter.

        Raises:
            SignatureExtractionError: If the function was not recognized by this adapter
        """
        if function.language is not self.language or not self.is_function_node(function.node):
            raise SignatureExtractionError(
                f"{type(self).__name__} cannot extract a signature from "
                f"{function.language.value} node '{function.node.kind}'"
            )
        return self._extract_signature(function.node)

    def build_comment(self, text: str) -> Optional[SyntaxNode]:
        """Build a comment node holding ``text`` as a closed block comment."""
        comment_text = normalize_comment_text(text)
        return SyntaxNode(
            kind=self.comment_kind,
            language=self.language.value,
            text=comment_text,
            end_byte=len(comment_text.encode("utf-8")),
        )

    @abstractmethod
    def _extract_signature(self, node: SyntaxNode) -> FunctionSignature:
        ...


class JavaAdapter(LanguageAdapter):
    """Adapter for the tree-sitter Java grammar."""

    language = LanguageKind.JAVA
    function_kinds = frozenset({"method_declaration", "constructor_declaration"})
    comment_kind = "block_comment"
    no_value_type = "void"

    def _extract_signature(self, node: SyntaxNode) -> FunctionSignature:
        name = node.child_by_field("name") or node.first_child_of_kind("identifier")

        parameters: List[ParameterInfo] = []
        formal = node.child_by_field("parameters") or node.first_child_of_kind("formal_parameters")
        if formal is not None:
            for param in formal.children_of_kind("formal_parameter", "spread_parameter"):
                parameters.append(self._parameter(param))

        # Constructors have no type field
        return_type = node.child_by_field("type")

        return FunctionSignature(
            name=_text_or_missing(name),
            parameters=parameters,
            return_type=return_type.text.strip() if return_type is not None else self.no_value_type,
        )

    def _parameter(self, param: SyntaxNode) -> ParameterInfo:
        if param.kind == "spread_parameter":
            # int... values -> type "int...", name from the declarator
            declarator = param.first_child_of_kind("variable_declarator")
            type_node = next(
                (c for c in param.named_children if c.kind not in ("modifiers", "variable_declarator")),
                None,
            )
            name_node = None
            if declarator is not None:
                name_node = declarator.child_by_field("name") or declarator.first_child_of_kind("identifier")
            type_text = _text_or_missing(type_node)
            if type_text != MISSING_TOKEN:
                type_text += "..."
            return ParameterInfo(name=_text_or_missing(name_node), type_hint=type_text)

        type_node = param.child_by_field("type")
        name_node = param.child_by_field("name") or param.first_child_of_kind("identifier")
        return ParameterInfo(name=_text_or_missing(name_node), type_hint=_text_or_missing(type_node))


_KOTLIN_IDENTIFIERS = ("simple_identifier", "identifier")
_KOTLIN_BODY_KINDS = ("function_body", "block", "type_constraints", "=")


def _type_after_colon(children: List[SyntaxNode], stop_kinds=()) -> Optional[SyntaxNode]:
    """Return the first named node following a ':' token."""
    seen_colon = False
    for child in children:
        if child.kind in stop_kinds:
            return None
        if child.kind == ":":
            seen_colon = True
            continue
        if seen_colon and child.named:
            return child
    return None


class KotlinAdapter(LanguageAdapter):
    """Adapter for the tree-sitter Kotlin grammar."""

    language = LanguageKind.KOTLIN
    function_kinds = frozenset({"function_declaration"})
    comment_kind = "multiline_comment"
    no_value_type = "Unit"

    def _extract_signature(self, node: SyntaxNode) -> FunctionSignature:
        name = node.child_by_field("name") or node.first_child_of_kind(*_KOTLIN_IDENTIFIERS)

        parameters: List[ParameterInfo] = []
        return_type: Optional[SyntaxNode] = None
        value_params = node.first_child_of_kind("function_value_parameters")
        if value_params is not None:
            for param in self._parameter_nodes(value_params):
                parameters.append(self._parameter(param))
            after = node.children[node.children.index(value_params) + 1:]
            return_type = _type_after_colon(after, stop_kinds=_KOTLIN_BODY_KINDS)

        return FunctionSignature(
            name=_text_or_missing(name),
            parameters=parameters,
            return_type=return_type.text.strip() if return_type is not None else self.no_value_type,
        )

    @staticmethod
    def _parameter_nodes(value_params: SyntaxNode) -> List[SyntaxNode]:
        found = []
        for child in value_params.children:
            if child.kind == "parameter":
                found.append(child)
            elif child.kind == "function_value_parameter":
                inner = child.first_child_of_kind("parameter")
                if inner is not None:
                    found.append(inner)
        return found

    @staticmethod
    def _parameter(param: SyntaxNode) -> ParameterInfo:
        name_node = param.child_by_field("name") or param.first_child_of_kind(*_KOTLIN_IDENTIFIERS)
        type_node = param.child_by_field("type") or _type_after_colon(param.children)
        return ParameterInfo(name=_text_or_missing(name_node), type_hint=_text_or_missing(type_node))


class NullLanguageAdapter(LanguageAdapter):
    """Adapter for languages without support; every capability is a no-op."""

    language = LanguageKind.OTHER

    def is_function_node(self, node: SyntaxNode) -> bool:
        return False

    def as_function(self, node: SyntaxNode) -> Optional[FunctionNode]:
        return None

    def build_comment(self, text: str) -> Optional[SyntaxNode]:
        return None

    def _extract_signature(self, node: SyntaxNode) -> FunctionSignature:
        raise SignatureExtractionError(f"No adapter for language '{node.language}'")


_ADAPTERS: Dict[LanguageKind, LanguageAdapter] = {
    LanguageKind.JAVA: JavaAdapter(),
    LanguageKind.KOTLIN: KotlinAdapter(),
    LanguageKind.OTHER: NullLanguageAdapter(),
}

if set(_ADAPTERS) != set(LanguageKind):
    raise RuntimeError("Every LanguageKind needs an adapter")


def get_adapter(language: LanguageKind) -> LanguageAdapter:
    """Return the adapter for a language variant."""
    return _ADAPTERS[language]


def adapter_for(node: SyntaxNode) -> LanguageAdapter:
    """Return the adapter selected by a node's language tag."""
    return _ADAPTERS[node.language_kind]
