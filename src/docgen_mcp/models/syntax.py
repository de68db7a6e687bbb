"""Syntax tree models shared by the parser, the adapters and the pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple


class LanguageKind(Enum):
    """Closed set of language variants the adapters know about."""

    JAVA = "java"
    KOTLIN = "kotlin"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "LanguageKind":
        """Resolve a node's language tag to a variant.

        Args:
            tag: Language tag such as "java", "Java" or "kotlin"

        Returns:
            Matching variant, OTHER for anything unrecognized
        """
        if not tag:
            return cls.OTHER
        return _TAG_ALIASES.get(tag.strip().lower(), cls.OTHER)

    @property
    def display_name(self) -> str:
        """Human readable language name used in prompts."""
        return _DISPLAY_NAMES[self]


_TAG_ALIASES = {
    "java": LanguageKind.JAVA,
    "kotlin": LanguageKind.KOTLIN,
    "kt": LanguageKind.KOTLIN,
    "kts": LanguageKind.KOTLIN,
}

_DISPLAY_NAMES = {
    LanguageKind.JAVA: "Java",
    LanguageKind.KOTLIN: "Kotlin",
    LanguageKind.OTHER: "Other",
}


Point = Tuple[int, int]


@dataclass
class SyntaxNode:
    """A node of a parsed source file.

    The tree owns its children; ``parent`` is a back reference and is left
    out of equality and repr so comparing two trees does not recurse upward.

    Attributes:
        kind: Grammar node type (e.g. "method_declaration")
        language: Language tag of the file the node came from
        text: Source text covered by the node
        start_byte: Start offset in the source
        end_byte: End offset in the source
        start_point: (row, column) of the start, 0-indexed
        end_point: (row, column) of the end, 0-indexed
        field_name: Grammar field under which the parent holds this node
        named: False for anonymous tokens such as punctuation
        children: Child nodes in source order
        parent: Enclosing node, None for the root
    """

    kind: str
    language: str
    text: str = ""
    start_byte: int = 0
    end_byte: int = 0
    start_point: Point = (0, 0)
    end_point: Point = (0, 0)
    field_name: Optional[str] = None
    named: bool = True
    children: List["SyntaxNode"] = field(default_factory=list)
    parent: Optional["SyntaxNode"] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def append_child(self, child: "SyntaxNode") -> "SyntaxNode":
        """Attach ``child`` as the last child and return it."""
        child.parent = self
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator["SyntaxNode"]:
        """Yield the parent chain from the nearest ancestor up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def root(self) -> "SyntaxNode":
        """Return the root of the tree containing this node."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def walk(self) -> Iterator["SyntaxNode"]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def child_by_field(self, field_name: str) -> Optional["SyntaxNode"]:
        """Return the first child held under ``field_name``."""
        for child in self.children:
            if child.field_name == field_name:
                return child
        return None

    def children_of_kind(self, *kinds: str) -> List["SyntaxNode"]:
        """Return direct children whose kind is one of ``kinds``."""
        return [child for child in self.children if child.kind in kinds]

    def first_child_of_kind(self, *kinds: str) -> Optional["SyntaxNode"]:
        for child in self.children:
            if child.kind in kinds:
                return child
        return None

    @property
    def named_children(self) -> List["SyntaxNode"]:
        return [child for child in self.children if child.named]

    @property
    def language_kind(self) -> LanguageKind:
        return LanguageKind.from_tag(self.language)

    def contains_point(self, row: int, column: int) -> bool:
        """Check whether (row, column) falls inside this node's span."""
        return self.start_point <= (row, column) <= self.end_point
