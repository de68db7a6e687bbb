"""Data models for documentation comment generation."""

from dataclasses import dataclass, field
from typing import List

from docgen_mcp.constants import CompletionDefaults
from docgen_mcp.models.config import GenerationMode
from docgen_mcp.models.syntax import LanguageKind, SyntaxNode


@dataclass
class ParameterInfo:
    """Information about a function parameter.

    Attributes:
        name: Parameter name ("_" when the grammar gave none)
        type_hint: Declared type ("_" when the grammar gave none)
    """

    name: str
    type_hint: str


@dataclass
class FunctionSignature:
    """Structural signature of a function node.

    Attributes:
        name: Function name, verbatim
        parameters: Parameters in declaration order
        return_type: Declared return type or the language's no-value spelling
    """

    name: str
    parameters: List[ParameterInfo] = field(default_factory=list)
    return_type: str = "void"


@dataclass(frozen=True)
class FunctionNode:
    """A syntax node an adapter has recognized as a function definition.

    Only adapters construct these; signature extraction accepts nothing else.

    Attributes:
        language: Variant of the adapter that recognized the node
        node: The underlying function definition node
    """

    language: LanguageKind
    node: SyntaxNode


@dataclass(frozen=True)
class CompletionRequest:
    """Request body for a text completion call.

    Attributes:
        prompt: Prompt text embedding the function source
        model: Completion model identifier
        temperature: Sampling temperature
        max_tokens: Upper bound on generated tokens
        top_p: Nucleus sampling mass
        frequency_penalty: Penalty for repeated tokens
        presence_penalty: Penalty for already-present tokens
    """

    prompt: str
    model: str
    temperature: float = CompletionDefaults.TEMPERATURE
    max_tokens: int = CompletionDefaults.MAX_TOKENS
    top_p: float = CompletionDefaults.TOP_P
    frequency_penalty: float = CompletionDefaults.FREQUENCY_PENALTY
    presence_penalty: float = CompletionDefaults.PRESENCE_PENALTY

    def to_payload(self) -> dict:
        """Serialize to the JSON body of an OpenAI-style /completions call."""
        return {
            "model": self.model,
            "prompt": self.prompt,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }


@dataclass
class CompletionChoice:
    text: str


@dataclass
class CompletionResponse:
    """Parsed completion response; only the first choice is ever consumed."""

    choices: List[CompletionChoice] = field(default_factory=list)

    @property
    def first_text(self) -> str:
        """Text of the first choice, empty when there are none."""
        return self.choices[0].text if self.choices else ""


@dataclass
class DocComment:
    """A generated documentation comment and the node built from it.

    Attributes:
        text: Final comment text
        node: Comment node spliced into the function
        function_name: Name of the documented function
        mode: Strategy that produced the text
    """

    text: str
    node: SyntaxNode
    function_name: str
    mode: GenerationMode
