"""Configuration models for docgen-mcp."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docgen_mcp.constants import CompletionDefaults


class GenerationMode(Enum):
    """How documentation text is produced."""

    STUB = "stub"
    COMPLETION = "completion"


class DocGenConfig(BaseModel):
    """Settings consumed by the documentation pipeline.

    Built once by the surrounding glue (environment, .env file, YAML config)
    and passed into the pipeline as an explicit value.

    Attributes:
        enabled: Use the completion service instead of the stub generator
        credential: API key for the completion service
        model: Completion model identifier
        base_url: Base URL of an OpenAI-compatible API
        timeout_seconds: Upper bound on a single completion call
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = False
    credential: str = Field(default="", repr=False)
    model: str = CompletionDefaults.MODEL
    base_url: str = CompletionDefaults.BASE_URL
    timeout_seconds: float = CompletionDefaults.TIMEOUT_SECONDS

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return v

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        """Reject blank model identifiers."""
        if not v.strip():
            raise ValueError("model cannot be empty")
        return v.strip()

    @property
    def mode(self) -> GenerationMode:
        """Generation mode selected by the ``enabled`` flag."""
        return GenerationMode.COMPLETION if self.enabled else GenerationMode.STUB
