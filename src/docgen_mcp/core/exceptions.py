"""Exception hierarchy for docgen-mcp."""


class DocGenError(Exception):
    """Base class for all docgen-mcp errors."""
    pass


class ConfigurationError(DocGenError):
    """Raised when a configuration file or value is invalid."""

    def __init__(self, config_path: str, message: str) -> None:
        self.config_path = config_path
        self.message = message
        super().__init__(f"Invalid configuration at {config_path}: {message}")


class MissingCredentialError(DocGenError):
    """Raised when the completion client is built without an API key."""

    def __init__(self, variable: str = "OPENAI_API_KEY") -> None:
        self.variable = variable
        super().__init__(
            f"No completion credential provided. Set {variable} or pass a credential explicitly."
        )


class UnsupportedLanguageError(DocGenError):
    """Raised when source text cannot be parsed for the requested language."""

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"Unsupported language '{language}'")


class SignatureExtractionError(DocGenError):
    """Raised when a signature is requested for a node its adapter does not recognize.

    The locator only hands recognized function nodes to the extractor, so this
    always indicates a programming error rather than bad input.
    """
    pass


class CompletionError(DocGenError):
    """Raised when the completion service call fails at the network or protocol level."""
    pass


class CompletionTimeoutError(CompletionError):
    """Raised when the completion service does not answer within the configured timeout."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Completion request timed out after {timeout_seconds}s")


class CompletionCancelledError(CompletionError):
    """Raised when the caller cancels an in-flight completion request."""
    pass
