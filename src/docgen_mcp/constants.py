"""Shared constants across the docgen-mcp codebase.

This module centralizes magic numbers and fixed protocol values
so the generators and the completion client agree on them.
"""


class CompletionDefaults:
    """Sampling parameters sent with every completion request."""

    TEMPERATURE = 0.7
    MAX_TOKENS = 256
    TOP_P = 1.0
    FREQUENCY_PENALTY = 0.0
    PRESENCE_PENALTY = 0.0

    MODEL = "gpt-3.5-turbo-instruct"
    BASE_URL = "https://api.openai.com/v1"
    TIMEOUT_SECONDS = 30.0

    # How often the sync bridge checks the cancellation event
    CANCEL_POLL_SECONDS = 0.05


class CommentTokens:
    """Block comment delimiters shared by Java and Kotlin."""

    OPEN = "/**"
    CLOSE = "*/"
    LINE_PREFIX = "*"

    # Returned by the response extractor when no block is found
    SENTINEL = "No comment"


class EnvVars:
    """Environment variables read by the configuration glue."""

    ENABLED = "OPENAI_ENABLED"
    API_KEY = "OPENAI_API_KEY"
    MODEL = "OPENAI_MODEL"
    BASE_URL = "OPENAI_BASE_URL"
    TIMEOUT = "DOCGEN_TIMEOUT"
    CONFIG = "DOCGEN_CONFIG"

    TRUTHY = ("1", "true", "yes", "on")
