"""Language name and file extension resolution."""

from pathlib import Path
from typing import Optional

from docgen_mcp.core.exceptions import UnsupportedLanguageError

_LANGUAGE_ALIASES = {
    "java": "java",
    "kotlin": "kotlin",
    "kt": "kotlin",
    "kts": "kotlin",
}

_EXTENSION_LANGUAGE_MAP = {
    ".java": "java",
    ".kt": "kotlin",
    ".kts": "kotlin",
}

_SUPPORTED_LANGUAGES = set(_LANGUAGE_ALIASES.values())


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(language)
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise UnsupportedLanguageError(suffix or str(file_path))


def resolve_language(language: Optional[str], file_path: Optional[Path]) -> str:
    """Resolve an explicit language name, falling back to the file extension.

    "auto" and empty values defer to the extension.
    """
    if language and language.strip().lower() != "auto":
        return normalize_language(language)
    if file_path:
        return detect_language_from_path(file_path)
    raise UnsupportedLanguageError(language or "auto")
