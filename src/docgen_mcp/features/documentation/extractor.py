"""Pull a comment block out of free-form completion text."""
import re

from docgen_mcp.constants import CommentTokens

# First /** ... */ block, across newlines, shortest match
_COMMENT_BLOCK = re.compile(r"/\*\*.*?\*/", re.DOTALL)


def extract_comment(raw_text: str) -> str:
    """Return the first comment block in ``raw_text``.

    Args:
        raw_text: Completion text, possibly with prose around the block

    Returns:
        The matched block stripped of surrounding whitespace, or the
        "No comment" sentinel when there is none
    """
    match = _COMMENT_BLOCK.search(raw_text or "")
    if match is None:
        return CommentTokens.SENTINEL
    return match.group(0).strip()
