"""Find the function definition enclosing a cursor node."""
import itertools
from typing import Iterable, Optional

from docgen_mcp.features.documentation.adapters import adapter_for
from docgen_mcp.models.documentation import FunctionNode
from docgen_mcp.models.syntax import SyntaxNode


def find_enclosing_function(node: SyntaxNode, include_self: bool = False) -> Optional[FunctionNode]:
    """Return the nearest ancestor the node's adapter recognizes as a function.

    The adapter is chosen from the starting node's language tag, even if an
    ancestor carries a different one.

    Args:
        node: Cursor-adjacent node
        include_self: Let ``node`` itself qualify

    Returns:
        The nearest function, or None when the root is reached first
    """
    adapter = adapter_for(node)
    candidates: Iterable[SyntaxNode] = node.ancestors()
    if include_self:
        candidates = itertools.chain((node,), candidates)

    for candidate in candidates:
        function = adapter.as_function(candidate)
        if function is not None:
            return function
    return None
