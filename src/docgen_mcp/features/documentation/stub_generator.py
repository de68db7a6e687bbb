"""Deterministic comment text built from a function signature alone.

Template::

    /**
    * <Name> Method Description:
    *
    * @param <p1> of type <t1>
    * @return <returnType>
    * @param <p2> of type <t2>
    * @return <returnType>
    */

``<Name>`` is the function name with its first character upper-cased and the
rest left untouched, for every language. A ``@return`` line follows each
``@param`` line; a function without parameters gets neither.
"""
from typing import List

from docgen_mcp.constants import CommentTokens
from docgen_mcp.models.documentation import FunctionSignature


def capitalize_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def generate_stub_doc(signature: FunctionSignature) -> str:
    """Render the stub comment for ``signature``."""
    prefix = CommentTokens.LINE_PREFIX
    lines: List[str] = [
        CommentTokens.OPEN,
        f"{prefix} {capitalize_name(signature.name)} Method Description:",
        prefix,
    ]
    for param in signature.parameters:
        lines.append(f"{prefix} @param {param.name} of type {param.type_hint}")
        lines.append(f"{prefix} @return {signature.return_type}")
    lines.append(CommentTokens.CLOSE)
    return "\n".join(lines)
