"""Signature extraction through the function's own adapter."""
from docgen_mcp.features.documentation.adapters import get_adapter
from docgen_mcp.models.documentation import FunctionNode, FunctionSignature


def extract_signature(function: FunctionNode) -> FunctionSignature:
    """Extract name, ordered parameters and return type of ``function``.

    Raises:
        SignatureExtractionError: If the node does not belong to its adapter
    """
    return get_adapter(function.language).signature_of(function)
