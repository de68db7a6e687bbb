"""Documentation pipeline.

Locator -> signature extraction -> (stub generator | completion request ->
completion client -> response extraction) -> comment node -> insertion.
"""
import threading
import time
from typing import Optional

import sentry_sdk

from docgen_mcp.core.exceptions import DocGenError
from docgen_mcp.core.logging import get_logger
from docgen_mcp.features.documentation.completion import CompletionClient, build_completion_request
from docgen_mcp.features.documentation.extractor import extract_comment
from docgen_mcp.features.documentation.insertion import insert_comment
from docgen_mcp.features.documentation.locator import find_enclosing_function
from docgen_mcp.features.documentation.signature import extract_signature
from docgen_mcp.features.documentation.stub_generator import generate_stub_doc
from docgen_mcp.models.config import DocGenConfig, GenerationMode
from docgen_mcp.models.documentation import DocComment, FunctionNode, FunctionSignature
from docgen_mcp.models.syntax import SyntaxNode

logger = get_logger(__name__)


def locate_function(node: SyntaxNode, *, include_self: bool = False) -> Optional[FunctionNode]:
    return find_enclosing_function(node, include_self=include_self)


def is_available(node: SyntaxNode) -> bool:
    """Whether documentation can be offered at ``node``."""
    return find_enclosing_function(node) is not None


def generate_doc_text(
    function: FunctionNode,
    mode: GenerationMode,
    client: Optional[CompletionClient] = None,
    *,
    timeout: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
    signature: Optional[FunctionSignature] = None,
) -> str:
    """Produce comment text for ``function`` without touching the tree.

    Args:
        function: Function to document
        mode: Stub or completion-backed generation
        client: Completion client, required in completion mode
        timeout: Completion timeout override
        cancel_event: Cancellation signal for the completion call
        signature: Already extracted signature of ``function`` (extracted when omitted)

    Returns:
        Comment text (the "No comment" sentinel if the completion had no block)
    """
    if mode is GenerationMode.STUB:
        return generate_stub_doc(signature or extract_signature(function))

    if client is None:
        raise ValueError("A CompletionClient is required for completion mode")

    request = build_completion_request(function.node.text, function.language.display_name, client.model)
    response = client.complete(request, timeout=timeout, cancel_event=cancel_event)
    return extract_comment(response.first_text)


def document_function(
    node: SyntaxNode,
    config: DocGenConfig,
    client: Optional[CompletionClient] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[DocComment]:
    """Generate a comment for the function enclosing ``node`` and insert it.

    Args:
        node: Cursor-adjacent node
        config: Pipeline configuration; ``config.mode`` picks the strategy
        client: Completion client (built from ``config`` when omitted)
        cancel_event: Cancellation signal for the completion call

    Returns:
        The inserted DocComment, or None when there is nothing to document

    Raises:
        MissingCredentialError: Completion mode without a credential
        CompletionError: Completion call failed, timed out or was cancelled
        SignatureExtractionError: Adapter invariant broken
    """
    start_time = time.time()
    mode = config.mode

    function = find_enclosing_function(node)
    if function is None:
        logger.info("document_function_skipped", reason="no_enclosing_function", language=node.language)
        return None

    logger.info(
        "document_function_started",
        language=function.language.value,
        function_kind=function.node.kind,
        mode=mode.value,
    )

    try:
        signature = extract_signature(function)
        if mode is GenerationMode.COMPLETION and client is None:
            client = CompletionClient.from_config(config)

        text = generate_doc_text(
            function,
            mode,
            client,
            timeout=config.timeout_seconds,
            cancel_event=cancel_event,
            signature=signature,
        )
    except DocGenError as e:
        logger.error(
            "document_function_failed",
            language=function.language.value,
            mode=mode.value,
            error=str(e)[:200],
        )
        sentry_sdk.capture_exception(e)
        raise

    comment = insert_comment(function, text)
    if comment is None:
        return None

    logger.info(
        "document_function_completed",
        function_name=signature.name,
        mode=mode.value,
        execution_time_ms=int((time.time() - start_time) * 1000),
    )
    return DocComment(text=comment.text, node=comment, function_name=signature.name, mode=mode)
