"""Sentry error tracking integration for docgen-mcp."""
import os
from typing import Any

import sentry_sdk

from docgen_mcp.core.logging import get_logger


def init_sentry(service_name: str = "docgen-mcp") -> None:
    """Initialize Sentry with service tagging.

    Args:
        service_name: Unique service identifier (default: 'docgen-mcp')
    """
    def _tag_event(event: Any, hint: Any) -> Any:
        """Add service tags to every event."""
        event.setdefault("tags", {})
        event["tags"]["service"] = service_name
        event["tags"]["language"] = "python"
        event["tags"]["component"] = "mcp-server"
        return event

    # Only initialize if SENTRY_DSN is set
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return

    environment = os.getenv("SENTRY_ENVIRONMENT", "development")
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=1.0 if environment == "development" else 0.1,
        # Prompts embed user source code
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
        debug=environment == "development",
        before_send=_tag_event,
    )

    sentry_sdk.set_tag("service", service_name)
    sentry_sdk.set_tag("language", "python")
    sentry_sdk.set_tag("component", "mcp-server")

    logger = get_logger("sentry")
    logger.info(
        "sentry_initialized",
        service=service_name,
        environment=environment,
    )
