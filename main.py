"""docgen MCP Server - Entry point.

Run with ``python main.py`` or the ``docgen-mcp`` console script.
"""

from docgen_mcp.core.config import parse_args_and_get_config  # noqa: F401
from docgen_mcp.server.registry import register_all_tools  # noqa: F401
from docgen_mcp.server.runner import mcp, run_mcp_server  # noqa: F401

if __name__ == "__main__":
    run_mcp_server()
