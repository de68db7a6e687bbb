"""MCP server entry point."""

from mcp.server.fastmcp import FastMCP

from docgen_mcp.core.config import parse_args_and_get_config
from docgen_mcp.core.sentry import init_sentry
from docgen_mcp.server.registry import register_all_tools

# Create FastMCP instance
mcp = FastMCP("docgen")


def run_mcp_server() -> None:
    """Run the MCP server.

    This function:
    1. Parses command-line arguments and loads configuration
    2. Initializes Sentry error tracking (if configured)
    3. Registers all MCP tools
    4. Starts the MCP server with stdio transport
    """
    parse_args_and_get_config()
    init_sentry()
    register_all_tools(mcp)
    mcp.run(transport="stdio")
