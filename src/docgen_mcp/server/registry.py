"""Central tool registration for MCP server."""

from mcp.server.fastmcp import FastMCP

from docgen_mcp.features.documentation.tools import register_documentation_tools


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools from all features.

    Documentation (2 tools - check_documentation_available, generate_function_doc)
    """
    register_documentation_tools(mcp)
