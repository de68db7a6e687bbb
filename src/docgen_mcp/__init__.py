"""docgen-mcp: documentation comment generation for the function under the cursor."""

__version__ = "0.1.0"
