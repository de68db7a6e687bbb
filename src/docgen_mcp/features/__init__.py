"""Feature modules for docgen-mcp."""
