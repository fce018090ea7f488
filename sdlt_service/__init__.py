"""UK Stamp Duty Land Tax calculator exposed as an MCP tool server."""
