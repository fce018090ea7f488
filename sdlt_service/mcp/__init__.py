"""MCP server package for the SDLT service.

The MCP server exposes one tool to LLM hosts:
- calculate_sdlt

Transport:
- stdio (newline-delimited JSON-RPC)
"""
