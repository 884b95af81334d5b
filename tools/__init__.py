# =============================================================================
# tools/__init__.py
# =============================================================================
# The FastMCP layer.  tools/mcp_server.py:
#   1. Registers the two product tools with their names, descriptions,
#      input schemas and read-only / open-world annotations
#   2. Hands each call to a handler in core/
#   3. Converts the resulting ContentEnvelope into MCP text content
#
# Nothing in core/ knows about FastMCP; this package is the only seam.
# =============================================================================
