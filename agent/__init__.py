# =============================================================================
# agent/__init__.py
# =============================================================================
# Example AI assistant client (Google ADK) for the product docs tools.
#
# It holds no product logic: a system prompt, a model, and a connection to
# the MCP server in tools/.  Everything it knows about the product comes
# back through the two tools.
# =============================================================================
