# =============================================================================
# core/__init__.py
# =============================================================================
# Framework-free logic for the product docs adapter: settings, data models,
# the upstream completion client, the analytics sink, and the two handlers.
#
# Nothing in this package imports FastMCP or Google ADK.  The handlers take
# plain arguments and return a ContentEnvelope, so they can be tested with
# fake clients and no server.
# =============================================================================
