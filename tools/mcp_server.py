# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (both tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server and registers the two product tools:
#
#     ask-question-about-<slug>   → core.handlers.answer_question
#     search-<slug>-docs          → core.handlers.search_docs
#
#   Each tool is a thin wrapper: log the request, call the core handler,
#   convert the ContentEnvelope into an MCP ToolResult, log the response.
#
# FAIL-SOFT CONTRACT:
#   The core handlers never raise, so a tool call always completes with a
#   (possibly empty) list of text content.  With no INKEEP_API_KEY the
#   tools are still listed but every call returns an empty list.
#
# RUNNING THIS SERVER:
#     a) stdio (default):  python -m tools.mcp_server
#     b) HTTP:             MCP_TRANSPORT=http python -m tools.mcp_server
#        Streamable HTTP on MCP_PATH; answers GET, POST and DELETE.
#     c) FastMCP CLI:      fastmcp run tools/mcp_server.py
# =============================================================================

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import Field

from core.analytics import log_conversation
from core.config import Settings, load_settings
from core.handlers import (
    AnalyticsLogger,
    ClientFactory,
    answer_question,
    drain_analytics,
    search_docs,
)
from core.models import ContentEnvelope, ToolRequest
from core.upstream import create_client

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: under the stdio transport STDOUT carries the MCP JSON
# stream, and anything else written there corrupts it.
#
#   CYAN   → incoming requests (tool name + parameters)
#   GREEN  → responses
#   YELLOW → intermediate status messages
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(request: ToolRequest) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in request.parameters.items())
    logging.info(f"{_CYAN}{request.operation_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, envelope: ContentEnvelope) -> ContentEnvelope:
    """Log the envelope as compact JSON in GREEN, then return it."""
    logging.info(
        f"{_GREEN}  ← {tool_name} response: "
        f"{json.dumps(envelope.to_dict(), separators=(',', ':'))}{_RESET}"
    )
    return envelope


def to_tool_result(envelope: ContentEnvelope) -> ToolResult:
    """Convert a ContentEnvelope into the MCP result FastMCP sends back."""
    return ToolResult(
        content=[TextContent(type="text", text=item.text) for item in envelope.content]
    )


# =============================================================================
# Tool descriptions
# =============================================================================
# The descriptions are what the calling assistant reads to decide WHEN to
# use each tool, so they spell out what comes back and how to treat it.
# =============================================================================

def qa_tool_description(settings: Settings) -> str:
    name = settings.product_name
    return (
        f"Use this tool to ask a question about {name} to an AI Support Agent that is "
        f"knowledgeable about {name}. Use this tool to ask specific troubleshooting, "
        f"feature capability, or conceptual questions. Be specific and provide the "
        f"minimum context needed to address your question in full"
    )


def rag_tool_description(settings: Settings) -> str:
    name = settings.product_name
    return (
        f"Use this tool to do a semantic search for reference content related to {name}. "
        f"The results provided will be extracts from documentation sites and other public "
        f"sources like GitHub. The content may not fully answer your question -- be "
        f"circumspect when reviewing and interpreting these extracts before using them "
        f"in your response."
    )


@asynccontextmanager
async def _flush_analytics_on_exit(server: FastMCP):
    try:
        yield
    finally:
        await drain_analytics()


# =============================================================================
# Server factory
# =============================================================================

def build_server(
    settings: Optional[Settings] = None,
    client_factory: ClientFactory = create_client,
    analytics_logger: AnalyticsLogger = log_conversation,
) -> FastMCP:
    """Create a FastMCP server with both product tools registered.

    Args:
        settings: Runtime configuration.  Loaded from the environment if omitted.
        client_factory: Builds the upstream OpenAI client, once per call.
        analytics_logger: Records successful QA exchanges.

    Returns:
        A ready-to-run FastMCP instance.
    """
    settings = settings or load_settings()
    mcp = FastMCP(f"{settings.product_slug}-mcp", lifespan=_flush_analytics_on_exit)

    qa_name = settings.qa_tool_name
    rag_name = settings.rag_tool_name

    if not settings.has_credentials:
        logging.warning("INKEEP_API_KEY is not set; tools will return empty results")

    # =========================================================================
    # TOOL 1: ask-question-about-<slug>
    # =========================================================================
    @mcp.tool(
        name=qa_name,
        description=qa_tool_description(settings),
        annotations=ToolAnnotations(
            title=f"Ask AI about {settings.product_name}",
            readOnlyHint=True,
            openWorldHint=True,
        ),
    )
    async def ask_question(
        question: Annotated[str, Field(description="Question about the product")],
    ) -> ToolResult:
        _log_request(ToolRequest(qa_name, {"question": question}))
        envelope = await answer_question(
            question,
            settings,
            client_factory=client_factory,
            analytics_logger=analytics_logger,
        )
        _log_status("answer found" if not envelope.is_empty else "no answer")
        return to_tool_result(_log_response(qa_name, envelope))

    # =========================================================================
    # TOOL 2: search-<slug>-docs
    # =========================================================================
    @mcp.tool(
        name=rag_name,
        description=rag_tool_description(settings),
        annotations=ToolAnnotations(
            title=f"Search {settings.product_name} Documentation",
            readOnlyHint=True,
            openWorldHint=True,
        ),
    )
    async def search_documentation(
        query: Annotated[str, Field(description="The search query to find relevant documentation")],
    ) -> ToolResult:
        _log_request(ToolRequest(rag_name, {"query": query}))
        envelope = await search_docs(query, settings, client_factory=client_factory)
        _log_status("documents found" if not envelope.is_empty else "no documents")
        return to_tool_result(_log_response(rag_name, envelope))

    return mcp


def run(settings: Settings, server: Optional[FastMCP] = None) -> None:
    """Serve over the configured transport (blocks until shutdown)."""
    server = server or build_server(settings)
    if settings.transport == "http":
        _log_status(f"Serving on http://{settings.host}:{settings.port}{settings.path}")
        server.run(transport="http", host=settings.host, port=settings.port, path=settings.path)
    elif settings.transport == "stdio":
        server.run(transport="stdio")
    else:
        raise ValueError(f"Unknown MCP_TRANSPORT {settings.transport!r}; use 'stdio' or 'http'")


# =============================================================================
# Module-level server
# =============================================================================
# `fastmcp run tools/mcp_server.py` looks for a FastMCP object named `mcp`.
# =============================================================================
load_dotenv()
_settings = load_settings()
configure_logging(_settings.verbose_logs)
mcp = build_server(_settings)


def main() -> None:
    run(_settings, mcp)


if __name__ == "__main__":
    main()
