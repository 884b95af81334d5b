# =============================================================================
# agent/docs_agent.py  —  Google ADK agent that consumes the MCP tools
# =============================================================================
#
# An example AI assistant client for the adapter.  The agent talks to
# tools/mcp_server.py over the stdio transport and reasons with any model
# LiteLLM can reach (OpenRouter GPT-4o by default, see AGENT_MODEL).
#
#     ADK Agent ──LiteLlm──▶ model
#         │
#         └──MCPToolset (stdio)──▶ tools/mcp_server.py ──▶ Inkeep API
# =============================================================================

import os

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_docs_assistant_prompt
from core.config import Settings

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def server_parameters() -> StdioServerParameters:
    """How ADK should spawn the MCP server subprocess.

    The server is started as a module from the project root so `core` is
    importable, and it inherits the full environment (the MCP SDK otherwise
    passes only a minimal default set, which would drop INKEEP_API_KEY).
    """
    env = dict(os.environ)
    env["MCP_TRANSPORT"] = "stdio"
    return StdioServerParameters(
        command="uv",
        args=["run", "python", "-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=env,
    )


def create_agent(settings: Settings) -> Agent:
    """Create the docs assistant agent wired to the product MCP tools."""
    mcp_tools = MCPToolset(connection_params=server_parameters())

    return Agent(
        name=f"{settings.product_slug.replace('-', '_')}_docs_assistant",
        model=LiteLlm(model=settings.agent_model),
        instruction=get_docs_assistant_prompt(settings),
        tools=[mcp_tools],
    )
