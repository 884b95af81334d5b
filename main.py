# =============================================================================
# main.py  —  Interactive docs assistant (example MCP client)
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# The ADK agent (agent/docs_agent.py) spawns tools/mcp_server.py over stdio
# and answers questions from the terminal, printing each tool it calls.
#
# To serve the tools to another assistant instead, run the server alone:
#   uv run python -m tools.mcp_server
# =============================================================================

import asyncio

from dotenv import load_dotenv

# LiteLlm reads the model provider key from the environment when the agent
# is created, so this must run before the ADK imports below are used.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.docs_agent import create_agent
from core.config import load_settings

APP_NAME = "docs_assistant"
USER_ID = "cli"
EXIT_WORDS = {"quit", "exit", "q"}


async def ask(runner: Runner, session_id: str, text: str) -> str:
    """Send one message to the agent and return its last text reply."""
    message = types.Content(role="user", parts=[types.Part(text=text)])
    reply = ""
    async for event in runner.run_async(user_id=USER_ID, session_id=session_id, new_message=message):
        for part in (event.content.parts if event.content else None) or []:
            if getattr(part, "function_call", None):
                print(f"  [tool] {part.function_call.name}")
            elif getattr(part, "text", None):
                reply = part.text
    return reply


async def run_agent():
    settings = load_settings()
    if not settings.has_credentials:
        print("INKEEP_API_KEY is not set; the docs tools will return empty results.")

    session_service = InMemorySessionService()
    runner = Runner(agent=create_agent(settings), app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print(f"Ask about {settings.product_name} ('quit' to exit).")
    while True:
        try:
            question = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if question.lower() in EXIT_WORDS:
            break
        if question:
            print(await ask(runner, session.id, question) or "(no response)")


if __name__ == "__main__":
    asyncio.run(run_agent())
