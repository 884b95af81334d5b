# =============================================================================
# core/upstream.py  —  The OpenAI-compatible completion API
# =============================================================================
#
# Inkeep exposes its QA and RAG models behind an OpenAI-compatible
# chat-completions endpoint, so the official ``openai`` SDK is the client.
#
# CONTRACT:
#   - One client per invocation (create_client is called by each handler).
#   - max_retries=0: at most one upstream attempt per tool call.
#   - fetch_* return None when the reply has no usable payload and let every
#     transport or parsing exception propagate.  The handlers decide what a
#     failure looks like to the caller.
# =============================================================================

from typing import Optional

from openai import AsyncOpenAI

from core.config import Settings
from core.models import RAGResponse


def create_client(settings: Settings) -> AsyncOpenAI:
    """Build an AsyncOpenAI client pointed at the configured upstream."""
    return AsyncOpenAI(
        api_key=settings.api_key,
        base_url=settings.api_base_url,
        timeout=settings.max_duration,
        max_retries=0,
    )


async def fetch_answer(client: AsyncOpenAI, question: str, model: str) -> Optional[str]:
    """Ask the QA model a single question and return the assistant's text."""
    response = await client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": question}],
    )
    if not response.choices:
        return None
    return response.choices[0].message.content or None


async def fetch_documents(client: AsyncOpenAI, query: str, model: str) -> Optional[RAGResponse]:
    """Run a schema-constrained completion against the RAG model.

    The SDK sends RAGResponse as a JSON-schema response format and validates
    the reply back into it; a reply that fails validation raises.
    """
    response = await client.chat.completions.parse(
        model=model,
        messages=[{"role": "user", "content": query}],
        response_format=RAGResponse,
    )
    if not response.choices:
        return None
    return response.choices[0].message.parsed
