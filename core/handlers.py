# =============================================================================
# core/handlers.py  —  The two tool operations
# =============================================================================
#
# Each handler runs the same small state machine:
#
#     Idle ──▶ AwaitingUpstream ──▶ Success  (usable payload)
#                              └──▶ Failed   (error, bad payload, no key)
#
# and ALWAYS returns a ContentEnvelope.  Failed is the empty envelope; no
# exception leaves this module.  A calling assistant therefore sees
# "upstream down", "nothing found" and "not configured" identically.
#
# The upstream client is opened and closed within one call.  Analytics runs
# as a detached task so a slow or failing sink never holds up an answer.
#
# Dependencies (client factory, analytics logger) are parameters so tests
# can substitute fakes without patching.
# =============================================================================

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from openai import AsyncOpenAI

from core.analytics import log_conversation
from core.config import Settings
from core.models import AnalyticsLogEntry, ContentEnvelope
from core.upstream import create_client, fetch_answer, fetch_documents

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], AsyncOpenAI]
AnalyticsLogger = Callable[[Settings, AnalyticsLogEntry], Awaitable[None]]


def _is_blank(text: str) -> bool:
    return not text or not text.strip()


async def answer_question(
    question: str,
    settings: Settings,
    client_factory: ClientFactory = create_client,
    analytics_logger: AnalyticsLogger = log_conversation,
) -> ContentEnvelope:
    """Answer a product question with the QA model.

    Returns one text item holding the answer, or an empty envelope when the
    key is missing, the question is blank, the reply has no text, or the
    upstream call fails.  A successful answer is also logged to analytics
    in the background; the result does not wait for it.
    """
    if not settings.has_credentials:
        logger.debug("INKEEP_API_KEY not set, returning empty result")
        return ContentEnvelope.empty()
    if _is_blank(question):
        return ContentEnvelope.empty()

    try:
        async with client_factory(settings) as client:
            answer = await fetch_answer(client, question, settings.qa_model)
    except Exception as e:
        logger.error(f"Error getting QA response: {e}")
        return ContentEnvelope.empty()

    if not answer:
        logger.warning("QA response contained no assistant text")
        return ContentEnvelope.empty()

    _schedule_log(settings, question, answer, analytics_logger)
    return ContentEnvelope.of_text(answer)


async def search_docs(
    query: str,
    settings: Settings,
    client_factory: ClientFactory = create_client,
) -> ContentEnvelope:
    """Semantic search over the product's documentation with the RAG model.

    Returns one text item holding the JSON-encoded RAGResponse (documents
    plus any extra upstream fields), or an empty envelope on any failure.
    """
    if not settings.has_credentials:
        logger.debug("INKEEP_API_KEY not set, returning empty result")
        return ContentEnvelope.empty()
    if _is_blank(query):
        return ContentEnvelope.empty()

    try:
        async with client_factory(settings) as client:
            documents = await fetch_documents(client, query, settings.rag_model)
    except Exception as e:
        logger.error(f"Error retrieving product docs: {e}")
        return ContentEnvelope.empty()

    if documents is None:
        logger.warning("RAG response could not be parsed into documents")
        return ContentEnvelope.empty()

    return ContentEnvelope.of_text(documents.to_json())


# In-flight analytics tasks.  The event loop only keeps weak references to
# tasks, so they are held here until they finish.
_pending_logs: set[asyncio.Task] = set()


def _schedule_log(
    settings: Settings,
    question: str,
    answer: str,
    analytics_logger: AnalyticsLogger,
) -> Optional[asyncio.Task]:
    entry = AnalyticsLogEntry.for_exchange(question, answer, model=settings.qa_model)
    try:
        task = asyncio.create_task(analytics_logger(settings, entry))
    except Exception as e:
        logger.error(f"Error starting analytics log: {e}")
        return None
    _pending_logs.add(task)
    task.add_done_callback(_on_log_done)
    return task


def _on_log_done(task: asyncio.Task) -> None:
    _pending_logs.discard(task)
    if task.cancelled():
        logger.warning("Analytics logging was cancelled")
        return
    error = task.exception()
    if error is not None:
        logger.error(f"Error logging conversation to analytics: {error}")


async def drain_analytics() -> None:
    """Wait for every in-flight analytics task (used at shutdown and in tests)."""
    if _pending_logs:
        await asyncio.gather(*list(_pending_logs), return_exceptions=True)
