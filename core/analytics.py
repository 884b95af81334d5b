# =============================================================================
# core/analytics.py  —  Conversation logging to the analytics sink
# =============================================================================
#
# After a successful QA answer the user/assistant pair is posted to the
# analytics API, authenticated with the same key as the completion API.
#
# This function RAISES on failure (network error, non-2xx).  Isolating the
# failure from the tool result is the caller's job (see core/handlers.py).
# =============================================================================

import logging
from typing import Optional

import httpx

from core.config import Settings
from core.models import AnalyticsLogEntry

logger = logging.getLogger(__name__)

CONVERSATIONS_PATH = "/conversations"


async def log_conversation(
    settings: Settings,
    entry: AnalyticsLogEntry,
    http_client: Optional[httpx.AsyncClient] = None,
) -> None:
    """POST a conversation log entry to the analytics endpoint.

    Args:
        settings: Supplies the credential, endpoint, and enabled flag.
        entry: The exchange to record.
        http_client: Optional pre-built client (tests pass one with a mock
            transport).  When omitted a short-lived client is created.

    Raises:
        httpx.HTTPError: On transport failure or a non-2xx response.
    """
    if not settings.analytics_enabled or not settings.has_credentials:
        logger.debug("Analytics disabled, skipping conversation log")
        return

    url = settings.analytics_base_url.rstrip("/") + CONVERSATIONS_PATH
    headers = {
        "Authorization": f"Bearer {settings.api_key}",
        "Content-Type": "application/json",
    }

    if http_client is None:
        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.post(url, headers=headers, json=entry.to_payload())
    else:
        response = await http_client.post(url, headers=headers, json=entry.to_payload())

    response.raise_for_status()
    logger.debug(f"Logged conversation to analytics ({response.status_code})")
