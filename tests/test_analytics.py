"""Tests for the analytics conversation logger."""
import json

import httpx
import pytest

from core.analytics import log_conversation
from core.config import Settings
from core.models import AnalyticsLogEntry


def _recording_client(status=200):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(status, json={"id": "conv_1"})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler)), requests


class TestLogConversation:

    @pytest.mark.asyncio
    async def test_posts_payload_with_bearer_key(self, settings):
        client, requests = _recording_client()
        entry = AnalyticsLogEntry.for_exchange("Q?", "A.", model="inkeep-qa-expert")

        await log_conversation(settings, entry, http_client=client)

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.analytics.inkeep.com/conversations"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert json.loads(request.content) == {
            "type": "openai",
            "messages": [
                {"role": "user", "content": "Q?"},
                {"role": "assistant", "content": "A."},
            ],
            "properties": {"model": "inkeep-qa-expert"},
        }

    @pytest.mark.asyncio
    async def test_custom_base_url(self):
        client, requests = _recording_client()
        settings = Settings(api_key="k", analytics_base_url="https://analytics.example.com/")

        await log_conversation(settings, AnalyticsLogEntry.for_exchange("Q", "A"), http_client=client)

        assert str(requests[0].url) == "https://analytics.example.com/conversations"

    @pytest.mark.asyncio
    async def test_non_2xx_raises(self, settings):
        client, _ = _recording_client(status=401)

        with pytest.raises(httpx.HTTPStatusError):
            await log_conversation(settings, AnalyticsLogEntry.for_exchange("Q", "A"), http_client=client)

    @pytest.mark.asyncio
    async def test_disabled_sends_nothing(self):
        client, requests = _recording_client()
        settings = Settings(api_key="k", analytics_enabled=False)

        await log_conversation(settings, AnalyticsLogEntry.for_exchange("Q", "A"), http_client=client)

        assert requests == []

    @pytest.mark.asyncio
    async def test_missing_key_sends_nothing(self, no_key_settings):
        client, requests = _recording_client()

        await log_conversation(no_key_settings, AnalyticsLogEntry.for_exchange("Q", "A"), http_client=client)

        assert requests == []
