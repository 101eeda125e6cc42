"""Tests for the provider HTTP adapters"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from thoughtlog.core.exceptions import ErrorKind, ProviderError, ProviderHttpError
from thoughtlog.llm.client import (
    ANTHROPIC_MESSAGES_URL,
    ANTHROPIC_VERSION,
    OPENAI_CHAT_URL,
    ClaudeClient,
    GenerationOptions,
    OpenAIClient,
)

FAST = GenerationOptions(tier="fast", temperature=0.3, max_tokens=1000)
SMART = GenerationOptions(tier="smart", temperature=0.7, max_tokens=2000)


def mock_response(status=200, payload=None, json_error=False):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = payload
    return response


class TestOpenAIClient:

    def test_requires_key(self):
        with pytest.raises(ValueError):
            OpenAIClient("")

    @patch("thoughtlog.llm.client.requests.post")
    def test_request_shape_and_reply(self, mock_post):
        mock_post.return_value = mock_response(payload={
            "choices": [{"message": {"content": '{"categoryName": "Fitness"}'}}]
        })
        client = OpenAIClient("sk-test", model="gpt-test", timeout=5)

        reply = client.invoke("system text", "user text", FAST)

        assert reply == '{"categoryName": "Fitness"}'
        args, kwargs = mock_post.call_args
        assert args[0] == OPENAI_CHAT_URL
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["timeout"] == 5
        body = kwargs["json"]
        assert body["model"] == "gpt-test"
        assert body["messages"] == [
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "user text"},
        ]
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 1000

    @patch("thoughtlog.llm.client.requests.post")
    def test_http_error_carries_status(self, mock_post):
        mock_post.return_value = mock_response(status=429)
        with pytest.raises(ProviderHttpError) as exc_info:
            OpenAIClient("sk-test").invoke("s", "u", FAST)
        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "OpenAI API error: 429"
        assert exc_info.value.kind is ErrorKind.PROVIDER
        assert exc_info.value.retryable is True

    @patch("thoughtlog.llm.client.requests.post")
    def test_transport_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ProviderError):
            OpenAIClient("sk-test").invoke("s", "u", FAST)

    @patch("thoughtlog.llm.client.requests.post")
    def test_unexpected_envelope(self, mock_post):
        mock_post.return_value = mock_response(payload={"choices": []})
        with pytest.raises(ProviderError):
            OpenAIClient("sk-test").invoke("s", "u", FAST)

    @patch("thoughtlog.llm.client.requests.post")
    def test_non_json_envelope(self, mock_post):
        mock_post.return_value = mock_response(json_error=True)
        with pytest.raises(ProviderError):
            OpenAIClient("sk-test").invoke("s", "u", FAST)


class TestClaudeClient:

    @patch("thoughtlog.llm.client.requests.post")
    def test_request_shape_and_reply(self, mock_post):
        mock_post.return_value = mock_response(payload={
            "content": [
                {"type": "text", "text": "[{\"title\": "},
                {"type": "text", "text": "\"A\"}]"},
            ]
        })
        client = ClaudeClient("sk-ant", fast_model="haiku", smart_model="sonnet")

        reply = client.invoke("system text", "user text", SMART)

        assert reply == '[{"title": "A"}]'
        args, kwargs = mock_post.call_args
        assert args[0] == ANTHROPIC_MESSAGES_URL
        assert kwargs["headers"]["x-api-key"] == "sk-ant"
        assert kwargs["headers"]["anthropic-version"] == ANTHROPIC_VERSION
        body = kwargs["json"]
        assert body["model"] == "sonnet"
        assert body["system"] == "system text"
        assert body["messages"] == [{"role": "user", "content": "user text"}]
        assert body["max_tokens"] == 2000

    @patch("thoughtlog.llm.client.requests.post")
    def test_fast_tier_uses_fast_model(self, mock_post):
        mock_post.return_value = mock_response(payload={"content": [{"type": "text", "text": "ok"}]})
        ClaudeClient("sk-ant", fast_model="haiku", smart_model="sonnet").invoke("s", "u", FAST)
        assert mock_post.call_args.kwargs["json"]["model"] == "haiku"

    @patch("thoughtlog.llm.client.requests.post")
    def test_http_error(self, mock_post):
        mock_post.return_value = mock_response(status=500)
        with pytest.raises(ProviderHttpError) as exc_info:
            ClaudeClient("sk-ant").invoke("s", "u", FAST)
        assert exc_info.value.message == "Claude API error: 500"
