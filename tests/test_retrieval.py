"""Tests for the OpenRouter-backed retriever (SDK client is faked)."""

import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from design_digest.config import LlmConfig, Settings
from design_digest.errors import AuthorizationError, RetrievalError
from design_digest.prompts import ARTICLE_SCHEMA
from design_digest.retrieval import GenerationRequest, OpenRouterRetriever

_REQUEST = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")


# ── Helpers ──────────────────────────────────────────────────────────────


class _FakeCompletions:
    def __init__(self, outcome) -> None:
        self.outcome = outcome
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class _FakeClient:
    def __init__(self, outcome) -> None:
        self.completions = _FakeCompletions(outcome)
        self.chat = SimpleNamespace(completions=self.completions)


def _response(content: str | None = "[]", reasoning: str | None = None, error=None):
    message = SimpleNamespace(content=content, reasoning_content=reasoning)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)], error=error)


def _retriever(outcome) -> tuple[OpenRouterRetriever, _FakeClient]:
    client = _FakeClient(outcome)
    retriever = OpenRouterRetriever(LlmConfig(), Settings(openrouter_api_key="sk-test"), client=client)
    return retriever, client


def _generate(retriever: OpenRouterRetriever, **kwargs) -> str:
    return asyncio.run(retriever.generate(GenerationRequest(prompt="find articles", **kwargs)))


# ── Tests ────────────────────────────────────────────────────────────────


class TestOpenRouterRetriever:
    """错误映射与请求参数"""

    def test_returns_content(self):
        retriever, _ = _retriever(_response('[{"a": 1}]'))
        assert _generate(retriever) == '[{"a": 1}]'

    def test_missing_key_is_authorization_error(self):
        retriever = OpenRouterRetriever(LlmConfig(), Settings(openrouter_api_key=""))
        with pytest.raises(AuthorizationError):
            _generate(retriever)

    def test_key_builds_client(self):
        retriever = OpenRouterRetriever(LlmConfig(), Settings(openrouter_api_key="sk-test"))
        assert retriever._client is not None

    def test_authentication_error(self):
        error = openai.AuthenticationError(
            "invalid key", response=httpx.Response(401, request=_REQUEST), body=None
        )
        retriever, _ = _retriever(error)
        with pytest.raises(AuthorizationError):
            _generate(retriever)

    def test_permission_denied(self):
        error = openai.PermissionDeniedError(
            "forbidden", response=httpx.Response(403, request=_REQUEST), body=None
        )
        retriever, _ = _retriever(error)
        with pytest.raises(AuthorizationError):
            _generate(retriever)

    def test_connection_error_is_retrieval_error(self):
        retriever, _ = _retriever(openai.APIConnectionError(request=_REQUEST))
        with pytest.raises(RetrievalError):
            _generate(retriever)

    def test_server_error_is_retrieval_error(self):
        error = openai.InternalServerError(
            "boom", response=httpx.Response(500, request=_REQUEST), body=None
        )
        retriever, _ = _retriever(error)
        with pytest.raises(RetrievalError):
            _generate(retriever)

    def test_in_body_auth_error(self):
        """OpenRouter 在响应体中返回 401"""
        retriever, _ = _retriever(_response(error={"code": 401, "message": "No auth credentials"}))
        with pytest.raises(AuthorizationError):
            _generate(retriever)

    def test_in_body_other_error(self):
        retriever, _ = _retriever(_response(error={"code": 502, "message": "Upstream error"}))
        with pytest.raises(RetrievalError):
            _generate(retriever)

    def test_empty_choices(self):
        retriever, _ = _retriever(SimpleNamespace(choices=[], error=None))
        with pytest.raises(RetrievalError):
            _generate(retriever)

    def test_empty_content(self):
        retriever, _ = _retriever(_response(content=""))
        with pytest.raises(RetrievalError):
            _generate(retriever)

    def test_reasoning_content_used(self):
        retriever, _ = _retriever(_response(content=None, reasoning="[1]"))
        assert _generate(retriever) == "[1]"

    def test_grounded_request_enables_web_plugin(self):
        retriever, client = _retriever(_response())
        _generate(retriever, grounded=True)

        kwargs = client.completions.calls[0]
        assert kwargs["extra_body"]["plugins"][0]["id"] == "web"
        assert "response_format" not in kwargs

    def test_schema_request(self):
        retriever, client = _retriever(_response())
        _generate(retriever, response_schema=ARTICLE_SCHEMA)

        kwargs = client.completions.calls[0]
        assert kwargs["response_format"]["type"] == "json_schema"
        assert kwargs["response_format"]["json_schema"]["schema"] is ARTICLE_SCHEMA
        assert "extra_body" not in kwargs

    def test_model_and_prompt_passed(self):
        retriever, client = _retriever(_response())
        _generate(retriever)

        kwargs = client.completions.calls[0]
        assert kwargs["model"] == LlmConfig().model
        assert kwargs["messages"] == [{"role": "user", "content": "find articles"}]
