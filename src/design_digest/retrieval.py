"""Content service boundary.

The pipelines only see ``ContentRetriever.generate``; the concrete
implementation talks to an OpenAI-compatible endpoint (OpenRouter by
default). 通过 OpenRouter 的 web 插件实现搜索 grounding。
"""

import logging
from abc import ABC, abstractmethod

import httpx
import openai
from openai import AsyncOpenAI
from pydantic import BaseModel

from .config import LlmConfig, Settings
from .errors import AuthorizationError, RetrievalError

logger = logging.getLogger(__name__)

_AUTH_CODES = frozenset({401, 403, "401", "403"})


class GenerationRequest(BaseModel):
    """One call to the content service."""

    prompt: str
    grounded: bool = False  # use live web search
    response_schema: dict | None = None  # structured output (JSON schema)


class ContentRetriever(ABC):
    """Abstract content service.

    Implementations raise ``AuthorizationError`` for credential problems
    and ``RetrievalError`` for everything else that goes wrong in transit.
    """

    name: str = ""

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> str:
        """Return the raw text produced for *request*."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class OpenRouterRetriever(ContentRetriever):
    """ContentRetriever backed by ``openai.AsyncOpenAI``.

    Create one per credential; pass ``client`` to reuse or fake the SDK client.
    """

    name = "openrouter"

    def __init__(
        self,
        llm_config: LlmConfig,
        settings: Settings,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.llm_config = llm_config
        if client is None and settings.openrouter_api_key:
            client = AsyncOpenAI(
                api_key=settings.openrouter_api_key,
                base_url=llm_config.base_url,
                max_retries=llm_config.max_retries,
                timeout=httpx.Timeout(llm_config.timeout, connect=10.0),
            )
        self._client = client

    def _build_kwargs(self, request: GenerationRequest) -> dict:
        kwargs: dict = {
            "model": self.llm_config.model,
            "messages": [{"role": "user", "content": request.prompt}],
            "temperature": self.llm_config.temperature,
        }
        if request.grounded:
            kwargs["extra_body"] = {
                "plugins": [
                    {"id": "web", "max_results": self.llm_config.search_max_results}
                ]
            }
        if request.response_schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "article",
                    "strict": True,
                    "schema": request.response_schema,
                },
            }
        return kwargs

    async def generate(self, request: GenerationRequest) -> str:
        if self._client is None:
            raise AuthorizationError(
                "OPENROUTER_API_KEY is required. Get one at https://openrouter.ai/keys"
            )

        try:
            response = await self._client.chat.completions.create(
                **self._build_kwargs(request)
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise AuthorizationError(str(e)) from e
        except openai.APIError as e:
            raise RetrievalError(f"{type(e).__name__}: {e}") from e

        # OpenRouter 可能在响应体中返回错误而非 HTTP 状态码
        error = getattr(response, "error", None)
        if error:
            err_msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            err_code = error.get("code", "unknown") if isinstance(error, dict) else "unknown"
            if err_code in _AUTH_CODES:
                raise AuthorizationError(f"OpenRouter rejected the credential: {err_msg}")
            raise RetrievalError(f"OpenRouter returned error (code={err_code}): {err_msg}")

        if not response.choices:
            raise RetrievalError("LLM returned no choices")

        message = response.choices[0].message
        content = message.content or ""

        # 推理模型可能仅在 reasoning_content 中返回内容
        if not content:
            reasoning = getattr(message, "reasoning_content", None)
            if reasoning:
                logger.warning("LLM returned reasoning_content but no content, using reasoning")
                content = reasoning

        if not content:
            raise RetrievalError("LLM returned empty content")

        return content
