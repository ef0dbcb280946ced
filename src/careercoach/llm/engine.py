"""Core LLM interface for careercoach.

Framework choice: **Pydantic AI**
- Native OpenRouter provider (no manual base_url wiring).
- Provider HTTP failures surface as ``ModelHTTPError`` with a status code,
  which is all the retry policy needs to tell transient from terminal.
- Built-in TestModel / FunctionModel for deterministic unit tests without
  real API calls.
"""

from __future__ import annotations

import logging

import httpx
from openai import AsyncOpenAI
from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openrouter import OpenRouterProvider

from careercoach.llm.config import get_api_key, get_default_model

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


def build_model(
    model: str | None = None,
    *,
    base_url: str = OPENROUTER_BASE_URL,
    http_client: httpx.AsyncClient | None = None,
) -> Model:
    """Create an OpenAI-compatible model backed by OpenRouter.

    The SDK's own retries are disabled: ``RetryPolicy`` is the only place
    a failed call is repeated.
    """
    openai_client = AsyncOpenAI(
        base_url=base_url,
        api_key=get_api_key(),
        max_retries=0,
        http_client=http_client,
    )
    return OpenAIChatModel(
        model or get_default_model(),
        provider=OpenRouterProvider(openai_client=openai_client),
    )


async def complete(prompt: str, llm: Model) -> str:
    """Send a prompt to *llm*, get the text response back (stripped)."""
    logger.debug("LLM call (text): model=%s, prompt_len=%d", llm, len(prompt))
    agent: Agent[None, str] = Agent(llm, output_type=str)
    result = await agent.run(prompt)
    return (result.output or "").strip()
