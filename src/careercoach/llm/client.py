"""Prompt-templated generation client.

One ``GenerationClient`` is built per process (see ``careercoach.cli``) and
handed to every service that talks to the provider. It owns the model handle
and the retry policy, and translates provider failures into the
``careercoach.core.errors`` taxonomy:

- HTTP 503 → retried per ``RetryPolicy``; ``ProviderTransientError`` once
  attempts run out.
- HTTP 429 → ``ProviderQuotaExceeded`` immediately (``generate`` turns it
  into a degraded ``Generation`` instead).
- unparseable JSON → ``ProviderMalformedOutput``.
- anything else → ``GenerationError`` after logging the cause.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_ai.exceptions import ModelHTTPError
from pydantic_ai.models import Model

from careercoach.core.errors import (
    GenerationError,
    ProviderMalformedOutput,
    ProviderQuotaExceeded,
    ProviderTransientError,
)
from careercoach.core.models import ArtifactStatus
from careercoach.llm.engine import build_model, complete
from careercoach.llm.json_output import parse_json_output
from careercoach.llm.retry import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

TRANSIENT_STATUS_CODES = frozenset({503})
QUOTA_STATUS_CODE = 429

QUOTA_MESSAGE = (
    "AI generation failed: quota exceeded. Please check your provider billing "
    "and quota settings and try again later."
)


@dataclass
class Generation:
    """Outcome of ``GenerationClient.generate``: real content or a diagnostic."""

    text: str
    status: ArtifactStatus = ArtifactStatus.COMPLETED

    @property
    def degraded(self) -> bool:
        return self.status is ArtifactStatus.FAILED


def is_transient(exc: Exception) -> bool:
    return isinstance(exc, ModelHTTPError) and exc.status_code in TRANSIENT_STATUS_CODES


def _provider_details(exc: ModelHTTPError) -> str:
    if isinstance(exc.body, (dict, list)):
        return json.dumps(exc.body)
    return str(exc.body) if exc.body else str(exc)


class GenerationClient:
    """Wraps one provider model behind retry + parse helpers.

    Parameters
    ----------
    model:
        A Pydantic-AI ``Model`` (tests pass ``TestModel``/``FunctionModel``),
        an OpenRouter model string, or *None* for the configured default.
        String/None models are built lazily on first use so commands that
        never call the provider don't need an API key.
    retry_policy:
        Policy for transient failures. Defaults to 3 attempts, 2 s apart.
    """

    def __init__(
        self,
        model: Model | str | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._model_name = None if isinstance(model, Model) else model
        self._model: Model | None = model if isinstance(model, Model) else None
        self.retry_policy = retry_policy or RetryPolicy()

    @property
    def model(self) -> Model:
        if self._model is None:
            try:
                self._model = build_model(self._model_name)
            except RuntimeError as exc:
                raise GenerationError(str(exc)) from exc
        return self._model

    async def generate_text(self, prompt: str) -> str:
        """Return the generated text, retrying transient provider failures."""
        llm = self.model
        try:
            return await self.retry_policy.run(
                lambda: complete(prompt, llm), retry_on=is_transient
            )
        except ModelHTTPError as exc:
            if exc.status_code in TRANSIENT_STATUS_CODES:
                logger.warning(
                    "Provider unavailable after %d attempts: %s",
                    self.retry_policy.max_attempts, exc,
                )
                raise ProviderTransientError("AI model unavailable after retries.") from exc
            if exc.status_code == QUOTA_STATUS_CODE:
                logger.warning("Provider quota exceeded: %s", exc)
                raise ProviderQuotaExceeded(
                    QUOTA_MESSAGE, details=_provider_details(exc)
                ) from exc
            logger.exception("Provider call failed with HTTP %s", exc.status_code)
            raise GenerationError("AI generation failed.") from exc
        except Exception as exc:
            logger.exception("Provider call failed")
            raise GenerationError("AI generation failed.") from exc

    async def generate(self, prompt: str) -> Generation:
        """Like ``generate_text``, but quota exhaustion yields a degraded result."""
        try:
            text = await self.generate_text(prompt)
        except ProviderQuotaExceeded as exc:
            return Generation(
                text=f"{exc}\n\nProvider details:\n{exc.details}",
                status=ArtifactStatus.FAILED,
            )
        return Generation(text=text)

    async def generate_json(self, prompt: str) -> Any:
        """Generate and parse a JSON answer (code fences are stripped first)."""
        text = await self.generate_text(prompt)
        return parse_json_output(text)

    async def generate_model(self, prompt: str, output_type: type[T]) -> T:
        """Generate JSON and validate it into *output_type*."""
        data = await self.generate_json(prompt)
        try:
            return output_type.model_validate(data)
        except ValidationError as exc:
            raise ProviderMalformedOutput(
                f"AI output does not match {output_type.__name__}", raw=json.dumps(data)
            ) from exc

    async def generate_optional(self, prompt: str) -> str | None:
        """Best-effort generation: *None* instead of an error."""
        try:
            return await self.generate_text(prompt)
        except GenerationError as exc:
            logger.warning("Optional generation skipped: %s", exc)
            return None
