"""Extract JSON from LLM responses that may be wrapped in code fences."""

from __future__ import annotations

import json
import re
from typing import Any

from careercoach.core.errors import ProviderMalformedOutput

_FENCE_RE = re.compile(r"```(?:json)?\n?")


def strip_code_fences(text: str) -> str:
    """Remove every ```/```json fence marker and surrounding whitespace."""
    return _FENCE_RE.sub("", text).strip()


def parse_json_output(text: str) -> Any:
    """Strip fences and parse; anything unparseable is a malformed answer."""
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ProviderMalformedOutput(
            f"AI returned malformed JSON: {exc.msg}", raw=text
        ) from exc
