"""Provider settings for content generation.

The project's ``.env`` is read once at import time; variables already set in
the environment take precedence over it.

``OPENROUTER_API_KEY``
    Required only when a real model is built.
``CAREERCOACH_MODEL``
    OpenRouter model id; defaults to :data:`DEFAULT_MODEL`.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from careercoach.core.paths import find_project_root

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENROUTER_API_KEY"
MODEL_ENV = "CAREERCOACH_MODEL"

# Letters, quizzes and insights are short; a flash-tier model is plenty.
DEFAULT_MODEL = "google/gemini-2.5-flash"


def _load_env_file() -> None:
    env_file = find_project_root() / ".env"
    loaded = load_dotenv(env_file, override=False)
    logger.debug("Read %s (found=%s)", env_file, loaded)


_load_env_file()


def get_default_model() -> str:
    return os.environ.get(MODEL_ENV) or DEFAULT_MODEL


def get_api_key() -> str:
    """The OpenRouter key, or ``RuntimeError`` with a hint on where to set it."""
    key = os.environ.get(API_KEY_ENV, "")
    if not key:
        raise RuntimeError(
            f"{API_KEY_ENV} is not set. "
            "Add it to the .env file at the project root or export it."
        )
    return key
