"""Where careercoach keeps its files: the project root and its ``data/`` dir."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

_MARKER = "pyproject.toml"


@lru_cache(maxsize=1)
def find_project_root() -> Path:
    """The nearest ancestor of this package that holds ``pyproject.toml``."""
    here = Path(__file__).resolve()
    return next(
        (p for p in here.parents if (p / _MARKER).exists()),
        # src/careercoach/core/paths.py sits three levels below the root
        here.parents[3],
    )


def data_dir() -> Path:
    """``<project root>/data``; callers create it when they write there."""
    return find_project_root() / "data"
