"""Suggestion ID generation.

IDs are opaque and only need to be unique for the process lifetime. The
generator is injectable so tests can pin a sequence.
"""

from __future__ import annotations

import itertools
import threading


class SuggestionIdGenerator:
    """Thread-safe monotonically increasing counter rendered as ``{prefix}-{n}``."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self, prefix: str) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{prefix}-{n}"


_default = SuggestionIdGenerator()


def default_id_generator() -> SuggestionIdGenerator:
    return _default
