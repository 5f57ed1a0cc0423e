"""
In-process storage used by the CLI and tests.

Real deployments pass their own object with the same get/set methods; where
and how it persists values is up to the caller.
"""

from __future__ import annotations

from typing import Optional

TIMESTAMPS_STORAGE_KEY = "subscribe.google.com:ts"


class MemoryStorage:
    """String key/value store that lives as long as the object does."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise ValueError("Stored values must be strings.")
        self._values[key] = value
