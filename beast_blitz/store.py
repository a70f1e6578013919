"""Key-value persistence contract and an in-memory implementation."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from beast_blitz.types import StoreError


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the host's key-value persistence.

    Values are opaque strings. Implementations raise ``StoreError`` (or
    ``OSError``) when the backing medium is unavailable.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is unset."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored."""
        ...


class MemoryStore:
    """Process-local store. Conforms to the KeyValueStore protocol."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StoreError(f"value for {key!r} must be str, got {type(value).__name__}")
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
