"""Player preferences backed by the key-value store."""
from __future__ import annotations

import logging

from beast_blitz.store import KeyValueStore
from beast_blitz.types import StoreError

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "Player"

SOUND_KEY = "prefs.sound_enabled"
HAPTICS_KEY = "prefs.haptics_enabled"
PLAYER_NAME_KEY = "prefs.player_name"

_TRUE = "true"
_FALSE = "false"


class Preferences:
    """Typed view of the player's settings. Unset or unreadable values use defaults."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def _read(self, key: str) -> str | None:
        try:
            return self._store.get(key)
        except (StoreError, OSError) as exc:
            logger.warning("could not read preference %s: %s", key, exc)
            return None

    def _write(self, key: str, value: str) -> None:
        try:
            self._store.set(key, value)
        except (StoreError, OSError) as exc:
            logger.warning("could not save preference %s: %s", key, exc)

    def _read_flag(self, key: str, default: bool) -> bool:
        raw = self._read(key)
        if raw == _TRUE:
            return True
        if raw == _FALSE:
            return False
        return default

    @property
    def player_name(self) -> str:
        name = self._read(PLAYER_NAME_KEY)
        return name if name else DEFAULT_PLAYER_NAME

    @player_name.setter
    def player_name(self, name: str) -> None:
        name = name.strip()
        self._write(PLAYER_NAME_KEY, name or DEFAULT_PLAYER_NAME)

    @property
    def sound_enabled(self) -> bool:
        return self._read_flag(SOUND_KEY, True)

    @sound_enabled.setter
    def sound_enabled(self, enabled: bool) -> None:
        self._write(SOUND_KEY, _TRUE if enabled else _FALSE)

    @property
    def haptics_enabled(self) -> bool:
        return self._read_flag(HAPTICS_KEY, True)

    @haptics_enabled.setter
    def haptics_enabled(self, enabled: bool) -> None:
        self._write(HAPTICS_KEY, _TRUE if enabled else _FALSE)
