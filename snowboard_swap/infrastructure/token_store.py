"""Token Stores: persistence for the bearer token behind the TokenStore protocol.

Invariants:
    - Exactly one opaque string token under one storage key
    - save_token(None) removes the key; load_token() then returns None
    - FileTokenStore keeps other keys in the file untouched
"""

import json
import logging
import threading
from pathlib import Path

from snowboard_swap.config import Settings, get_settings

logger = logging.getLogger(__name__)


class InMemoryTokenStore:
    """Process-local store, used by tests and ephemeral sessions."""

    def __init__(self, token: str | None = None):
        self._token = token

    def load_token(self) -> str | None:
        return self._token

    def save_token(self, token: str | None) -> None:
        self._token = token


class FileTokenStore:
    """JSON-object file on disk: {storage_key: token}."""

    def __init__(self, path: Path, key: str = "codex01.jwt.token"):
        self.path = Path(path)
        self.key = key
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "FileTokenStore":
        settings = settings or get_settings()
        return cls(settings.token_file, settings.token_storage_key)

    def _read(self) -> dict:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Token file %s is not valid JSON, ignoring it", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def load_token(self) -> str | None:
        with self._lock:
            token = self._read().get(self.key)
        return token if isinstance(token, str) and token else None

    def save_token(self, token: str | None) -> None:
        with self._lock:
            data = self._read()
            if token is None:
                data.pop(self.key, None)
            else:
                data[self.key] = token
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
