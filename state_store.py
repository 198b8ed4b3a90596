"""Durable JSON storage for the single UserState document."""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from user_state import MalformedStateError, UserState

LOGGER = logging.getLogger(__name__)

DEFAULT_STATE_PATH = Path.home() / ".quranconnect" / "state.json"


class StateStore:
    """Load and save the whole user document, replacing the file atomically."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_STATE_PATH
        self._lock = threading.Lock()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[UserState]:
        """Return the stored state, or None when it is missing or malformed."""
        with self._lock:
            if not self.path.exists():
                LOGGER.debug("No state document at %s", self.path)
                return None
            try:
                with self.path.open("r", encoding="utf-8") as handle:
                    payload = json.load(handle)
                state = UserState.from_dict(payload)
            except (OSError, ValueError, RecursionError) as exc:
                # json.JSONDecodeError and MalformedStateError are both ValueErrors
                kind = "malformed" if isinstance(exc, (MalformedStateError, json.JSONDecodeError, RecursionError)) else "unreadable"
                LOGGER.warning("Ignoring %s state document at %s: %s", kind, self.path, exc)
                return None
        LOGGER.debug("Loaded state document from %s (%d bookmarks)", self.path, len(state.bookmarks))
        return state

    def save(self, state: UserState) -> None:
        payload = serialize(state)
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(temp_name, self.path)
            except OSError:
                LOGGER.exception("Failed to write state document to %s", self.path)
                if os.path.exists(temp_name):
                    os.unlink(temp_name)
                raise
        LOGGER.debug("Saved state document to %s", self.path)


def serialize(state: UserState) -> str:
    """Render the document exactly as it is written to disk."""
    return json.dumps(state.to_dict(), indent=2, ensure_ascii=False) + "\n"
