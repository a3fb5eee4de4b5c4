"""
Client name list for the Name field's autocomplete.

Names live in a small JSON key-value file under the ``clientNames`` key.
Other keys in the file are left untouched on write.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

import config as cfg

logger = logging.getLogger(__name__)


class ClientStoreError(RuntimeError):
    """Raised when the client name file cannot be read or parsed."""


class ClientNameStore:
    """Append-if-absent list of client names backed by a JSON file."""

    def __init__(self, path: Optional[str] = None, key: str = cfg.CLIENT_STORE_KEY) -> None:
        self.path = path or cfg.CLIENT_STORE_PATH
        self.key = key
        self._names: List[str] = self.load()

    # ── persistence ──────────────────────────────────────────────────

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise ClientStoreError(f"Cannot read client names from {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ClientStoreError(f"Client name file {self.path} is not a JSON object")
        return data

    def load(self) -> List[str]:
        """Return the stored names, or the defaults when none are stored."""
        stored = self._read_all().get(self.key)
        if stored is None:
            return list(cfg.DEFAULT_CLIENT_NAMES)
        if not isinstance(stored, list):
            raise ClientStoreError(f"'{self.key}' in {self.path} is not a list")
        return [str(n) for n in stored]

    def save(self) -> None:
        data = self._read_all()
        data[self.key] = self._names
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)

    # ── public API ───────────────────────────────────────────────────

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._names

    def add(self, name: Optional[str]) -> bool:
        """Record *name* if it is new. Returns True when the list changed."""
        cleaned = (name or "").strip()
        if not cleaned or cleaned in self._names:
            return False
        self._names.append(cleaned)
        self.save()
        logger.info("Added client name %r to %s", cleaned, self.path)
        return True
