"""
Flat‑file record stores.

Each record kind is persisted as one JSON array in its own file inside
the data directory (``appointments.json``, ``contacts.json``).  A store
is addressed by name; ``read`` returns the whole array and ``write``
replaces it.  There is no partial update: callers perform
read‑modify‑write cycles while holding ``lock(name)``, which serialises
writers inside one process.  Writers in separate processes are not
coordinated.

``JsonFileStore`` is the production implementation.  ``MemoryStore``
keeps the same contract in a dictionary and is used in tests or
anywhere the file system is unwanted.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

from .errors import StoreCorruptError, StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)

APPOINTMENTS = "appointments"
CONTACTS = "contacts"


class RecordStore(ABC):
    """Interface shared by all record stores."""

    def __init__(self) -> None:
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def lock(self, name: str) -> Iterator[None]:
        """Hold the mutex of store ``name`` for the duration of the block."""
        with self._locks_guard:
            store_lock = self._locks.setdefault(name, threading.RLock())
        with store_lock:
            yield

    @abstractmethod
    def read(self, name: str) -> List[Dict[str, Any]]:
        """Return every record of store ``name`` in append order."""

    @abstractmethod
    def write(self, name: str, records: List[Dict[str, Any]]) -> None:
        """Replace the contents of store ``name`` with ``records``."""


class JsonFileStore(RecordStore):
    """Store each record kind as a pretty‑printed JSON array on disk."""

    def __init__(self, data_dir: str | os.PathLike) -> None:
        super().__init__()
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def _ensure_data_dir(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def read(self, name: str) -> List[Dict[str, Any]]:
        """Load the array stored for ``name``.

        A missing file is not an error: it is created holding ``[]`` and
        an empty list is returned.  Unreadable files raise
        ``StoreReadError``; undecodable bytes, malformed JSON and
        documents that are not arrays raise its subclass
        ``StoreCorruptError``.
        """
        path = self.path_for(name)
        try:
            self._ensure_data_dir()
            if not path.exists():
                path.write_text("[]", encoding="utf-8")
                logger.info("Initialised empty store %s", path)
                return []
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise StoreCorruptError(name, f"not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise StoreReadError(name, str(exc)) from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreCorruptError(name, f"malformed JSON: {exc}") from exc
        if not isinstance(data, list):
            raise StoreCorruptError(name, f"expected a JSON array, found {type(data).__name__}")
        return data

    def write(self, name: str, records: List[Dict[str, Any]]) -> None:
        """Overwrite the file of ``name`` with ``records``.

        The file is rewritten in place (no temp file and rename), so a
        crash mid‑write can leave a truncated store.
        """
        path = self.path_for(name)
        try:
            self._ensure_data_dir()
            path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise StoreWriteError(name, str(exc)) from exc


class MemoryStore(RecordStore):
    """Keep stores in memory; records are deep‑copied in and out."""

    def __init__(self, initial: Dict[str, List[Dict[str, Any]]] | None = None) -> None:
        super().__init__()
        self._data: Dict[str, List[Dict[str, Any]]] = copy.deepcopy(initial or {})

    def read(self, name: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._data.setdefault(name, []))

    def write(self, name: str, records: List[Dict[str, Any]]) -> None:
        self._data[name] = copy.deepcopy(list(records))
