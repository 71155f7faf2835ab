"""JSON document store holding the users, requests and posts collections."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from flask import Flask, current_app

from errors import StoreError

COLLECTIONS = ("users", "requests", "posts")

Document = dict[str, list[dict[str, Any]]]

# One lock per resolved file path, shared by every store object in the process.
_locks: dict[str, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = str(path.resolve())
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.RLock()
        return lock


def empty_document() -> Document:
    """Return a fresh document with every collection empty."""

    return {name: [] for name in COLLECTIONS}


def next_id(records: list[dict[str, Any]]) -> int:
    """Return ``max(id) + 1`` for a collection, starting at 1."""

    return max((int(record["id"]) for record in records), default=0) + 1


class DocumentStore:
    """Persist the whole document as a single JSON file.

    Every operation reads the full document and, when it mutates, writes the
    full document back. ``transaction`` serializes those sequences so
    concurrent writers in one process cannot lose each other's updates.
    """

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def initialize(self) -> None:
        """Create the backing file with the default document if it is missing."""

        with self._lock:
            if not self.path.exists():
                self.save(empty_document())

    def load(self) -> Document:
        """Return the full current document, or the empty one if none exists."""

        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError:
            return empty_document()
        except (OSError, ValueError) as exc:
            raise StoreError(f"could not read {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StoreError(f"{self.path} does not hold a JSON object")
        for name in COLLECTIONS:
            data.setdefault(name, [])
        return data

    def save(self, document: Document) -> None:
        """Atomically replace the backing file with ``document``."""

        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, indent=2)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StoreError(f"could not write {self.path}: {exc}") from exc

    @contextmanager
    def read(self) -> Iterator[Document]:
        """Yield a consistent snapshot of the document."""

        with self._lock:
            yield self.load()

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Yield the document for mutation and save it when the block succeeds.

        Nothing is written when the block raises.
        """

        with self._lock:
            document = self.load()
            yield document
            self.save(document)


class Database:
    """Flask extension binding one :class:`DocumentStore` per application."""

    extension_name = "document_store"

    def __init__(self, app: Flask | None = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        path = app.config.get("DATABASE_PATH")
        if not path:
            raise RuntimeError("DATABASE_PATH must be configured.")
        store = DocumentStore(path)
        store.initialize()
        app.extensions[self.extension_name] = store

    @property
    def store(self) -> DocumentStore:
        """Return the store bound to the current application."""

        try:
            return current_app.extensions[self.extension_name]
        except KeyError as exc:  # pragma: no cover - misconfiguration
            raise RuntimeError("Database.init_app() was not called.") from exc
