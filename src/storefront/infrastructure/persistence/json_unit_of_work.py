"""JSON-file-backed implementation of UnitOfWork.

The whole store lives in one document, ``storefront.json``, so a commit is a
single atomic file replacement: readers see either the state before a
transaction or the state after it, never a mix.

While a unit of work is open it holds an in-process lock for the document
path and an exclusive ``flock`` on a sibling lock file, which serialises
transactions between threads and between CLI processes alike.  Locking is
POSIX-only.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import IO

from storefront.domain.exceptions import StorageError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
DOCUMENT_FILE = "storefront.json"
LOCK_FILE = "storefront.lock"
_SECTIONS = ("products", "customers", "carts", "orders")

_path_locks: dict[Path, threading.RLock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _path_locks_guard:
        return _path_locks.setdefault(path, threading.RLock())


def empty_document() -> dict:
    return {
        "schema_version": SCHEMA_VERSION,
        "next_order_id": 1,
        "products": {},
        "customers": {},
        "carts": {},
        "orders": {},
    }


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._file_path = self._data_dir / DOCUMENT_FILE
        self._thread_lock = _lock_for(self._file_path.resolve())
        self._lock_file: IO[str] | None = None
        self._document: dict | None = None

    # --- UnitOfWork interface -------------------------------------------------

    def commit(self) -> None:
        if self._document is None:
            raise StorageError("No open unit of work to commit")
        self._persist(self._document)
        logger.debug("Committed %s", self._file_path)

    def rollback(self) -> None:
        self._document = None

    def _begin(self) -> None:
        self._thread_lock.acquire()
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            self._lock_file = open(self._data_dir / LOCK_FILE, "a", encoding="utf-8")
            fcntl.flock(self._lock_file.fileno(), fcntl.LOCK_EX)
            self._document = self._load()
            self.products = JsonProductRepository(self._document)
            self.carts = JsonCartRepository(self._document)
            self.orders = JsonOrderRepository(self._document)
            self.customers = JsonCustomerRepository(self._document)
        except OSError as exc:
            self._end()
            raise StorageError(f"Cannot open store at {self._data_dir}: {exc}") from exc
        except BaseException:
            self._end()
            raise

    def _end(self) -> None:
        try:
            if self._lock_file is not None:
                fcntl.flock(self._lock_file.fileno(), fcntl.LOCK_UN)
                self._lock_file.close()
        finally:
            self._lock_file = None
            self._thread_lock.release()

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict:
        if not self._file_path.exists():
            return empty_document()
        try:
            document = json.loads(self._file_path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise StorageError(f"Store file {self._file_path} is corrupt: {exc}") from exc
        if not isinstance(document, dict):
            raise StorageError(f"Store file {self._file_path} is corrupt: not a JSON object")
        version = document.get("schema_version")
        if version != SCHEMA_VERSION:
            raise StorageError(
                f"Unsupported store schema version {version}; expected {SCHEMA_VERSION}"
            )
        missing = [key for key in _SECTIONS if not isinstance(document.get(key), dict)]
        if not isinstance(document.get("next_order_id"), int):
            missing.append("next_order_id")
        if missing:
            raise StorageError(
                f"Store file {self._file_path} is corrupt: missing {', '.join(missing)}"
            )
        return document

    def _persist(self, document: dict) -> None:
        """Write to a temp file then rename over the document (atomic on POSIX)."""
        fd, temp_path = tempfile.mkstemp(
            dir=self._data_dir, prefix=".storefront_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self._file_path)
        except OSError as exc:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Cannot write store at {self._file_path}: {exc}") from exc
