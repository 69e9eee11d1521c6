"""Persistence of rendered documents and the storage path they are proposed under."""

from __future__ import annotations

import hashlib
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from .exceptions import StorageError

logger = logging.getLogger(__name__)

REPORTS_PREFIX = "reports"
DIGEST_LENGTH = 12


@runtime_checkable
class DocumentStore(Protocol):
    """Persists document bytes under a path; raises StorageError on failure."""

    def store(self, data: bytes, path: str) -> None:
        ...


def propose_storage_path(session_code: str, generated_at: datetime, content: bytes) -> str:
    """
    Storage path for a rendered record.

    Shape: ``reports/<CODE>/registro-<epoch ms>-<sha256 prefix>.pdf``. Naive
    timestamps are taken as UTC.
    """
    if generated_at.tzinfo is None:
        generated_at = generated_at.replace(tzinfo=timezone.utc)
    epoch_ms = int(generated_at.timestamp() * 1000)
    digest = hashlib.sha256(content).hexdigest()[:DIGEST_LENGTH]
    return f"{REPORTS_PREFIX}/{session_code.strip().upper()}/registro-{epoch_ms}-{digest}.pdf"


class FileSystemDocumentStore:
    """Writes documents below a root directory; existing files are never replaced."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()

    def path_for(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root):
            raise StorageError("Storage path escapes the store root", path)
        return target

    def store(self, data: bytes, path: str) -> None:
        target = self.path_for(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("xb") as handle:
                handle.write(data)
        except FileExistsError as exc:
            raise StorageError("Document already exists", path) from exc
        except OSError as exc:
            raise StorageError("Cannot write document", f"{path}: {exc}") from exc
        logger.info("Stored %d bytes at %s", len(data), target)


class InMemoryDocumentStore:
    """Dictionary-backed store, mainly for tests and previews."""

    def __init__(self) -> None:
        self.documents: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def store(self, data: bytes, path: str) -> None:
        with self._lock:
            if path in self.documents:
                raise StorageError("Document already exists", path)
            self.documents[path] = bytes(data)

    def get(self, path: str) -> Optional[bytes]:
        with self._lock:
            return self.documents.get(path)
