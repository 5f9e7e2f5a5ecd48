"""JSON file-backed document store.

The whole data set lives in one JSON document. Every mutation rewrites the
whole file::

    with store.mutate() as doc:     # mutation lock held
        doc.users[user.id] = user   # load -> mutate in memory -> persist

``load`` and ``persist`` are individually guarded by a reader/writer lock so a
reader never observes a half-written file. ``mutate`` additionally holds one
process-wide mutation lock across the full load -> mutate -> persist sequence,
so two overlapping writers cannot overwrite each other's changes (no lost
updates). Reads never take the mutation lock.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from marshmallow import ValidationError

from chirpy.infra.document.locks import ReadWriteLock
from chirpy.infra.document.sequences import IdAllocator
from chirpy.models import Document
from chirpy.schemas.document import DocumentSchema
from chirpy.services._shared.errors import StorageError

log = logging.getLogger(__name__)


class JSONDocumentStore:
    """
    Durable keyed storage for the ``chirps``, ``users`` and ``tokens`` collections.

    :param path: Location of the backing JSON file.
    :param reset: Discard any existing file before starting (debug mode).
    :raises StorageError: If the document cannot be created or read. Callers
        treat this as fatal at startup.
    """

    def __init__(self, path: str | os.PathLike[str], *, reset: bool = False) -> None:
        self.path = Path(path)
        self.ids = IdAllocator()
        self._rw = ReadWriteLock()
        self._mutation_lock = threading.Lock()
        self._schema = DocumentSchema()
        self._ensure(reset=reset)
        self.ids.seed(self.load())

    # ------------------------------------------------------------------ #
    # Startup
    # ------------------------------------------------------------------ #

    def _ensure(self, *, reset: bool) -> None:
        """Create an empty document when none exists (or when resetting)."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if reset and self.path.exists():
                log.info("store.reset discarding existing document path=%s", self.path)
                self.path.unlink()
        except OSError as exc:
            raise StorageError(f"Cannot prepare document at {self.path}: {exc}") from exc
        if not self.path.exists():
            self.persist(Document())

    # ------------------------------------------------------------------ #
    # Whole-document I/O
    # ------------------------------------------------------------------ #

    def load(self) -> Document:
        """Read and parse the whole document.

        :raises StorageError: On I/O failure or a corrupt document.
        """
        try:
            with self._rw.read():
                raw = self.path.read_text(encoding="utf-8")
            return self._schema.load(json.loads(raw))
        except OSError as exc:
            log.error("store.load_failed path=%s", self.path, exc_info=True)
            raise StorageError(f"Cannot read document at {self.path}") from exc
        except (ValueError, ValidationError) as exc:
            # json.JSONDecodeError is a ValueError, so are non-numeric keys.
            log.error("store.corrupt_document path=%s", self.path, exc_info=True)
            raise StorageError(f"Document at {self.path} is corrupt") from exc

    def persist(self, document: Document) -> None:
        """Serialise ``document`` and atomically replace the backing file.

        :raises StorageError: If the file cannot be written.
        """
        payload = json.dumps(self._schema.dump(document))
        tmp_name: str | None = None
        try:
            with self._rw.write():
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self.path.parent,
                    prefix=f".{self.path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as fh:
                    tmp_name = fh.name
                    fh.write(payload)
                os.replace(tmp_name, self.path)
                tmp_name = None
        except OSError as exc:
            log.error("store.persist_failed path=%s", self.path, exc_info=True)
            raise StorageError(f"Cannot write document at {self.path}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #

    @contextmanager
    def mutate(self) -> Iterator[Document]:
        """Yield a freshly loaded document and persist it when the block exits.

        Nothing is written if the block raises. The mutation lock is not
        reentrant: do not call ``mutate`` from inside a ``mutate`` block.
        """
        with self._mutation_lock:
            document = self.load()
            yield document
            self.persist(document)

    def next_id(self, kind: str) -> int:
        """Allocate the next id for ``kind`` (``"chirps"`` or ``"users"``)."""
        return self.ids.next(kind)

    def stats(self) -> dict[str, int]:
        """Return the record count per collection."""
        return self.load().counts()

    def reset(self) -> None:
        """Replace the document with an empty one and rewind the id counters."""
        with self._mutation_lock:
            empty = Document()
            self.persist(empty)
            self.ids.seed(empty)
