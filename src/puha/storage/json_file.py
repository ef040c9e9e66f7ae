"""JSON file backend: one document per tree, written atomically."""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from puha.storage.document import dump_store, load_store
from puha.tree.errors import CorruptStateError, PersistenceError
from puha.tree.store import NodeStore

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Stores the tree as a single JSON document at `path`."""

    def __init__(self, path: Path, indent: int | None = 2) -> None:
        self.path = Path(path)
        self.indent = indent

    def load(self) -> NodeStore:
        if not self.path.exists():
            logger.debug("No state file at %s, starting with an empty tree", self.path)
            return NodeStore()
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise PersistenceError(f"cannot read {self.path}: {exc}") from exc
        try:
            document = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise CorruptStateError(str(self.path), f"not UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CorruptStateError(str(self.path), f"invalid JSON: {exc}") from exc

        store = load_store(document)
        logger.debug("Loaded %d nodes from %s", len(store), self.path)
        return store

    def save(self, store: NodeStore) -> None:
        payload = json.dumps(dump_store(store), ensure_ascii=False, indent=self.indent)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload + "\n", encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise PersistenceError(f"cannot write {self.path}: {exc}") from exc
        logger.debug("Saved %d nodes to %s", len(store), self.path)
