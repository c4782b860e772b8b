"""
SymbolTableStore -- File-keyed persistence for symbol tables

Key: normalized absolute path of the declaring file.
Value: that file's symbol table (namespace -> SymbolEntry).

The store is the single source of truth: scanners reload a table at the
start of each unit of work and write it back, and readers (completion,
hover) may read it at any time. Reads never fail; a missing or malformed
table reads as empty.

Backends:
- MemoryStore: in-process dict (host workspace state)
- FileStore: one JSON shard per file on disk

Usage:
    store = FileStore(Path(".sassindex/symbols"))
    table = store.get("/work/theme/_colors.sass")
    store.set("/work/theme/_colors.sass", table)
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

import orjson
import xxhash

from .documents import normalize_path
from .symbols import SymbolTable, serialize_table, deserialize_table


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SymbolTableStore:
    """Abstract per-file symbol table store."""

    def get(self, path: PathLike) -> SymbolTable:
        """Table for a file (empty mapping if never written)."""
        raise NotImplementedError

    def set(self, path: PathLike, table: SymbolTable) -> None:
        """Replace the table for a file."""
        raise NotImplementedError

    def delete(self, path: PathLike) -> bool:
        """Drop a file's table. Returns True if one existed."""
        raise NotImplementedError

    def paths(self) -> List[str]:
        """Normalized paths with a stored table."""
        raise NotImplementedError

    def __contains__(self, path: PathLike) -> bool:
        return normalize_path(path) in self.paths()


class MemoryStore(SymbolTableStore):
    """
    In-process store.

    Holds serialized tables, like a host workspace-state memento, so a
    table returned by get() is never aliased with the stored copy.
    """

    def __init__(self):
        self._tables: Dict[str, dict] = {}

    def get(self, path: PathLike) -> SymbolTable:
        return deserialize_table(self._tables.get(normalize_path(path)))

    def set(self, path: PathLike, table: SymbolTable) -> None:
        self._tables[normalize_path(path)] = serialize_table(table)

    def delete(self, path: PathLike) -> bool:
        return self._tables.pop(normalize_path(path), None) is not None

    def paths(self) -> List[str]:
        return list(self._tables.keys())


class FileStore(SymbolTableStore):
    """
    On-disk store with one JSON shard per indexed file.

    Shard name is the xxh64 digest of the normalized path; the path itself
    is kept inside the shard so paths() can be listed.

    Shard format:
        {"version": 1, "path": "/abs/file.sass", "symbols": {namespace: entry}}
    """

    VERSION = 1

    def __init__(self, root: PathLike):
        self.root = Path(root)

    def _shard_path(self, key: str) -> Path:
        return self.root / f"{xxhash.xxh64(key.encode()).hexdigest()}.json"

    def _read_shard(self, shard: Path) -> dict:
        try:
            data = orjson.loads(shard.read_bytes())
        except FileNotFoundError:
            return {}
        except (OSError, orjson.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable symbol shard {shard}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, path: PathLike) -> SymbolTable:
        key = normalize_path(path)
        data = self._read_shard(self._shard_path(key))
        if data.get("path") != key:
            return {}
        return deserialize_table(data.get("symbols"))

    def set(self, path: PathLike, table: SymbolTable) -> None:
        key = normalize_path(path)
        self.root.mkdir(parents=True, exist_ok=True)
        payload = {
            "version": self.VERSION,
            "path": key,
            "symbols": serialize_table(table),
        }
        self._shard_path(key).write_bytes(orjson.dumps(payload))

    def delete(self, path: PathLike) -> bool:
        shard = self._shard_path(normalize_path(path))
        if not shard.exists():
            return False
        shard.unlink()
        return True

    def paths(self) -> List[str]:
        if not self.root.exists():
            return []
        found = []
        for shard in sorted(self.root.glob("*.json")):
            path = self._read_shard(shard).get("path")
            if isinstance(path, str):
                found.append(path)
        return found


def create_store(backend: str, path: PathLike) -> SymbolTableStore:
    """Build the configured store backend."""
    if backend == "memory":
        return MemoryStore()
    return FileStore(path)
