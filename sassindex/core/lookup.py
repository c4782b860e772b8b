"""
SymbolLookup -- Read-side queries used by completion and hover

Reads a file's table from the store on every call; nothing is cached, so
results always reflect the latest scan.

Usage:
    lookup = SymbolLookup(store)
    lookup.find("theme/_colors.sass", "primary")        # exact, $ optional
    lookup.suggest("theme/_colors.sass", "prim", limit=5)  # fuzzy, ranked
"""

from typing import List, Optional, Tuple

from rapidfuzz import fuzz, process

from .store import SymbolTableStore, PathLike
from .symbols import SymbolEntry, SymbolKind


def _bare(name: str) -> str:
    """Name without its sigil, for comparison."""
    return name.strip().lstrip('$')


class SymbolLookup:
    """Query symbols of one file by name."""

    def __init__(self, store: SymbolTableStore):
        self.store = store

    def entries(self, path: PathLike, kind: Optional[SymbolKind] = None) -> List[Tuple[str, SymbolEntry]]:
        """(namespace, entry) pairs of a file, sorted by title."""
        table = self.store.get(path)
        items = [
            (namespace, entry) for namespace, entry in table.items()
            if kind is None or entry.kind is kind
        ]
        return sorted(items, key=lambda item: (item[1].title, item[0]))

    def find(self, path: PathLike, name: str) -> List[SymbolEntry]:
        """Entries whose title matches name exactly (sigil optional)."""
        wanted = _bare(name)
        return [entry for _, entry in self.entries(path) if _bare(entry.title) == wanted]

    def suggest(self, path: PathLike, query: str, limit: int = 10, min_score: float = 0.5) -> List[Tuple[SymbolEntry, float]]:
        """
        Fuzzy-ranked entries for a partial name.

        Uses rapidfuzz partial_ratio so prefixes rank highly.

        Returns:
            (entry, score) pairs, best first, score in 0-1
        """
        entries = [entry for _, entry in self.entries(path)]
        if not entries or not query.strip():
            return []

        choices = [_bare(entry.title) for entry in entries]
        results = process.extract(
            _bare(query),
            choices,
            scorer=fuzz.partial_ratio,
            limit=limit,
            score_cutoff=min_score * 100,
        )
        return [(entries[index], score / 100.0) for _, score, index in results]
