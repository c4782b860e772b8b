"""
Formatters -- Text and JSON rendering of symbol tables for the CLI

Tables are plain aligned columns; JSON follows the store contract
(namespace -> {title, insert, detail, kind, type}).
"""

import sys
from typing import List, Sequence, Tuple

import orjson

from ..core.symbols import SymbolEntry


DETAIL_LENGTH = 60


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Print with graceful encoding fallback.

    Stylesheets may contain any Unicode; unencodable characters are
    replaced rather than raising.
    """
    if file is None:
        file = sys.stdout

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        encoding = getattr(file, 'encoding', 'utf-8') or 'utf-8'
        encoded = text.encode(encoding, errors='replace')
        print(encoded.decode(encoding), end=end, file=file)


def truncate(text: str, length: int = DETAIL_LENGTH) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= length:
        return text
    return text[:length - 3] + "..."


def format_table(entries: Sequence[Tuple[str, SymbolEntry]], empty_message: str = "No symbols indexed.") -> str:
    """Render (namespace, entry) pairs as aligned columns."""
    if not entries:
        return empty_message

    headers = ("TYPE", "TITLE", "INSERT", "DETAIL")
    rows: List[Tuple[str, ...]] = [
        (entry.type, entry.title, entry.insert, truncate(entry.detail))
        for _, entry in entries
    ]

    widths = [
        max(len(row[i]) for row in rows + [headers])
        for i in range(len(headers))
    ]

    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [line(headers), line(["-" * width for width in widths])]
    lines.extend(line(row) for row in rows)
    return "\n".join(lines)


def format_json(entries: Sequence[Tuple[str, SymbolEntry]]) -> str:
    """Render (namespace, entry) pairs in the store's serialized form."""
    data = {namespace: entry.to_dict() for namespace, entry in entries}
    return orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS).decode()


def format_suggestions(suggestions: Sequence[Tuple[SymbolEntry, float]]) -> str:
    """Render fuzzy lookup results, best first."""
    if not suggestions:
        return "No matching symbols."
    return "\n".join(
        f"{score:.2f}  {entry.title}  {entry.insert}"
        for entry, score in suggestions
    )
