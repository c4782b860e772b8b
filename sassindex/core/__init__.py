"""
Core -- Data layer for sassindex

Contains the foundational data structures:
- Symbols: SymbolEntry, SymbolKind, namespaces and tables
- Documents: Text documents and change notifications
- Store: File-keyed symbol table persistence
- Lookup: Read-side queries by file and name
- Parsing: Declaration patterns and extraction
"""

from .symbols import (
    SymbolKind, SymbolEntry, LineRecord, SymbolTable,
    make_namespace, serialize_table, deserialize_table,
)
from .documents import (
    Position, Range, ContentChange, TextChangeEvent, TextDocument, normalize_path,
)
from .store import SymbolTableStore, MemoryStore, FileStore, create_store
from .lookup import SymbolLookup

__all__ = [
    # Symbols
    'SymbolKind', 'SymbolEntry', 'LineRecord', 'SymbolTable',
    'make_namespace', 'serialize_table', 'deserialize_table',
    # Documents
    'Position', 'Range', 'ContentChange', 'TextChangeEvent', 'TextDocument', 'normalize_path',
    # Store
    'SymbolTableStore', 'MemoryStore', 'FileStore', 'create_store',
    # Lookup
    'SymbolLookup',
]
