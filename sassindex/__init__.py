"""
sassindex -- Incremental symbol index for Sass stylesheets

Indexes variable and mixin declarations per file so editor features
(completion, hover) can look them up by file and name without re-parsing
on every keystroke.

Usage:
    from sassindex import Scanner, MemoryStore, TextDocument, TextChangeEvent

    store = MemoryStore()
    scanner = Scanner(store)

    document = TextDocument("theme/_colors.sass", "$primary: #fff\\n")
    scanner.scan_file(document)                      # full scan
    scanner.scan_changes(TextChangeEvent.for_lines(document, 0))  # incremental
    store.get(document.path)                         # namespace -> SymbolEntry
"""

__version__ = "0.1.0"

# Core layer (data)
from .core.symbols import SymbolKind, SymbolEntry, LineRecord, SymbolTable, make_namespace
from .core.documents import Position, Range, ContentChange, TextChangeEvent, TextDocument, normalize_path
from .core.store import SymbolTableStore, MemoryStore, FileStore, create_store
from .core.lookup import SymbolLookup
from .core.parsing import (
    LanguageConfig, LanguageRegistry, create_default_registry,
    create_variable, create_mixin, extract_line, iter_declarations,
)

# Services layer
from .services.scanner import Scanner
from .services.session import IndexSession

# Config (stays at root)
from .config import Config, ConfigManager, IndexConfig, StoreConfig, DisplayConfig, get_config

__all__ = [
    # Core
    'SymbolKind', 'SymbolEntry', 'LineRecord', 'SymbolTable', 'make_namespace',
    'Position', 'Range', 'ContentChange', 'TextChangeEvent', 'TextDocument', 'normalize_path',
    'SymbolTableStore', 'MemoryStore', 'FileStore', 'create_store',
    'SymbolLookup',
    'LanguageConfig', 'LanguageRegistry', 'create_default_registry',
    'create_variable', 'create_mixin', 'extract_line', 'iter_declarations',
    # Services
    'Scanner', 'IndexSession',
    # Config
    'Config', 'ConfigManager', 'IndexConfig', 'StoreConfig', 'DisplayConfig', 'get_config',
]
