"""
Parsing module -- Lightweight declaration extraction for stylesheets.

This module provides:
- LanguageConfig: Per-language declaration patterns
- LanguageRegistry: Extension/language-id routing
- Extractor functions: fragment -> (SymbolEntry, LineRecord)

Usage:
    from sassindex.core.parsing import create_default_registry, extract_line

    registry = create_default_registry()
    config = registry.get_config_by_id(registry.language_for("theme/_colors.sass"))
    extraction = extract_line("$primary: #fff", "_colors.sass", 0, config)
"""

from .config import LanguageConfig
from .registry import LanguageRegistry, create_default_registry
from .extractor import (
    create_variable,
    create_mixin,
    extract_line,
    iter_declarations,
)

__all__ = [
    'LanguageConfig',
    'LanguageRegistry',
    'create_default_registry',
    'create_variable',
    'create_mixin',
    'extract_line',
    'iter_declarations',
]
