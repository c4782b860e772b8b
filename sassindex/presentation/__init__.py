"""
Presentation -- Output formatting for the sassindex CLI
"""

from .formatters import safe_print, truncate, format_table, format_json, format_suggestions

__all__ = ['safe_print', 'truncate', 'format_table', 'format_json', 'format_suggestions']
