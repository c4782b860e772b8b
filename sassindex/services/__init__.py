"""
Services -- Indexing layer for sassindex

- Scanner: Full-file and incremental indexing
- Session: Editor event routing
"""

from .scanner import Scanner, LineSpan, realign_records, post_edit_ranges
from .session import IndexSession

__all__ = [
    "Scanner", "LineSpan", "realign_records", "post_edit_ranges",
    "IndexSession",
]
