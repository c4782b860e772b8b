"""
IndexSession -- Routes editor host events to the scanner

The host delivers events one at a time, in order:
- a document was opened: full scan
- the active editor changed: re-scan the document being left (it may
  have changed outside the incremental path) and the one being entered
- a document changed: incremental scan
- a document was closed: drop its line state; its table stays stored
"""

import logging
from typing import Optional

from ..core.documents import TextDocument, TextChangeEvent
from .scanner import Scanner


logger = logging.getLogger(__name__)


class IndexSession:
    """Event router for one editor window."""

    def __init__(self, scanner: Scanner):
        self.scanner = scanner
        self.active: Optional[TextDocument] = None

    def did_open(self, document: TextDocument) -> bool:
        return self.scanner.scan_file(document)

    def did_change_active(self, document: Optional[TextDocument]) -> None:
        if self.active is not None:
            self.scanner.scan_file(self.active)
        if document is not None:
            self.scanner.scan_file(document)
        self.active = document

    def did_change(self, event: TextChangeEvent) -> bool:
        return self.scanner.scan_changes(event)

    def did_close(self, document: TextDocument) -> None:
        path = document.normalized_path
        self.scanner.reset(path)
        if self.active is not None and self.active.normalized_path == path:
            logger.debug(f"Closed active document {document.path}")
            self.active = None
