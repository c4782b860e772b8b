"""
Scanner -- Full-file and incremental symbol indexing

Two scan strategies share one data model and one extractor:

- scan_file(document): scan the whole text, replace the file's table
- scan_changes(event): re-scan only the lines an edit touched, then
  reconcile so entries of edited, renamed or deleted declarations are
  evicted without touching unrelated entries

An edit notification reports which lines changed, not which declarations
disappeared. Two pieces of scanner state bridge that gap:

Line index (per document):
    (line, namespace) records of every declaration the scanner has seen
    in a document. Seeded by a full scan, realigned through each edit's
    line delta, and updated line by line. The old entries of a touched
    line are looked up here. A namespace is evicted from the table once
    no record references it any more.

Previous-batch memory:
    Records written by the most recent unit of work. Snapshot and reset
    at the start of every notification, filled while processing it,
    consulted only by the next notification (substring reconcile mode).
    It belongs to one document; a notification for another document
    starts from an empty memory.

Ordering: notifications for one file must be processed one at a time and
in document order. Nothing here locks.

Usage:
    scanner = Scanner(MemoryStore())
    scanner.scan_file(document)
    scanner.scan_changes(TextChangeEvent.for_lines(document, 5))
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..config import IndexConfig
from ..core.documents import ContentChange, TextDocument, TextChangeEvent
from ..core.parsing import (
    LanguageConfig,
    LanguageRegistry,
    create_default_registry,
    extract_line,
    iter_declarations,
)
from ..core.store import SymbolTableStore
from ..core.symbols import LineRecord, SymbolTable


logger = logging.getLogger(__name__)


class Scanner:
    """
    Indexes Sass declarations into a SymbolTableStore.

    The scanner never keeps a table in memory between calls: every unit of
    work reloads from the store and writes back, so concurrent readers
    always see the latest state.
    """

    def __init__(
        self,
        store: SymbolTableStore,
        registry: Optional[LanguageRegistry] = None,
        config: Optional[IndexConfig] = None,
    ):
        self.store = store
        self.registry = registry or create_default_registry()
        self.config = config or IndexConfig()

        self._lines: Dict[str, List[LineRecord]] = {}
        self._previous: List[LineRecord] = []
        self._previous_path: Optional[str] = None

    @property
    def previous_batch(self) -> List[LineRecord]:
        """Records written by the last unit of work (read-only copy)."""
        return list(self._previous)

    def line_index(self, path: str) -> List[LineRecord]:
        """Known declaration records of a document (read-only copy)."""
        return list(self._lines.get(path, []))

    def reset(self, path: Optional[str] = None) -> None:
        """Forget scanner state for one document, or for all of them."""
        if path is None:
            self._lines.clear()
        else:
            self._lines.pop(path, None)

        if path is None or path == self._previous_path:
            self._previous = []
            self._previous_path = None

    def language_config(self, document: TextDocument) -> Optional[LanguageConfig]:
        """Config for a document, or None if it is not an indexed language."""
        language_id = document.language_id or self.registry.language_for(document.path)
        if language_id not in self.config.languages:
            return None
        return self.registry.get_config_by_id(language_id)

    # =========================================================================
    # Full scan
    # =========================================================================

    def scan_file(self, document: TextDocument) -> bool:
        """
        Rebuild a document's table from its full text.

        Replaces (does not merge) the stored table.

        Returns:
            True if the document was scanned, False if it was skipped
        """
        config = self.language_config(document)
        if config is None:
            logger.debug(f"Skipping {document.path}: not an indexed language")
            return False

        if len(document.text) > config.max_file_size:
            logger.warning(f"Skipping {document.path}: exceeds {config.max_file_size} characters")
            return False

        path = document.normalized_path
        table: SymbolTable = {}
        records: List[LineRecord] = []

        for entry, record in iter_declarations(document.text, document.basename, config):
            table[record.namespace] = entry
            records.append(record)

        self.store.set(path, table)
        self._lines[path] = records
        self._previous = list(records)
        self._previous_path = path

        logger.debug(f"Indexed {len(table)} symbol(s) in {path}")
        return True

    # =========================================================================
    # Incremental scan
    # =========================================================================

    def scan_changes(self, event: TextChangeEvent) -> bool:
        """
        Re-index the lines touched by an edit notification.

        The document must already hold the post-edit text. Ranges extending
        past the end of the document are clipped.

        Returns:
            True if the notification was processed, False if it was skipped
        """
        document = event.document
        config = self.language_config(document)
        if config is None:
            logger.debug(f"Ignoring change in {document.path}: not an indexed language")
            return False

        path = document.normalized_path
        previous = self._previous if self._previous_path == path else []
        self._previous = []
        self._previous_path = path

        spans = sorted(LineSpan.from_change(change) for change in event.content_changes)
        self._lines[path], removed = realign_records(self._lines.get(path, []), spans)

        for first, last in post_edit_ranges(spans):
            for line in range(max(first, 0), min(last, document.line_count - 1) + 1):
                self._scan_line(document, config, line, previous)

        if removed and self.config.evict_unmatched:
            table = self.store.get(path)
            if self._evict_orphans(path, table, [record.namespace for record in removed], "lines deleted"):
                self.store.set(path, table)

        return True

    def _scan_line(
        self,
        document: TextDocument,
        config: LanguageConfig,
        line: int,
        previous: List[LineRecord],
    ) -> None:
        path = document.normalized_path
        old = [record for record in self._lines[path] if record.line == line]
        extraction = extract_line(document.line_at(line), document.basename, line, config)

        if extraction is None:
            if old and self.config.evict_unmatched:
                self._replace_line(path, line, [])
                table = self.store.get(path)
                if self._evict_orphans(path, table, [r.namespace for r in old], f"line {line} no longer declares"):
                    self.store.set(path, table)
            return

        entry, record = extraction
        table = self.store.get(path)
        table[record.namespace] = entry
        self._previous.append(record)
        self._replace_line(path, line, [record])

        stale = [prior.namespace for prior in old if prior.namespace != record.namespace]
        self._evict_orphans(path, table, stale, f"superseded by {record.namespace}")

        if self.config.reconcile == "substring":
            self._evict_contained(path, table, previous, record)

        self.store.set(path, table)

    def _replace_line(self, path: str, line: int, records: List[LineRecord]) -> None:
        kept = [record for record in self._lines[path] if record.line != line]
        self._lines[path] = kept + records

    def _referenced(self, path: str) -> Set[str]:
        return {record.namespace for record in self._lines[path]}

    def _evict_orphans(self, path: str, table: SymbolTable, namespaces: Iterable[str], reason: str) -> bool:
        """
        Drop namespaces no line of the document declares any more.

        Returns:
            True if the table changed
        """
        referenced = self._referenced(path)
        removed = [
            namespace for namespace in dict.fromkeys(namespaces)
            if namespace not in referenced and table.pop(namespace, None) is not None
        ]
        if removed:
            logger.debug(f"Evicted {', '.join(removed)} ({reason})")
        return bool(removed)

    def _evict_contained(
        self,
        path: str,
        table: SymbolTable,
        previous: List[LineRecord],
        record: LineRecord,
    ) -> None:
        """
        Substring reconcile mode: drop previous-batch namespaces found
        inside the newly written namespace.

        Catches in-place extensions ("$col" -> "$color") even across lines,
        at the cost of also dropping unrelated entries that happen to be
        a literal substring of the new namespace.
        """
        written = {prior.namespace for prior in self._previous}
        for prior in previous:
            if prior.namespace in written:
                continue
            if re.search(re.escape(prior.namespace), record.namespace) is None:
                continue
            self._lines[path] = [r for r in self._lines[path] if r.namespace != prior.namespace]
            if table.pop(prior.namespace, None) is not None:
                logger.debug(f"Evicted {prior.namespace} (contained in {record.namespace})")


# =============================================================================
# Line bookkeeping
# =============================================================================

@dataclass(order=True, frozen=True)
class LineSpan:
    """
    Line footprint of one content change.

    start/end are pre-edit line numbers of the replaced range; inserted is
    the number of line breaks in the replacement text.
    """
    start: int
    end: int
    inserted: int

    @classmethod
    def from_change(cls, change: ContentChange) -> 'LineSpan':
        return cls(change.range.start.line, change.range.end.line, change.text.count('\n'))

    @property
    def delta(self) -> int:
        """Change in document line count caused by this edit."""
        return self.inserted - (self.end - self.start)


def realign_records(
    records: List[LineRecord],
    spans: List[LineSpan],
) -> Tuple[List[LineRecord], List[LineRecord]]:
    """
    Map records from pre-edit to post-edit line numbers.

    Records below an edit shift by its line delta. Records on lines the edit
    removed are returned separately. Spans must be sorted and disjoint.

    Returns:
        (kept, removed)
    """
    kept: List[LineRecord] = []
    removed: List[LineRecord] = []

    for record in records:
        if record.line is None:
            kept.append(record)
            continue

        shift = 0
        gone = False
        for span in spans:
            if record.line <= span.end:
                gone = record.line > span.start + span.inserted
                break
            shift += span.delta

        if gone:
            removed.append(record)
        else:
            kept.append(LineRecord(record.line + shift, record.namespace))

    return kept, removed


def post_edit_ranges(spans: List[LineSpan]) -> Iterator[Tuple[int, int]]:
    """
    Yield (first, last) post-edit line ranges to re-scan, one per span.

    Covers every line of the replacement text and never fewer lines than
    the reported range; callers clip to the document length.
    """
    offset = 0
    for span in spans:
        first = span.start + offset
        yield first, first + max(span.inserted, span.end - span.start)
        offset += span.delta
