"""
Tests for Scanner -- full-file and incremental indexing

Tests validate:
- Full scans replace a file's table and are idempotent
- Incremental scans converge with a full scan of the edited text
- Stale entries of edited, renamed and deleted lines are evicted
- Reconcile modes (exact, substring) and evict_unmatched
- Line bookkeeping helpers (LineSpan, realign_records, post_edit_ranges)
"""

from dataclasses import replace

import pytest

from sassindex.config import IndexConfig
from sassindex.core.documents import (
    Position, Range, ContentChange, TextChangeEvent, TextDocument,
)
from sassindex.core.parsing import LanguageRegistry
from sassindex.core.parsing.languages import SASS_CONFIG
from sassindex.core.store import MemoryStore
from sassindex.core.symbols import LineRecord, SymbolKind
from sassindex.services.scanner import (
    Scanner, LineSpan, realign_records, post_edit_ranges,
)


def full_scan(document):
    """Table a fresh scanner builds from the document's current text."""
    store = MemoryStore()
    Scanner(store).scan_file(TextDocument(document.path, document.text))
    return store.get(document.path)


def full_records(document):
    scanner = Scanner(MemoryStore())
    scanner.scan_file(TextDocument(document.path, document.text))
    return set(scanner.line_index(document.normalized_path))


# =============================================================================
# Full scan
# =============================================================================

class TestScanFile:
    """Whole-document indexing."""

    def test_indexes_variables_and_mixins(self, scanner, store, sample_document):
        """Every variable and mixin lands in the file's table."""
        assert scanner.scan_file(sample_document) is True

        table = store.get(sample_document.path)
        assert set(table) == {
            "_theme.sass/$primary-color",
            "_theme.sass/$spacing",
            "_theme.sass/$border",
            "_theme.sass/button($color, $size)",
        }

    def test_mixin_snippet(self, scanner, store, sample_document):
        """Mixins get a title and a numbered include snippet."""
        scanner.scan_file(sample_document)
        entry = store.get(sample_document.path)["_theme.sass/button($color, $size)"]

        assert entry.title == "$button"
        assert entry.insert == "@include button({1:$color}, {2:$size})"
        assert entry.kind is SymbolKind.MIXIN

    def test_variable_entry(self, scanner, store, sample_document):
        """Variable detail names the variable without its sigil."""
        scanner.scan_file(sample_document)
        entry = store.get(sample_document.path)["_theme.sass/$primary-color"]

        assert entry.title == "$primary-color"
        assert "primary-color" in entry.detail
        assert "$primary-color" not in entry.detail

    def test_idempotent(self, scanner, store, sample_document):
        """Scanning unchanged text twice gives the same table and records."""
        scanner.scan_file(sample_document)
        first = store.get(sample_document.path)
        first_records = set(scanner.line_index(sample_document.normalized_path))

        scanner.scan_file(sample_document)
        assert store.get(sample_document.path) == first
        assert set(scanner.line_index(sample_document.normalized_path)) == first_records

    def test_replaces_table(self, scanner, store, sample_document):
        """A full scan replaces the stored table."""
        scanner.scan_file(sample_document)
        sample_document.set_text("$only: 1\n")
        scanner.scan_file(sample_document)

        assert list(store.get(sample_document.path)) == ["_theme.sass/$only"]

    def test_redeclaration_overwrites(self, scanner, store, make_document):
        """Redeclaring the same text keeps one namespace."""
        document = make_document("$a: 1\n$a: 2\n")
        scanner.scan_file(document)

        assert list(store.get(document.path)) == ["_theme.sass/$a"]
        assert len(scanner.line_index(document.normalized_path)) == 2

    def test_tables_are_per_file(self, scanner, store, make_document):
        """Same-named declarations in two files stay apart."""
        colors = make_document("$primary: red\n", name="_colors.sass")
        theme = make_document("$primary: blue\n", name="_theme.sass")
        scanner.scan_file(colors)
        scanner.scan_file(theme)

        assert list(store.get(colors.path)) == ["_colors.sass/$primary"]
        assert list(store.get(theme.path)) == ["_theme.sass/$primary"]

    def test_primes_previous_batch(self, scanner, sample_document):
        """A full scan fills the previous batch with its records."""
        scanner.scan_file(sample_document)
        assert set(scanner.previous_batch) == set(scanner.line_index(sample_document.normalized_path))
        assert LineRecord(3, "_theme.sass/button($color, $size)") in scanner.previous_batch

    def test_empty_document(self, scanner, store, make_document):
        """An empty document stores an empty table."""
        document = make_document("")
        assert scanner.scan_file(document) is True
        assert store.get(document.path) == {}


class TestLanguageFilter:
    """Only configured languages are indexed."""

    def test_unknown_extension_ignored(self, scanner, store, make_document):
        """Non-stylesheet documents are never indexed."""
        document = make_document("$a: 1\n", name="site.css")

        assert scanner.scan_file(document) is False
        assert scanner.scan_changes(TextChangeEvent.for_lines(document, 0)) is False
        assert store.paths() == []

    def test_scss_needs_opt_in(self, store, make_document):
        """SCSS is indexed only when listed in languages."""
        document = make_document("$a: 1;\n", name="_vars.scss")

        assert Scanner(store).scan_file(document) is False
        assert Scanner(store, config=IndexConfig(languages=["sass", "scss"])).scan_file(document) is True
        assert list(store.get(document.path)) == ["_vars.scss/$a"]

    def test_language_id_overrides_extension(self, scanner, store, make_document):
        """The host language id wins over the extension."""
        document = make_document("$a: 1\n", name="notes.txt", language_id="sass")
        assert scanner.scan_file(document) is True

        other = make_document("$a: 1\n", name="_b.sass", language_id="css")
        assert scanner.scan_file(other) is False

    def test_oversized_document_skipped(self, store, make_document):
        """Documents over max_file_size are skipped."""
        registry = LanguageRegistry()
        registry.register(replace(SASS_CONFIG, max_file_size=10))
        document = make_document("$primary-color: #fff\n")

        assert Scanner(store, registry).scan_file(document) is False
        assert store.get(document.path) == {}


# =============================================================================
# Incremental scan
# =============================================================================

class TestScanChanges:
    """Re-indexing edited lines."""

    def test_same_line_redeclaration_evicts_old(self, scanner, store, make_document):
        """Redeclaring a line as another variable drops the old one."""
        document = make_document("\n" * 5 + "$foo: 1\n")
        scanner.scan_file(document)

        scanner.scan_changes(document.edit(Range(Position(5, 1), Position(5, 4)), "bar"))

        table = store.get(document.path)
        assert "_theme.sass/$foo" not in table
        assert "_theme.sass/$bar" in table

    def test_retyping_keeps_declaration(self, scanner, store, make_document):
        """Editing a value keeps the declaration."""
        document = make_document("$col: red\n")
        scanner.scan_file(document)

        scanner.scan_changes(document.edit(Range(Position(0, 6), Position(0, 9)), "blue"))
        assert list(store.get(document.path)) == ["_theme.sass/$col"]

    def test_edit_into_non_declaration_evicts(self, scanner, store, make_document):
        """A line edited into plain text loses its entry."""
        document = make_document("$a: 1\n$b: 2\n")
        scanner.scan_file(document)

        scanner.scan_changes(document.edit(Range(Position(0, 0), Position(0, 1)), ""))
        assert list(store.get(document.path)) == ["_theme.sass/$b"]

    def test_namespace_kept_while_another_line_declares_it(self, scanner, store, make_document):
        """A namespace survives while any line still declares it."""
        document = make_document("$a: 1\n$a: 2\n")
        scanner.scan_file(document)

        scanner.scan_changes(document.edit(Range(Position(0, 1), Position(0, 2)), "b"))
        assert set(store.get(document.path)) == {"_theme.sass/$a", "_theme.sass/$b"}

        scanner.scan_changes(document.edit(Range(Position(1, 0), Position(1, 1)), ""))
        assert set(store.get(document.path)) == {"_theme.sass/$b"}

    def test_unscanned_document(self, scanner, store, make_document):
        """Edits to a never-scanned document index the touched lines."""
        document = make_document("$a: 1\n")
        assert scanner.scan_changes(TextChangeEvent.for_lines(document, 0)) is True
        assert list(store.get(document.path)) == ["_theme.sass/$a"]

    def test_out_of_range_does_not_raise(self, scanner, store, sample_document):
        """Ranges past the end are ignored."""
        scanner.scan_file(sample_document)
        before = store.get(sample_document.path)

        event = TextChangeEvent(sample_document, [ContentChange(Range.lines(100, 120))])
        assert scanner.scan_changes(event) is True
        assert store.get(sample_document.path) == before

    def test_multi_line_deletion_past_end(self, scanner, store, sample_document):
        """A deletion reaching past the new end converges with a full scan."""
        scanner.scan_file(sample_document)

        event = sample_document.edit(Range(Position(3, 0), Position(7, 0)), "")
        assert sample_document.line_count - 1 < 7
        scanner.scan_changes(event)

        assert store.get(sample_document.path) == full_scan(sample_document)
        assert set(store.get(sample_document.path)) == {
            "_theme.sass/$primary-color", "_theme.sass/$spacing",
        }

    def test_previous_batch_reset_per_notification(self, scanner, make_document):
        """Each notification starts a fresh previous batch."""
        document = make_document("$a: 1\n\n")
        scanner.scan_file(document)

        scanner.scan_changes(document.edit(Range(Position(1, 0), Position(1, 0)), "$b: 2"))
        assert scanner.previous_batch == [LineRecord(1, "_theme.sass/$b")]

        scanner.scan_changes(document.edit(Range(Position(1, 0), Position(1, 5)), "x"))
        assert scanner.previous_batch == []

    def test_reset_forgets_document(self, scanner, sample_document):
        """reset drops line state and memory for a document."""
        scanner.scan_file(sample_document)
        scanner.reset(sample_document.normalized_path)

        assert scanner.line_index(sample_document.normalized_path) == []
        assert scanner.previous_batch == []


class TestConvergence:
    """Incremental results match a full scan of the edited text."""

    def test_edit_sequence(self, scanner, store, sample_document):
        """Rename, insert and delete converge with a full scan."""
        scanner.scan_file(sample_document)

        # rename
        scanner.scan_changes(sample_document.edit(Range(Position(0, 1), Position(0, 14)), "brand"))
        # insert a declaration above the mixin
        scanner.scan_changes(sample_document.edit(Range(Position(3, 0), Position(3, 0)), "$radius: 2px\n"))
        # delete the $border line
        scanner.scan_changes(sample_document.edit(Range(Position(7, 0), Position(8, 0)), ""))

        table = store.get(sample_document.path)
        assert table == full_scan(sample_document)
        assert set(table) == {
            "_theme.sass/$brand",
            "_theme.sass/$spacing",
            "_theme.sass/$radius",
            "_theme.sass/button($color, $size)",
        }
        assert set(scanner.line_index(sample_document.normalized_path)) == full_records(sample_document)

    def test_multi_line_paste(self, scanner, store, sample_document):
        """Pasting several declarations converges with a full scan."""
        scanner.scan_file(sample_document)
        scanner.scan_changes(sample_document.edit(Range(Position(2, 0), Position(2, 0)), "$x: 1\n$y: 2\n"))

        assert store.get(sample_document.path) == full_scan(sample_document)
        assert set(scanner.line_index(sample_document.normalized_path)) == full_records(sample_document)

    def test_join_lines(self, scanner, store, sample_document):
        """Joining two lines converges with a full scan."""
        scanner.scan_file(sample_document)
        scanner.scan_changes(sample_document.edit(Range(Position(1, 13), Position(2, 0)), ""))

        assert store.get(sample_document.path) == full_scan(sample_document)
        assert set(scanner.line_index(sample_document.normalized_path)) == full_records(sample_document)

    def test_several_changes_in_one_notification(self, scanner, store, sample_document):
        """Multiple ranges in one notification converge."""
        scanner.scan_file(sample_document)

        border = sample_document.edit(Range(Position(6, 1), Position(6, 7)), "outline")
        primary = sample_document.edit(Range(Position(0, 1), Position(0, 14)), "brand")
        event = TextChangeEvent(sample_document, border.content_changes + primary.content_changes)
        scanner.scan_changes(event)

        assert store.get(sample_document.path) == full_scan(sample_document)
        assert "_theme.sass/$outline" in store.get(sample_document.path)

    def test_rewrite_mixin_signature(self, scanner, store, sample_document):
        """Extending a mixin signature replaces its entry."""
        scanner.scan_file(sample_document)
        scanner.scan_changes(sample_document.edit(Range(Position(3, 27), Position(3, 27)), ", $radius"))

        table = store.get(sample_document.path)
        assert table == full_scan(sample_document)
        assert table["_theme.sass/button($color, $size, $radius)"].insert == (
            "@include button({1:$color}, {2:$size}, {3:$radius})"
        )


class TestReconcileModes:
    """exact vs. substring reconciliation."""

    def test_exact_keeps_unrelated_prefix(self, store, make_document):
        """Exact mode leaves a shorter unrelated name alone."""
        document = make_document("$col: red\n")
        scanner = Scanner(store)
        scanner.scan_file(document)

        scanner.scan_changes(document.edit(Range(Position(1, 0), Position(1, 0)), "$color: blue"))
        assert set(store.get(document.path)) == {"_theme.sass/$col", "_theme.sass/$color"}

    def test_substring_evicts_contained_namespace(self, store, make_document):
        """Substring mode drops a name contained in a new one."""
        document = make_document("$col: red\n")
        scanner = Scanner(store, config=IndexConfig(reconcile="substring"))
        scanner.scan_file(document)

        scanner.scan_changes(document.edit(Range(Position(1, 0), Position(1, 0)), "$color: blue"))
        assert set(store.get(document.path)) == {"_theme.sass/$color"}
        assert LineRecord(0, "_theme.sass/$col") not in scanner.line_index(document.normalized_path)

    def test_substring_keeps_namespace_just_written(self, store, make_document):
        """Substring mode never drops what it just wrote."""
        document = make_document("$col: red\n")
        scanner = Scanner(store, config=IndexConfig(reconcile="substring"))
        scanner.scan_file(document)

        scanner.scan_changes(document.edit(Range(Position(0, 6), Position(0, 9)), "blue"))
        assert list(store.get(document.path)) == ["_theme.sass/$col"]

    def test_memory_belongs_to_one_document(self, store, make_document):
        """Another document's batch is never reconciled against."""
        other = make_document("$col: 1\n", name="_b.sass")
        active = make_document("$x: 1\n", name="_a.sass")
        scanner = Scanner(store, config=IndexConfig(reconcile="substring"))
        scanner.scan_file(other)
        scanner.scan_file(active)

        scanner.scan_changes(other.edit(Range(Position(1, 0), Position(1, 0)), "$color: 2"))

        assert set(store.get(other.path)) == {"_b.sass/$col", "_b.sass/$color"}
        assert scanner.previous_batch == [LineRecord(1, "_b.sass/$color")]


class TestEvictUnmatched:
    """evict_unmatched = false keeps entries of lines that stop declaring."""

    @pytest.fixture
    def keeping(self, store):
        return Scanner(store, config=IndexConfig(evict_unmatched=False))

    def test_non_declaration_edit_keeps_entry(self, keeping, store, make_document):
        """Without eviction a line edited into plain text keeps its entry."""
        document = make_document("$a: 1\n")
        keeping.scan_file(document)

        keeping.scan_changes(document.edit(Range(Position(0, 0), Position(0, 1)), ""))
        assert list(store.get(document.path)) == ["_theme.sass/$a"]

    def test_deleted_line_keeps_entry(self, keeping, store, make_document):
        """Without eviction deleted lines keep their entries."""
        document = make_document("$a: 1\n\n$b: 2\n")
        keeping.scan_file(document)

        keeping.scan_changes(document.edit(Range(Position(0, 5), Position(2, 5)), ""))
        assert document.text == "$a: 1\n"
        assert set(store.get(document.path)) == {"_theme.sass/$a", "_theme.sass/$b"}

    def test_redeclaration_still_evicts(self, keeping, store, make_document):
        """Same-line redeclaration evicts regardless of the flag."""
        document = make_document("$foo: 1\n")
        keeping.scan_file(document)

        keeping.scan_changes(document.edit(Range(Position(0, 1), Position(0, 4)), "bar"))
        assert list(store.get(document.path)) == ["_theme.sass/$bar"]


# =============================================================================
# Line bookkeeping
# =============================================================================

class TestLineSpan:

    def test_from_change(self):
        """Spans count replaced lines and inserted breaks."""
        span = LineSpan.from_change(ContentChange(Range(Position(2, 4), Position(5, 0)), "a\nb"))
        assert span == LineSpan(2, 5, 1)
        assert span.delta == -2

    def test_sorted_by_start(self):
        """Spans order by start line."""
        spans = sorted([LineSpan(9, 9, 0), LineSpan(1, 2, 0)])
        assert [span.start for span in spans] == [1, 9]


class TestRealignRecords:
    """Pre-edit to post-edit line mapping."""

    def test_insertion_shifts_lines_below(self):
        """Records below an insertion move down."""
        records = [LineRecord(0, "a"), LineRecord(2, "b"), LineRecord(5, "c")]
        kept, removed = realign_records(records, [LineSpan(2, 2, 1)])

        assert kept == [LineRecord(0, "a"), LineRecord(2, "b"), LineRecord(6, "c")]
        assert removed == []

    def test_deletion_removes_collapsed_lines(self):
        """Records on deleted lines are returned as removed."""
        records = [LineRecord(line, f"n{line}") for line in range(5)]
        kept, removed = realign_records(records, [LineSpan(1, 3, 0)])

        assert kept == [LineRecord(0, "n0"), LineRecord(1, "n1"), LineRecord(2, "n4")]
        assert removed == [LineRecord(2, "n2"), LineRecord(3, "n3")]

    def test_several_spans_accumulate(self):
        """Deltas of earlier spans add up."""
        records = [LineRecord(4, "a"), LineRecord(9, "b")]
        kept, _ = realign_records(records, [LineSpan(1, 1, 2), LineSpan(6, 7, 0)])
        assert kept == [LineRecord(6, "a"), LineRecord(10, "b")]

    def test_records_without_line_are_kept(self):
        """Records without a line are left as they are."""
        kept, removed = realign_records([LineRecord(None, "a")], [LineSpan(0, 4, 0)])
        assert kept == [LineRecord(None, "a")]
        assert removed == []


class TestPostEditRanges:

    def test_covers_inserted_lines(self):
        """Every inserted line is re-scanned."""
        assert list(post_edit_ranges([LineSpan(3, 3, 2)])) == [(3, 5)]

    def test_covers_reported_range(self):
        """At least the reported range is re-scanned."""
        assert list(post_edit_ranges([LineSpan(1, 3, 0)])) == [(1, 3)]

    def test_offsets_later_spans(self):
        """Later ranges shift by earlier deltas."""
        ranges = list(post_edit_ranges([LineSpan(1, 3, 0), LineSpan(10, 10, 2)]))
        assert ranges == [(1, 3), (8, 10)]
