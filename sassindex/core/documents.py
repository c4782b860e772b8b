"""
Documents -- Editor-facing text model consumed by the scanner

Mirrors the shape of the notifications an editor host delivers:
a document (identity + full current text) and change events carrying
one or more changed ranges. Only line bounds are consumed for indexing.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


def normalize_path(path: Union[str, Path]) -> str:
    """Normalized absolute path used as the store key for a file."""
    return os.path.normpath(os.path.abspath(str(path)))


@dataclass(frozen=True)
class Position:
    """Zero-based line/character position."""
    line: int
    character: int = 0


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def lines(cls, start: int, end: Optional[int] = None) -> 'Range':
        """Range spanning whole lines start..end (inclusive)."""
        return cls(Position(start), Position(start if end is None else end))


@dataclass
class TextDocument:
    """
    A stylesheet as seen by the editor.

    Attributes:
        path: File path (identity)
        text: Full current text
        language_id: Host language id ("sass", "scss", ...). When None the
            scanner derives it from the file extension.
    """
    path: str
    text: str = ""
    language_id: Optional[str] = None
    _lines: List[str] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.path = str(self.path)

    @classmethod
    def from_path(cls, path: Union[str, Path], language_id: Optional[str] = None) -> 'TextDocument':
        """Load a document from disk."""
        text = Path(path).read_text(encoding='utf-8', errors='replace')
        return cls(path=str(path), text=text, language_id=language_id)

    @property
    def basename(self) -> str:
        return os.path.basename(self.path)

    @property
    def normalized_path(self) -> str:
        return normalize_path(self.path)

    @property
    def lines(self) -> List[str]:
        if self._lines is None:
            # An empty document still has one (empty) line
            self._lines = [line.rstrip('\r') for line in self.text.split('\n')]
        return self._lines

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, index: int) -> str:
        """Text of a line, without its line terminator."""
        return self.lines[index]

    def set_text(self, text: str) -> None:
        """Replace the document text (after an edit)."""
        self.text = text
        self._lines = None

    def offset_at(self, position: Position) -> int:
        """Character offset of a position, clamped to the document."""
        raw = self.text.split('\n')
        line = min(max(position.line, 0), len(raw) - 1)
        offset = sum(len(text) + 1 for text in raw[:line])
        return offset + min(max(position.character, 0), len(raw[line]))

    def edit(self, range: 'Range', text: str) -> 'TextChangeEvent':
        """
        Replace a range with new text, as an editor would.

        Returns the change notification describing the edit.
        """
        start = self.offset_at(range.start)
        end = self.offset_at(range.end)
        self.set_text(self.text[:start] + text + self.text[end:])
        return TextChangeEvent(self, [ContentChange(range, text)])


@dataclass(frozen=True)
class ContentChange:
    """One changed range of a change notification."""
    range: Range
    text: str = ""


@dataclass
class TextChangeEvent:
    """
    Text change notification.

    Carries the edited document (already holding the post-edit text) and
    the ranges touched by the edit.
    """
    document: TextDocument
    content_changes: List[ContentChange] = field(default_factory=list)

    @classmethod
    def for_lines(cls, document: TextDocument, start: int, end: Optional[int] = None) -> 'TextChangeEvent':
        """
        Notification for lines start..end rewritten in place.

        The replacement text is taken from the (post-edit) document, so the
        edit does not change the line count.
        """
        end = start if end is None else end
        text = "\n".join(document.lines[start:end + 1])
        return cls(document, [ContentChange(Range.lines(start, end), text)])
