"""
Symbols -- Data model for indexed Sass declarations

A symbol is one variable or mixin declaration found in a stylesheet.
Each file owns a symbol table mapping namespace -> SymbolEntry.

Namespace format:
    <declaring-file-basename>/<raw-declaration-text>

    "_colors.sass/$primary"            (variable)
    "_mixins.sass/button($color)"      (mixin)

The raw declaration text is embedded verbatim, so formatting differences
produce distinct namespaces. Later writes to the same namespace overwrite
earlier ones.

Serialized entry (store contract):
    {"title": ..., "insert": ..., "detail": ..., "kind": "Method", "type": "Mixin"}
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class SymbolKind(Enum):
    """
    Kind of an indexed declaration.

    Each member carries both labels the editor host expects: the completion
    kind tag and the type discriminator.
    """
    MIXIN = ("Method", "Mixin")
    VARIABLE = ("Variable", "Variable")
    CSS_VARIABLE = ("Variable", "Css Variable")  # reserved, never produced

    @property
    def kind_label(self) -> str:
        """Completion item kind passed through to the UI."""
        return self.value[0]

    @property
    def type_label(self) -> str:
        """Declaration type discriminator."""
        return self.value[1]

    @classmethod
    def from_type_label(cls, label: str) -> Optional['SymbolKind']:
        for member in cls:
            if member.type_label == label:
                return member
        return None


@dataclass
class SymbolEntry:
    """One indexed declaration, as shown by completion and hover."""
    title: str      # Display label ("$primary", "$button")
    insert: str     # Text substituted when chosen
    detail: str     # One-line description naming the declaring file
    kind: SymbolKind

    @property
    def type(self) -> str:
        return self.kind.type_label

    @property
    def is_mixin(self) -> bool:
        return self.kind is SymbolKind.MIXIN

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "insert": self.insert,
            "detail": self.detail,
            "kind": self.kind.kind_label,
            "type": self.kind.type_label,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional['SymbolEntry']:
        """
        Rebuild an entry from its serialized form.

        Stored data is not trusted: anything that is not a mapping with
        string fields and a known type label yields None.
        """
        if not isinstance(data, dict):
            return None

        fields = [data.get(name) for name in ("title", "insert", "detail")]
        if not all(isinstance(value, str) for value in fields):
            return None

        kind = SymbolKind.from_type_label(data.get("type"))
        if kind is None:
            return None

        title, insert, detail = fields
        return cls(title=title, insert=insert, detail=detail, kind=kind)


@dataclass(frozen=True)
class LineRecord:
    """Where a namespace was written during one unit of scanning work."""
    line: Optional[int]
    namespace: str


# Per-file table: namespace -> entry
SymbolTable = Dict[str, SymbolEntry]


def make_namespace(basename: str, declaration: str) -> str:
    """Build the lookup key for a declaration in a file."""
    return f"{basename}/{declaration}"


def serialize_table(table: SymbolTable) -> Dict[str, Dict[str, str]]:
    return {namespace: entry.to_dict() for namespace, entry in table.items()}


def deserialize_table(data: Any) -> SymbolTable:
    """Rebuild a table, dropping malformed entries."""
    if not isinstance(data, dict):
        return {}

    table: SymbolTable = {}
    for namespace, raw in data.items():
        if not isinstance(namespace, str):
            continue
        entry = SymbolEntry.from_dict(raw)
        if entry is not None:
            table[namespace] = entry
    return table
