"""
ShowCommand -- Read a file's symbol table

Handles:
- show: print every stored symbol of a file
- lookup: find symbols of a file by name (exact or fuzzy)
"""

from ..commands.base import BaseCommand
from ..presentation.formatters import (
    safe_print, format_table, format_json, format_suggestions,
)


class ShowCommand(BaseCommand):
    """Command for querying stored symbol tables."""

    def _path(self, file: str):
        return self.project_dir / file

    def show(self, file: str, fmt: str = None) -> int:
        entries = self.lookup.entries(self._path(file))
        fmt = fmt or self.config.display.format

        if fmt == "json":
            safe_print(format_json(entries))
        else:
            safe_print(format_table(entries, empty_message=f"No symbols indexed for {file}."))
        return 0

    def find(self, file: str, name: str, fuzzy: bool = False, limit: int = 10) -> int:
        """
        Look up symbols by name.

        Returns:
            Exit code (1 when nothing matched)
        """
        path = self._path(file)

        if fuzzy:
            suggestions = self.lookup.suggest(path, name, limit=limit)
            safe_print(format_suggestions(suggestions))
            return 0 if suggestions else 1

        matches = self.lookup.find(path, name)
        if not matches:
            print(f"No symbol named {name} in {file}")
            return 1

        for entry in matches:
            safe_print(f"{entry.title}  [{entry.type}]")
            safe_print(f"  insert: {entry.insert}")
            safe_print(f"  detail: {entry.detail}")
        return 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAMES = ['show', 'lookup']


def register_parser(subparsers):
    """Register show and lookup command parsers."""
    p1 = subparsers.add_parser('show', help="Print a file's indexed symbols")
    p1.add_argument('file', help='Stylesheet path')
    p1.add_argument('--format', '-f', choices=['table', 'json'],
                    help='Output format (default: display.format)')

    p2 = subparsers.add_parser('lookup', help='Find a symbol by name')
    p2.add_argument('file', help='Stylesheet path')
    p2.add_argument('name', help='Symbol name ($ optional)')
    p2.add_argument('--fuzzy', action='store_true', help='Rank partial matches')
    p2.add_argument('--limit', type=int, default=10, help='Max fuzzy results (default: 10)')

    return p1, p2


def handle(cli, args):
    """Handle show or lookup command dispatch."""
    if args.command == 'show':
        return cli._show_cmd.show(args.file, fmt=args.format)
    return cli._show_cmd.find(args.file, args.name, fuzzy=args.fuzzy, limit=args.limit)
