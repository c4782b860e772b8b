"""
ScanCommand -- Full-file indexing from the command line

Handles:
- scan: index files, or every stylesheet under a directory
- clear: drop a file's stored table
"""

import sys
from pathlib import Path
from typing import Iterator, List

from ..commands.base import BaseCommand
from ..core.documents import TextDocument
from ..presentation.formatters import safe_print


# Directory names never descended into
EXCLUDED_DIRS = frozenset({'.git', '.hg', '.svn', '.sassindex', 'node_modules'})


class ScanCommand(BaseCommand):
    """Command for building and dropping symbol tables."""

    def _iter_files(self, root: Path) -> Iterator[Path]:
        """Stylesheets of indexed languages below a directory."""
        extensions = self.registry.extensions_for(self.config.index.languages)
        for path in sorted(root.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in extensions:
                continue
            if any(part in EXCLUDED_DIRS for part in path.relative_to(root).parts):
                continue
            yield path

    def _collect(self, paths: List[str]) -> List[Path]:
        files: List[Path] = []
        for raw in paths:
            path = Path(raw)
            if not path.is_absolute():
                path = self.project_dir / path
            if not path.exists():
                raise FileNotFoundError(raw)
            if path.is_dir():
                files.extend(self._iter_files(path))
            else:
                files.append(path)
        return files

    def scan(self, paths: List[str]) -> int:
        """
        Full-scan files and directories.

        Returns:
            Exit code (0 on success)
        """
        try:
            files = self._collect(paths or ["."])
        except FileNotFoundError as e:
            print(f"Error: Path not found: {e}", file=sys.stderr)
            return 1

        indexed = 0
        total = 0
        for path in files:
            document = TextDocument.from_path(path)
            if self.scanner.language_config(document) is None:
                safe_print(f"  skipped  {path} (not an indexed language)")
                continue
            if not self.scanner.scan_file(document):
                safe_print(f"  skipped  {path} (file too large)")
                continue
            count = len(self.store.get(document.normalized_path))
            safe_print(f"  indexed  {path} ({count} symbol(s))")
            indexed += 1
            total += count

        print(f"\nIndexed {indexed} file(s), {total} symbol(s).")
        return 0

    def clear(self, path: str) -> int:
        if self.store.delete(self.project_dir / path):
            print(f"Cleared symbols for {path}")
        else:
            print(f"No symbols stored for {path}")
        return 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAMES = ['scan', 'clear']


def register_parser(subparsers):
    """Register scan and clear command parsers."""
    p1 = subparsers.add_parser('scan', help='Index stylesheets (full scan)')
    p1.add_argument('paths', nargs='*', help='Files or directories (default: project dir)')

    p2 = subparsers.add_parser('clear', help="Drop a file's symbol table")
    p2.add_argument('file', help='Stylesheet path')

    return p1, p2


def handle(cli, args):
    """Handle scan or clear command dispatch."""
    if args.command == 'scan':
        return cli._scan_cmd.scan(args.paths)
    return cli._scan_cmd.clear(args.file)
