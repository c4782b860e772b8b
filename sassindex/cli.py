"""
CLI -- Command interface for the Sass symbol index

Indexes stylesheets into the configured store and answers lookups the
way an editor's completion and hover providers would.

Usage:
    sassindex scan src/styles
    sassindex show src/styles/_colors.sass
    sassindex lookup src/styles/_mixins.sass button
    sassindex lookup src/styles/_colors.sass prim --fuzzy
    sassindex config --set index.languages=sass,scss
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import ConfigManager
from .core.lookup import SymbolLookup
from .core.parsing import create_default_registry
from .core.store import create_store
from .services.scanner import Scanner
from .commands.scan_cmd import ScanCommand
from .commands.show_cmd import ShowCommand
from .commands.config_cmd import ConfigCommand
from . import __version__


class IndexCLI:
    """Command-line interface holding the shared indexing resources."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir).resolve()

        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()

        self.registry = create_default_registry()
        self.store = create_store(
            self.config.store.backend,
            self.config.store.resolve_path(self.project_dir),
        )
        self.scanner = Scanner(self.store, self.registry, self.config.index)
        self.lookup = SymbolLookup(self.store)

        # Command handlers
        self._scan_cmd = ScanCommand(self)
        self._show_cmd = ShowCommand(self)
        self._config_cmd = ConfigCommand(self)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    """
    Main entry point for the sassindex CLI.

    Parser definitions and dispatch logic live in the command modules.
    """
    parser = argparse.ArgumentParser(
        description="sassindex -- Sass variable and mixin index",
        epilog="Indexes declarations so completion and hover never re-parse.",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("SASSINDEX_PROJECT_PATH", "."),
        help='Project directory (default: SASSINDEX_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log indexing details'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'sassindex {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    from .commands import register_all, dispatch
    register_all(subparsers)

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    cli = IndexCLI(Path(args.project))

    try:
        result = dispatch(args.command, cli, args)
    except KeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help()
        return 1

    return result or 0


if __name__ == '__main__':
    sys.exit(main())
