"""
BaseCommand -- Shared foundation for all CLI commands

Commands receive the CLI instance and access its resources through
properties instead of building their own.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import IndexCLI


class BaseCommand:
    """Base class for CLI commands with access to shared resources."""

    def __init__(self, cli: 'IndexCLI'):
        self._cli = cli

    @property
    def project_dir(self):
        return self._cli.project_dir

    @property
    def config(self):
        """Application configuration."""
        return self._cli.config

    @property
    def config_manager(self):
        return self._cli.config_manager

    @property
    def store(self):
        """Symbol table store."""
        return self._cli.store

    @property
    def scanner(self):
        return self._cli.scanner

    @property
    def registry(self):
        """Language registry."""
        return self._cli.registry

    @property
    def lookup(self):
        return self._cli.lookup
