"""
BaseCommand — Shared foundation for all CLI commands

Provides access to CLI resources via composition.
Commands receive the CLI instance and access its resources through properties.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import RepositoryCLI


class BaseCommand:
    """
    Base class for CLI commands with access to shared resources.

    Commands don't reinitialize resources — they access them via the CLI instance.
    """

    def __init__(self, cli: 'RepositoryCLI'):
        """
        Args:
            cli: The RepositoryCLI instance holding all resources
        """
        self._cli = cli

    @property
    def project_dir(self):
        """Repository working directory."""
        return self._cli.project_dir

    @property
    def config(self):
        """Application configuration."""
        return self._cli.config

    @property
    def symbols(self):
        """Symbol set for display (Unicode/ASCII)."""
        return self._cli.symbols

    @property
    def repository(self):
        """The local model repository."""
        return self._cli.repository

    @property
    def registry(self):
        """Host model registry."""
        return self._cli.registry

    @property
    def editors(self):
        """Host editor manager."""
        return self._cli.editors

    @property
    def loader(self):
        """Grafico model loader."""
        return self._cli.loader
