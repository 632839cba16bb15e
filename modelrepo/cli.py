"""
CLI -- Command interface

    modelrepo load            import the working directory, restoring missing objects
    modelrepo status          what a load would see
    modelrepo delete --yes    remove the local repository folder
    modelrepo config          view or set configuration
"""

import argparse
import logging
import os
from pathlib import Path

from .config import ConfigManager
from .host.editors import EditorManager
from .host.registry import ModelRegistry
from .grafico.repository import ArchiRepository
from .grafico.loader import GraficoModelLoader
from .presentation.symbols import get_symbols
from .commands.load_cmd import LoadCommand
from .commands.status import StatusCommand
from .commands.delete_cmd import DeleteCommand
from .commands.config_cmd import ConfigCommand
from . import __version__


class RepositoryCLI:
    """Command-line interface for a local model repository."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)

        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()
        self.symbols = get_symbols(self.config.display.symbols)

        # Host: open models and their editors
        self.editors = EditorManager()
        self.registry = ModelRegistry(editors=self.editors)

        # Saving the repository's model exports it back to grafico files
        self.repository = ArchiRepository(self.project_dir)
        self.repository.install_save_listener(self.registry)

        self.loader = GraficoModelLoader(
            repository=self.repository,
            registry=self.registry,
            editors=self.editors,
            config=self.config
        )

        # Command handlers
        self._load_cmd = LoadCommand(self)
        self._status_cmd = StatusCommand(self)
        self._delete_cmd = DeleteCommand(self)
        self._config_cmd = ConfigCommand(self)

    def load(self):
        """Load the model. Delegates to LoadCommand."""
        return self._load_cmd.load()

    def status(self):
        """Show status. Delegates to StatusCommand."""
        return self._status_cmd.status()

    def delete(self, yes: bool = False):
        """Delete local folder. Delegates to DeleteCommand."""
        return self._delete_cmd.delete(yes=yes)


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


def main():
    """
    Main entry point for modelrepo CLI.

    Uses command registry pattern for modular command handling.
    """
    parser = argparse.ArgumentParser(
        description="modelrepo -- grafico model repository loader",
        epilog="Restores objects missing from the working directory from git history."
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("MODELREPO_PROJECT_PATH", "."),
        help='Repository working directory (default: MODELREPO_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log recovery details'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'modelrepo {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    from .commands import register_all, dispatch
    register_all(subparsers)

    args = parser.parse_args()
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return

    cli = RepositoryCLI(Path(args.project))

    try:
        dispatch(args.command, cli, args)
    except KeyError as e:
        print(f"Error: {e}")
        parser.print_help()


if __name__ == '__main__':
    main()
