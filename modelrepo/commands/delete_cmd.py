"""
DeleteCommand — Delete the local repository folder

Closes the model first; if the host refuses (unsaved changes) nothing
is deleted.
"""

from ..commands.base import BaseCommand
from ..presentation.template import OutputTemplate


class DeleteCommand(BaseCommand):
    """Command for deleting a local repository copy."""

    def delete(self, yes: bool = False):
        """
        Delete the local repository folder.

        Args:
            yes: Skip the confirmation prompt
        """
        symbols = self.symbols
        folder = self.repository.local_repository_folder

        if not yes:
            response = input(f"Delete local repository {folder}? [y/N] ").strip().lower()
            if response not in ('y', 'yes'):
                print("Cancelled.")
                return False

        template = OutputTemplate(symbols=symbols)
        template.header("MODELREPO DELETE", str(folder))

        try:
            deleted = self.repository.delete(self.registry)
        except OSError as e:
            template.section("ERROR", str(e))
            print(template.render(command="delete", context={"error": True}))
            return False

        if not deleted:
            template.section("NOT DELETED", "The open model has unsaved changes.")
            print(template.render(command="delete", context={"error": True}))
            return False

        template.footer(f"{symbols.check_pass} Deleted")
        print(template.render(command="delete"))
        return True


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'delete'


def register_parser(subparsers):
    """Register delete command parser."""
    p = subparsers.add_parser('delete', help='Delete the local repository folder')
    p.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')
    return p


def handle(cli, args):
    """Handle delete command dispatch."""
    cli._delete_cmd.delete(yes=args.yes)
