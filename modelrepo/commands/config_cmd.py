"""
ConfigCommand — Configuration management

Displays and sets configuration values.
"""

from ..commands.base import BaseCommand
from ..presentation.template import OutputTemplate


class ConfigCommand(BaseCommand):
    """Command for configuration display and modification."""

    def show_config(self):
        """Show current configuration."""
        template = OutputTemplate(symbols=self.symbols)
        template.header("MODELREPO CONFIG", "Current Configuration")
        template.section("SETTINGS", self._cli.config_manager.display())
        print(template.render(command="config", context={}))

    def set_config(self, key: str, value: str, scope: str = "project"):
        """Set a configuration value."""
        symbols = self.symbols
        error = self._cli.config_manager.set(key, value, scope)

        template = OutputTemplate(symbols=symbols)

        if error:
            template.header("MODELREPO CONFIG", "Error")
            template.section("ERROR", error)
            output = template.render(command="config", context={"error": True})
        else:
            template.header("MODELREPO CONFIG", "Configuration Updated")
            template.section("SETTING", f"Set {key} = {value}")
            if scope == "project":
                template.section("SAVED TO", str(self._cli.config_manager.project_config_path))
            else:
                template.section("SAVED TO", str(self._cli.config_manager.user_config_path))
            template.footer(f"{symbols.check_pass} Configuration saved")
            output = template.render(command="config", context={"updated": True})

        print(output)
        return error


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'config'


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., repository.branch=refs/heads/main)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    if args.set:
        if '=' not in args.set:
            print("Error: Use format KEY=VALUE (e.g., repository.unresolved=delete)")
        else:
            key, value = args.set.split('=', 1)
            scope = "user" if args.user else "project"
            cli._config_cmd.set_config(key, value, scope)
    else:
        cli._config_cmd.show_config()
