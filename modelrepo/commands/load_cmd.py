"""
LoadCommand — Load the working directory's model

Imports the grafico files, restores missing objects from history,
opens the model and reports what was restored.
"""

from ..commands.base import BaseCommand
from ..host.registry import ModelCloseRefused
from ..services.git import GitError
from ..presentation.symbols import safe_print, symbol_for_element
from ..presentation.template import OutputTemplate


class LoadCommand(BaseCommand):
    """Command for loading a repository model."""

    def load(self):
        """Load the model and print a summary."""
        symbols = self.symbols
        template = OutputTemplate(symbols=symbols)

        try:
            result = self.loader.load()
        except ModelCloseRefused as e:
            template.header("MODELREPO LOAD", "Not Loaded")
            template.section("ERROR", str(e))
            template.section("ACTION", "Save or discard changes to the open model, then reload.")
            print(template.render(command="load", context={"error": True}))
            return None
        except GitError as e:
            template.header("MODELREPO LOAD", "History Unreadable")
            template.section("ERROR", str(e))
            print(template.render(command="load", context={"git_error": True}))
            return None
        except OSError as e:
            template.header("MODELREPO LOAD", "Working Directory Unreadable")
            template.section("ERROR", str(e))
            print(template.render(command="load", context={"error": True}))
            return None

        if not result.loaded:
            template.header("MODELREPO LOAD", "No Model")
            template.section("WORKING DIRECTORY", f"No model found in {self.repository.model_folder}")
            print(template.render(command="load", context={"no_model": True}))
            return result

        model = result.model
        diagrams = [e for e in model.all_contents() if e.is_viewable]

        template.header("MODELREPO LOAD", model.name or model.id)
        template.section("MODEL", "\n".join([
            f"{symbols.model} {model.name or '(unnamed)'}",
            f"  Elements: {model.count()}",
            f"  Diagrams: {len(diagrams)}",
            f"  Saved to: {model.file}",
        ]))

        if result.restored:
            lines = [
                f"{symbols.restored} {symbol_for_element(symbols, e)} "
                + (f"{e.name} ({e.kind})" if e.name else e.kind)
                for e in result.restored
            ]
            template.section("RESTORED FROM HISTORY", "\n".join(lines))

        if result.unresolved:
            lines = [
                f"{symbols.missing} {u.missing_file_name} (referenced by {u.parent_object.kind} '{u.parent_object.name or u.parent_object.id}')"
                for u in result.unresolved
            ]
            template.section("NOT FOUND IN HISTORY", "\n".join(lines))

        template.footer(
            f"{symbols.check_pass} Loaded {model.count()} element(s), "
            f"{len(result.restored)} restored, {len(result.unresolved)} missing"
        )
        # Names come from model files
        safe_print(template.render(command="load", context={"restored": bool(result.restored)}))
        return result


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'load'


def register_parser(subparsers):
    """Register load command parser."""
    p = subparsers.add_parser('load', help='Load the model, restoring missing objects from history')
    return p


def handle(cli, args):
    """Handle load command dispatch."""
    cli._load_cmd.load()
