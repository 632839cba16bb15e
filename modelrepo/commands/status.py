"""
StatusCommand — Repository and working directory status

Reports what a load would see without loading:
- Git repository and branch history is read from
- Model files and their unresolved references
"""

from ..commands.base import BaseCommand
from ..grafico.importer import GraficoModelImporter
from ..services.git import GitIntegration, GitError
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate


class StatusCommand(BaseCommand):
    """Command for displaying repository status."""

    def status(self):
        symbols = self.symbols
        template = OutputTemplate(symbols=symbols)
        template.header("MODELREPO STATUS", str(self.project_dir))

        # Git
        git = GitIntegration(self.project_dir)
        git_lines = []
        if git.is_git_repo:
            try:
                head = git.head_commit()
                git_lines.append(f"{symbols.check_pass} Git repository (HEAD {head[:8] if head else 'none'})")
                start = git.resolve_primary_branch(self.config.repository.branch)
                git_lines.append(f"  History from: {self.config.repository.effective_branch} ({start[:8]})")
            except GitError as e:
                git_lines.append(f"{symbols.check_warn} {e}")
        else:
            git_lines.append(f"{symbols.check_fail} Not a git repository (missing objects cannot be restored)")
        template.section("REPOSITORY", "\n".join(git_lines))

        # Working directory
        importer = GraficoModelImporter(self.project_dir)
        context = {}
        try:
            model = importer.import_as_model()
        except OSError as e:
            template.section("MODEL", f"{symbols.check_fail} {e}")
            print(template.render(command="status", context={"error": True}))
            return

        if model is None:
            template.section("MODEL", f"No model in {self.repository.model_folder}")
            context["no_model"] = True
        else:
            unresolved = importer.get_unresolved_objects() or []
            lines = [
                f"{symbols.model} {model.name or '(unnamed)'}",
                f"  Elements: {model.count()}",
                f"  Unresolved references: {len(unresolved)}",
            ]
            for u in unresolved:
                lines.append(f"  {symbols.missing} {u.missing_file_name}")
            template.section("MODEL", "\n".join(lines))

        safe_print(template.render(command="status", context=context))


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'status'


def register_parser(subparsers):
    """Register status command parser."""
    p = subparsers.add_parser('status', help='Show repository and model status')
    return p


def handle(cli, args):
    """Handle status command dispatch."""
    cli._status_cmd.status()
