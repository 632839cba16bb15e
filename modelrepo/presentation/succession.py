"""
Command Succession — Data-driven next-step guidance

Each command knows its successors + conditions for context-aware hints:
- status -> load
- load -> status (or review restored objects, or fix config)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class NextStep:
    """Single next-step hint with optional condition."""
    command: Optional[str]    # e.g., "load" (None = terminal)
    label: str                # e.g., "modelrepo load"
    condition: Optional[str] = None  # When to show (None = always)
    why: Optional[str] = None        # Brief rationale


@dataclass
class Succession:
    """Succession rules for a command."""
    default: NextStep
    alternatives: List[NextStep] = field(default_factory=list)


RULES: Dict[str, Succession] = {
    "status": Succession(
        default=NextStep("load", "modelrepo load",
                         why="Import the working directory"),
        alternatives=[
            NextStep(None, "Nothing to load", condition="no_model",
                     why="No model/ folder in working directory"),
        ]
    ),

    "load": Succession(
        default=NextStep("status", "modelrepo status",
                         why="Check the loaded model"),
        alternatives=[
            NextStep(None, "Commit the restored files", condition="restored",
                     why="Restored files are not yet committed"),
            NextStep("config", "modelrepo config", condition="git_error",
                     why="Check repository.branch"),
            NextStep(None, "Nothing to load", condition="no_model",
                     why="No model/ folder in working directory"),
        ]
    ),

    "delete": Succession(
        default=NextStep(None, "Local copy removed"),
    ),

    "config": Succession(
        default=NextStep("load", "modelrepo load",
                         why="Reload with the new settings"),
        alternatives=[
            NextStep("config", "modelrepo config", condition="error",
                     why="Review valid settings"),
        ]
    ),
}


def get_hint(command: str, context: dict = None) -> Optional[str]:
    """
    Get contextual next-step hint for command.

    Args:
        command: Command that just ran (e.g., "load")
        context: Result state flags (e.g., {"restored": True})

    Returns:
        Formatted hint string or None
    """
    context = context or {}
    rules = RULES.get(command)

    if not rules:
        return None

    for alt in rules.alternatives:
        if alt.condition and context.get(alt.condition):
            return _format_hint(alt)

    if rules.default.condition and not context.get(rules.default.condition):
        return None

    return _format_hint(rules.default)


def _format_hint(step: NextStep) -> str:
    """Format NextStep as display hint."""
    if not step.command:
        # Terminal state
        return f"-> {step.label}" + (f"  ({step.why})" if step.why else "")

    hint = f"-> Next: {step.label}"
    if step.why:
        hint += f"  ({step.why})"
    return hint
