"""
Commands — Modular CLI command implementations with self-registration

Each command module:
1. Defines XxxCommand class (handler implementation)
2. Exports register_parser(subparsers) to configure its argparse
3. Exports handle(cli, args) to dispatch to handler methods
"""

import importlib
import logging
from typing import Dict, Callable, Any

from .base import BaseCommand


logger = logging.getLogger(__name__)


# Command modules that participate in auto-registration
# Order determines help display order
COMMAND_MODULES = [
    'load_cmd',
    'status',
    'delete_cmd',
    'config_cmd',
]

# Handler registry: command_name -> handle function
_handlers: Dict[str, Callable] = {}


def register_all(subparsers) -> None:
    """
    Discover and register all command parsers.

    Imports each module in COMMAND_MODULES and calls its register_parser()
    function if it exists. Also registers the handle() function for dispatch.
    """
    _handlers.clear()

    for module_name in COMMAND_MODULES:
        try:
            module = importlib.import_module(f'.{module_name}', __package__)
        except ImportError as e:
            logger.warning("Could not load command module '%s': %s", module_name, e)
            continue

        if hasattr(module, 'register_parser'):
            module.register_parser(subparsers)

        if hasattr(module, 'handle'):
            # Derive from module name: 'load_cmd' -> 'load'
            cmd_name = getattr(module, 'COMMAND_NAME', None) or module_name.replace('_cmd', '')
            for name in getattr(module, 'COMMAND_NAMES', [cmd_name]):
                _handlers[name] = module.handle


def dispatch(command: str, cli: Any, args: Any) -> Any:
    """
    Dispatch command to its registered handler.

    Raises:
        KeyError: If command not registered
    """
    if command not in _handlers:
        raise KeyError(f"Unknown command: {command}. Available: {list(_handlers.keys())}")

    return _handlers[command](cli, args)


def get_registered_commands() -> list:
    """Get list of registered command names."""
    return list(_handlers.keys())


__all__ = ['BaseCommand', 'register_all', 'dispatch', 'get_registered_commands']
