"""
Presentation — Output formatting for modelrepo commands
"""

from .symbols import SymbolSet, UNICODE, ASCII, get_symbols, safe_print, symbol_for_element
from .template import OutputTemplate
from .succession import get_hint

__all__ = [
    "SymbolSet", "UNICODE", "ASCII", "get_symbols", "safe_print", "symbol_for_element",
    "OutputTemplate",
    "get_hint",
]
