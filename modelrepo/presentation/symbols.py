"""
Symbols — Visual vocabulary for command output

Progressive enhancement: Unicode when supported, ASCII fallback.
Configurable via display.symbols setting.

Also provides safe_print(): encoding-safe printing for names read from
model files, which may contain any Unicode.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


# Common Unicode to ASCII replacements for display
UNICODE_TO_ASCII = {
    '→': '->',
    '←': '<-',
    '…': '...',
    '–': '-',
    '—': '--',
    '“': '"',
    '”': '"',
    '‘': "'",
    '’': "'",
    '•': '*',
    '·': '.',
}


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Print with graceful encoding fallback.

    Handles UnicodeEncodeError by replacing unencodable characters
    with ASCII equivalents or '?' as last resort.

    Args:
        text: Text to print (may contain any Unicode)
        end: String appended after text (default: newline)
        file: Output stream (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        safe_text = text
        for unicode_char, ascii_equiv in UNICODE_TO_ASCII.items():
            safe_text = safe_text.replace(unicode_char, ascii_equiv)

        try:
            print(safe_text, end=end, file=file)
        except UnicodeEncodeError:
            # Last resort: replace all unencodable chars with ?
            encoding = getattr(file, 'encoding', 'utf-8') or 'utf-8'
            encoded = safe_text.encode(encoding, errors='replace')
            print(encoded.decode(encoding), end=end, file=file)


@dataclass(frozen=True)
class SymbolSet:
    """Complete set of symbols for model objects and states."""
    # Object types
    model: str
    folder: str
    element: str
    diagram: str

    # Recovery states
    restored: str
    missing: str

    # Status markers
    check_pass: str
    check_warn: str
    check_fail: str


UNICODE = SymbolSet(
    model='◎',
    folder='▢',
    element='◇',
    diagram='◈',
    restored='↻',
    missing='⊘',
    check_pass='✓',
    check_warn='⚠',
    check_fail='❌',
)

ASCII = SymbolSet(
    model='[M]',
    folder='[F]',
    element='[E]',
    diagram='[D]',
    restored='[R]',
    missing='[X]',
    check_pass='[OK]',
    check_warn='[!]',
    check_fail='[ERR]',
)


def supports_unicode() -> bool:
    """
    Check if environment likely supports Unicode output.

    Conservative: defaults to ASCII if uncertain.
    """
    # Explicit environment override
    if os.environ.get('MODELREPO_ASCII_ONLY', '').lower() in ('1', 'true', 'yes'):
        return False
    if os.environ.get('MODELREPO_UNICODE', '').lower() in ('1', 'true', 'yes'):
        return True

    stdout_encoding = getattr(sys.stdout, 'encoding', None)
    if stdout_encoding:
        encoding_lower = stdout_encoding.lower().replace('-', '').replace('_', '')
        if encoding_lower.startswith('cp') or encoding_lower in ('ascii', 'latin1', 'iso88591'):
            return False
        if 'utf' in encoding_lower:
            return True

    lang = os.environ.get('LANG', '').lower()
    lc_all = os.environ.get('LC_ALL', '').lower()
    if 'utf-8' in lang or 'utf8' in lang or 'utf-8' in lc_all or 'utf8' in lc_all:
        return True

    # Default: ASCII for safety
    return False


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Get appropriate symbol set based on preference or auto-detection.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII


def symbol_for_element(symbols: SymbolSet, element) -> str:
    """Symbol for a model object (folder, diagram or plain element)."""
    if element.kind == "Folder":
        return symbols.folder
    if element.is_viewable:
        return symbols.diagram
    return symbols.element
