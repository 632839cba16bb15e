"""
OutputTemplate — Consistent CLI output structure

Builder for command output with header, sections and footer.

Usage:
    template = OutputTemplate()
    template.header("MODELREPO LOAD", "Archisurance")
    template.section("RESTORED", restored_lines)
    print(template.render(command="load", context={"restored": True}))
"""

import shutil
from dataclasses import dataclass
from typing import List, Dict, Optional, Any

from .symbols import SymbolSet, get_symbols
from .succession import get_hint


HEADER_CHAR = "="
SECTION_CHAR = "-"
DEFAULT_WIDTH = 80


@dataclass
class TemplateSection:
    """A titled section of output."""
    title: str
    content: str


class OutputTemplate:
    """
    Builder for structured CLI output.

    - HEADER: Command identity
    - SECTIONS: Titled content blocks
    - FOOTER: Summary, succession hint
    """

    def __init__(self, symbols: Optional[SymbolSet] = None, width: Optional[int] = None):
        """
        Args:
            symbols: SymbolSet for visual elements (auto-detect if None)
            width: Terminal width (auto-detect if None)
        """
        self.symbols = symbols or get_symbols()
        self.width = width or shutil.get_terminal_size().columns or DEFAULT_WIDTH

        self._title: Optional[str] = None
        self._subtitle: Optional[str] = None
        self._sections: List[TemplateSection] = []
        self._summary: Optional[str] = None

    def header(self, title: str, subtitle: Optional[str] = None) -> "OutputTemplate":
        self._title = title
        self._subtitle = subtitle
        return self

    def section(self, title: str, content: str) -> "OutputTemplate":
        self._sections.append(TemplateSection(title=title, content=content))
        return self

    def footer(self, summary: Optional[str] = None) -> "OutputTemplate":
        self._summary = summary
        return self

    def render(self, command: Optional[str] = None, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render template to formatted string.

        Args:
            command: Command name for succession hint (optional)
            context: Context dict for succession conditions (optional)
        """
        lines: List[str] = []

        if self._title:
            border = HEADER_CHAR * self.width
            lines.append(border)
            lines.append(f"{self._title} - {self._subtitle}" if self._subtitle else self._title)
            lines.append(border)
            lines.append("")

        for section in self._sections:
            if section.title:
                lines.append(section.title)
                lines.append(SECTION_CHAR * len(section.title))
            if section.content:
                lines.append(section.content)
            lines.append("")

        lines.append(SECTION_CHAR * self.width)
        if self._summary:
            lines.append(f"Summary: {self._summary}")
        if command:
            hint = get_hint(command, context)
            if hint:
                lines.append(hint)
        lines.append(HEADER_CHAR * self.width)

        return "\n".join(lines)
