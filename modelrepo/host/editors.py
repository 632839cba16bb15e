"""
Editor Manager — Open diagram editors of the host

Tracks which diagrams are open in a visual editor. An editor is bound
to one diagram instance; when its model is reloaded the editor is
closed and, if wanted, reopened against the new instance by id.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..core.model import Element, Model


logger = logging.getLogger(__name__)


class EditorError(Exception):
    """An editor cannot be opened or its input cannot be read."""


@dataclass(eq=False)
class EditorReference:
    """An open diagram editor."""
    diagram: Optional[Element]

    def get_diagram(self) -> Element:
        """The diagram bound to this editor."""
        if self.diagram is None:
            raise EditorError("Editor has no input")
        return self.diagram


class EditorManager:
    """Open diagram editors, in opening order."""

    def __init__(self):
        self._editors: List[EditorReference] = []

    def editor_references(self) -> List[EditorReference]:
        return list(self._editors)

    def open_diagram_editor(self, diagram: Element) -> EditorReference:
        """
        Open an editor for a diagram, or return the one already open.

        Raises:
            EditorError: Element cannot be shown in an editor
        """
        if not diagram.is_viewable:
            raise EditorError(f"{diagram.kind} '{diagram.id}' cannot be opened in an editor")

        for ref in self._editors:
            if ref.diagram is diagram:
                return ref

        ref = EditorReference(diagram=diagram)
        self._editors.append(ref)
        logger.debug("Opened editor for %s", diagram.id)
        return ref

    def close_editor(self, ref: EditorReference):
        if ref in self._editors:
            self._editors.remove(ref)

    def close_editors_for(self, model: Model) -> int:
        """Close every editor showing a diagram of model. Returns count closed."""
        keep = []
        closed = 0
        for ref in self._editors:
            if ref.diagram is not None and ref.diagram.model is model:
                closed += 1
            else:
                keep.append(ref)
        self._editors = keep
        return closed
