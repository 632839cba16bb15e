"""
Editor State Preserver — Keep diagram editors open across a reload

A reload replaces every model object, so editors are remembered by the
id of their diagram and reopened by looking that id up in the new model.
Failures here never fail the load: the model is already loaded.
"""

import logging
from typing import Optional, List

from ..core.model import Model
from ..host.editors import EditorManager, EditorReference, EditorError


logger = logging.getLogger(__name__)


class EditorStatePreserver:

    def __init__(self, editors: EditorManager):
        self.editors = editors

    def capture(self, model: Model) -> List[str]:
        """Ids of the diagrams of model that are open in an editor."""
        ids = []
        for ref in self.editors.editor_references():
            try:
                diagram = ref.get_diagram()
            except EditorError as e:
                logger.warning("Skipping editor: %s", e)
                continue
            if diagram.model is model:
                ids.append(diagram.id)
        return ids

    def restore(self, model: Model, ids: Optional[List[str]]) -> List[EditorReference]:
        """Reopen editors for the diagrams of model with the given ids."""
        reopened = []
        for object_id in ids or []:
            element = model.get_object_by_id(object_id)
            if element is None or not element.is_viewable:
                continue
            try:
                reopened.append(self.editors.open_diagram_editor(element))
            except EditorError as e:
                logger.warning("Could not reopen editor for %s: %s", object_id, e)
        return reopened
