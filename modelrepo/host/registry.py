"""
Model Registry — Models open in the host

The host side of a load: open, close and save models.

Saving notifies save listeners (the repository uses one to export the
saved model back to grafico files). A save made while loading passes
notify=False, so a load never triggers a write-back of what it just read.
"""

import logging
from typing import Optional, List, Callable, Dict

from ..core.model import Model
from .editors import EditorManager


logger = logging.getLogger(__name__)


SaveListener = Callable[[Model], None]


class ModelCloseRefused(RuntimeError):
    """The host refused to close a model (e.g. unsaved changes)."""

    def __init__(self, model: Model):
        self.model = model
        super().__init__(f"Model '{model.name or model.id}' has unsaved changes and was not closed")


class ModelRegistry:
    """
    Open models and their saved state.

    A model is dirty when its content fingerprint differs from the one
    recorded at open or at the last save.
    """

    def __init__(
        self,
        editors: Optional[EditorManager] = None,
        confirm_close: Optional[Callable[[Model], bool]] = None
    ):
        """
        Args:
            editors: Editor host whose editors are closed with their model
            confirm_close: Asked before closing a dirty model. None refuses.
        """
        self.editors = editors
        self.confirm_close = confirm_close
        self._models: List[Model] = []
        self._saved: Dict[int, str] = {}
        self._listeners: List[SaveListener] = []

    @property
    def models(self) -> List[Model]:
        return list(self._models)

    def is_open(self, model: Model) -> bool:
        return any(m is model for m in self._models)

    def open_model(self, model: Model):
        if self.is_open(model):
            return
        self._models.append(model)
        self._saved[id(model)] = model.fingerprint()
        logger.debug("Opened model %s", model.id)

    def is_dirty(self, model: Model) -> bool:
        saved = self._saved.get(id(model))
        return saved is not None and saved != model.fingerprint()

    def close_model(self, model: Model) -> bool:
        """
        Close a model.

        Returns:
            False if the model is dirty and closing was not confirmed
        """
        if not self.is_open(model):
            return True

        if self.is_dirty(model):
            if self.confirm_close is None or not self.confirm_close(model):
                logger.info("Close of %s refused: unsaved changes", model.id)
                return False

        if self.editors is not None:
            self.editors.close_editors_for(model)

        self._models = [m for m in self._models if m is not model]
        self._saved.pop(id(model), None)
        logger.debug("Closed model %s", model.id)
        return True

    def save_model(self, model: Model, notify: bool = True):
        """
        Write the model snapshot to model.file.

        Args:
            model: Model to save (must have a file)
            notify: Call save listeners after writing

        Raises:
            ValueError: Model has no file
        """
        if model.file is None:
            raise ValueError(f"Model '{model.id}' has no file to save to")

        model.file.parent.mkdir(parents=True, exist_ok=True)
        model.file.write_bytes(model.to_json())
        self._saved[id(model)] = model.fingerprint()

        if notify:
            for listener in list(self._listeners):
                listener(model)

    def add_save_listener(self, listener: SaveListener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_save_listener(self, listener: SaveListener):
        if listener in self._listeners:
            self._listeners.remove(listener)
