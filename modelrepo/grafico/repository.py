"""
Repository — A local model repository working directory

    <folder>/
    ├── .git/
    │   └── temp.archimate     → snapshot the host saves the loaded model to
    └── model/                 → grafico files

The temp file is the model's logical identity: an open model whose file
is this repository's temp file is this repository's model.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from ..core.model import Model
from ..host.registry import ModelRegistry
from .importer import MODEL_FOLDER
from .exporter import GraficoModelExporter


logger = logging.getLogger(__name__)


TEMP_MODEL_FILENAME = "temp.archimate"


class ArchiRepository:
    """A model repository on disk."""

    def __init__(self, folder: Path):
        self.folder = Path(folder)

    @property
    def local_repository_folder(self) -> Path:
        return self.folder

    @property
    def local_git_folder(self) -> Path:
        return self.folder / ".git"

    @property
    def model_folder(self) -> Path:
        return self.folder / MODEL_FOLDER

    @property
    def temp_model_file(self) -> Path:
        return self.local_git_folder / TEMP_MODEL_FILENAME

    def locate_model(self, registry: ModelRegistry) -> Optional[Model]:
        """The open model belonging to this repository, if any."""
        temp_file = self.temp_model_file.resolve()
        for model in registry.models:
            if model.file is not None and Path(model.file).resolve() == temp_file:
                return model
        return None

    def export_model(self, model: Model):
        """Write model back to this repository's grafico files."""
        GraficoModelExporter(model, self.folder).export_model()
        logger.info("Exported %s to %s", model.name or model.id, self.model_folder)

    def install_save_listener(self, registry: ModelRegistry):
        """Export this repository's model whenever the host saves it."""
        registry.add_save_listener(self._on_save)

    def _on_save(self, model: Model):
        if model.file is not None and Path(model.file).resolve() == self.temp_model_file.resolve():
            self.export_model(model)

    def delete(self, registry: ModelRegistry) -> bool:
        """
        Close the model and delete the local repository folder.

        Returns:
            False if the host refused to close the model (nothing deleted)
        """
        model = self.locate_model(registry)
        if model is not None and not registry.close_model(model):
            return False

        if self.folder.exists():
            shutil.rmtree(self.folder)
            logger.info("Deleted %s", self.folder)
        return True
