"""
Model Loader — Import a model from grafico files and reconcile it

Load sequence:
    1. Import the working directory (nothing there → no model)
    2. Remember open diagram editors of the previously loaded model, close it
    3. Bind the new model to the repository's temp file
    4. Unresolved references → restore missing files from history and
       re-import (or, with the "delete" policy, drop the referencing objects)
    5. Open the model in the host and save it without triggering export
    6. Reopen the remembered editors against the new model
    7. Report the model and the objects restored from history

Errors:
    - GraficoError / GitError (OSError): working directory or history unreadable
    - ModelCloseRefused: the previous model could not be closed; raised
      before the working directory is touched
    - A file found nowhere in history is not an error: its object is just
      absent from the model
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, List, Callable, TYPE_CHECKING

from ..core.model import Model, Element
from ..host.editors import EditorManager
from ..host.registry import ModelRegistry, ModelCloseRefused
from ..services.git import GitIntegration
from .importer import GraficoModelImporter, GraficoError, UnresolvedObject
from .history import HistoryScanner
from .editors import EditorStatePreserver
from .repository import ArchiRepository

if TYPE_CHECKING:
    from ..config import Config


logger = logging.getLogger(__name__)


RESTORED_HEADER = "Restored missing objects from history:"

POLICY_RESTORE = "restore"
POLICY_DELETE = "delete"


@dataclass
class LoadResult:
    """Result of a load."""
    model: Optional[Model]
    restored: List[Element] = field(default_factory=list)
    unresolved: List[UnresolvedObject] = field(default_factory=list)  # left after recovery

    @property
    def loaded(self) -> bool:
        return self.model is not None


class GraficoModelLoader:
    """
    Loads a repository's model into the host.

    One load at a time per repository; the caller serializes loads.
    """

    def __init__(
        self,
        repository: ArchiRepository,
        registry: ModelRegistry,
        editors: Optional[EditorManager] = None,
        config: Optional['Config'] = None,
        scanner_factory: Optional[Callable[[], HistoryScanner]] = None
    ):
        """
        Args:
            repository: Repository to load
            registry: Host the model is opened in
            editors: Editor host (None = no editor state to preserve)
            config: Application config (branch, unresolved policy)
            scanner_factory: Builds the HistoryScanner for a recovery pass
        """
        self.repository = repository
        self.registry = registry
        self.editors = editors if editors is not None else (registry.editors or EditorManager())
        self.preserver = EditorStatePreserver(self.editors)

        self.branch = config.repository.branch if config else None
        self.unresolved_policy = config.repository.unresolved if config else POLICY_RESTORE

        self._scanner_factory = scanner_factory or self._default_scanner
        self._restored_objects: Optional[List[Element]] = None
        self._still_unresolved: List[UnresolvedObject] = []

    def _default_scanner(self) -> HistoryScanner:
        return HistoryScanner(GitIntegration(self.repository.local_repository_folder), self.branch)

    @property
    def restored_objects(self) -> List[Element]:
        return list(self._restored_objects or [])

    # =========================================================================
    # Primary Interface
    # =========================================================================

    def load(self) -> LoadResult:
        """
        Load the model.

        Raises:
            OSError: Working directory or repository history unreadable
            ModelCloseRefused: Previously loaded model could not be closed
        """
        self._restored_objects = None
        self._still_unresolved = []

        importer = GraficoModelImporter(self.repository.local_repository_folder)
        model = importer.import_as_model()

        if model is None:
            return LoadResult(model=None)

        # Close the previously loaded model, remembering its open diagrams
        open_diagram_ids = None
        previous = self.repository.locate_model(self.registry)
        if previous is not None:
            open_diagram_ids = self.preserver.capture(previous)
            if not self.registry.close_model(previous):
                raise ModelCloseRefused(previous)

        model.file = self.repository.temp_model_file

        unresolved = importer.get_unresolved_objects()
        if unresolved:
            if self.unresolved_policy == POLICY_DELETE:
                model = self._delete_problem_objects(unresolved, model)
            else:
                model = self._restore_problem_objects(unresolved)

        self.registry.open_model(model)

        # Save to the temp file; this save must not export back to grafico files
        self.registry.save_model(model, notify=False)

        self.preserver.restore(model, open_diagram_ids)

        return LoadResult(model=model, restored=self.restored_objects, unresolved=list(self._still_unresolved))

    def load_model(self) -> Optional[Model]:
        """Load and return only the model."""
        return self.load().model

    def get_restored_objects_as_string(self) -> Optional[str]:
        """
        The objects restored by the last load, one per line.

        Returns:
            None if the last load did not run a recovery
        """
        if self._restored_objects is None:
            return None

        lines = [RESTORED_HEADER]
        for element in self._restored_objects:
            lines.append(f"{element.name} ({element.kind})" if element.name else element.kind)

        return "\n".join(lines)

    # =========================================================================
    # Unresolved References
    # =========================================================================

    def _restore_problem_objects(self, unresolved_objects: List[UnresolvedObject]) -> Model:
        """Restore missing files from history, then re-import."""
        self._restored_objects = []

        scanner = self._scanner_factory()
        restored_ids = set(scanner.restore(unresolved_objects))

        importer = GraficoModelImporter(self.repository.local_repository_folder)
        model = importer.import_as_model()
        if model is None:
            raise GraficoError(f"Model disappeared from {self.repository.model_folder} during recovery")
        model.file = self.repository.temp_model_file

        for element in model.all_contents():
            if element.id in restored_ids:
                self._restored_objects.append(element)

        self._still_unresolved = importer.get_unresolved_objects() or []
        if self._still_unresolved:
            logger.info("%d reference(s) could not be restored", len(self._still_unresolved))

        return model

    def _delete_problem_objects(self, unresolved_objects: List[UnresolvedObject], model: Model) -> Model:
        """Remove objects holding unresolved references and re-export."""
        for unresolved in unresolved_objects:
            element = model.get_object_by_id(unresolved.parent_object.id)
            if element is not None:
                model.remove(element)
                logger.info("Removed %s '%s' (missing %s)", element.kind, element.id, unresolved.missing_object_uri)

        self.repository.export_model(model)
        return model
