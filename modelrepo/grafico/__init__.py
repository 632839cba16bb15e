"""
Grafico — File-per-element model serialization and load reconciliation

- Importer / Exporter: model/ tree <-> Model
- History: recover missing files from git history
- Editors: keep diagram editors open across reloads
- Loader: import, reconcile, open in host
- Repository: a local repository working directory
"""

from .importer import GraficoModelImporter, GraficoError, UnresolvedObject, split_href
from .exporter import GraficoModelExporter
from .history import HistoryScanner, HistoryMatch, path_matches
from .editors import EditorStatePreserver
from .repository import ArchiRepository, TEMP_MODEL_FILENAME
from .loader import GraficoModelLoader, LoadResult, RESTORED_HEADER, POLICY_RESTORE, POLICY_DELETE

__all__ = [
    "GraficoModelImporter", "GraficoError", "UnresolvedObject", "split_href",
    "GraficoModelExporter",
    "HistoryScanner", "HistoryMatch", "path_matches",
    "EditorStatePreserver",
    "ArchiRepository", "TEMP_MODEL_FILENAME",
    "GraficoModelLoader", "LoadResult", "RESTORED_HEADER", "POLICY_RESTORE", "POLICY_DELETE",
]
