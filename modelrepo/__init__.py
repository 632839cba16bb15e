"""
modelrepo — Grafico model repository loader

Loads a model stored one file per element in a git working directory.
Objects whose files went missing (partial checkout, merge leftovers,
manual deletion) are restored from commit history and reported.

Usage:
    modelrepo load
    modelrepo status
    modelrepo config --set repository.branch=refs/heads/main
    modelrepo delete --yes
"""

__version__ = "0.1.0"

# Core layer (data)
from .core.model import Model, Element, Folder, Reference, new_id

# Grafico layer
from .grafico.importer import GraficoModelImporter, GraficoError, UnresolvedObject
from .grafico.exporter import GraficoModelExporter
from .grafico.history import HistoryScanner
from .grafico.editors import EditorStatePreserver
from .grafico.repository import ArchiRepository
from .grafico.loader import GraficoModelLoader, LoadResult

# Host layer
from .host.registry import ModelRegistry, ModelCloseRefused
from .host.editors import EditorManager, EditorReference, EditorError

# Services layer
from .services.git import GitIntegration, GitError, TreeEntry

# Config (stays at root)
from .config import Config, ConfigManager, get_config, RepositoryConfig, DisplayConfig

__all__ = [
    # Core
    'Model', 'Element', 'Folder', 'Reference', 'new_id',
    # Grafico
    'GraficoModelImporter', 'GraficoError', 'UnresolvedObject',
    'GraficoModelExporter',
    'HistoryScanner',
    'EditorStatePreserver',
    'ArchiRepository',
    'GraficoModelLoader', 'LoadResult',
    # Host
    'ModelRegistry', 'ModelCloseRefused',
    'EditorManager', 'EditorReference', 'EditorError',
    # Services
    'GitIntegration', 'GitError', 'TreeEntry',
    # Config
    'Config', 'ConfigManager', 'get_config', 'RepositoryConfig', 'DisplayConfig',
]
