"""
Core — Data layer for modelrepo

Contains the in-memory model graph:
- Model: decoded model with stable logical identity (its file)
- Element / Folder: identifiable nodes
- Reference: resolved cross-reference between elements
"""

from .model import Model, Element, Folder, Reference, new_id, VIEW_KINDS, FOLDER_KIND

__all__ = [
    "Model", "Element", "Folder", "Reference", "new_id", "VIEW_KINDS", "FOLDER_KIND",
]
