"""
Host — The environment models are loaded into

- Registry: open/close/save models, save listeners
- Editors: open diagram editors
"""

from .editors import EditorManager, EditorReference, EditorError
from .registry import ModelRegistry, ModelCloseRefused

__all__ = [
    "EditorManager", "EditorReference", "EditorError",
    "ModelRegistry", "ModelCloseRefused",
]
