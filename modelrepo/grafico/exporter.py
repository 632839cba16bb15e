"""
Grafico Exporter — Encode a Model as one XML file per element

Inverse of GraficoModelImporter. The model/ tree is rewritten from
scratch on every export so deleted elements do not leave stale files.

Directory naming:
    top-level folder  → its type ("business"), or its id if the type is taken
    nested folder     → its id
    element           → <Kind>_<id>.xml
"""

import shutil
import xml.etree.ElementTree as ET
from pathlib import Path, PurePosixPath
from typing import Dict, Set

from ..core.model import Model, Element, Folder
from .importer import MODEL_FOLDER, FOLDER_FILE, ELEMENT_SUFFIX


def element_file_name(element: Element) -> str:
    return f"{element.kind}_{element.id}{ELEMENT_SUFFIX}"


class GraficoModelExporter:
    """Export a model to grafico files under <folder>/model/."""

    def __init__(self, model: Model, folder: Path):
        self.model = model
        self.folder = Path(folder)
        self.model_folder = self.folder / MODEL_FOLDER
        self._paths: Dict[str, PurePosixPath] = {}

    def export_model(self):
        """Write the model, replacing any existing model/ tree."""
        if self.model_folder.exists():
            shutil.rmtree(self.model_folder)
        self.model_folder.mkdir(parents=True)

        self._paths = self._assign_paths()

        root = ET.Element("model", {"id": self.model.id, "name": self.model.name})
        self._write_common(root, self.model.documentation, self.model.properties)
        self._write(root, self.model_folder / FOLDER_FILE)

        for folder in self.model.folders:
            self._write_folder(folder)

    def _assign_paths(self) -> Dict[str, PurePosixPath]:
        """Map every element id to its file path relative to model/."""
        paths: Dict[str, PurePosixPath] = {}
        used: Set[str] = set()

        def visit(folder: Folder, directory: PurePosixPath):
            paths[folder.id] = directory / FOLDER_FILE
            for child in folder.children:
                if isinstance(child, Folder):
                    visit(child, directory / child.id)
                else:
                    paths[child.id] = directory / element_file_name(child)

        for folder in self.model.folders:
            name = folder.type if folder.type and folder.type not in used else folder.id
            used.add(name)
            visit(folder, PurePosixPath(name))

        return paths

    def _write_folder(self, folder: Folder):
        path = self._paths[folder.id]
        node = ET.Element("folder", {"id": folder.id, "name": folder.name, "type": folder.type})
        self._write_common(node, folder.documentation, folder.properties)
        self._write_references(node, folder)
        self._write(node, self.model_folder / path)

        for child in folder.children:
            if isinstance(child, Folder):
                self._write_folder(child)
            else:
                self._write_element(child)

    def _write_element(self, element: Element):
        node = ET.Element("element", {"kind": element.kind, "id": element.id, "name": element.name})
        self._write_common(node, element.documentation, element.properties)
        self._write_references(node, element)
        self._write(node, self.model_folder / self._paths[element.id])

    def _write_common(self, node: ET.Element, documentation: str, properties: Dict[str, str]):
        if documentation:
            ET.SubElement(node, "documentation").text = documentation
        for key, value in properties.items():
            ET.SubElement(node, "property", {"key": key, "value": value})

    def _write_references(self, node: ET.Element, element: Element):
        for ref in element.references:
            target_path = self._paths.get(ref.target.id)
            if target_path is None:
                continue  # Target is not part of this model
            ET.SubElement(node, "reference", {"role": ref.role, "href": f"{target_path}#{ref.target.id}"})

    def _write(self, node: ET.Element, path: Path):
        path.parent.mkdir(parents=True, exist_ok=True)
        ET.indent(node)
        ET.ElementTree(node).write(path, encoding="utf-8", xml_declaration=True)
