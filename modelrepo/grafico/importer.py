"""
Grafico Importer — Decode a file-per-element working directory

Reads the model/ tree of a repository working directory into a Model.
One XML file per element, one folder.xml per folder:

    model/
    ├── folder.xml                         → <model id name>
    ├── business/
    │   ├── folder.xml                     → <folder id name type>
    │   └── BusinessActor_id-1.xml         → <element kind id name>
    └── diagrams/
        ├── folder.xml
        └── DiagramModel_id-2.xml          → <reference role href="business/BusinessActor_id-1.xml#id-1"/>

Cross-references are resolved by the #fragment (the target's id), not by
path, so an element file restored under a reorganised folder still
resolves. References whose target was not loaded are collected as
UnresolvedObjects for the loader to recover.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, List, Dict, Tuple

from ..core.model import Model, Element, Folder


MODEL_FOLDER = "model"
FOLDER_FILE = "folder.xml"
ELEMENT_SUFFIX = ".xml"


class GraficoError(OSError):
    """Working directory cannot be read or decoded."""


def split_href(href: str) -> Tuple[str, str]:
    """Split 'dir/File.xml#id' into ('dir/File.xml', 'id')."""
    path, _, fragment = href.partition("#")
    return path, fragment


@dataclass
class UnresolvedObject:
    """A cross-reference whose target file could not be found."""
    missing_object_uri: str
    parent_object: Element
    role: str = ""

    @property
    def missing_file_name(self) -> str:
        """Last path segment of the missing file (e.g. 'BusinessActor_id-1.xml')."""
        path, _ = split_href(self.missing_object_uri)
        return PurePosixPath(path).name

    @property
    def search_name(self) -> str:
        """
        Trailing path to look for in history.

        Every folder is stored as folder.xml, so a folder keeps its
        directory name ('id-sub/folder.xml'); elements use the file name.
        """
        path, _ = split_href(self.missing_object_uri)
        pure = PurePosixPath(path)
        if pure.name == FOLDER_FILE and pure.parent.name:
            return f"{pure.parent.name}/{pure.name}"
        return pure.name

    @property
    def missing_object_id(self) -> str:
        _, fragment = split_href(self.missing_object_uri)
        return fragment


class GraficoModelImporter:
    """
    Import a model from grafico files.

    Safe to call import_as_model() repeatedly: every call starts from an
    empty state and returns a new Model instance.
    """

    def __init__(self, folder: Path):
        """
        Args:
            folder: Repository working directory (parent of model/)
        """
        self.folder = Path(folder)
        self.model_folder = self.folder / MODEL_FOLDER

        self._index: Dict[str, Element] = {}
        self._pending: List[Tuple[Element, str, str]] = []
        self._unresolved: Optional[List[UnresolvedObject]] = None

    def import_as_model(self) -> Optional[Model]:
        """
        Decode the working directory.

        Returns:
            The Model, or None if there is no model/folder.xml

        Raises:
            GraficoError: Malformed file, missing identifier or duplicate identifier
        """
        self._index = {}
        self._pending = []
        self._unresolved = None

        root_file = self.model_folder / FOLDER_FILE
        if not root_file.is_file():
            return None

        node = self._parse(root_file)
        if node.tag != "model":
            raise GraficoError(f"Expected <model> root in {root_file}, found <{node.tag}>")

        model = Model(
            id=self._require_id(node, root_file),
            name=node.get("name", ""),
            documentation=self._documentation(node),
            properties=self._properties(node),
        )

        for directory in sorted(p for p in self.model_folder.iterdir() if p.is_dir()):
            folder = self._load_folder(directory)
            if folder is not None:
                model.add_folder(folder)

        self._resolve_references()
        return model

    def get_unresolved_objects(self) -> Optional[List[UnresolvedObject]]:
        """Unresolved references from the last import, or None if all resolved."""
        return self._unresolved

    # =========================================================================
    # Decoding
    # =========================================================================

    def _load_folder(self, directory: Path) -> Optional[Folder]:
        folder_file = directory / FOLDER_FILE
        if not folder_file.is_file():
            return None  # Not part of the model tree

        node = self._parse(folder_file)
        folder = Folder(
            id=self._require_id(node, folder_file),
            name=node.get("name", ""),
            type=node.get("type", ""),
            documentation=self._documentation(node),
            properties=self._properties(node),
        )
        self._register(folder, folder_file)
        self._collect_references(folder, node)

        for path in sorted(directory.iterdir()):
            if path.is_dir():
                child = self._load_folder(path)
                if child is not None:
                    folder.add(child)
            elif path.suffix == ELEMENT_SUFFIX and path.name != FOLDER_FILE:
                folder.add(self._load_element(path))

        return folder

    def _load_element(self, path: Path) -> Element:
        node = self._parse(path)
        kind = node.get("kind")
        if node.tag != "element" or not kind:
            raise GraficoError(f"Not a grafico element file: {path}")

        element = Element(
            id=self._require_id(node, path),
            kind=kind,
            name=node.get("name", ""),
            documentation=self._documentation(node),
            properties=self._properties(node),
        )
        self._register(element, path)
        self._collect_references(element, node)
        return element

    def _resolve_references(self):
        unresolved = []
        for element, role, href in self._pending:
            _, target_id = split_href(href)
            target = self._index.get(target_id)
            if target is not None:
                element.add_reference(role, target)
            else:
                unresolved.append(UnresolvedObject(missing_object_uri=href, parent_object=element, role=role))

        self._unresolved = unresolved or None

    # =========================================================================
    # Helpers
    # =========================================================================

    def _parse(self, path: Path) -> ET.Element:
        try:
            return ET.parse(path).getroot()
        except ET.ParseError as e:
            raise GraficoError(f"Malformed grafico file {path}: {e}") from e

    def _require_id(self, node: ET.Element, path: Path) -> str:
        object_id = node.get("id")
        if not object_id:
            raise GraficoError(f"Missing identifier in {path}")
        return object_id

    def _register(self, element: Element, path: Path):
        if element.id in self._index:
            raise GraficoError(f"Duplicate identifier '{element.id}' in {path}")
        self._index[element.id] = element

    def _collect_references(self, element: Element, node: ET.Element):
        for ref in node.findall("reference"):
            href = ref.get("href")
            if href:
                self._pending.append((element, ref.get("role", ""), href))

    def _documentation(self, node: ET.Element) -> str:
        doc = node.find("documentation")
        return doc.text or "" if doc is not None else ""

    def _properties(self, node: ET.Element) -> Dict[str, str]:
        return {p.get("key", ""): p.get("value", "") for p in node.findall("property")}
