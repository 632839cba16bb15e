"""
Model — In-memory object graph decoded from grafico files

Every node carries a stable identifier assigned at creation.
A fresh decode always produces fresh instances: two Model objects for
the same working directory are never the same object, so anything that
survives a reload (open editors, restored objects) is matched by id.

Structure:
    Model
    └── Folder (type="business")
        ├── Element (kind="BusinessActor")
        └── Folder
            └── Element (kind="DiagramModel")  → references elements
"""

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Dict, Any, Iterator

import orjson
import xxhash


# Element kinds that can be opened in a visual editor
VIEW_KINDS = frozenset({"DiagramModel", "SketchModel", "CanvasModel"})

FOLDER_KIND = "Folder"


def new_id() -> str:
    """Generate a new globally unique element identifier."""
    return f"id-{uuid.uuid4().hex}"


@dataclass
class Reference:
    """A resolved cross-reference from one element to another."""
    role: str
    target: 'Element'


@dataclass(eq=False)
class Element:
    """An identifiable node of the model graph."""
    kind: str
    name: str = ""
    id: str = field(default_factory=new_id)
    documentation: str = ""
    properties: Dict[str, str] = field(default_factory=dict)
    references: List[Reference] = field(default_factory=list)
    parent: Optional['Folder'] = field(default=None, repr=False)

    @property
    def model(self) -> Optional['Model']:
        """The model this element belongs to (via its folder chain)."""
        node = self
        while node.parent is not None:
            node = node.parent
        return getattr(node, "owner", None)

    @property
    def is_viewable(self) -> bool:
        return self.kind in VIEW_KINDS

    def add_reference(self, role: str, target: 'Element') -> Reference:
        ref = Reference(role=role, target=target)
        self.references.append(ref)
        return ref

    def targets(self, role: Optional[str] = None) -> List['Element']:
        """Referenced elements, optionally filtered by role."""
        return [r.target for r in self.references if role is None or r.role == role]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "name": self.name,
            "documentation": self.documentation,
            "properties": dict(self.properties),
            "references": [{"role": r.role, "target": r.target.id} for r in self.references],
        }


@dataclass(eq=False)
class Folder(Element):
    """A folder grouping elements and sub-folders."""
    kind: str = FOLDER_KIND
    type: str = ""
    children: List[Element] = field(default_factory=list)
    owner: Optional['Model'] = field(default=None, repr=False)

    def add(self, element: Element) -> Element:
        element.parent = self
        self.children.append(element)
        return element

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["type"] = self.type
        data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass(eq=False)
class Model:
    """
    A decoded model.

    `file` is where the host saves the model snapshot; it is the model's
    logical identity across reloads.
    """
    name: str = ""
    id: str = field(default_factory=new_id)
    documentation: str = ""
    properties: Dict[str, str] = field(default_factory=dict)
    folders: List[Folder] = field(default_factory=list)
    file: Optional[Path] = None

    def add_folder(self, folder: Folder) -> Folder:
        folder.parent = None
        folder.owner = self
        self.folders.append(folder)
        return folder

    def all_contents(self) -> Iterator[Element]:
        """Depth-first iteration over every folder and element."""
        stack: List[Element] = list(reversed(self.folders))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Folder):
                stack.extend(reversed(node.children))

    def get_object_by_id(self, object_id: str) -> Optional[Element]:
        for element in self.all_contents():
            if element.id == object_id:
                return element
        return None

    def remove(self, element: Element) -> bool:
        """
        Detach an element (and its contents) from the model.

        References held by remaining elements that pointed into the
        removed subtree are dropped as well.
        """
        if isinstance(element, Folder) and element in self.folders:
            self.folders.remove(element)
            element.owner = None
        elif element.parent is not None and element in element.parent.children:
            element.parent.children.remove(element)
            element.parent = None
        else:
            return False

        removed = {element.id}
        if isinstance(element, Folder):
            stack: List[Element] = list(element.children)
            while stack:
                node = stack.pop()
                removed.add(node.id)
                if isinstance(node, Folder):
                    stack.extend(node.children)

        for other in self.all_contents():
            other.references = [r for r in other.references if r.target.id not in removed]

        return True

    def count(self) -> int:
        return sum(1 for e in self.all_contents() if not isinstance(e, Folder))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "documentation": self.documentation,
            "properties": dict(self.properties),
            "folders": [folder.to_dict() for folder in self.folders],
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict(), option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2)

    def fingerprint(self) -> str:
        """Content hash, stable for equal content (used for dirty tracking)."""
        return xxhash.xxh64(orjson.dumps(self.to_dict(), option=orjson.OPT_SORT_KEYS)).hexdigest()
