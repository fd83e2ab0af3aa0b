"""Parser for design document JSON exports.

The counter never talks to a live design tool. It works on a JSON export of
the document tree, which can be either:
1. A single page: {"type": "PAGE", "name": ..., "children": [...]}
2. A whole document: {"type": "DOCUMENT", "children": [PAGE, ...], "components": [...]}

Node types that matter here:
- INSTANCE: a placed occurrence of a component (mainComponent -> id or inline node)
- COMPONENT: a reusable definition
- COMPONENT_SET: a variant group whose children are COMPONENT nodes
Everything else (FRAME, GROUP, TEXT, ...) is only walked through.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

INSTANCE = "INSTANCE"
COMPONENT = "COMPONENT"
COMPONENT_SET = "COMPONENT_SET"
PAGE = "PAGE"
DOCUMENT = "DOCUMENT"


@dataclass
class DocNode:
    """A node in the document tree."""
    id: str
    type: str
    name: str = ""
    visible: bool = True
    children: list["DocNode"] = field(default_factory=list)
    properties: dict = field(default_factory=dict)
    parent: "DocNode | None" = field(default=None, repr=False, compare=False)
    main_component: "DocNode | None" = field(default=None, repr=False, compare=False)

    @property
    def is_instance(self) -> bool:
        return self.type == INSTANCE

    @property
    def is_component(self) -> bool:
        return self.type == COMPONENT

    @property
    def is_component_set(self) -> bool:
        return self.type == COMPONENT_SET

    def walk(self):
        """Yield all nodes in the subtree (DFS), self included."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, predicate) -> list["DocNode"]:
        """All descendants (self excluded) matching predicate, in document order."""
        return [n for n in self.walk() if n is not self and predicate(n)]


@dataclass
class DocPage:
    """The page being inventoried."""
    root: DocNode
    source_file: str = ""

    @property
    def name(self) -> str:
        return self.root.name

    @property
    def instances(self) -> list[DocNode]:
        """Instances with a resolvable main component; detached ones are dropped."""
        return self.root.find_all(lambda n: n.is_instance and n.main_component is not None)


def _parse_node(data: dict, parent: DocNode | None = None) -> DocNode:
    """Recursively parse a raw JSON node dict into a DocNode with parent links."""
    skip_keys = {"id", "type", "name", "visible", "children", "parent"}
    node = DocNode(
        id=str(data.get("id", "")),
        type=data.get("type", "FRAME"),
        name=data.get("name") or "",
        visible=bool(data.get("visible", True)),
        properties={k: v for k, v in data.items() if k not in skip_keys},
        parent=parent,
    )

    # Inline parent, used by library components that are not placed in the export
    raw_parent = data.get("parent")
    if parent is None and isinstance(raw_parent, dict):
        node.parent = _parse_node(raw_parent)

    raw_children = data.get("children", [])
    if isinstance(raw_children, list):
        for child_data in raw_children:
            if isinstance(child_data, dict):
                node.children.append(_parse_node(child_data, node))
    return node


def _resolve_instances(nodes: list[DocNode], components: dict[str, DocNode]):
    """Link every INSTANCE under nodes to its main component."""
    for top in nodes:
        for node in top.walk():
            if not node.is_instance:
                continue
            ref = node.properties.get("mainComponent")
            if isinstance(ref, dict):
                node.main_component = _parse_node(ref)
            elif isinstance(ref, str):
                node.main_component = components.get(ref)


def _index_components(nodes: list[DocNode]) -> dict[str, DocNode]:
    index: dict[str, DocNode] = {}
    for top in nodes:
        for node in top.walk():
            if node.is_component and node.id:
                index.setdefault(node.id, node)
    return index


def _select_page(document: DocNode, page: str | None) -> DocNode:
    pages = [n for n in document.children if n.type == PAGE]
    if not pages:
        raise ValueError("Document export contains no pages")
    if page is None:
        return pages[0]
    for p in pages:
        if p.name == page or p.id == page:
            return p
    available = ", ".join(p.name for p in pages)
    raise ValueError(f"Page not found: {page} (available: {available})")


def parse_page_json(data: dict, page: str | None = None) -> DocPage:
    """Parse a page or document export into the DocPage to inventory.

    For document exports, page selects by name or id; the first page is the default.
    Main components are resolved across the whole export, not just the chosen page.
    """
    if not isinstance(data, dict):
        raise ValueError("Export root must be a JSON object")

    root = _parse_node(data)
    library: list[DocNode] = []
    for comp_data in data.get("components", []) or []:
        if isinstance(comp_data, dict):
            library.append(_parse_node(comp_data))

    scope = [root, *library]
    _resolve_instances([root], _index_components(scope))

    if root.type == DOCUMENT:
        return DocPage(root=_select_page(root, page))
    return DocPage(root=root)


def load_page_file(path: str | Path, page: str | None = None) -> DocPage:
    """Load and parse a JSON export file."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(p, encoding="utf-8") as f:
        data = json.load(f)

    doc = parse_page_json(data, page=page)
    doc.source_file = str(p)
    return doc
