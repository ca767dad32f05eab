# src/accessibility_checker/dom/models.py
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, PrivateAttr

from .core import ElementNode, Node


class DocumentIndex:
    """
    Whole-document query surface, built once per analysis pass.

    Holds the lookups rules need beyond the element they inspect: all elements
    by tag, by id, labels by their `for` target, document order and parent links.
    The index is read-only once built.
    """

    def __init__(self, roots: Iterable[ElementNode]):
        self.roots = list(roots)
        self.elements: List[ElementNode] = []
        self._by_tag: Dict[str, List[ElementNode]] = defaultdict(list)
        self._by_id: Dict[str, List[ElementNode]] = defaultdict(list)
        self._labels_by_for: Dict[str, List[ElementNode]] = defaultdict(list)
        self._ordinals: Dict[int, int] = {}
        self._parents: Dict[int, ElementNode] = {}

        for root in self.roots:
            self._index(root, None)

    def _index(self, node: ElementNode, parent: Optional[ElementNode]) -> None:
        # Iterative pre-order walk; deep documents must not hit the recursion limit
        stack = [(node, parent)]
        while stack:
            element, parent_el = stack.pop()
            self._ordinals[id(element)] = len(self.elements)
            self.elements.append(element)
            if parent_el is not None:
                self._parents[id(element)] = parent_el

            self._by_tag[element.name].append(element)

            el_id = element.get("id")
            if el_id is not None:
                self._by_id[el_id].append(element)

            if element.name == "label":
                target = element.get("for")
                if target is not None:
                    self._labels_by_for[target].append(element)

            for child in reversed(element.element_children()):
                stack.append((child, element))

    # --- Global queries ---

    def by_tag(self, *tags: str) -> List[ElementNode]:
        """Elements with any of the given tag names, in document order."""
        if len(tags) == 1:
            return list(self._by_tag.get(tags[0].lower(), []))
        found = [el for t in tags for el in self._by_tag.get(t.lower(), [])]
        return sorted(found, key=self.ordinal)

    def count_id(self, el_id: str) -> int:
        return len(self._by_id.get(el_id, []))

    def labels_for(self, el_id: Optional[str]) -> List[ElementNode]:
        """Label elements whose `for` attribute equals the given id."""
        if el_id is None:
            return []
        return list(self._labels_by_for.get(el_id, []))

    # --- Tree-relative queries ---

    def ordinal(self, element: ElementNode) -> int:
        return self._ordinals[id(element)]

    def parent(self, element: ElementNode) -> Optional[ElementNode]:
        return self._parents.get(id(element))

    def ancestors(self, element: ElementNode) -> List[ElementNode]:
        """Ancestors from the closest parent up to the root."""
        result = []
        current = self.parent(element)
        while current is not None:
            result.append(current)
            current = self.parent(current)
        return result

    def closest(self, element: ElementNode, tag: str) -> Optional[ElementNode]:
        for ancestor in self.ancestors(element):
            if ancestor.name == tag:
                return ancestor
        return None

    def siblings(self, element: ElementNode) -> List[ElementNode]:
        parent = self.parent(element)
        if parent is None:
            return []
        return [el for el in parent.element_children() if el is not element]

    def __len__(self) -> int:
        return len(self.elements)


class HTMLDocument(BaseModel):
    """
    A parsed HTML document ready for auditing.

    `nodes` are the top-level nodes of the parse (normally a single <html>
    element, but fragments may have several). The index is computed on first
    access and reused by every rule of the pass.
    """
    path: str = ""
    title: str = ""
    nodes: List[Node] = Field(default_factory=list)

    _index: Optional[DocumentIndex] = PrivateAttr(default=None)

    @property
    def roots(self) -> List[ElementNode]:
        return [n for n in self.nodes if isinstance(n, ElementNode)]

    @property
    def root(self) -> Optional[ElementNode]:
        roots = self.roots
        return roots[0] if roots else None

    @property
    def index(self) -> DocumentIndex:
        if self._index is None:
            self._index = DocumentIndex(self.roots)
        return self._index
