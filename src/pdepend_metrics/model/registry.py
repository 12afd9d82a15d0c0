"""Deduplicated store of code elements for one project run."""

from __future__ import annotations

from typing import Iterator, Optional

from .elements import CodeElement, ElementKey, ElementKind


class ElementRegistry:
    """Maps (kind, qualified name) to exactly one CodeElement.

    Not thread-safe; a run populates it from a single ingestion pass.
    """

    def __init__(self) -> None:
        self._elements: dict[ElementKey, CodeElement] = {}
        self._parents: dict[ElementKey, list[ElementKey]] = {}

    def get_or_create(self, kind: ElementKind, name: str) -> CodeElement:
        """Return the element for ``(kind, name)``, creating it on first use."""
        key = ElementKey(kind, name)
        element = self._elements.get(key)
        if element is None:
            element = CodeElement(key)
            self._elements[key] = element
        return element

    def get(self, kind: ElementKind, name: str) -> Optional[CodeElement]:
        return self._elements.get(ElementKey(kind, name))

    def add_child(self, parent: CodeElement, child: CodeElement) -> None:
        """Record a parent -> child edge. Repeated calls are no-ops."""
        if parent.add_child(child):
            self._parents.setdefault(child.key, []).append(parent.key)

    def parents_of(self, element: CodeElement) -> list[CodeElement]:
        """Elements that list ``element`` as a child, in edge order."""
        return [self._elements[k] for k in self._parents.get(element.key, [])]

    def elements(self, kind: Optional[ElementKind] = None) -> list[CodeElement]:
        """All elements in creation order, optionally filtered by kind."""
        if kind is None:
            return list(self._elements.values())
        return [e for e in self._elements.values() if e.kind == kind]

    def roots(self) -> list[CodeElement]:
        """Elements without a parent."""
        return [e for k, e in self._elements.items() if k not in self._parents]

    def __contains__(self, key: object) -> bool:
        return key in self._elements

    def __iter__(self) -> Iterator[CodeElement]:
        return iter(self._elements.values())

    def __len__(self) -> int:
        return len(self._elements)
