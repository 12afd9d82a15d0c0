"""JSON-ready views of a populated Project."""

from __future__ import annotations

from typing import Any

from .model import CodeElement, Project


def element_to_dict(element: CodeElement) -> dict[str, Any]:
    return {
        "kind": element.kind.value,
        "name": element.name,
        "location": str(element.location) if element.location else None,
        "metrics": dict(element.metrics),
        "children": [str(child.key) for child in element.children],
    }


def project_to_dict(project: Project) -> dict[str, Any]:
    """Project metrics plus every element in creation order."""
    return {
        "dir": project.dir,
        "metrics": dict(project.metrics),
        "elements": [element_to_dict(e) for e in project.registry],
    }
