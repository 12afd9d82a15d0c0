"""Project and code element model."""

from .elements import CodeElement, ElementKey, ElementKind, Location, Number
from .project import Project
from .registry import ElementRegistry

__all__ = [
    "CodeElement",
    "ElementKey",
    "ElementKind",
    "ElementRegistry",
    "Location",
    "Number",
    "Project",
]
