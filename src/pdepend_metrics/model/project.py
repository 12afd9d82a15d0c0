"""The analysis scope: root directory, project metrics and element registry."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from .elements import CodeElement, ElementKind, Location, Number
from .registry import ElementRegistry


class Project:
    """A project under analysis.

    Owns the ElementRegistry for its run and the project-level metrics.
    """

    def __init__(self, directory: Union[str, Path]):
        self.dir = str(directory).rstrip("/\\") or str(directory)
        self.metrics: dict[str, Number] = {}
        self.registry = ElementRegistry()

    def set_metric(self, name: str, value: Number) -> None:
        """Set a project-level metric, replacing any earlier value."""
        self.metrics[name] = value

    set_simple_valued_metric = set_metric

    def get_metric(self, name: str, default: Optional[Number] = None) -> Optional[Number]:
        return self.metrics.get(name, default)

    def get_or_create_code_element(self, kind: ElementKind, name: str) -> CodeElement:
        return self.registry.get_or_create(kind, name)

    def relative_location(self, filename: str) -> Location:
        """Location of ``filename`` relative to the project root.

        Paths outside the root are kept as given.
        """
        for sep in {os.sep, "/"}:
            prefix = self.dir.rstrip(sep) + sep
            if filename.startswith(prefix):
                return Location(filename[len(prefix):])
        return Location(filename)

    def __repr__(self) -> str:
        return f"Project(dir={self.dir!r}, elements={len(self.registry)})"
