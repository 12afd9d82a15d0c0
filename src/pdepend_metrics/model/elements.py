"""Code element model.

Elements form a hierarchy owned by a Project:

    Project (root, project-level metrics)
        └── package
                └── class
                        └── operation

Each element is identified by an ElementKey (kind + qualified name) and
carries an optional Location and a metric map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)

Number = Union[int, float]


class ElementKind(Enum):
    """The three kinds of code element."""

    PACKAGE = "package"
    CLASS = "class"
    OPERATION = "operation"


@dataclass(frozen=True)
class ElementKey:
    """Unique identifier of an element within one project run.

    Name conventions:
        PACKAGE    - package name              e.g. Acme\\Lib, +global
        CLASS      - package\\class             e.g. Acme\\Lib\\Widget
        OPERATION  - class::method             e.g. Acme\\Lib\\Widget::render
    """

    kind: ElementKind
    name: str

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.name}"


@dataclass(frozen=True)
class Location:
    """A file path relative to the project root."""

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(eq=False)
class CodeElement:
    """A package, class or operation with its metrics and children.

    Identity matters: the registry hands out one instance per key, so
    equality is object identity.
    """

    key: ElementKey
    location: Optional[Location] = None
    metrics: dict[str, Number] = field(default_factory=dict)
    _children: dict[ElementKey, CodeElement] = field(default_factory=dict, repr=False)

    @property
    def kind(self) -> ElementKind:
        """Shortcut to self.key.kind."""
        return self.key.kind

    @property
    def name(self) -> str:
        """Shortcut to self.key.name."""
        return self.key.name

    @property
    def children(self) -> list[CodeElement]:
        """Children in insertion order."""
        return list(self._children.values())

    def add_child(self, child: CodeElement) -> bool:
        """Add a child once. Returns False if it was already present."""
        if child.key in self._children:
            return False
        self._children[child.key] = child
        return True

    def set_location(self, location: Location) -> None:
        """Set the location. The first location set wins."""
        if self.location is None:
            self.location = location
        elif self.location != location:
            logger.debug(
                "Keeping location %s for %s, ignoring %s", self.location, self.key, location
            )

    def set_metric(self, name: str, value: Number) -> None:
        """Set a metric, replacing any earlier value with the same name."""
        self.metrics[name] = value

    def get_metric(self, name: str, default: Optional[Number] = None) -> Optional[Number]:
        return self.metrics.get(name, default)
