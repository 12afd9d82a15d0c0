"""Typed handles over the nodes of a PDepend summary report.

    <metrics ...>                 MetricsNode   project-level attributes
      <package name=...>          PackageNode
        <class name=...>          ClassNode
          <file name=.../>          ClassNode.file
          <method name=.../>      MethodNode

Attribute lookup never fails: an absent attribute reads as ``""`` and
coerces to ``0`` or ``0.0``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..model import Number


def to_int(text: str) -> int:
    """Coerce attribute text to int; empty or non-numeric text is 0.

    Float text is truncated toward zero (``"3.7"`` -> ``3``).
    """
    text = text.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return 0


def to_float(text: str) -> float:
    """Coerce attribute text to float; empty, non-numeric or non-finite text is 0.0."""
    text = text.strip()
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


@dataclass
class ReportNode:
    """An XML element reduced to its attributes."""

    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.get("name")

    def get(self, attribute: str) -> str:
        """Raw attribute text, or ``""`` when absent."""
        return self.attributes.get(attribute, "")

    def get_int(self, attribute: str) -> int:
        return to_int(self.get(attribute))

    def get_float(self, attribute: str) -> float:
        return to_float(self.get(attribute))

    def value(self, attribute: str, dtype: type) -> Number:
        """Attribute coerced to ``dtype`` (``int`` or ``float``)."""
        if dtype is int:
            return self.get_int(attribute)
        if dtype is float:
            return self.get_float(attribute)
        raise TypeError(f"Unsupported metric type: {dtype!r}")


@dataclass
class MethodNode(ReportNode):
    pass


@dataclass
class ClassNode(ReportNode):
    file: Optional[str] = None
    methods: list[MethodNode] = field(default_factory=list)


@dataclass
class PackageNode(ReportNode):
    classes: list[ClassNode] = field(default_factory=list)


@dataclass
class MetricsNode(ReportNode):
    packages: list[PackageNode] = field(default_factory=list)


@dataclass
class Report:
    """A parsed summary report."""

    metrics: MetricsNode

    @property
    def packages(self) -> list[PackageNode]:
        return self.metrics.packages

    @property
    def generated(self) -> Optional[str]:
        """Generation timestamp written by PDepend, if any."""
        return self.metrics.get("generated") or None

    @property
    def pdepend_version(self) -> Optional[str]:
        return self.metrics.get("pdepend") or None

    def walk(self) -> Iterator[ReportNode]:
        """Nodes in ingestion order: metrics, then each package depth-first."""
        yield self.metrics
        for package in self.metrics.packages:
            yield package
            for cls in package.classes:
                yield cls
                yield from cls.methods
