"""Populate a Project from a parsed summary report.

Walks the report top-down (project -> package -> class -> method), resolving
each node to its element through the project's registry and writing the
node's attributes through the metric tables.
"""

from __future__ import annotations

from dataclasses import dataclass

from .logging_config import get_logger
from .metrics import (
    CLASS_METRICS,
    OPERATION_METRICS,
    PACKAGE_METRICS,
    PROJECT_METRICS,
    apply_metrics,
)
from .model import CodeElement, ElementKind, Project
from .report import ClassNode, PackageNode, Report

logger = get_logger(__name__)

GLOBAL_PACKAGE = "+global"
NAMESPACE_SEPARATOR = "\\"
OPERATION_SEPARATOR = "::"


@dataclass
class IngestSummary:
    """Counts of report nodes visited during one ingestion."""

    packages: int = 0
    classes: int = 0
    operations: int = 0

    def to_dict(self) -> dict:
        return {
            "packages": self.packages,
            "classes": self.classes,
            "operations": self.operations,
        }


def package_name(node: PackageNode) -> str:
    return node.name or GLOBAL_PACKAGE


def class_name(package: str, node: ClassNode) -> str:
    return f"{package}{NAMESPACE_SEPARATOR}{node.name}"


def operation_name(class_qualified_name: str, method: str) -> str:
    return f"{class_qualified_name}{OPERATION_SEPARATOR}{method}"


def ingest_report(project: Project, report: Report) -> IngestSummary:
    """Attach every metric of ``report`` to ``project`` and its elements."""
    summary = IngestSummary()
    apply_metrics(project, report.metrics, PROJECT_METRICS)

    for package_node in report.packages:
        package = project.get_or_create_code_element(
            ElementKind.PACKAGE, package_name(package_node)
        )
        apply_metrics(package, package_node, PACKAGE_METRICS)
        summary.packages += 1

        for class_node in package_node.classes:
            _ingest_class(project, package, class_node, summary)

    logger.info(
        "Ingested %d packages, %d classes, %d operations",
        summary.packages,
        summary.classes,
        summary.operations,
    )
    return summary


def _ingest_class(
    project: Project, package: CodeElement, node: ClassNode, summary: IngestSummary
) -> None:
    registry = project.registry
    cls = registry.get_or_create(ElementKind.CLASS, class_name(package.name, node))
    registry.add_child(package, cls)

    if node.file:
        cls.set_location(project.relative_location(node.file))
    else:
        logger.debug("Class %s has no <file> reference", cls.name)

    apply_metrics(cls, node, CLASS_METRICS)
    summary.classes += 1

    for method_node in node.methods:
        method = registry.get_or_create(
            ElementKind.OPERATION, operation_name(cls.name, method_node.name)
        )
        if cls.location is not None:
            method.set_location(cls.location)
        registry.add_child(cls, method)
        apply_metrics(method, method_node, OPERATION_METRICS)
        summary.operations += 1
