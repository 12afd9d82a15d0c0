"""Summary report parsing."""

from .nodes import ClassNode, MethodNode, MetricsNode, PackageNode, Report, ReportNode
from .parser import parse_report

__all__ = [
    "ClassNode",
    "MethodNode",
    "MetricsNode",
    "PackageNode",
    "Report",
    "ReportNode",
    "parse_report",
]
