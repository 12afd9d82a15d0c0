"""
pdepend-metrics - PHP PDepend results as a project metrics hierarchy

Runs PDepend against a source tree, parses its summary report and attaches
the measurements to packages, classes and operations.
"""

__version__ = "0.1.0"

from .analyzer import PDependAnalyzer
from .config import AnalyzerConfig, load_config
from .ingest import IngestSummary, ingest_report
from .model import CodeElement, ElementKind, Location, Project
from .report import parse_report

__all__ = [
    "PDependAnalyzer",  # Main entry point
    "AnalyzerConfig",
    "load_config",
    "Project",
    "CodeElement",
    "ElementKind",
    "Location",
    "IngestSummary",
    "ingest_report",
    "parse_report",
]
