"""Running PDepend: command line, process supervision, report file."""

from .command import build_command
from .report_file import ReportFile
from .runner import ProcessResult, ProcessRunner

__all__ = ["ProcessResult", "ProcessRunner", "ReportFile", "build_command"]
