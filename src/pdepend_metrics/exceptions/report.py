"""Report errors: reading and interpreting the summary XML."""

from pathlib import Path
from typing import Optional

from .base import PdependMetricsError


class ReportError(PdependMetricsError):
    """Base class for report-related errors."""

    pass


class ReportReadError(ReportError):
    """Raised when the report file cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot read report: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class MalformedReport(ReportError):
    """Raised when the report is not well-formed XML."""

    def __init__(self, reason: str, line: Optional[int] = None):
        details = {"reason": reason}
        if line is not None:
            details["line"] = str(line)

        super().__init__("Report is not well-formed XML", details=details)
        self.reason = reason
        self.line = line


class MissingRootNode(ReportError):
    """Raised when the report has no metrics root element."""

    def __init__(self, expected: str, found: str):
        super().__init__(
            f"Report has no <{expected}> element",
            details={"expected": expected, "found": found},
        )
        self.expected = expected
        self.found = found
