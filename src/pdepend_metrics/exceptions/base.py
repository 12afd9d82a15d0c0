"""Base exception for pdepend-metrics."""

from typing import Dict, Optional


class PdependMetricsError(Exception):
    """Root of every error the analyzer raises.

    Attributes:
        message: One-line summary shown to the user.
        details: Key/value context appended to ``str(error)``.
        output: Tail of the external tool's output, when the error happened
            while or after running it. Empty otherwise.
    """

    def __init__(
        self, message: str, details: Optional[Dict[str, str]] = None, output: str = ""
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.output = output

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
