"""Execution errors: launching and supervising the external tool."""

from typing import Sequence

from .base import PdependMetricsError


class ExecutionError(PdependMetricsError):
    """Base class for errors raised while running the external tool."""

    pass


class ProcessLaunchError(ExecutionError):
    """Raised when the executable cannot be found or started."""

    def __init__(self, command: Sequence[str], reason: str):
        super().__init__(
            f"Cannot launch {command[0] if command else '<empty command>'}",
            details={"command": " ".join(command), "reason": reason},
        )
        self.command = list(command)
        self.reason = reason


class ProcessTimeout(ExecutionError):
    """Raised when the process runs longer than the overall timeout."""

    kind = "timeout"

    def __init__(self, command: Sequence[str], timeout: float, output: str = ""):
        super().__init__(
            f"Process exceeded the {self.kind} of {timeout:g}s",
            details={"command": " ".join(command), "timeout": f"{timeout:g}"},
            output=output,
        )
        self.command = list(command)
        self.timeout = timeout


class ProcessIdleTimeout(ProcessTimeout):
    """Raised when the process produces no output within the idle timeout."""

    kind = "idle timeout"


class ExternalToolFailure(ExecutionError):
    """Raised when the tool exits with a non-zero code."""

    def __init__(self, command: Sequence[str], exit_code: int, output: str = ""):
        super().__init__(
            f"External tool failed with exit code {exit_code}",
            details={"command": " ".join(command), "exit_code": str(exit_code)},
            output=output,
        )
        self.command = list(command)
        self.exit_code = exit_code
