"""Run the external tool with an overall and an idle timeout.

Output is read incrementally and handed to a log sink line by line while
the process is alive. On POSIX the child is attached to a pseudo-terminal
so that it line-buffers its output instead of flushing only at exit.
"""

from __future__ import annotations

import codecs
import errno
import os
import selectors
import signal
import subprocess
import sys
import time
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from ..config import DEFAULT_IDLE_TIMEOUT_SECONDS, DEFAULT_TIMEOUT_SECONDS
from ..exceptions import (
    ExternalToolFailure,
    ProcessIdleTimeout,
    ProcessLaunchError,
    ProcessTimeout,
)
from ..logging_config import LogSink, get_logger, logger_sink

logger = get_logger(__name__)

PTY_SUPPORTED = sys.platform != "win32"

# Lines of output kept for error reports.
DEFAULT_TAIL_LINES = 200

_READ_SIZE = 4096


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a process that ran to completion."""

    command: tuple[str, ...]
    exit_code: int
    output: str
    elapsed_seconds: float

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def check(self) -> ProcessResult:
        """Raise ExternalToolFailure unless the exit code is 0."""
        if self.exit_code != 0:
            raise ExternalToolFailure(self.command, self.exit_code, self.output)
        return self


class _LineBuffer:
    """Splits a byte stream into lines and forwards them to a sink."""

    def __init__(self, sink: LogSink, tail_lines: int):
        self._sink = sink
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._partial = ""
        self.tail: deque[str] = deque(maxlen=tail_lines)

    def feed(self, chunk: bytes) -> None:
        text = self._partial + self._decoder.decode(chunk)
        *lines, self._partial = text.split("\n")
        for line in lines:
            self._emit(line)

    def flush(self) -> None:
        text = self._partial + self._decoder.decode(b"", final=True)
        self._partial = ""
        if text:
            self._emit(text)

    def _emit(self, line: str) -> None:
        line = line.rstrip("\r")
        self.tail.append(line)
        self._sink(line)

    @property
    def output(self) -> str:
        return "\n".join(self.tail)


class ProcessRunner:
    """Runs one command to completion, streaming its output.

    Args:
        timeout: Overall wall-clock bound in seconds.
        idle_timeout: Maximum seconds without any output.
        log_sink: Receives each output line as it arrives.
        use_pty: Attach the child to a pseudo-terminal (POSIX only).
        tail_lines: Lines of output kept for ProcessResult.output.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT_SECONDS,
        log_sink: Optional[LogSink] = None,
        use_pty: bool = True,
        tail_lines: int = DEFAULT_TAIL_LINES,
    ):
        if timeout <= 0 or idle_timeout <= 0:
            raise ValueError("timeouts must be positive")
        self.timeout = timeout
        self.idle_timeout = idle_timeout
        self.log_sink: LogSink = log_sink or logger_sink()
        self.use_pty = use_pty and PTY_SUPPORTED
        self.tail_lines = tail_lines

    def run(
        self,
        command: Sequence[str],
        cwd: Optional[Union[str, Path]] = None,
        env: Optional[dict[str, str]] = None,
    ) -> ProcessResult:
        """Run ``command`` and return once it exits.

        Raises:
            ProcessLaunchError: If the command cannot be started.
            ProcessTimeout: If the overall timeout is exceeded.
            ProcessIdleTimeout: If no output arrives within the idle timeout.
        """
        command = tuple(command)
        if not command:
            raise ProcessLaunchError(command, "empty command")

        logger.debug("Running %s", " ".join(command))
        start = time.monotonic()
        proc, fd = self._spawn(command, cwd, env)
        buffer = _LineBuffer(self.log_sink, self.tail_lines)
        selector = selectors.DefaultSelector()
        selector.register(fd, selectors.EVENT_READ)

        try:
            last_output = start
            while True:
                wait = self._remaining(command, proc, buffer, start, last_output)
                if not selector.select(wait):
                    continue
                chunk = _read(fd)
                if not chunk:
                    break
                last_output = time.monotonic()
                buffer.feed(chunk)

            buffer.flush()

            while True:
                wait = self._remaining(command, proc, buffer, start, last_output)
                try:
                    exit_code = proc.wait(timeout=wait)
                    break
                except subprocess.TimeoutExpired:
                    continue
        finally:
            selector.close()
            self._close(proc, fd)
            if proc.poll() is None:
                _terminate(proc)

        elapsed = time.monotonic() - start
        logger.debug("Process exited with %d after %.1fs", exit_code, elapsed)
        return ProcessResult(
            command=command,
            exit_code=exit_code,
            output=buffer.output,
            elapsed_seconds=elapsed,
        )

    def _remaining(
        self,
        command: tuple[str, ...],
        proc: subprocess.Popen,
        buffer: _LineBuffer,
        start: float,
        last_output: float,
    ) -> float:
        """Seconds until the nearest deadline; kills and raises once one has passed."""
        now = time.monotonic()
        overall_left = start + self.timeout - now
        idle_left = last_output + self.idle_timeout - now

        if overall_left <= 0:
            _terminate(proc)
            raise ProcessTimeout(command, self.timeout, buffer.output)
        if idle_left <= 0:
            _terminate(proc)
            raise ProcessIdleTimeout(command, self.idle_timeout, buffer.output)
        return min(overall_left, idle_left)

    def _spawn(
        self,
        command: tuple[str, ...],
        cwd: Optional[Union[str, Path]],
        env: Optional[dict[str, str]],
    ) -> tuple[subprocess.Popen, int]:
        env2 = None
        if env is not None:
            env2 = os.environ.copy()
            env2.update(env)

        if self.use_pty:
            import pty

            master, slave = pty.openpty()
            try:
                proc = subprocess.Popen(
                    command,
                    cwd=str(cwd) if cwd else None,
                    env=env2,
                    stdin=subprocess.DEVNULL,
                    stdout=slave,
                    stderr=slave,
                    start_new_session=True,
                )
            except OSError as e:
                os.close(master)
                raise ProcessLaunchError(command, e.strerror or str(e)) from e
            finally:
                os.close(slave)
            return proc, master

        try:
            proc = subprocess.Popen(
                command,
                cwd=str(cwd) if cwd else None,
                env=env2,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                start_new_session=PTY_SUPPORTED,
            )
        except OSError as e:
            raise ProcessLaunchError(command, e.strerror or str(e)) from e
        assert proc.stdout is not None
        return proc, proc.stdout.fileno()

    def _close(self, proc: subprocess.Popen, fd: int) -> None:
        if self.use_pty:
            os.close(fd)
        elif proc.stdout is not None:
            proc.stdout.close()


def _read(fd: int) -> bytes:
    try:
        return os.read(fd, _READ_SIZE)
    except OSError as e:
        # Linux reports EIO on the master side once the child side is closed.
        if e.errno == errno.EIO:
            return b""
        raise


def _terminate(proc: subprocess.Popen) -> None:
    """Kill the process (and its session on POSIX) and reap it."""
    if proc.poll() is not None:
        return
    try:
        if PTY_SUPPORTED:
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        pass
    proc.wait()
