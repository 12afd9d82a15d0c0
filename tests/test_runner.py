"""Tests for ProcessRunner: streaming, exit codes and both timeouts."""

import sys

import pytest

from pdepend_metrics.exceptions import (
    ExternalToolFailure,
    ProcessIdleTimeout,
    ProcessLaunchError,
    ProcessTimeout,
)
from pdepend_metrics.execution import ProcessResult, ProcessRunner

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX pty")


def python(code: str) -> list:
    return [sys.executable, "-c", code]


@pytest.fixture(params=[True, False], ids=["pty", "pipe"])
def use_pty(request):
    return request.param


class TestProcessResult:
    def test_check_passes_on_zero(self):
        result = ProcessResult(("tool",), 0, "", 0.1)
        assert result.succeeded
        assert result.check() is result

    def test_check_raises_on_non_zero(self):
        result = ProcessResult(("tool", "--x"), 3, "boom", 0.1)
        with pytest.raises(ExternalToolFailure) as exc_info:
            result.check()
        assert exc_info.value.exit_code == 3
        assert exc_info.value.output == "boom"
        assert exc_info.value.command == ["tool", "--x"]


@posix_only
class TestProcessRunner:
    def test_streams_lines_in_order(self, use_pty):
        lines = []
        runner = ProcessRunner(timeout=30, idle_timeout=10, log_sink=lines.append, use_pty=use_pty)
        result = runner.run(python("print('one'); print('two'); print('three')"))
        assert result.exit_code == 0
        assert lines == ["one", "two", "three"]
        assert result.output == "one\ntwo\nthree"

    def test_stderr_is_streamed(self, use_pty):
        lines = []
        runner = ProcessRunner(timeout=30, idle_timeout=10, log_sink=lines.append, use_pty=use_pty)
        runner.run(python("import sys; sys.stderr.write('warn\\n')"))
        assert lines == ["warn"]

    def test_trailing_partial_line_is_flushed(self, use_pty):
        lines = []
        runner = ProcessRunner(timeout=30, idle_timeout=10, log_sink=lines.append, use_pty=use_pty)
        runner.run(python("import sys; sys.stdout.write('no newline')"))
        assert lines == ["no newline"]

    def test_lines_arrive_while_running(self):
        seen_at = []
        import time

        def sink(line):
            seen_at.append((line, time.monotonic()))

        runner = ProcessRunner(timeout=30, idle_timeout=10, log_sink=sink, use_pty=True)
        start = time.monotonic()
        result = runner.run(
            python("import time\nprint('early')\ntime.sleep(1.0)\nprint('late')")
        )
        assert [line for line, _ in seen_at] == ["early", "late"]
        # 'early' was delivered well before the process finished.
        assert seen_at[0][1] - start < result.elapsed_seconds - 0.5

    def test_non_zero_exit_is_reported(self, use_pty):
        runner = ProcessRunner(timeout=30, idle_timeout=10, log_sink=lambda _: None, use_pty=use_pty)
        result = runner.run(python("import sys; print('failing'); sys.exit(4)"))
        assert result.exit_code == 4
        assert not result.succeeded
        with pytest.raises(ExternalToolFailure):
            result.check()

    def test_tail_is_bounded(self):
        runner = ProcessRunner(
            timeout=30, idle_timeout=10, log_sink=lambda _: None, use_pty=False, tail_lines=3
        )
        result = runner.run(python("for i in range(10): print(i)"))
        assert result.output == "7\n8\n9"

    def test_idle_timeout(self, use_pty):
        runner = ProcessRunner(timeout=30, idle_timeout=0.5, log_sink=lambda _: None, use_pty=use_pty)
        with pytest.raises(ProcessIdleTimeout) as exc_info:
            runner.run(python("print('started', flush=True)\nimport time\ntime.sleep(20)"))
        assert exc_info.value.timeout == 0.5
        assert exc_info.value.output == "started"

    def test_overall_timeout(self, use_pty):
        runner = ProcessRunner(timeout=1.0, idle_timeout=0.5, log_sink=lambda _: None, use_pty=use_pty)
        chatty = "import time\nwhile True:\n    print('tick', flush=True)\n    time.sleep(0.1)"
        with pytest.raises(ProcessTimeout) as exc_info:
            runner.run(python(chatty))
        assert type(exc_info.value) is ProcessTimeout
        assert exc_info.value.timeout == 1.0

    def test_launch_failure(self, tmp_path, use_pty):
        runner = ProcessRunner(log_sink=lambda _: None, use_pty=use_pty)
        with pytest.raises(ProcessLaunchError) as exc_info:
            runner.run([str(tmp_path / "missing-pdepend")])
        assert "missing-pdepend" in exc_info.value.message

    def test_empty_command(self):
        with pytest.raises(ProcessLaunchError):
            ProcessRunner(log_sink=lambda _: None).run([])

    def test_non_positive_timeouts_rejected(self):
        with pytest.raises(ValueError):
            ProcessRunner(timeout=0)
        with pytest.raises(ValueError):
            ProcessRunner(idle_timeout=0)
