"""Tests for the pdepend-metrics exception hierarchy."""

import pytest

from pdepend_metrics.exceptions import (
    ConfigurationError,
    ExecutionError,
    ExternalToolFailure,
    InvalidConfigError,
    MalformedReport,
    MissingRootNode,
    PdependMetricsError,
    ProcessIdleTimeout,
    ProcessLaunchError,
    ProcessTimeout,
    ReportError,
    ReportReadError,
)


class TestHierarchy:
    """Every error is catchable at its family and at the base."""

    @pytest.mark.parametrize(
        "error_cls,family",
        [
            (ProcessLaunchError, ExecutionError),
            (ProcessTimeout, ExecutionError),
            (ProcessIdleTimeout, ProcessTimeout),
            (ExternalToolFailure, ExecutionError),
            (ReportReadError, ReportError),
            (MalformedReport, ReportError),
            (MissingRootNode, ReportError),
            (InvalidConfigError, ConfigurationError),
        ],
    )
    def test_family(self, error_cls, family):
        assert issubclass(error_cls, family)
        assert issubclass(error_cls, PdependMetricsError)

    def test_families_are_distinct(self):
        assert not issubclass(ExecutionError, ReportError)
        assert not issubclass(ReportError, ExecutionError)


class TestMessages:
    def test_base_without_details(self):
        assert str(PdependMetricsError("boom")) == "boom"

    def test_base_with_details(self):
        err = PdependMetricsError("boom", details={"a": "1", "b": "2"})
        assert str(err) == "boom (a=1, b=2)"

    def test_launch_error(self):
        err = ProcessLaunchError(["pdepend", "--summary-xml=x"], "No such file or directory")
        assert err.command == ["pdepend", "--summary-xml=x"]
        assert err.reason == "No such file or directory"
        assert str(err).startswith("Cannot launch pdepend")

    def test_timeouts(self):
        overall = ProcessTimeout(("pdepend",), 3600.0, output="tail")
        idle = ProcessIdleTimeout(("pdepend",), 2.5)
        assert overall.message == "Process exceeded the timeout of 3600s"
        assert idle.message == "Process exceeded the idle timeout of 2.5s"
        assert overall.output == "tail"
        assert idle.timeout == 2.5

    def test_tool_failure(self):
        err = ExternalToolFailure(["pdepend"], 255, output="PHP Fatal error")
        assert err.exit_code == 255
        assert err.output == "PHP Fatal error"
        assert err.details["exit_code"] == "255"

    def test_malformed_report_line(self):
        assert MalformedReport("unclosed token", line=3).details == {
            "reason": "unclosed token",
            "line": "3",
        }
        assert "line" not in MalformedReport("empty").details

    def test_missing_root(self):
        err = MissingRootNode("metrics", "pdepend")
        assert err.message == "Report has no <metrics> element"
        assert err.found == "pdepend"

    def test_invalid_config(self):
        err = InvalidConfigError("timeout_seconds", -1, "must be positive")
        assert err.key == "timeout_seconds"
        assert err.details["value"] == "-1"
