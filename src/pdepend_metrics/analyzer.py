"""Gathers metrics for a PHP project using PDepend."""

from __future__ import annotations

from typing import Optional

from .config import AnalyzerConfig
from .execution import ProcessRunner, ReportFile, build_command
from .ingest import IngestSummary, ingest_report
from .logging_config import LogSink, get_logger, logger_sink
from .model import Project
from .report import parse_report

logger = get_logger(__name__)


class PDependAnalyzer:
    """Runs PDepend on a project and attaches its summary metrics.

    The pipeline is synchronous: build command, run in the project root
    (bounded by both timeouts), check the exit status, read and delete the report, parse,
    ingest. Any failure aborts the run before the project is touched.
    """

    name = "php_pdepend"
    description = "Analyzes the size and structure of a PHP project."

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        log_sink: Optional[LogSink] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        self.config = config or AnalyzerConfig()
        self.log_sink = log_sink or logger_sink()
        self.runner = runner or ProcessRunner(
            timeout=self.config.timeout_seconds,
            idle_timeout=self.config.idle_timeout_seconds,
            log_sink=self.log_sink,
            use_pty=self.config.use_pty,
        )

    def scrutinize(self, project: Project) -> IngestSummary:
        """Analyze ``project`` and populate its metrics and elements.

        Raises:
            ProcessLaunchError, ProcessTimeout, ProcessIdleTimeout,
            ExternalToolFailure: The tool could not produce a trusted report.
            ReportReadError, MalformedReport, MissingRootNode: The report
                could not be interpreted.
        """
        with ReportFile() as report_file:
            command = build_command(self.config, report_file.path, project.dir)
            result = self.runner.run(command, cwd=project.dir)
            result.check()
            raw = report_file.read()

        report = parse_report(raw)
        logger.debug(
            "PDepend %s report generated %s",
            report.pdepend_version or "(unknown version)",
            report.generated or "(no timestamp)",
        )
        return ingest_report(project, report)
