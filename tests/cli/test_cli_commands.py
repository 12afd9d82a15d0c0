"""Tests for the analyze and ingest commands."""

import json

import pytest
from typer.testing import CliRunner

from pdepend_metrics.cli import app


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def report_path(tmp_path, sample_report):
    path = tmp_path / "summary.xml"
    path.write_text(sample_report)
    return path


class TestIngestCommand:
    def test_json_output(self, runner, report_path, project_root):
        result = runner.invoke(app, ["ingest", str(report_path), "--root", str(project_root), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"] == {"packages": 2, "classes": 2, "operations": 3}
        assert data["metrics"]["pdepend.lines_of_code"] == 250
        widget = next(e for e in data["elements"] if e["name"] == "Acme\\Lib\\Widget")
        assert widget["location"] == "src/Widget.php"

    def test_report_file_is_kept(self, runner, report_path, project_root):
        runner.invoke(app, ["ingest", str(report_path), "-r", str(project_root), "--json"])
        assert report_path.exists()

    def test_table_output(self, runner, report_path, project_root):
        result = runner.invoke(app, ["ingest", str(report_path), "-r", str(project_root)])

        assert result.exit_code == 0, result.output
        assert "Project metrics" in result.output
        assert "Widget" in result.output

    def test_malformed_report(self, runner, tmp_path, project_root):
        bad = tmp_path / "bad.xml"
        bad.write_text("<metrics><package>")

        result = runner.invoke(app, ["ingest", str(bad), "-r", str(project_root)])

        assert result.exit_code == 1
        assert "not well-formed" in result.output

    def test_missing_file(self, runner, tmp_path, project_root):
        result = runner.invoke(app, ["ingest", str(tmp_path / "nope.xml"), "-r", str(project_root)])
        assert result.exit_code != 0


class TestAnalyzeCommand:
    def test_json_output(self, runner, fake_tool, sample_report, project_root, report_tmpdir):
        fake_tool.write(report=sample_report)

        result = runner.invoke(
            app,
            ["analyze", str(project_root), "--command", fake_tool.command, "--json", "-s", "*.php"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["classes"] == 2
        assert "--suffix=php" in fake_tool.received_args
        assert list(report_tmpdir.iterdir()) == []

    def test_tool_failure_exits_1(self, runner, fake_tool, project_root, report_tmpdir):
        fake_tool.write(report="<metrics/>", exit_code=3, lines=("Something broke",))

        result = runner.invoke(app, ["analyze", str(project_root), "--command", fake_tool.command])

        assert result.exit_code == 1
        assert "exit code 3" in result.output
        assert "Something broke" in result.output

    def test_invalid_config_file(self, runner, tmp_path, project_root):
        config = tmp_path / "bad.toml"
        config.write_text("timeout_seconds = -5\n")

        result = runner.invoke(app, ["analyze", str(project_root), "--config", str(config)])

        assert result.exit_code == 1
        assert "timeout_seconds" in result.output
