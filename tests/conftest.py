"""Shared fixtures: sample PDepend reports and a fake pdepend executable."""

import shlex
import sys
import textwrap
from pathlib import Path
from typing import Optional

import pytest

SAMPLE_REPORT = """\
<?xml version="1.0" encoding="UTF-8"?>
<metrics generated="2024-03-01T12:00:00" pdepend="2.16.2" ahh="1.25" andc="0.5"
         calls="42" ccn="17" ccn2="19" cloc="30" clsa="0" clsc="2" eloc="120"
         fanout="3" leafs="2" lloc="80" loc="250" maxDIT="1" ncloc="220" noc="2"
         nof="0" noi="0" nom="3" nop="2" roots="0" hlen="310" hvol="1520.75"
         hbug="0.51" heff="9001.5" mi="68.3" mi2="66.1" mi21="65.9" minc="70.0" minc2="69.5">
  <package name="Acme\\Lib" cr="0.15" noc="1" nof="0" noi="0" nom="2" rcr="0.3"
           hlen="200" hvol="980.5" hbug="0.33" heff="5100.25" mi="71.5">
    <class name="Widget" ca="1" cbo="2" ce="2" cis="2" cloc="5" cr="0.15" csz="3"
           dit="0" eloc="60" impl="1" lloc="40" loc="100" ncloc="95" noam="0" nocc="0"
           nom="2" noom="0" npm="2" rcr="0.3" vars="1" varsi="0" varsnp="1" wmc="4"
           wmci="4" wmcnp="4" hlen="200" hvol="980.5" hbug="0.33" heff="5100.25">
      <file name="{root}/src/Widget.php"/>
      <method name="render" ccn="3" ccn2="4" cloc="2" eloc="20" lloc="12" loc="25"
              ncloc="23" npath="6" hlen="80" hvol="400.5" hbug="0.13" heff="2000.0"
              hvoc="32" hdiff="5.5" op="50" od="30" uop="12" uod="20" mi="60.2"/>
      <method name="__construct" ccn="1" ccn2="1" cloc="0" eloc="3" lloc="2" loc="4"
              ncloc="4" npath="1"/>
    </class>
  </package>
  <package name="">
    <class name="Helper" loc="12">
      <file name="{root}/helpers.php"/>
      <method name="run" ccn="2"/>
    </class>
  </package>
</metrics>
"""


@pytest.fixture
def project_root(tmp_path):
    """An empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def sample_report(project_root):
    """SAMPLE_REPORT with class files under ``project_root``."""
    return SAMPLE_REPORT.replace("{root}", str(project_root))


_FAKE_TOOL = """\
import os
import sys
import time

args = sys.argv[1:]
with open({args_file!r}, "w") as f:
    f.write("\\n".join(args))
with open({cwd_file!r}, "w") as f:
    f.write(os.getcwd())

for line in {lines!r}:
    print(line, flush=True)
    time.sleep({line_delay!r})

time.sleep({sleep!r})

report = {report!r}
if report is not None:
    out = [a for a in args if a.startswith("--summary-xml=")][0].split("=", 1)[1]
    with open(out, "w") as f:
        f.write(report)

sys.exit({exit_code!r})
"""


class FakeTool:
    """A Python script standing in for the pdepend executable."""

    def __init__(self, directory: Path):
        self.directory = directory
        self.script = directory / "fake_pdepend.py"
        self.args_file = directory / "fake_pdepend.args"
        self.cwd_file = directory / "fake_pdepend.cwd"

    def write(
        self,
        report: Optional[str] = None,
        exit_code: int = 0,
        lines: tuple = (),
        line_delay: float = 0.0,
        sleep: float = 0.0,
    ) -> "FakeTool":
        self.script.write_text(
            textwrap.dedent(
                _FAKE_TOOL.format(
                    args_file=str(self.args_file),
                    cwd_file=str(self.cwd_file),
                    lines=list(lines),
                    line_delay=line_delay,
                    sleep=sleep,
                    report=report,
                    exit_code=exit_code,
                )
            )
        )
        return self

    @property
    def command(self) -> str:
        return f"{shlex.quote(sys.executable)} {shlex.quote(str(self.script))}"

    @property
    def argv(self) -> list:
        return [sys.executable, str(self.script)]

    @property
    def received_args(self) -> list:
        return self.args_file.read_text().split("\n")

    @property
    def received_cwd(self) -> str:
        return self.cwd_file.read_text()


@pytest.fixture
def fake_tool(tmp_path):
    """Factory for a fake pdepend script living in ``tmp_path/bin``."""
    directory = tmp_path / "bin"
    directory.mkdir()
    return FakeTool(directory)


@pytest.fixture
def report_tmpdir(tmp_path, monkeypatch):
    """Redirect temporary report files into a directory the test can inspect."""
    import tempfile

    directory = tmp_path / "tmp"
    directory.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(directory))
    return directory


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Keep user/project config files and env vars out of tests."""
    import os

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("PDEPEND_METRICS_"):
            monkeypatch.delenv(key)
