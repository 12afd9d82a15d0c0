"""Build the PDepend command line."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from ..config import AnalyzerConfig

PathLike = Union[str, Path]


def build_command(
    config: AnalyzerConfig, output_file: PathLike, target_dir: PathLike
) -> list[str]:
    """Assemble argv for one run.

    ``<executable> --summary-xml=<out> [--configuration=<f>] [--suffix=<csv>]
    [--ignore=<csv>] <target_dir>``; unset options are omitted.
    """
    cmd = [*config.executable, f"--summary-xml={output_file}"]

    if config.configuration_file:
        cmd.append(f"--configuration={config.configuration_file}")

    if config.suffixes:
        cmd.append(f"--suffix={','.join(config.suffixes)}")

    # Deprecated: PDepend now honours the global filter, but explicit
    # exclusions are still passed through.
    if config.excluded_dirs:
        cmd.append(f"--ignore={','.join(config.excluded_dirs)}")

    cmd.append(str(target_dir))
    return cmd
