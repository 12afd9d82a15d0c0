"""
Logging for pdepend-metrics.

Two kinds of output go through the ``pdepend_metrics`` logger tree:

* the analyzer's own diagnostics (``pdepend_metrics.<module>``), and
* PDepend's console output, forwarded line by line through a LogSink
  (``pdepend_metrics.tool``).

Terminal output is rendered by rich on stderr so that ``--json`` output on
stdout stays machine-readable.
"""

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "pdepend_metrics"

# Logger the external tool's output is forwarded to.
TOOL_LOGGER = f"{ROOT_LOGGER}.tool"

# Receives one line of external tool output at a time.
LogSink = Callable[[str], None]


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach rich (and optionally file) handlers to the pdepend_metrics logger.

    Calling it again replaces the handlers from the previous call, so each
    CLI invocation starts from a clean configuration.

    Args:
        verbose: DEBUG level, with source paths and locals in tracebacks
        quiet: Only ERROR and above (used with --json)
        log_file: Also append plain-text records to this file

    Returns:
        The configured pdepend_metrics logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Tool output can contain square brackets, so markup stays off.
    rich_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for a module of this package.

    ``get_logger(__name__)`` and ``get_logger("ingest")`` both land under
    ``pdepend_metrics``; ``None`` returns the package logger itself.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)


def logger_sink(logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> LogSink:
    """Adapt a logger into a line sink for the process runner.

    Defaults to the ``pdepend_metrics.tool`` logger.
    """
    target = logger or logging.getLogger(TOOL_LOGGER)

    def sink(line: str) -> None:
        target.log(level, "%s", line)

    return sink
