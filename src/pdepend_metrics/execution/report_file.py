"""Temporary file the tool writes its summary report to."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from ..exceptions import ReportReadError
from ..logging_config import get_logger

logger = get_logger(__name__)


class ReportFile:
    """A temporary report path that is deleted exactly once.

    Usage:
        with ReportFile() as report:
            run(build_command(config, report.path, target))
            raw = report.read()   # deletes the file
        # deleted on exit if read() was never reached
    """

    def __init__(
        self, directory: Optional[Union[str, Path]] = None, prefix: str = "pdepend-output"
    ):
        self.directory = directory
        self.prefix = prefix
        self._path: Optional[Path] = None
        self._deleted = False

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("ReportFile has not been created; use it as a context manager")
        return self._path

    @property
    def deleted(self) -> bool:
        return self._deleted

    def create(self) -> Path:
        fd, name = tempfile.mkstemp(prefix=self.prefix, suffix=".xml", dir=self.directory)
        os.close(fd)
        self._path = Path(name)
        self._deleted = False
        return self._path

    def read(self) -> str:
        """Return the file's text and delete the file, even if reading fails."""
        path = self.path
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ReportReadError(path, e.strerror or str(e)) from e
        finally:
            self.delete()

    def delete(self) -> None:
        """Remove the file. Only the first call has an effect."""
        if self._path is None or self._deleted:
            return
        self._deleted = True
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not delete report file %s: %s", self._path, e)

    def __enter__(self) -> ReportFile:
        self.create()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.delete()
