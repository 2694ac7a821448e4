"""Plain-text progress output for a run."""

from __future__ import annotations

import sys
from typing import TextIO


class RunReporter:
    """Writes progress lines and warnings to a stream when verbose."""

    def __init__(self, verbose: bool = False, stream: TextIO | None = None) -> None:
        self._verbose = verbose
        self._stream = stream if stream is not None else sys.stdout

    @property
    def verbose(self) -> bool:
        return self._verbose

    def info(self, message: str) -> None:
        if not self._verbose:
            return
        self._stream.write(f"{message}\n")

    def warning(self, message: str) -> None:
        """Report a skipped, non-fatal step."""
        if not self._verbose:
            return
        self._stream.write(f"WARNING [{message}]\n")
        self._stream.flush()
