"""Run reporting and structured logging utilities."""

from .reporter import RunReporter
from .runlog import JsonlRunLogger, RunEvent, utc_timestamp

__all__ = ["JsonlRunLogger", "RunEvent", "RunReporter", "utc_timestamp"]
