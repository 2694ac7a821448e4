"""Structured JSONL run log utilities."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class RunEvent:
    """One recorded step of a run."""

    timestamp: str
    run_id: str
    event: str
    path: str | None
    ok: bool
    detail: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonlRunLogger:
    """Append-only JSONL run logger."""

    def __init__(self, path: Path, run_id: str) -> None:
        self._path = path
        self._run_id = run_id
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    @property
    def run_id(self) -> str:
        return self._run_id

    def record(
        self,
        event: str,
        path: str | None = None,
        ok: bool = True,
        detail: dict[str, object] | None = None,
    ) -> RunEvent:
        """Build and append one event for the current run."""
        entry = RunEvent(
            timestamp=utc_timestamp(),
            run_id=self._run_id,
            event=event,
            path=path,
            ok=ok,
            detail=dict(sorted((detail or {}).items())),
        )
        self.append(entry)
        return entry

    def append(self, event: RunEvent) -> None:
        """Append an event as one JSON object per line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")
