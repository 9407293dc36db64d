"""JSONL run log for a mudville session.

Each run folder holds one `run.jsonl`: a header line with the seed and avatar
the run was started with, then one line per tick carrying its world snapshot
and the announcements heard during it.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from mudville.sim.contracts import TickPayload

SCHEMA_VERSION = 1
RUN_LOG_NAME = "run.jsonl"


def create_run_folder(
    base_dir: Path, *, timestamp: str | None = None
) -> tuple[Path, Path]:
    run_id = timestamp or datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")
    run_dir = base_dir / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir, run_dir / RUN_LOG_NAME


def write_header(path: Path, *, metadata: dict[str, Any]) -> None:
    _append_record(
        path,
        {"type": "header", "schema_version": SCHEMA_VERSION, "metadata": metadata},
    )


def append_tick_payload(path: Path, payload: TickPayload) -> None:
    _append_record(
        path,
        {
            "type": "tick",
            "schema_version": SCHEMA_VERSION,
            "payload": payload.model_dump(mode="json"),
        },
    )


def read_header(path: Path) -> dict[str, Any] | None:
    with path.open("r", encoding="utf-8") as handle:
        first = handle.readline()
    if not first:
        return None
    record = json.loads(first)
    if record.get("type") != "header":
        return None
    return record.get("metadata", {})


def _append_record(path: Path, record: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record))
        handle.write("\n")
