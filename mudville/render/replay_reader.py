"""Load a saved mudville run folder back into tick payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from mudville.db.replay_log import RUN_LOG_NAME, SCHEMA_VERSION, read_header
from mudville.sim.contracts import TickPayload


def read_run(run_dir: Path) -> tuple[dict[str, Any] | None, list[TickPayload]]:
    """Return the run's header metadata and every tick it recorded."""
    log_path = run_dir / RUN_LOG_NAME
    return read_header(log_path), list(read_tick_payloads(log_path))


def read_tick_payloads(path: Path) -> Iterator[TickPayload]:
    """Yield tick records in file order.

    Lines that are not JSON, header records, and ticks written under another
    schema version are skipped.
    """
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                continue
            if record.get("type") != "tick" or record.get("payload") is None:
                continue
            if record.get("schema_version", SCHEMA_VERSION) != SCHEMA_VERSION:
                continue
            yield TickPayload.model_validate(record["payload"])
