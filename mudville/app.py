"""Application entry for running the simulation loop."""

from __future__ import annotations

import os
import random
from pathlib import Path

from rich.console import Console

from mudville.db.replay_log import append_tick_payload, create_run_folder, write_header
from mudville.render.viewer import render_tick
from mudville.sim.session import Session, setup
from mudville.sim.tick_loop import run_ticks
from mudville.sim.world_loader import WorldPaths, load_world_config

DEFAULT_TICKS = 10
DEFAULT_SEED = 6001
DEFAULT_AVATAR = "alyssa-p-hacker"
DEFAULT_WORLD_DIR = Path("world")


def start_session(
    *,
    seed: int | None = None,
    avatar_name: str | None = None,
    omniscient: bool | None = None,
    world_dir: Path | None = None,
) -> Session:
    config = load_world_config(paths=WorldPaths(world_dir or DEFAULT_WORLD_DIR))
    return setup(
        config,
        avatar_name=_resolve_avatar(avatar_name),
        rng=random.Random(_resolve_seed(seed)),
        omniscient=_resolve_omniscient(omniscient),
    )


def run_simulation(
    base_dir: Path,
    *,
    ticks: int | None = DEFAULT_TICKS,
    seed: int | None = None,
    avatar_name: str | None = None,
    omniscient: bool | None = None,
    world_dir: Path | None = None,
    console: Console | None = None,
) -> Path:
    run_dir, log_path = create_run_folder(base_dir)
    session = start_session(
        seed=seed,
        avatar_name=avatar_name,
        omniscient=omniscient,
        world_dir=world_dir,
    )
    write_header(
        log_path,
        metadata={
            "run_id": run_dir.name,
            "ticks": ticks,
            "seed": _resolve_seed(seed),
            "avatar": session.avatar.name,
        },
    )
    for payload in run_ticks(session, ticks):
        append_tick_payload(log_path, payload)
        if console is not None:
            console.print(render_tick(payload))
    return run_dir


def _resolve_seed(seed: int | None) -> int:
    if seed is not None:
        return seed
    raw = os.getenv("MUDVILLE_SEED")
    return int(raw) if raw else DEFAULT_SEED


def _resolve_avatar(avatar_name: str | None) -> str:
    return avatar_name or os.getenv("MUDVILLE_AVATAR") or DEFAULT_AVATAR


def _resolve_omniscient(omniscient: bool | None) -> bool:
    if omniscient is not None:
        return omniscient
    return os.getenv("MUDVILLE_OMNISCIENT", "").lower() in {"1", "true", "yes"}
