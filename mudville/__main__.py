"""Module entry point for `python -m mudville`."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console

from mudville.app import DEFAULT_TICKS, DEFAULT_WORLD_DIR, run_simulation
from mudville.render.replay_reader import read_run
from mudville.render.viewer import render_tick

DEFAULT_REPLAY_DIR = Path("replay")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the mudville simulation.")
    parser.add_argument(
        "--ticks",
        type=int,
        default=DEFAULT_TICKS,
        help="Number of ticks to run.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random source (defaults to MUDVILLE_SEED or 6001).",
    )
    parser.add_argument(
        "--avatar",
        default=None,
        help="Name of the player-controlled person.",
    )
    parser.add_argument(
        "--omniscient",
        action="store_true",
        default=None,
        help="Report announcements from every room, not just the avatar's.",
    )
    parser.add_argument(
        "--world-dir",
        type=Path,
        default=DEFAULT_WORLD_DIR,
        help="Directory holding world.json and characters.json.",
    )
    parser.add_argument(
        "--replay-dir",
        type=Path,
        default=DEFAULT_REPLAY_DIR,
        help="Base directory for run logs.",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Print a saved run folder instead of simulating.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only write the run log; do not print ticks.",
    )
    args = parser.parse_args()
    console = Console()

    if args.replay is not None:
        header, payloads = read_run(args.replay)
        if header is not None:
            console.print(
                f"Run {header.get('run_id')}: seed {header.get('seed')}, "
                f"avatar {header.get('avatar')}"
            )
        for payload in payloads:
            console.print(render_tick(payload))
        return

    created_run = run_simulation(
        args.replay_dir,
        ticks=args.ticks,
        seed=args.seed,
        avatar_name=args.avatar,
        omniscient=args.omniscient,
        world_dir=args.world_dir,
        console=None if args.quiet else console,
    )
    console.print(f"Run saved to {created_run}")


if __name__ == "__main__":
    main()
