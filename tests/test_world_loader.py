import json
from pathlib import Path

import pytest

from mudville.sim.graph import PersonKind
from mudville.sim.world_loader import WorldPaths, load_world_config

WORLD_DIR = Path(__file__).resolve().parents[1] / "world"


def test_world_loader_parses_config() -> None:
    config = load_world_config(paths=WorldPaths(WORLD_DIR))

    assert config.places
    assert config.exits
    assert config.characters
    assert config.avatar_start == "lobby-10"
    kinds = {char.kind for char in config.characters}
    assert PersonKind.PROFESSOR in kinds
    assert PersonKind.TROLL in kinds


def test_unknown_exit_destination_is_rejected(tmp_path: Path) -> None:
    _write_world(
        tmp_path,
        world={
            "places": [{"id": "lobby"}],
            "exits": [{"from": "lobby", "direction": "up", "to": "attic"}],
        },
    )

    with pytest.raises(ValueError, match="attic"):
        load_world_config(paths=WorldPaths(tmp_path))


def test_unknown_character_kind_is_rejected(tmp_path: Path) -> None:
    _write_world(
        tmp_path,
        world={"places": [{"id": "lobby"}]},
        characters={"characters": [{"name": "bob", "kind": "wizard"}]},
    )

    with pytest.raises(ValueError, match="wizard"):
        load_world_config(paths=WorldPaths(tmp_path))


def test_avatar_cannot_be_seeded_as_population(tmp_path: Path) -> None:
    _write_world(
        tmp_path,
        world={"places": [{"id": "lobby"}]},
        characters={"characters": [{"name": "bob", "kind": "avatar"}]},
    )

    with pytest.raises(ValueError):
        load_world_config(paths=WorldPaths(tmp_path))


def test_character_rates_below_one_are_rejected(tmp_path: Path) -> None:
    _write_world(
        tmp_path,
        world={"places": [{"id": "lobby"}]},
        characters={
            "characters": [
                {"name": "lazy-ben", "kind": "autonomous", "activity": 0, "miserly": 0}
            ]
        },
    )

    with pytest.raises(ValueError, match="lazy-ben has activity 0"):
        load_world_config(paths=WorldPaths(tmp_path))


def test_missing_world_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_world_config(paths=WorldPaths(tmp_path))


def _write_world(base: Path, *, world: dict, characters: dict | None = None) -> None:
    (base / "world.json").write_text(json.dumps(world), encoding="utf-8")
    (base / "characters.json").write_text(
        json.dumps(characters or {"characters": []}), encoding="utf-8"
    )
