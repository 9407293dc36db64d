"""Load world topology and population from JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from mudville.sim.graph import PersonKind, validate_rates

POPULATION_KINDS = {
    PersonKind.AUTONOMOUS,
    PersonKind.TROLL,
    PersonKind.HALL_MONITOR,
    PersonKind.PROFESSOR,
}


@dataclass(frozen=True)
class WorldPaths:
    base_dir: Path = Path("world")

    @property
    def world_json(self) -> Path:
        return self.base_dir / "world.json"

    @property
    def characters_json(self) -> Path:
        return self.base_dir / "characters.json"


@dataclass(frozen=True)
class PlaceDef:
    id: str
    name: str


@dataclass(frozen=True)
class ExitDef:
    source: str
    direction: str
    destination: str
    back: str | None = None


@dataclass(frozen=True)
class ThingDef:
    name: str
    place: str
    mobile: bool = True


@dataclass(frozen=True)
class SpellPlacement:
    name: str
    place: str


@dataclass(frozen=True)
class CharacterDef:
    name: str
    kind: PersonKind
    birthplace: str | None = None
    activity: int = 1
    miserly: int = 1
    hunger: int = 1
    irritability: int = 1


@dataclass(frozen=True)
class WorldConfig:
    places: list[PlaceDef]
    exits: list[ExitDef] = field(default_factory=list)
    things: list[ThingDef] = field(default_factory=list)
    spells: list[SpellPlacement] = field(default_factory=list)
    characters: list[CharacterDef] = field(default_factory=list)
    avatar_start: str | None = None


def load_world_config(*, paths: WorldPaths | None = None) -> WorldConfig:
    paths = paths or WorldPaths()
    world_data = _load_json(paths.world_json)
    characters_data = _load_json(paths.characters_json)

    places = [
        PlaceDef(id=place["id"], name=place.get("name", place["id"]))
        for place in world_data.get("places", [])
    ]
    exits = [
        ExitDef(
            source=exit_["from"],
            direction=exit_["direction"],
            destination=exit_["to"],
            back=exit_.get("back"),
        )
        for exit_ in world_data.get("exits", [])
    ]
    things = [
        ThingDef(
            name=thing["name"],
            place=thing["place"],
            mobile=thing.get("mobile", True),
        )
        for thing in world_data.get("things", [])
    ]
    spells = [
        SpellPlacement(name=spell["name"], place=spell["place"])
        for spell in world_data.get("spells", [])
    ]
    characters = [_parse_character(char) for char in characters_data.get("characters", [])]
    config = WorldConfig(
        places=places,
        exits=exits,
        things=things,
        spells=spells,
        characters=characters,
        avatar_start=characters_data.get("avatar_start"),
    )
    validate_world_config(config)
    return config


def validate_world_config(config: WorldConfig) -> None:
    place_ids: set[str] = set()
    for place in config.places:
        if place.id in place_ids:
            raise ValueError(f"Place {place.id} is defined twice.")
        place_ids.add(place.id)
    if not place_ids:
        raise ValueError("World defines no places.")

    for exit_ in config.exits:
        for end in (exit_.source, exit_.destination):
            if end not in place_ids:
                raise ValueError(
                    f"Exit {exit_.source} -> {exit_.direction} points to unknown {end}."
                )
    for thing in config.things:
        if thing.place not in place_ids:
            raise ValueError(f"Thing {thing.name} placed in unknown {thing.place}.")
    for spell in config.spells:
        if spell.place not in place_ids:
            raise ValueError(f"Spell {spell.name} placed in unknown {spell.place}.")
    for char in config.characters:
        if char.birthplace is not None and char.birthplace not in place_ids:
            raise ValueError(
                f"Character {char.name} born in unknown {char.birthplace}."
            )
        validate_rates(char.name, _character_rates(char))
    if config.avatar_start is not None and config.avatar_start not in place_ids:
        raise ValueError(f"Avatar start {config.avatar_start} is not defined.")


def _character_rates(char: CharacterDef) -> dict[str, int]:
    return {
        "activity": char.activity,
        "miserly": char.miserly,
        "hunger": char.hunger,
        "irritability": char.irritability,
    }


def _parse_character(raw: dict) -> CharacterDef:
    try:
        kind = PersonKind(raw["kind"])
    except ValueError:
        raise ValueError(f"Character {raw['name']} has unknown kind {raw['kind']}.") from None
    if kind not in POPULATION_KINDS:
        raise ValueError(f"Character {raw['name']} cannot be seeded as {kind.value}.")
    return CharacterDef(
        name=raw["name"],
        kind=kind,
        birthplace=raw.get("birthplace"),
        activity=raw.get("activity", 1),
        miserly=raw.get("miserly", 1),
        hunger=raw.get("hunger", 1),
        irritability=raw.get("irritability", 1),
    )


def _load_json(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Missing world data file: {path}") from exc
    return json.loads(text)
