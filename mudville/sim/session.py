"""Driver surface: build a world from its seed and act for the player."""

from __future__ import annotations

import random
from dataclasses import dataclass

from mudville.sim.announce import EventAnnouncer
from mudville.sim.contracts import LookReport, TickPayload
from mudville.sim.engine import Engine
from mudville.sim.graph import (
    Entity,
    EntityNotFound,
    Person,
    PersonKind,
    Place,
    Spell,
    find_named,
)
from mudville.sim.scheduler import Clock
from mudville.sim.tick_loop import capture_tick, run_ticks
from mudville.sim.world_loader import CharacterDef, WorldConfig


@dataclass
class Session:
    engine: Engine
    announcer: EventAnnouncer
    avatar: Person
    places: dict[str, Place]

    @property
    def clock(self) -> Clock:
        return self.engine.clock

    def run_for(self, ticks: int) -> list[TickPayload]:
        return list(run_ticks(self, ticks))

    def look(self) -> LookReport:
        return self.engine.look_around(self.avatar)

    def go(self, direction: str) -> TickPayload | None:
        """Move the avatar; a successful move spends a tick, returned as a payload."""
        if not self.engine.go(self.avatar, direction):
            return None
        return capture_tick(self)

    def say(self, message: str) -> None:
        self.engine.say(self.avatar, message)

    def take(self, name: str) -> bool:
        return self.engine.take(self.avatar, self._visible(name))

    def drop(self, name: str) -> bool:
        return self.engine.drop(self.avatar, find_named(self.avatar, name))

    def learn_spell(self, spell_name: str, professor_name: str) -> bool:
        professor = find_named(self.avatar.location, professor_name)
        if isinstance(professor, Person):
            spell = find_named(professor, spell_name)
        else:
            spell = self.engine.template(spell_name)
        return self.engine.learn_spell(self.avatar, spell, professor)

    def cast(self, spell_name: str, target_name: str) -> bool:
        spell = find_named(self.avatar, spell_name)
        if not isinstance(spell, Spell):
            raise EntityNotFound(f"{spell_name} is not a spell.")
        return self.engine.cast_spell(self.avatar, spell, self._visible(target_name))

    def _visible(self, name: str) -> Entity:
        """Resolve a name among held things, the floor, and what others carry."""
        containers = [self.avatar, self.avatar.location]
        containers.extend(self.engine.people_around(self.avatar))
        for container in containers:
            try:
                return find_named(container, name)
            except EntityNotFound:
                continue
        raise EntityNotFound(f"Nothing named {name} is visible here.")


def setup(
    world_seed: WorldConfig,
    *,
    avatar_name: str,
    rng: random.Random | None = None,
    clock: Clock | None = None,
    omniscient: bool = False,
) -> Session:
    clock = clock or Clock()
    clock.reset()
    announcer = EventAnnouncer(omniscient=omniscient)
    engine = Engine(clock=clock, announcer=announcer, rng=rng)

    places = {place.id: engine.make_place(place.name) for place in world_seed.places}
    for exit_ in world_seed.exits:
        source = places[exit_.source]
        destination = places[exit_.destination]
        engine.make_exit(source, exit_.direction, destination)
        if exit_.back:
            engine.make_exit(destination, exit_.back, source)
    for thing in world_seed.things:
        if thing.mobile:
            engine.make_mobile_thing(thing.name, places[thing.place])
        else:
            engine.make_thing(thing.name, places[thing.place])
    for placement in world_seed.spells:
        engine.clone_spell(engine.template(placement.name), places[placement.place])

    birthplaces = list(places.values())
    for char in world_seed.characters:
        birthplace = (
            places[char.birthplace]
            if char.birthplace
            else engine.rng.choice(birthplaces)
        )
        populate(engine, char, birthplace)

    start = (
        places[world_seed.avatar_start]
        if world_seed.avatar_start
        else engine.rng.choice(birthplaces)
    )
    avatar = engine.make_avatar(avatar_name, start)
    announcer.observer = avatar
    return Session(engine=engine, announcer=announcer, avatar=avatar, places=places)


def populate(engine: Engine, char: CharacterDef, birthplace: Place) -> Person:
    if char.kind is PersonKind.TROLL:
        return engine.make_troll(
            char.name,
            birthplace,
            activity=char.activity,
            miserly=char.miserly,
            hunger=char.hunger,
        )
    if char.kind is PersonKind.HALL_MONITOR:
        return engine.make_hall_monitor(
            char.name,
            birthplace,
            activity=char.activity,
            irritability=char.irritability,
            miserly=char.miserly,
        )
    if char.kind is PersonKind.PROFESSOR:
        return engine.make_professor(
            char.name, birthplace, activity=char.activity, miserly=char.miserly
        )
    return engine.make_autonomous_person(
        char.name, birthplace, activity=char.activity, miserly=char.miserly
    )
