"""Action resolution: movement, ownership transfer, combat and death.

Every operation either applies fully or refuses. Refusals are spoken by the
acting person through the announcer and reported as ``False``; they are never
raised. Lookup failures (unknown ids, unregistered callbacks) do raise.
"""

from __future__ import annotations

import random
from typing import Callable

from mudville.sim import spells
from mudville.sim.announce import Announcer
from mudville.sim.contracts import LookReport
from mudville.sim.graph import (
    Container,
    Entity,
    EntityNotFound,
    Exit,
    MobileThing,
    Person,
    PersonKind,
    Place,
    Spell,
    SpellEffect,
    Thing,
    exit_toward,
    move,
    validate_rates,
)
from mudville.sim.scheduler import Clock

HEAVEN_NAME = "heaven"

MOVE_AND_TAKE_STUFF = "move-and-take-stuff"
EAT_PEOPLE = "eat-people"
IRRITATE_STUDENTS = "irritate-students"

EXTRA_CALLBACKS = {
    PersonKind.TROLL: EAT_PEOPLE,
    PersonKind.HALL_MONITOR: IRRITATE_STUDENTS,
}


class Engine:
    def __init__(
        self,
        *,
        clock: Clock,
        announcer: Announcer,
        rng: random.Random | None = None,
    ) -> None:
        self.clock = clock
        self.announcer = announcer
        self.rng = rng or random.Random()
        self._entities: dict[str, Entity] = {}
        self.vault = self._register(spells.create_vault())
        self.heaven = self.make_place(HEAVEN_NAME)
        self.templates = spells.install_templates(self)
        clock.register_operation(
            MOVE_AND_TAKE_STUFF, self._handler(self.move_and_take_stuff)
        )
        clock.register_operation(EAT_PEOPLE, self._handler(self.eat_people))
        clock.register_operation(
            IRRITATE_STUDENTS, self._handler(self.irritate_students)
        )

    # -- registry -----------------------------------------------------------

    def entity(self, entity_id: str) -> Entity:
        try:
            return self._entities[entity_id]
        except KeyError:
            raise EntityNotFound(f"No entity with id {entity_id}.") from None

    def person(self, entity_id: str) -> Person:
        entity = self.entity(entity_id)
        if not isinstance(entity, Person):
            raise EntityNotFound(f"{entity.name} is not a person.")
        return entity

    def person_named(self, name: str) -> Person:
        for entity in self._entities.values():
            if isinstance(entity, Person) and entity.name == name:
                return entity
        raise EntityNotFound(f"No person named {name}.")

    def template(self, name: str) -> Spell:
        try:
            return self.templates[name]
        except KeyError:
            raise EntityNotFound(f"No spell named {name} in the vault.") from None

    def entities(self) -> list[Entity]:
        return list(self._entities.values())

    def places(self) -> list[Place]:
        return [
            entity
            for entity in self._entities.values()
            if isinstance(entity, Place) and entity is not self.vault
        ]

    def people(self) -> list[Person]:
        return [
            entity for entity in self._entities.values() if isinstance(entity, Person)
        ]

    # -- construction -------------------------------------------------------

    def make_place(self, name: str) -> Place:
        return self._register(Place(name=name))

    def make_exit(self, source: Place, direction: str, destination: Place) -> Exit:
        return Exit(source=source, direction=direction, destination=destination)

    def connect(
        self, first: Place, direction: str, second: Place, back: str
    ) -> tuple[Exit, Exit]:
        return (
            self.make_exit(first, direction, second),
            self.make_exit(second, back, first),
        )

    def make_thing(self, name: str, location: Container) -> Thing:
        return self._register(Thing(name=name, location=location))

    def make_mobile_thing(self, name: str, location: Container) -> MobileThing:
        return self._register(MobileThing(name=name, location=location))

    def make_spell_template(
        self, name: str, *, incantation: str, effect: SpellEffect
    ) -> Spell:
        return self._register(
            Spell(name=name, location=self.vault, incantation=incantation, effect=effect)
        )

    def clone_spell(self, spell: Spell, destination: Container) -> Spell:
        return self._register(spells.clone(spell, destination))

    def make_person(
        self,
        name: str,
        birthplace: Place,
        *,
        kind: PersonKind = PersonKind.BASIC,
        health: int = 3,
        max_health: int = 3,
        strength: int = 1,
        activity: int = 1,
        miserly: int = 1,
        hunger: int = 1,
        irritability: int = 1,
    ) -> Person:
        validate_rates(
            name,
            {
                "activity": activity,
                "miserly": miserly,
                "hunger": hunger,
                "irritability": irritability,
            },
        )
        person = self._register(
            Person(
                name=name,
                location=birthplace,
                kind=kind,
                health=health,
                max_health=max_health,
                strength=strength,
                birthplace=birthplace,
                activity=activity,
                miserly=miserly,
                hunger=hunger,
                irritability=irritability,
            )
        )
        if person.is_autonomous:
            self.clock.add_callback(person.entity_id, MOVE_AND_TAKE_STUFF)
        extra = EXTRA_CALLBACKS.get(kind)
        if extra:
            self.clock.add_callback(person.entity_id, extra)
        return person

    def make_autonomous_person(
        self, name: str, birthplace: Place, *, activity: int, miserly: int
    ) -> Person:
        return self.make_person(
            name,
            birthplace,
            kind=PersonKind.AUTONOMOUS,
            activity=activity,
            miserly=miserly,
        )

    def make_troll(
        self,
        name: str,
        birthplace: Place,
        *,
        activity: int,
        miserly: int,
        hunger: int,
    ) -> Person:
        return self.make_person(
            name,
            birthplace,
            kind=PersonKind.TROLL,
            activity=activity,
            miserly=miserly,
            hunger=hunger,
        )

    def make_hall_monitor(
        self,
        name: str,
        birthplace: Place,
        *,
        activity: int,
        irritability: int,
        miserly: int = 10,
    ) -> Person:
        return self.make_person(
            name,
            birthplace,
            kind=PersonKind.HALL_MONITOR,
            activity=activity,
            miserly=miserly,
            irritability=irritability,
        )

    def make_professor(
        self, name: str, birthplace: Place, *, activity: int, miserly: int
    ) -> Person:
        professor = self.make_person(
            name,
            birthplace,
            kind=PersonKind.PROFESSOR,
            activity=activity,
            miserly=miserly,
        )
        for spell_def in spells.HEALING_SPELLS:
            self.clone_spell(self.template(spell_def.name), professor)
        return professor

    def make_avatar(self, name: str, birthplace: Place) -> Person:
        return self.make_person(name, birthplace, kind=PersonKind.AVATAR)

    # -- queries ------------------------------------------------------------

    def people_around(self, person: Person) -> list[Person]:
        return [
            other
            for other in person.location.things
            if isinstance(other, Person) and other is not person and other.alive
        ]

    def stuff_around(self, person: Person) -> list[MobileThing]:
        return [
            thing
            for thing in person.location.things
            if isinstance(thing, MobileThing) and not isinstance(thing, Person)
        ]

    def peek_around(self, person: Person) -> list[MobileThing]:
        return [
            thing
            for other in self.people_around(person)
            for thing in other.things
            if isinstance(thing, MobileThing) and not isinstance(thing, Spell)
        ]

    def knows_spell(self, person: Person, name: str) -> bool:
        return any(
            isinstance(thing, Spell) and thing.name == name for thing in person.things
        )

    def look_around(self, person: Person) -> LookReport:
        place = person.location
        report = LookReport(
            location=place.name,
            carrying=[thing.name for thing in person.things],
            floor=[
                thing.name
                for thing in place.things
                if isinstance(thing, Thing) and not isinstance(thing, Person)
            ],
            people=[other.name for other in self.people_around(person)],
            exits=place.directions if isinstance(place, Place) else [],
        )
        self.announcer.announce_to_room(place, f"You are in {report.location}")
        self.announcer.announce_to_room(
            place, f"You are holding: {_listing(report.carrying)}"
        )
        self.announcer.announce_to_room(
            place, f"You see stuff in the room: {_listing(report.floor)}"
        )
        self.announcer.announce_to_room(
            place, f"You see other people: {_listing(report.people)}"
        )
        self.announcer.announce_to_room(
            place, f"The exits are in directions: {_listing(report.exits)}"
        )
        return report

    # -- speech -------------------------------------------------------------

    def say(self, person: Person, message: str) -> None:
        place = person.location
        self.announcer.announce_to_room(
            place, f"At {place.name} {person.name} says -- {message}"
        )

    def _refuse(self, person: Person, message: str) -> bool:
        self.say(person, message)
        return False

    def _refuse_dead(self, person: Person) -> bool:
        return self._refuse(person, "I can do nothing now; I have passed on.")

    # -- ownership ----------------------------------------------------------

    def take(self, actor: Person, thing: Entity) -> bool:
        if not actor.alive:
            return self._refuse_dead(actor)
        if actor.has(thing):
            return self._refuse(actor, f"I am already carrying {thing.name}")
        if isinstance(thing, Person) or not isinstance(thing, MobileThing):
            return self._refuse(actor, f"I try but cannot take {thing.name}")
        owner = thing.location
        if owner is self.vault:
            return self._refuse(actor, f"{thing.name} is sealed in the vault")
        if isinstance(owner, Person):
            if isinstance(thing, Spell):
                return self._refuse(
                    actor, f"I cannot take {thing.name}; it is bound to {owner.name}"
                )
            self.lose(owner, thing, actor)
        else:
            move(thing, owner, actor)
        self.say(actor, f"I take {thing.name} from {owner.name}")
        return True

    def lose(
        self, holder: Person, thing: Entity, to: Container, *, force: bool = False
    ) -> bool:
        if isinstance(thing, Spell) and not force:
            return self._refuse(holder, f"I will not part with {thing.name}")
        move(thing, holder, to)
        if not force:
            self.say(holder, f"I lose {thing.name}")
            self.say(holder, "Yaaaah! I am upset!")
        return True

    def drop(self, holder: Person, thing: Entity) -> bool:
        if not holder.alive:
            return self._refuse_dead(holder)
        if isinstance(thing, Spell):
            return self._refuse(holder, f"I cannot drop {thing.name}; spells stay with me")
        if not holder.has(thing):
            return self._refuse(holder, f"I am not carrying {thing.name}")
        place = holder.location
        move(thing, holder, place)
        self.say(holder, f"I drop {thing.name} at {place.name}")
        return True

    # -- movement -----------------------------------------------------------

    def go(self, actor: Person, direction: str) -> bool:
        if not actor.alive:
            return self._refuse_dead(actor)
        place = actor.location
        exit_ = exit_toward(place, direction) if isinstance(place, Place) else None
        if exit_ is None:
            self.announcer.announce_to_room(place, f"No exit in {direction} direction")
            return False
        self.use_exit(actor, exit_)
        if actor.kind is PersonKind.AVATAR:
            self.clock.tick()
        return True

    def use_exit(self, actor: Person, exit_: Exit) -> None:
        self.leave_room(actor, exit_.direction)
        move(actor, exit_.source, exit_.destination)
        self.announcer.announce_to_room(
            exit_.destination,
            f"{actor.name} moves from {exit_.source.name} to {exit_.destination.name}",
        )
        self.enter_room(actor)

    def go_home(self, person: Person) -> None:
        home = person.birthplace or person.location
        self.leave_room(person)
        move(person, person.location, home)
        self.enter_room(person)

    def leave_room(self, person: Person, direction: str | None = None) -> None:
        message = f"{person.name} leaves {person.location.name}"
        if direction is not None:
            message += f" heading {direction}"
        self.announcer.announce_to_room(person.location, message)

    def enter_room(self, person: Person) -> None:
        others = self.people_around(person)
        if others:
            self.say(person, "Hi " + ", ".join(other.name for other in others))
        if person.kind is PersonKind.AVATAR:
            self.look_around(person)

    # -- combat and healing -------------------------------------------------

    def suffer(self, target: Person, hits: int, source: Entity | None = None) -> bool:
        if target.kind is PersonKind.PROFESSOR:
            return self._refuse(target, "Your puny attack cannot harm a professor.")
        if not target.alive:
            return self._refuse_dead(target)
        self.say(target, f"Ouch! {hits} hits is more than I want!")
        target.health -= hits
        if target.health <= 0:
            self.die(target, source)
        return True

    def heal(self, target: Person, points: int) -> bool:
        if not target.alive:
            return self._refuse_dead(target)
        target.health = min(target.health + points, target.max_health)
        self.say(target, "Ahhh, that feels much better.")
        return True

    def die(self, target: Person, cause: Entity | None = None) -> None:
        if not target.alive:
            raise ValueError(f"{target.name} is already dead.")
        if target.is_autonomous:
            self.clock.remove_callback(target.entity_id, MOVE_AND_TAKE_STUFF)
        extra = EXTRA_CALLBACKS.get(target.kind)
        if extra:
            self.clock.remove_callback(target.entity_id, extra)
        place = target.location
        for thing in target.things:
            self.lose(target, thing, place, force=True)
        cause_name = cause.name if cause is not None else "misadventure"
        self.announcer.announce_to_world(
            "An earth-shattering, soul-piercing scream is heard... "
            f"{target.name} has been slain by {cause_name}."
        )
        move(target, place, self.heaven)
        target.alive = False
        self.enter_room(target)

    # -- spells -------------------------------------------------------------

    def teach_spell(self, professor: Person, spell: Spell, target: Entity) -> bool:
        if not isinstance(target, Person):
            return self._refuse(professor, f"{target.name} cannot learn spells")
        if not professor.has(spell):
            return self._refuse(professor, f"I do not know {spell.name} myself")
        self.clone_spell(spell, target)
        self.say(professor, f"{target.name}, you now know {spell.name}. Use it wisely.")
        return True

    def learn_spell(self, student: Person, spell: Entity, professor: Entity) -> bool:
        if not student.alive:
            return self._refuse_dead(student)
        if not isinstance(spell, Spell):
            return self._refuse(student, f"{spell.name} is not a spell")
        if not isinstance(professor, Person) or professor.kind is not PersonKind.PROFESSOR:
            return self._refuse(student, f"{professor.name} is no professor")
        if self.knows_spell(student, spell.name):
            return self._refuse(student, f"I already know {spell.name}")
        if not self.teach_spell(professor, spell, student):
            return False
        self.say(student, f"I have learned {spell.name}!")
        return True

    def cast_spell(self, caster: Person, spell: Spell, target: Entity) -> bool:
        if not caster.alive:
            return self._refuse_dead(caster)
        if not caster.has(spell):
            return self._refuse(caster, f"I do not know {spell.name}")
        self.say(caster, spell.incantation)
        spells.use(spell, caster, target)
        return True

    # -- autonomous behavior ------------------------------------------------

    def move_and_take_stuff(self, person: Person) -> None:
        for _ in range(self.rng.randint(1, person.activity)):
            self.move_somewhere(person)
        if self.rng.randint(1, person.miserly) == 1:
            self.take_something(person)

    def move_somewhere(self, person: Person) -> None:
        place = person.location
        if not isinstance(place, Place) or not place.exits:
            return
        self.go(person, self.rng.choice(place.exits).direction)

    def take_something(self, person: Person) -> None:
        candidates = self.stuff_around(person) + self.peek_around(person)
        if candidates:
            self.take(person, self.rng.choice(candidates))

    def eat_people(self, troll: Person) -> None:
        if self.rng.randint(1, troll.hunger) != 1:
            return
        victims = self.people_around(troll)
        if not victims:
            self.say(troll, "Growl.... I'm hungry and there is nobody to eat.")
            return
        victim = self.rng.choice(victims)
        self.say(troll, f"Growl.... I'm going to eat you, {victim.name}")
        self.suffer(victim, self.rng.randint(1, 3), troll)
        self.say(troll, f"Chomp chomp. {victim.name} tastes yummy!")

    def irritate_students(self, monitor: Person) -> None:
        if self.rng.randint(1, monitor.irritability) != 1:
            return
        students = [
            person
            for person in self.people_around(monitor)
            if person.kind is not PersonKind.PROFESSOR
        ]
        if not students:
            self.say(monitor, "Grrr... When I catch those students...")
            return
        self.say(monitor, "What are you doing still up? Everyone back to their rooms!")
        for student in students:
            self.go_home(student)

    # -- internals ----------------------------------------------------------

    def _register(self, entity):
        self._entities[entity.entity_id] = entity
        return entity

    def _handler(self, behavior: Callable[[Person], None]) -> Callable[[str], None]:
        def activate(owner_id: str) -> None:
            behavior(self.person(owner_id))

        return activate


def _listing(names: list[str]) -> str:
    return ", ".join(names) if names else "nothing"
