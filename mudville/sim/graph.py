"""Ownership graph: places, exits, containers and the things they hold."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator
from uuid import uuid4


class EntityNotFound(LookupError):
    """Raised when an entity cannot be resolved by name or id."""


def _new_entity_id() -> str:
    return uuid4().hex


@dataclass(eq=False)
class Container:
    """Holds an insertion-ordered set of entities.

    ``add`` and ``remove`` are only called in pairs by :func:`move` (and once
    by construction, which places a new thing in its origin container). Used
    on their own they break the single-container invariant.
    """

    _things: dict[str, Entity] = field(
        default_factory=dict, init=False, repr=False
    )

    @property
    def things(self) -> list[Entity]:
        return list(self._things.values())

    def has(self, entity: Entity) -> bool:
        return self._things.get(entity.entity_id) is entity

    def add(self, entity: Entity) -> None:
        self._things[entity.entity_id] = entity

    def remove(self, entity: Entity) -> None:
        if not self.has(entity):
            raise EntityNotFound(f"{entity.name} is not held by {_label(self)}.")
        del self._things[entity.entity_id]

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.things)


@dataclass(eq=False)
class Entity:
    name: str
    entity_id: str = field(default_factory=_new_entity_id, kw_only=True)


@dataclass(eq=False)
class Place(Entity, Container):
    exits: list[Exit] = field(default_factory=list, repr=False)

    def add_exit(self, exit_: Exit) -> bool:
        if exit_toward(self, exit_.direction) is not None:
            return False
        self.exits.append(exit_)
        return True

    @property
    def directions(self) -> list[str]:
        return [exit_.direction for exit_ in self.exits]


@dataclass(eq=False)
class Exit:
    source: Place
    direction: str
    destination: Place

    def __post_init__(self) -> None:
        self.source.add_exit(self)


@dataclass(eq=False)
class Thing(Entity):
    """An entity fixed to the container it was created in."""

    location: Container

    def __post_init__(self) -> None:
        self.location.add(self)


@dataclass(eq=False)
class MobileThing(Thing):
    pass


class PersonKind(str, Enum):
    BASIC = "basic"
    AUTONOMOUS = "autonomous"
    TROLL = "troll"
    HALL_MONITOR = "hall_monitor"
    PROFESSOR = "professor"
    AVATAR = "avatar"


AUTONOMOUS_KINDS = frozenset(
    {
        PersonKind.AUTONOMOUS,
        PersonKind.TROLL,
        PersonKind.HALL_MONITOR,
        PersonKind.PROFESSOR,
    }
)


def validate_rates(name: str, rates: dict[str, int]) -> None:
    """Temperament rates are the upper bound of a 1..n draw."""
    for field_name, value in rates.items():
        if value < 1:
            raise ValueError(
                f"Character {name} has {field_name} {value}; it must be at least 1."
            )


@dataclass(eq=False)
class Person(MobileThing, Container):
    """A mobile thing that carries other things and can die.

    Behavior differences between students, trolls, hall monitors, professors
    and the player avatar are expressed through ``kind`` and the temperament
    fields rather than subclasses; the engine dispatches on them.
    """

    kind: PersonKind = PersonKind.BASIC
    health: int = 3
    max_health: int = 3
    strength: int = 1
    birthplace: Place | None = None
    activity: int = 1
    miserly: int = 1
    hunger: int = 1
    irritability: int = 1
    alive: bool = True

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.birthplace is None and isinstance(self.location, Place):
            self.birthplace = self.location

    @property
    def is_autonomous(self) -> bool:
        return self.kind in AUTONOMOUS_KINDS


SpellEffect = Callable[["Person", Entity], None]


@dataclass(eq=False)
class Spell(MobileThing):
    incantation: str = ""
    effect: SpellEffect | None = field(default=None, repr=False)


def move(entity: Entity, source: Container, destination: Container) -> None:
    """Relocate ``entity`` from ``source`` to ``destination`` in one step."""
    if not isinstance(entity, MobileThing):
        raise TypeError(f"{entity.name} is fixed in place and cannot be moved.")
    source.remove(entity)
    destination.add(entity)
    entity.location = destination


def exit_toward(place: Place, direction: str) -> Exit | None:
    for exit_ in place.exits:
        if exit_.direction == direction:
            return exit_
    return None


def find_named(container: Container, name: str) -> Entity:
    for entity in container.things:
        if entity.name == name:
            return entity
    raise EntityNotFound(f"No thing named {name} in {_label(container)}.")


def holder_of(entity: Thing) -> Person | None:
    location = entity.location
    return location if isinstance(location, Person) else None


def _label(container: Container) -> str:
    return getattr(container, "name", type(container).__name__)
