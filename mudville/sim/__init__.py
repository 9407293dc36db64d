"""Simulation core: ownership graph, clock, engine and spells."""

from mudville.sim.announce import Announcer, EventAnnouncer
from mudville.sim.contracts import (
    Event,
    LookReport,
    NodeType,
    StateSnapshot,
    TickPayload,
    WorldNode,
    WorldTree,
)
from mudville.sim.engine import Engine
from mudville.sim.graph import (
    Container,
    EntityNotFound,
    Exit,
    MobileThing,
    Person,
    PersonKind,
    Place,
    Spell,
    Thing,
    exit_toward,
    move,
)
from mudville.sim.scheduler import Callback, CallbackNotFound, Clock
from mudville.sim.session import Session, setup
from mudville.sim.tick_loop import run_ticks, snapshot_world

__all__ = [
    "Announcer",
    "Callback",
    "CallbackNotFound",
    "Clock",
    "Container",
    "Engine",
    "EntityNotFound",
    "Event",
    "EventAnnouncer",
    "Exit",
    "LookReport",
    "MobileThing",
    "NodeType",
    "Person",
    "PersonKind",
    "Place",
    "Session",
    "Spell",
    "StateSnapshot",
    "Thing",
    "TickPayload",
    "WorldNode",
    "WorldTree",
    "exit_toward",
    "move",
    "run_ticks",
    "setup",
    "snapshot_world",
]
