"""Announcement sinks used by the engine to report what happens."""

from __future__ import annotations

from typing import Protocol

from mudville.sim.contracts import Event
from mudville.sim.graph import Person, Place

ROOM_EVENT = "ROOM"
WORLD_EVENT = "WORLD"


class Announcer(Protocol):
    def announce_to_room(self, place: Place, message: str) -> None:
        """Deliver a message to observers standing in ``place``."""

    def announce_to_world(self, message: str) -> None:
        """Deliver a message to every observer."""


class EventAnnouncer:
    """Buffers announcements as events until the tick loop drains them.

    Room messages are kept only when the observer stands in that room, or
    for every room when ``omniscient`` is set.
    """

    def __init__(
        self, *, observer: Person | None = None, omniscient: bool = False
    ) -> None:
        self.observer = observer
        self.omniscient = omniscient
        self._events: list[Event] = []

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    def announce_to_room(self, place: Place, message: str) -> None:
        if not self._observes(place):
            return
        self._events.append(
            Event(kind=ROOM_EVENT, payload={"place": place.name, "message": message})
        )

    def announce_to_world(self, message: str) -> None:
        self._events.append(Event(kind=WORLD_EVENT, payload={"message": message}))

    def drain(self) -> list[Event]:
        drained, self._events = self._events, []
        return drained

    def _observes(self, place: Place) -> bool:
        if self.omniscient:
            return True
        return self.observer is not None and self.observer.location is place
