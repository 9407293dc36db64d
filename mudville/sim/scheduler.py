"""Global clock and the per-tick callback registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

CallbackHandler = Callable[[str], None]


class CallbackNotFound(LookupError):
    """Raised when removing a callback that was never registered."""


class UnknownOperation(LookupError):
    """Raised when a callback names an operation with no handler."""


@dataclass(frozen=True)
class Callback:
    """A named command bound to an owner; equality ignores the operation."""

    owner_id: str
    name: str
    operation: str = field(compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.owner_id, self.name)


class Clock:
    """Tick counter plus the live callback set.

    Callbacks are stored newest-first. A tick activates a snapshot taken
    oldest-first; anything removed while the tick runs is recorded in a
    marker set and skipped if it has not activated yet.
    """

    def __init__(self) -> None:
        self._time = 0
        self._callbacks: list[Callback] = []
        self._removed_this_tick: set[tuple[str, str]] = set()
        self._handlers: dict[str, CallbackHandler] = {}

    @property
    def callbacks(self) -> list[Callback]:
        return list(self._callbacks)

    def current_time(self) -> int:
        return self._time

    def reset(self) -> None:
        self._time = 0
        self._callbacks = []
        self._removed_this_tick = set()

    def register_operation(self, operation: str, handler: CallbackHandler) -> None:
        self._handlers[operation] = handler

    def has_callback(self, owner_id: str, name: str) -> bool:
        return any(callback.key == (owner_id, name) for callback in self._callbacks)

    def add_callback(
        self, owner_id: str, name: str, operation: str | None = None
    ) -> bool:
        if self.has_callback(owner_id, name):
            return False
        callback = Callback(owner_id=owner_id, name=name, operation=operation or name)
        self._callbacks.insert(0, callback)
        return True

    def remove_callback(self, owner_id: str, name: str) -> Callback:
        for index, callback in enumerate(self._callbacks):
            if callback.key == (owner_id, name):
                del self._callbacks[index]
                self._removed_this_tick.add(callback.key)
                return callback
        raise CallbackNotFound(f"No callback {name} registered for {owner_id}.")

    def tick(self) -> None:
        self._removed_this_tick = set()
        snapshot = list(reversed(self._callbacks))
        for callback in snapshot:
            if callback.key in self._removed_this_tick:
                continue
            self._activate(callback)
        self._time += 1

    def run_for(self, ticks: int) -> None:
        for _ in range(ticks):
            self.tick()

    def _activate(self, callback: Callback) -> None:
        handler = self._handlers.get(callback.operation)
        if handler is None:
            raise UnknownOperation(
                f"Callback {callback.name} uses unknown operation {callback.operation}."
            )
        handler(callback.owner_id)
