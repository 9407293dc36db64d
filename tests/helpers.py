import random

from mudville.sim.announce import EventAnnouncer
from mudville.sim.engine import Engine
from mudville.sim.scheduler import Clock


class ScriptedRandom(random.Random):
    """Random source whose randint draws come from a fixed script."""

    def __init__(self, draws: list[int]) -> None:
        super().__init__(0)
        self.draws = list(draws)

    def randint(self, a: int, b: int) -> int:
        value = self.draws.pop(0)
        assert a <= value <= b
        return value


def build_engine(rng: random.Random | None = None) -> tuple[Engine, EventAnnouncer]:
    announcer = EventAnnouncer(omniscient=True)
    engine = Engine(clock=Clock(), announcer=announcer, rng=rng or random.Random(1))
    return engine, announcer


def messages(announcer: EventAnnouncer) -> list[str]:
    return [event.payload["message"] for event in announcer.events]
