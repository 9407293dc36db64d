"""Rich viewer rendering for TickPayload."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mudville.sim.announce import WORLD_EVENT
from mudville.sim.contracts import TickPayload
from mudville.sim.world_utils import people, resolve_place_name


def render_tick(payload: TickPayload, *, max_events: int = 8) -> RenderableType:
    header = Text(f"Tick {payload.tick}", style="bold")
    left = Group(header, _render_people(payload))
    right = _render_announcements(payload, max_events=max_events)
    return Columns([Panel(left, title="World"), Panel(right, title="Heard")])


def _render_people(payload: TickPayload) -> RenderableType:
    table = Table(title="People", show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Location")
    table.add_column("Health", justify="right")

    world = payload.state.world
    for node in sorted(people(world), key=lambda item: item.name):
        location = resolve_place_name(world, node.id) or "Unknown"
        health = "dead" if node.alive is False else str(node.health)
        table.add_row(node.name, location, health)
    return table


def _render_announcements(payload: TickPayload, *, max_events: int) -> RenderableType:
    table = Table(title="Announcements", show_header=True, header_style="bold")
    table.add_column("Where")
    table.add_column("Message")

    events = payload.events or []
    for event in events[-max_events:]:
        where = "everywhere" if event.kind == WORLD_EVENT else event.payload.get("place", "-")
        table.add_row(where, event.payload.get("message", ""))
    if not events:
        table.add_row("-", "None")
    return table
