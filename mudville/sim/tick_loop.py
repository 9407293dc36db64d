"""Tick loop orchestration: advance the clock and capture each tick."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from mudville.sim.contracts import NodeType, StateSnapshot, TickPayload, WorldNode, WorldTree
from mudville.sim.engine import Engine
from mudville.sim.graph import Container, Entity, Person, Place, Spell, Thing

if TYPE_CHECKING:
    from mudville.sim.session import Session

ROOT_ID = "world"


def run_ticks(session: Session, ticks: int | None) -> Iterable[TickPayload]:
    step_count = 0
    while ticks is None or step_count < ticks:
        session.clock.tick()
        yield capture_tick(session)
        step_count += 1


def capture_tick(session: Session) -> TickPayload:
    """Bundle the tick that just ended with everything announced during it."""
    events = session.announcer.drain()
    return TickPayload(
        tick=session.clock.current_time(),
        state=StateSnapshot(world=snapshot_world(session.engine)),
        events=events or None,
    )


def snapshot_world(engine: Engine) -> WorldTree:
    """Project the ownership graph, vault excluded, into a validated tree."""
    places = engine.places()
    nodes: dict[str, WorldNode] = {
        ROOT_ID: WorldNode(
            id=ROOT_ID,
            name="World",
            type=NodeType.WORLD,
            children=[place.entity_id for place in places],
        )
    }
    for place in places:
        _add_node(nodes, place, parent_id=ROOT_ID)
    return WorldTree(root_id=ROOT_ID, nodes=nodes)


def _add_node(nodes: dict[str, WorldNode], entity: Entity, *, parent_id: str) -> None:
    node = WorldNode(
        id=entity.entity_id,
        name=entity.name,
        type=_node_type(entity),
        parent_id=parent_id,
    )
    if isinstance(entity, Person):
        node.kind = entity.kind.value
        node.health = entity.health
        node.alive = entity.alive
    nodes[entity.entity_id] = node
    if isinstance(entity, Container):
        for child in entity.things:
            node.children.append(child.entity_id)
            _add_node(nodes, child, parent_id=entity.entity_id)


def _node_type(entity: Entity) -> NodeType:
    if isinstance(entity, Place):
        return NodeType.PLACE
    if isinstance(entity, Person):
        return NodeType.PERSON
    if isinstance(entity, Spell):
        return NodeType.SPELL
    if type(entity) is Thing:
        return NodeType.THING
    return NodeType.MOBILE_THING
