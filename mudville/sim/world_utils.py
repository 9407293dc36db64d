"""World tree helpers for resolving where a node stands."""

from __future__ import annotations

from mudville.sim.contracts import NodeType, WorldNode, WorldTree


def resolve_place_id(world: WorldTree, node_id: str | None) -> str | None:
    if node_id is None:
        return None
    node = world.nodes.get(node_id)
    current = node.parent_id if node else None
    while current is not None:
        parent = world.nodes.get(current)
        if parent is None:
            return None
        if parent.type == NodeType.PLACE:
            return parent.id
        current = parent.parent_id
    return None


def resolve_place_name(world: WorldTree, node_id: str | None) -> str | None:
    place_id = resolve_place_id(world, node_id)
    if place_id is None:
        return None
    node = world.nodes.get(place_id)
    return node.name if node else None


def people(world: WorldTree) -> list[WorldNode]:
    return [node for node in world.nodes.values() if node.type == NodeType.PERSON]
