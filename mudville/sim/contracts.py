"""Data contracts for world snapshots, announcements and tick payloads."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NodeType(str, Enum):
    WORLD = "world"
    PLACE = "place"
    THING = "thing"
    MOBILE_THING = "mobile_thing"
    PERSON = "person"
    SPELL = "spell"


class WorldNode(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    type: NodeType
    parent_id: str | None = None
    children: list[str] = Field(default_factory=list)
    kind: str | None = None
    health: int | None = None
    alive: bool | None = None


class WorldTree(BaseModel):
    model_config = ConfigDict(extra="forbid")

    root_id: str
    nodes: dict[str, WorldNode]

    @model_validator(mode="after")
    def validate_tree(self) -> "WorldTree":
        if self.root_id not in self.nodes:
            raise ValueError("root_id must exist in nodes")
        for node_id, node in self.nodes.items():
            if node.id != node_id:
                raise ValueError("node id must match nodes key")
            for child_id in node.children:
                child = self.nodes.get(child_id)
                if child is None or child.parent_id != node_id:
                    raise ValueError(f"child {child_id} does not point back to {node_id}")
        return self


class Event(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: str
    payload: dict[str, Any] = Field(default_factory=dict)


class StateSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid")

    world: WorldTree


class TickPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tick: int
    state: StateSnapshot
    events: list[Event] | None = None


class LookReport(BaseModel):
    """What a person can see from where they stand."""

    model_config = ConfigDict(extra="forbid")

    location: str
    carrying: list[str] = Field(default_factory=list)
    floor: list[str] = Field(default_factory=list)
    people: list[str] = Field(default_factory=list)
    exits: list[str] = Field(default_factory=list)
