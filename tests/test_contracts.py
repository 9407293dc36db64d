import pytest
from pydantic import ValidationError

from mudville.sim.announce import EventAnnouncer
from mudville.sim.contracts import LookReport, WorldNode, WorldTree
from mudville.sim.graph import Person, Place


def test_world_tree_rejects_orphaned_children() -> None:
    nodes = {
        "world": WorldNode(
            id="world", name="World", type="world", children=["lobby"]
        ),
        "lobby": WorldNode(id="lobby", name="lobby", type="place", parent_id="elsewhere"),
    }

    with pytest.raises(ValidationError):
        WorldTree(root_id="world", nodes=nodes)


def test_world_tree_requires_root() -> None:
    with pytest.raises(ValidationError):
        WorldTree(root_id="world", nodes={})


def test_look_report_forbids_extra_fields() -> None:
    with pytest.raises(ValidationError):
        LookReport(location="lobby", smell="coffee")


def test_announcer_filters_rooms_by_observer() -> None:
    lobby = Place(name="lobby")
    attic = Place(name="attic")
    observer = Person(name="alyssa", location=lobby)
    announcer = EventAnnouncer(observer=observer)

    announcer.announce_to_room(lobby, "heard")
    announcer.announce_to_room(attic, "not heard")
    announcer.announce_to_world("heard everywhere")

    drained = announcer.drain()
    assert [event.payload["message"] for event in drained] == [
        "heard",
        "heard everywhere",
    ]
    assert announcer.events == []


def test_omniscient_announcer_hears_every_room() -> None:
    attic = Place(name="attic")
    announcer = EventAnnouncer(omniscient=True)

    announcer.announce_to_room(attic, "creak")

    assert announcer.events[0].kind == "ROOM"
    assert announcer.events[0].payload == {"place": "attic", "message": "creak"}
