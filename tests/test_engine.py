import pytest
from helpers import build_engine, messages

from mudville.sim.graph import PersonKind, exit_toward


def test_person_goes_up_to_stairwell() -> None:
    engine, announcer = build_engine()
    lobby, stairwell = _lobby_and_stairwell(engine)
    person = engine.make_person("ben", lobby)

    assert engine.go(person, "up")

    assert person.location is stairwell
    assert stairwell.has(person)
    assert not lobby.has(person)
    assert "ben moves from lobby to stairwell" in messages(announcer)
    assert engine.clock.current_time() == 0


def test_avatar_move_advances_clock_once() -> None:
    engine, _ = build_engine()
    lobby, stairwell = _lobby_and_stairwell(engine)
    avatar = engine.make_avatar("alyssa", lobby)

    assert engine.go(avatar, "up")
    assert avatar.location is stairwell
    assert engine.clock.current_time() == 1

    assert not engine.go(avatar, "sideways")
    assert engine.clock.current_time() == 1


def test_avatar_move_is_announced_before_the_new_room_is_described() -> None:
    engine, announcer = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    avatar = engine.make_avatar("alyssa", lobby)

    engine.go(avatar, "up")

    heard = messages(announcer)
    assert heard[0] == "alyssa leaves lobby heading up"
    assert heard[1] == "alyssa moves from lobby to stairwell"
    assert heard[2] == "You are in stairwell"


def test_person_rates_below_one_are_rejected() -> None:
    engine, _ = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)

    with pytest.raises(ValueError, match="hunger 0"):
        engine.make_troll("grendel", lobby, activity=1, miserly=1, hunger=0)
    assert engine.people() == []


def test_go_without_exit_leaves_actor_in_place() -> None:
    engine, announcer = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    person = engine.make_person("ben", lobby)

    assert exit_toward(lobby, "west") is None
    assert not engine.go(person, "west")
    assert person.location is lobby
    assert "No exit in west direction" in messages(announcer)


def test_enter_room_greets_people_already_there() -> None:
    engine, announcer = build_engine()
    lobby, stairwell = _lobby_and_stairwell(engine)
    engine.make_person("amy", stairwell)
    ben = engine.make_person("ben", lobby)

    engine.go(ben, "up")

    assert "At stairwell ben says -- Hi amy" in messages(announcer)


def test_take_from_floor_and_from_another_person() -> None:
    engine, announcer = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby)
    amy = engine.make_person("amy", lobby)
    bagel = engine.make_mobile_thing("bagel", lobby)

    assert engine.take(ben, bagel)
    assert bagel.location is ben

    assert engine.take(amy, bagel)
    assert bagel.location is amy
    assert not ben.has(bagel)
    assert "At lobby ben says -- Yaaaah! I am upset!" in messages(announcer)


def test_take_refusals_leave_state_unchanged() -> None:
    engine, _ = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby)
    amy = engine.make_person("amy", lobby)
    chair = engine.make_thing("chair", lobby)
    bagel = engine.make_mobile_thing("bagel", ben)

    assert not engine.take(ben, bagel)
    assert not engine.take(ben, chair)
    assert not engine.take(ben, amy)
    assert not engine.take(ben, engine.template("cure-light"))
    assert chair.location is lobby
    assert amy.location is lobby
    assert engine.template("cure-light").location is engine.vault


def test_spells_cannot_be_dropped_lost_or_stolen() -> None:
    engine, _ = build_engine()
    lobby, stairwell = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby)
    amy = engine.make_person("amy", lobby)
    spell = engine.clone_spell(engine.template("boil-spell"), ben)

    assert not engine.drop(ben, spell)
    assert not engine.lose(ben, spell, stairwell)
    assert not engine.take(amy, spell)
    assert spell.location is ben
    assert ben.has(spell)


def test_spell_on_floor_can_be_taken() -> None:
    engine, _ = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby)
    spell = engine.clone_spell(engine.template("slug-spell"), lobby)

    assert engine.take(ben, spell)
    assert spell.location is ben


def test_drop_places_thing_in_current_room() -> None:
    engine, _ = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby)
    bagel = engine.make_mobile_thing("bagel", ben)
    cookie = engine.make_mobile_thing("cookie", lobby)

    assert engine.drop(ben, bagel)
    assert bagel.location is lobby
    assert not engine.drop(ben, cookie)


def test_heal_never_exceeds_max_health() -> None:
    engine, _ = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby, health=1)

    engine.heal(ben, 1)
    assert ben.health == 2
    engine.heal(ben, 10)
    assert ben.health == ben.max_health


def test_suffer_reduces_health_and_kills_at_zero() -> None:
    engine, _ = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby)

    assert engine.suffer(ben, 2)
    assert ben.health == 1
    assert ben.alive

    engine.suffer(ben, 1)
    assert not ben.alive
    assert ben.location is engine.heaven


def test_death_drops_inventory_and_unregisters_callbacks() -> None:
    engine, announcer = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    troll = engine.make_troll("grendel", lobby, activity=1, miserly=1, hunger=1)
    club = engine.make_mobile_thing("club", troll)
    spell = engine.clone_spell(engine.template("boil-spell"), troll)

    engine.die(troll, None)

    assert club.location is lobby
    assert spell.location is lobby
    assert troll.things == []
    assert troll.location is engine.heaven
    assert engine.heaven.has(troll)
    assert not lobby.has(troll)
    assert engine.clock.callbacks == []
    assert any(event.kind == "WORLD" for event in announcer.events)

    engine.clock.run_for(2)
    assert troll.location is engine.heaven


def test_dead_person_cannot_act() -> None:
    engine, _ = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby)
    bagel = engine.make_mobile_thing("bagel", lobby)
    engine.die(ben)

    assert not engine.go(ben, "up")
    assert not engine.take(ben, bagel)
    assert not engine.heal(ben, 1)
    assert not engine.suffer(ben, 1)


def test_look_around_reports_surroundings() -> None:
    engine, _ = build_engine()
    lobby, _ = _lobby_and_stairwell(engine)
    avatar = engine.make_avatar("alyssa", lobby)
    engine.make_person("ben", lobby)
    engine.make_thing("chair", lobby)
    engine.make_mobile_thing("pen", avatar)

    report = engine.look_around(avatar)

    assert report.location == "lobby"
    assert report.carrying == ["pen"]
    assert report.floor == ["chair"]
    assert report.people == ["ben"]
    assert report.exits == ["up"]


def test_go_home_returns_person_to_birthplace() -> None:
    engine, _ = build_engine()
    lobby, stairwell = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", stairwell)
    engine.go(ben, "down")
    assert ben.location is lobby

    engine.go_home(ben)

    assert ben.location is stairwell
    assert ben.kind is PersonKind.BASIC


def test_single_container_invariant_after_transfers() -> None:
    engine, _ = build_engine()
    lobby, stairwell = _lobby_and_stairwell(engine)
    ben = engine.make_person("ben", lobby)
    amy = engine.make_person("amy", lobby)
    bagel = engine.make_mobile_thing("bagel", lobby)
    engine.take(ben, bagel)
    engine.take(amy, bagel)
    engine.go(amy, "up")
    engine.drop(amy, bagel)
    engine.die(amy)

    containers = [entity for entity in engine.entities() if hasattr(entity, "things")]
    for entity in engine.entities():
        if entity in engine.places() or entity is engine.vault:
            continue
        holders = [container for container in containers if container.has(entity)]
        assert holders == [entity.location]
    assert bagel.location is stairwell


def _lobby_and_stairwell(engine):
    lobby = engine.make_place("lobby")
    stairwell = engine.make_place("stairwell")
    engine.connect(lobby, "up", stairwell, "down")
    return lobby, stairwell
