"""Spell vault, template cloning and the effects spells carry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mudville.sim.graph import Container, Entity, Person, Place, Spell, SpellEffect

if TYPE_CHECKING:
    from mudville.sim.engine import Engine

VAULT_NAME = "chamber-of-stata"
SLUG_NAME = "slug"


@dataclass(frozen=True)
class SpellDef:
    name: str
    incantation: str
    kind: str
    points: int = 0


HEALING_SPELLS = (
    SpellDef("cure-light", "sana minima", "heal", points=1),
    SpellDef("cure-serious", "sana maior", "heal", points=2),
    SpellDef("cure-critical", "sana maxima", "heal", points=3),
)

OFFENSIVE_SPELLS = (
    SpellDef("boil-spell", "habooic katarnum", "boil", points=2),
    SpellDef("slug-spell", "dagnabbit ekaterin", "slug"),
)


def create_vault() -> Place:
    """The vault has no exits and nobody ever visits it."""
    return Place(name=VAULT_NAME)


def clone(template: Spell, destination: Container) -> Spell:
    return Spell(
        name=template.name,
        location=destination,
        incantation=template.incantation,
        effect=template.effect,
    )


def use(spell: Spell, caster: Person, target: Entity) -> None:
    if spell.effect is None:
        raise ValueError(f"Spell {spell.name} has no effect bound.")
    spell.effect(caster, target)


def install_templates(engine: Engine) -> dict[str, Spell]:
    templates: dict[str, Spell] = {}
    for spell_def in HEALING_SPELLS + OFFENSIVE_SPELLS:
        templates[spell_def.name] = engine.make_spell_template(
            spell_def.name,
            incantation=spell_def.incantation,
            effect=build_effect(engine, spell_def),
        )
    return templates


def build_effect(engine: Engine, spell_def: SpellDef) -> SpellEffect:
    if spell_def.kind == "heal":
        return healing_effect(engine, spell_def.points)
    if spell_def.kind == "boil":
        return boil_effect(engine, spell_def.points)
    if spell_def.kind == "slug":
        return slug_effect(engine)
    raise ValueError(f"Unknown spell kind {spell_def.kind}.")


def healing_effect(engine: Engine, points: int) -> SpellEffect:
    def effect(caster: Person, target: Entity) -> None:
        if not isinstance(target, Person):
            engine.say(caster, f"{target.name} has no wounds to mend.")
            return
        engine.heal(target, points)
        engine.say(caster, f"I mend {target.name}'s wounds.")

    return effect


def boil_effect(engine: Engine, hits: int) -> SpellEffect:
    def effect(caster: Person, target: Entity) -> None:
        if not isinstance(target, Person):
            engine.say(caster, f"{target.name} just sits there, unboiled.")
            return
        engine.say(target, "Ouch! My skin is boiling!")
        engine.suffer(target, hits, caster)

    return effect


def slug_effect(engine: Engine) -> SpellEffect:
    def effect(caster: Person, target: Entity) -> None:
        place = target.location if isinstance(target, Person) else caster.location
        engine.make_mobile_thing(SLUG_NAME, place)
        engine.say(caster, f"A slimy slug appears at {target.name}'s feet.")

    return effect
