import pytest
from esper import World

from action_economy.components.combat_pointer import CombatPointer
from action_economy.components.effect import Effect
from action_economy.components.effect_duration import EffectDuration
from action_economy.components.effect_list import EffectList
from action_economy.events.bus import (
    EventBus,
    EVENT_EFFECT_APPLY,
    EVENT_EFFECT_APPLIED,
    EVENT_EFFECT_EXPIRED,
    EVENT_EFFECT_REFRESHED,
    EVENT_EFFECT_REMOVE,
)
from action_economy.factories.actors import create_actor
from action_economy.systems.effect_lifecycle_system import EffectLifecycleSystem

from tests.helpers import capture


@pytest.fixture
def lifecycle_world():
    bus = EventBus()
    world = World()
    system = EffectLifecycleSystem(world, bus)
    owner = create_actor(world, "Aria")
    return bus, world, system, owner


def _effect_entities(world: World, owner: int) -> list[int]:
    effect_list = world.component_for_entity(owner, EffectList)
    return list(effect_list.effect_entities)


def test_apply_creates_effect_with_duration(lifecycle_world):
    bus, world, _system, owner = lifecycle_world
    applied = capture(bus, EVENT_EFFECT_APPLIED)
    combat = CombatPointer(round=2, turn=1, active_actor=owner, combatants=frozenset({owner}))
    bus.emit(EVENT_EFFECT_APPLY, owner_entity=owner, slug="bless", label="Bless", rounds=10, combat=combat)
    (effect_entity,) = _effect_entities(world, owner)
    effect = world.component_for_entity(effect_entity, Effect)
    assert effect.label == "Bless"
    duration = world.component_for_entity(effect_entity, EffectDuration)
    assert (duration.rounds, duration.start_round, duration.start_turn) == (10, 2, 1)
    assert applied[-1]["effect_entity"] == effect_entity


def test_same_origin_refreshes_instead_of_stacking(lifecycle_world):
    bus, world, _system, owner = lifecycle_world
    refreshed = capture(bus, EVENT_EFFECT_REFRESHED)
    bus.emit(EVENT_EFFECT_APPLY, owner_entity=owner, slug="rage", origin="Item.rage.rage", rounds=10)
    (effect_entity,) = _effect_entities(world, owner)
    world.component_for_entity(effect_entity, Effect).disabled = True
    later = CombatPointer(round=4, turn=0, active_actor=owner, combatants=frozenset({owner}))

    bus.emit(EVENT_EFFECT_APPLY, owner_entity=owner, slug="rage", origin="Item.rage.rage", rounds=10, combat=later)

    assert _effect_entities(world, owner) == [effect_entity]
    assert world.component_for_entity(effect_entity, Effect).disabled is False
    assert world.component_for_entity(effect_entity, EffectDuration).start_round == 4
    assert refreshed[-1]["effect_entity"] == effect_entity


def test_effects_without_origin_stack(lifecycle_world):
    bus, world, _system, owner = lifecycle_world
    bus.emit(EVENT_EFFECT_APPLY, owner_entity=owner, slug="bless")
    bus.emit(EVENT_EFFECT_APPLY, owner_entity=owner, slug="bless")
    assert len(_effect_entities(world, owner)) == 2


def test_remove_by_slug(lifecycle_world):
    bus, world, _system, owner = lifecycle_world
    expired = capture(bus, EVENT_EFFECT_EXPIRED)
    bus.emit(EVENT_EFFECT_APPLY, owner_entity=owner, slug="bless")
    bus.emit(EVENT_EFFECT_APPLY, owner_entity=owner, slug="haste")
    bus.emit(EVENT_EFFECT_REMOVE, owner_entity=owner, slug="bless")
    remaining = _effect_entities(world, owner)
    assert [world.component_for_entity(e, Effect).slug for e in remaining] == ["haste"]
    assert expired[-1]["slug"] == "bless"
    assert expired[-1]["reason"] == "removed"


def test_remove_by_entity(lifecycle_world):
    bus, world, _system, owner = lifecycle_world
    bus.emit(EVENT_EFFECT_APPLY, owner_entity=owner, slug="haste")
    (effect_entity,) = _effect_entities(world, owner)
    bus.emit(EVENT_EFFECT_REMOVE, effect_entity=effect_entity, reason="dispelled")
    assert _effect_entities(world, owner) == []
    assert not world.entity_exists(effect_entity)


def test_apply_to_missing_owner_is_ignored(lifecycle_world):
    bus, world, _system, _owner = lifecycle_world
    applied = capture(bus, EVENT_EFFECT_APPLIED)
    bus.emit(EVENT_EFFECT_APPLY, owner_entity=4242, slug="bless")
    assert not applied
