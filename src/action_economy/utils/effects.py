from __future__ import annotations

from typing import Any, Iterator

from esper import World

from action_economy.components.effect import Effect
from action_economy.components.effect_list import EffectList
from action_economy.events.bus import EVENT_EFFECT_APPLIED, EVENT_EFFECT_EXPIRED, EventBus


def ensure_effect_list(world: World, owner_entity: int) -> EffectList:
    try:
        return world.component_for_entity(owner_entity, EffectList)
    except KeyError:
        effect_list = EffectList()
        world.add_component(owner_entity, effect_list)
        return effect_list


def get_effect_list(world: World, owner_entity: int) -> EffectList | None:
    try:
        return world.component_for_entity(owner_entity, EffectList)
    except KeyError:
        return None


def iter_effects(world: World, owner_entity: int, *component_types) -> Iterator[tuple[int, tuple[Any, ...]]]:
    """Yield (effect_entity, components) for the owner's effects carrying every requested type."""
    effect_list = get_effect_list(world, owner_entity)
    if effect_list is None:
        return
    for effect_entity in list(effect_list.effect_entities):
        try:
            components = tuple(world.component_for_entity(effect_entity, t) for t in component_types)
        except KeyError:
            continue
        yield effect_entity, components


def find_effect(world: World, owner_entity: int, *, slug: str | None = None, origin: str | None = None) -> int | None:
    for effect_entity, (effect,) in iter_effects(world, owner_entity, Effect):
        if slug is not None and effect.slug != slug:
            continue
        if origin is not None and effect.origin != origin:
            continue
        return effect_entity
    return None


def attach_effect(world: World, event_bus: EventBus, effect: Effect, *components: Any) -> int:
    """Create an effect entity, reference it from the owner's EffectList and announce it."""
    effect_entity = world.create_entity(effect, *components)
    ensure_effect_list(world, effect.owner_entity).effect_entities.append(effect_entity)
    event_bus.emit(
        EVENT_EFFECT_APPLIED,
        effect_entity=effect_entity,
        owner_entity=effect.owner_entity,
        slug=effect.slug,
    )
    return effect_entity


def detach_effect(world: World, event_bus: EventBus, effect_entity: int, reason: str) -> None:
    try:
        effect = world.component_for_entity(effect_entity, Effect)
    except KeyError:
        if world.entity_exists(effect_entity):
            world.delete_entity(effect_entity, immediate=True)
        return
    effect_list = get_effect_list(world, effect.owner_entity)
    if effect_list and effect_entity in effect_list.effect_entities:
        effect_list.effect_entities.remove(effect_entity)
    world.delete_entity(effect_entity, immediate=True)
    event_bus.emit(
        EVENT_EFFECT_EXPIRED,
        effect_entity=effect_entity,
        owner_entity=effect.owner_entity,
        slug=effect.slug,
        reason=reason,
    )
