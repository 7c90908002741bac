from __future__ import annotations

from typing import Any, Dict

from esper import World

from action_economy.components.combat_pointer import CombatPointer
from action_economy.components.effect import Effect
from action_economy.components.effect_duration import EffectDuration
from action_economy.events.bus import (
    EVENT_EFFECT_APPLY,
    EVENT_EFFECT_REFRESHED,
    EVENT_EFFECT_REMOVE,
    EventBus,
)
from action_economy.utils.effects import attach_effect, detach_effect, find_effect, get_effect_list


class EffectLifecycleSystem:
    """Handles creation, refreshing, and removal of effect entities requested over the bus.

    An apply request carrying an ``origin`` that matches an effect already on
    the owner re-enables that effect and restarts its duration instead of
    stacking a copy.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_EFFECT_APPLY, self.on_effect_apply)
        self.event_bus.subscribe(EVENT_EFFECT_REMOVE, self.on_effect_remove)

    def on_effect_apply(self, sender, **kwargs):
        slug = kwargs.get("slug")
        owner_entity = kwargs.get("owner_entity")
        if slug is None or owner_entity is None:
            return
        if not self.world.entity_exists(owner_entity):
            return
        origin = kwargs.get("origin")
        rounds = kwargs.get("rounds")
        combat: CombatPointer | None = kwargs.get("combat")
        metadata: Dict[str, Any] = dict(kwargs.get("metadata") or {})
        if origin is not None:
            existing = find_effect(self.world, owner_entity, origin=origin)
            if existing is not None:
                self._refresh_effect(existing, rounds, combat)
                return
        components: list[Any] = []
        if rounds is not None:
            components.append(self._duration(rounds, combat))
        attach_effect(
            self.world,
            self.event_bus,
            Effect(
                slug=slug,
                owner_entity=owner_entity,
                label=kwargs.get("label") or slug,
                origin=origin,
                metadata=metadata,
            ),
            *components,
        )

    def on_effect_remove(self, sender, **kwargs):
        effect_entity = kwargs.get("effect_entity")
        reason = kwargs.get("reason", "removed")
        if effect_entity is not None:
            detach_effect(self.world, self.event_bus, effect_entity, reason=reason)
            return
        owner_entity = kwargs.get("owner_entity")
        if owner_entity is None:
            return
        slug = kwargs.get("slug")
        remove_all = bool(kwargs.get("remove_all", False))
        effect_list = get_effect_list(self.world, owner_entity)
        if effect_list is None:
            return
        for candidate in list(effect_list.effect_entities):
            try:
                effect = self.world.component_for_entity(candidate, Effect)
            except KeyError:
                effect_list.effect_entities.remove(candidate)
                continue
            if slug is not None and effect.slug != slug:
                continue
            detach_effect(self.world, self.event_bus, candidate, reason=reason)
            if not remove_all:
                break

    def _refresh_effect(self, effect_entity: int, rounds: Any, combat: CombatPointer | None) -> None:
        effect = self.world.component_for_entity(effect_entity, Effect)
        effect.disabled = False
        if rounds is not None:
            fresh = self._duration(rounds, combat)
            try:
                duration = self.world.component_for_entity(effect_entity, EffectDuration)
            except KeyError:
                self.world.add_component(effect_entity, fresh)
            else:
                duration.rounds = fresh.rounds
                duration.start_round = fresh.start_round
                duration.start_turn = fresh.start_turn
        self.event_bus.emit(
            EVENT_EFFECT_REFRESHED,
            effect_entity=effect_entity,
            owner_entity=effect.owner_entity,
            slug=effect.slug,
        )

    @staticmethod
    def _duration(rounds: Any, combat: CombatPointer | None) -> EffectDuration:
        try:
            rounds_value = int(rounds)
        except (TypeError, ValueError):
            rounds_value = 0
        if combat is None:
            return EffectDuration(rounds=max(0, rounds_value))
        return EffectDuration(rounds=max(0, rounds_value), start_round=combat.round, start_turn=combat.turn)
