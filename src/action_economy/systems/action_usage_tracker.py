from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from esper import World

from action_economy.components.effect import Effect
from action_economy.components.effect_duration import EffectDuration
from action_economy.components.usage_marker import UsageMarker
from action_economy.events.bus import EVENT_USAGE_CLEARED, EVENT_USAGE_RECORDED, EventBus
from action_economy.slots.factory import ensure_default_slots_registered
from action_economy.slots.registry import ResourceSlotType, SlotRegistry, default_slot_registry
from action_economy.utils.effects import attach_effect, detach_effect, iter_effects
from action_economy.utils.turn_boundary import is_stale

logger = logging.getLogger(__name__)


class Decision(Enum):
    ALLOW = auto()
    WARN_AND_DENY = auto()
    DENY = auto()


@dataclass(frozen=True, slots=True)
class UsageCheck:
    """Outcome of ``ActionUsageTracker.check_usage``.

    Only ``WARN_AND_DENY`` cancels the host action. A silent ``DENY`` means the
    user was already warned and is deliberately retrying, so the action goes ahead.
    """

    decision: Decision
    source_label: str | None = None

    @property
    def cancels(self) -> bool:
        return self.decision is Decision.WARN_AND_DENY


ALLOW = UsageCheck(Decision.ALLOW)


class ActionUsageTracker:
    """Gates and records per-turn slot consumption and expires stale markers.

    Markers are effect entities carrying ``Effect``, ``EffectDuration`` and
    ``UsageMarker``, referenced from the actor's ``EffectList``. There is at
    most one marker per (actor, slot type).
    """

    def __init__(self, world: World, event_bus: EventBus, registry: SlotRegistry = default_slot_registry):
        self.world = world
        self.event_bus = event_bus
        self.registry = registry
        if registry is default_slot_registry:
            ensure_default_slots_registered()

    def find_marker(self, actor: int, slot_type: ResourceSlotType) -> tuple[int, UsageMarker] | None:
        for marker_entity, (marker,) in iter_effects(self.world, actor, UsageMarker):
            if marker.slot_type == slot_type:
                return marker_entity, marker
        return None

    def markers(self, actor: int) -> list[tuple[int, UsageMarker]]:
        return [(ent, marker) for ent, (marker,) in iter_effects(self.world, actor, UsageMarker)]

    def check_usage(self, actor: int | None, slot_type: ResourceSlotType | None) -> UsageCheck:
        if actor is None or not self.world.entity_exists(actor):
            return ALLOW
        if not self.registry.has(slot_type):
            return ALLOW
        found = self.find_marker(actor, slot_type)
        if found is None:
            return ALLOW
        _, marker = found
        if not marker.warned:
            marker.warned = True
            return UsageCheck(Decision.WARN_AND_DENY, marker.source_label)
        return UsageCheck(Decision.DENY, marker.source_label)

    def record_usage(
        self,
        actor: int | None,
        slot_type: ResourceSlotType | None,
        source_label: str,
        current_round: int,
        current_turn: int,
    ) -> int | None:
        """Mark ``slot_type`` as consumed by ``actor``; returns the marker entity.

        An existing marker for the same slot is rewritten in place. A marker still
        current for this turn keeps its warned flag, so reuse warns once per turn.
        """
        if actor is None or not self.world.entity_exists(actor):
            return None
        if not self.registry.has(slot_type):
            return None
        definition = self.registry.get(slot_type)
        found = self.find_marker(actor, slot_type)
        if found is not None:
            marker_entity, marker = found
            if is_stale(marker.created_round, marker.created_turn, current_round, current_turn):
                marker.warned = False
            marker.source_label = source_label
            marker.created_round = current_round
            marker.created_turn = current_turn
            effect = self.world.component_for_entity(marker_entity, Effect)
            effect.label = definition.marker_label(source_label)
            duration = self.world.component_for_entity(marker_entity, EffectDuration)
            duration.start_round = current_round
            duration.start_turn = current_turn
            logger.debug("Replaced %s marker on %s with %r", slot_type.value, actor, source_label)
        else:
            marker_entity = attach_effect(
                self.world,
                self.event_bus,
                Effect(
                    slug=f"usage:{slot_type.value}",
                    owner_entity=actor,
                    label=definition.marker_label(source_label),
                    icon=definition.icon,
                    description=definition.description,
                ),
                EffectDuration(rounds=definition.rounds, start_round=current_round, start_turn=current_turn),
                UsageMarker(
                    slot_type=slot_type,
                    source_label=source_label,
                    created_round=current_round,
                    created_turn=current_turn,
                ),
            )
            logger.debug("Created %s marker on %s for %r", slot_type.value, actor, source_label)
        self.event_bus.emit(
            EVENT_USAGE_RECORDED,
            actor=actor,
            slot_type=slot_type,
            marker_entity=marker_entity,
            source_label=source_label,
        )
        return marker_entity

    def sweep_stale(self, actor: int | None, current_round: int, current_turn: int) -> list[int]:
        if actor is None or not self.world.entity_exists(actor):
            return []
        stale = [
            marker_entity
            for marker_entity, marker in self.markers(actor)
            if is_stale(marker.created_round, marker.created_turn, current_round, current_turn)
        ]
        for marker_entity in stale:
            detach_effect(self.world, self.event_bus, marker_entity, reason="turn")
        if stale:
            logger.debug("Cleared %d stale marker(s) on %s", len(stale), actor)
            self.event_bus.emit(EVENT_USAGE_CLEARED, actor=actor, marker_entities=list(stale))
        return stale
