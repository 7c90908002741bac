from __future__ import annotations

import logging

from esper import World

from action_economy.components.activity import Activity
from action_economy.components.combat_pointer import CombatPointer
from action_economy.events.bus import (
    EventBus,
    EVENT_COMBAT_TURN_CHANGE,
    EVENT_POST_USE_ACTIVITY,
    EVENT_PRE_USE_ACTIVITY,
)
from action_economy.settings import Settings
from action_economy.slots.registry import ResourceSlotType
from action_economy.systems.action_usage_tracker import ActionUsageTracker, Decision, UsageCheck
from action_economy.utils.notify import notify_warn

logger = logging.getLogger(__name__)


def already_used_message(slot_type: ResourceSlotType, source_label: str | None) -> str:
    return (
        f"You already used your {slot_type.value} on {source_label}, "
        "try again if you really want to use it."
    )


class ActionUsageSystem:
    """Connects activity and turn hooks to the usage tracker.

    Flow:
      - pre_use_activity: check the activity's slot, warn and cancel on first reuse.
      - post_use_activity: record the slot as consumed.
      - combat_turn_change: sweep stale markers from the actor whose turn starts.
    Untracked slots, disabled toggles and actors outside combat are left alone.
    """

    def __init__(self, world: World, event_bus: EventBus, settings: Settings, tracker: ActionUsageTracker | None = None):
        self.world = world
        self.event_bus = event_bus
        self.settings = settings
        self.tracker = tracker or ActionUsageTracker(world, event_bus)
        self.event_bus.subscribe(EVENT_PRE_USE_ACTIVITY, self.on_pre_use_activity)
        self.event_bus.subscribe(EVENT_POST_USE_ACTIVITY, self.on_post_use_activity)
        self.event_bus.subscribe(EVENT_COMBAT_TURN_CHANGE, self.on_combat_turn_change)

    def _tracked_slot(self, actor: int | None, activity: Activity | None, combat: CombatPointer | None) -> ResourceSlotType | None:
        if activity is None or combat is None or not combat.includes(actor):
            return None
        slot_type = ResourceSlotType.parse(activity.activation)
        if not self.tracker.registry.has(slot_type):
            return None
        if not self.settings.is_slot_tracked(slot_type):
            return None
        return slot_type

    def gate(self, actor: int, slot_type: ResourceSlotType) -> UsageCheck:
        """Run check_usage and surface the warning when it is the first reuse."""
        check = self.tracker.check_usage(actor, slot_type)
        if check.decision is Decision.WARN_AND_DENY:
            notify_warn(self.event_bus, already_used_message(slot_type, check.source_label))
        return check

    def on_pre_use_activity(self, sender, **payload) -> bool:
        actor = payload.get("actor")
        activity: Activity | None = payload.get("activity")
        logger.debug("Checking activity %s", getattr(activity, "name", None))
        slot_type = self._tracked_slot(actor, activity, payload.get("combat"))
        if slot_type is None:
            return True
        return not self.gate(actor, slot_type).cancels

    def on_post_use_activity(self, sender, **payload) -> None:
        actor = payload.get("actor")
        activity: Activity | None = payload.get("activity")
        combat: CombatPointer | None = payload.get("combat")
        logger.debug("Activity used %s", getattr(activity, "name", None))
        slot_type = self._tracked_slot(actor, activity, combat)
        if slot_type is None:
            return
        logger.debug("A tracked action %s was used", slot_type.value)
        self.tracker.record_usage(actor, slot_type, activity.item_name, combat.round, combat.turn)

    def on_combat_turn_change(self, sender, **payload) -> None:
        combat: CombatPointer | None = payload.get("combat")
        if combat is None or combat.active_actor is None:
            return
        self.tracker.sweep_stale(combat.active_actor, combat.round, combat.turn)
