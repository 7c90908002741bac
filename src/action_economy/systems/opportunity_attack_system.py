from __future__ import annotations

import logging

from esper import World

from action_economy.components.activity import Activity
from action_economy.components.combat_pointer import CombatPointer
from action_economy.events.bus import EventBus, EVENT_COMBAT_TURN_CHANGE, EVENT_PRE_ROLL_ATTACK, EVENT_ROLL_ATTACK
from action_economy.settings import Settings
from action_economy.slots.registry import ResourceSlotType
from action_economy.systems.action_usage_system import ActionUsageSystem
from action_economy.systems.action_usage_tracker import UsageCheck
from action_economy.utils.notify import notify_info

logger = logging.getLogger(__name__)

OPPORTUNITY_ATTACK_MESSAGE = "You're attacking when it's not your turn, assuming an Opportunity Attack."


class OpportunityAttackSystem:
    """Treats an attack rolled outside the attacker's own turn as spending its reaction.

    The pre-roll gate and the post-roll record form one decision: the gate's
    outcome is kept per actor until the roll lands, and a cancelled gate never
    records. A kept outcome only applies to a roll on the same round and turn.
    """

    def __init__(self, world: World, event_bus: EventBus, settings: Settings, usage_system: ActionUsageSystem):
        self.world = world
        self.event_bus = event_bus
        self.settings = settings
        self.usage_system = usage_system
        self._pending: dict[int, tuple[int, int, UsageCheck]] = {}
        self.event_bus.subscribe(EVENT_PRE_ROLL_ATTACK, self.on_pre_roll_attack)
        self.event_bus.subscribe(EVENT_ROLL_ATTACK, self.on_roll_attack)
        self.event_bus.subscribe(EVENT_COMBAT_TURN_CHANGE, self.on_combat_turn_change)

    def _is_off_turn_attack(self, actor: int | None, combat: CombatPointer | None) -> bool:
        if combat is None or not combat.includes(actor):
            return False
        if combat.is_active(actor):
            return False
        return self.settings.is_slot_tracked(ResourceSlotType.REACTION)

    def on_pre_roll_attack(self, sender, **payload) -> bool:
        actor = payload.get("actor")
        combat: CombatPointer | None = payload.get("combat")
        if not self._is_off_turn_attack(actor, combat):
            return True
        check = self.usage_system.gate(actor, ResourceSlotType.REACTION)
        self._pending[actor] = (combat.round, combat.turn, check)
        return not check.cancels

    def on_roll_attack(self, sender, **payload) -> None:
        actor = payload.get("actor")
        combat: CombatPointer | None = payload.get("combat")
        activity: Activity | None = payload.get("activity")
        if not self._is_off_turn_attack(actor, combat):
            self._pending.pop(actor, None)
            return
        pending = self._pending.pop(actor, None)
        check = None
        if pending is not None and pending[:2] == (combat.round, combat.turn):
            check = pending[2]
        if check is None:
            check = self.usage_system.gate(actor, ResourceSlotType.REACTION)
        if check.cancels:
            return
        notify_info(self.event_bus, OPPORTUNITY_ATTACK_MESSAGE)
        source_label = activity.item_name if activity is not None else ""
        self.usage_system.tracker.record_usage(
            actor, ResourceSlotType.REACTION, source_label, combat.round, combat.turn
        )

    def on_combat_turn_change(self, sender, **payload) -> None:
        self._pending.clear()
