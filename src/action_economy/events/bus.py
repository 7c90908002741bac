from blinker import Signal
from typing import Dict


class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)

    def request(self, name: str, **payload) -> bool:
        """Dispatch a cancellable hook.

        Every receiver runs; the hook continues unless one of them returned ``False``.
        """
        sig = self._signals.get(name)
        if not sig:
            return True
        results = sig.send(self, **payload)
        return all(value is not False for _receiver, value in results)


# ============================================================================
# HOST HOOKS (cancellable ones are dispatched with EventBus.request)
# ============================================================================
EVENT_PRE_USE_ACTIVITY = "pre_use_activity"      # payload: actor=int, activity=Activity, combat=CombatPointer|None -> bool
EVENT_POST_USE_ACTIVITY = "post_use_activity"    # payload: actor=int, activity=Activity, combat=CombatPointer|None, targets=int
EVENT_PRE_ROLL_ATTACK = "pre_roll_attack"        # payload: actor=int, activity=Activity, combat=CombatPointer|None -> bool
EVENT_ROLL_ATTACK = "roll_attack"                # payload: actor=int, activity=Activity, combat=CombatPointer|None
EVENT_COMBAT_TURN_CHANGE = "combat_turn_change"  # payload: combat=CombatPointer


# ============================================================================
# HEALTH & STATUS
# ============================================================================
EVENT_DAMAGE_APPLIED = "damage_applied"              # payload: actor=int, amount=int, combat=CombatPointer|None
EVENT_TOKEN_STATUS_TOGGLED = "token_status_toggled"  # payload: actor=int, status=str, state=bool, combat=CombatPointer|None
EVENT_STATUS_CHANGED = "status_changed"              # payload: actor=int, status=str, active=bool, overlay=bool


# ============================================================================
# EFFECTS
# ============================================================================
EVENT_EFFECT_APPLY = "effect_apply"        # payload: owner_entity=int, slug=str, label=str, origin=str|None, rounds=int|None, combat=CombatPointer|None
EVENT_EFFECT_APPLIED = "effect_applied"    # payload: effect_entity=int, owner_entity=int, slug=str
EVENT_EFFECT_REFRESHED = "effect_refreshed"  # payload: effect_entity=int, owner_entity=int, slug=str
EVENT_EFFECT_REMOVE = "effect_remove"      # payload: effect_entity=int|None, owner_entity=int|None, slug=str|None
EVENT_EFFECT_EXPIRED = "effect_expired"    # payload: effect_entity=int, owner_entity=int, slug=str, reason=str


# ============================================================================
# ACTION USAGE
# ============================================================================
EVENT_USAGE_RECORDED = "usage_recorded"  # payload: actor=int, slot_type=ResourceSlotType, marker_entity=int, source_label=str
EVENT_USAGE_CLEARED = "usage_cleared"    # payload: actor=int, marker_entities=list[int]


# ============================================================================
# USER MESSAGES
# ============================================================================
EVENT_NOTIFY = "notify"  # payload: level=str ("info"|"warn"), message=str
