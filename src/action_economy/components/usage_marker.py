from dataclasses import dataclass

from action_economy.slots.registry import ResourceSlotType


@dataclass(slots=True)
class UsageMarker:
    """Records that the owning actor consumed ``slot_type`` this turn.

    created_round/created_turn: combat pointer when the slot was consumed.
    warned: set once the user has been told the slot is already spent.
    """

    slot_type: ResourceSlotType
    source_label: str
    created_round: int
    created_turn: int
    warned: bool = False
