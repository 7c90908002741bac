from __future__ import annotations

from action_economy.slots.registry import (
    MODULE_ID,
    ResourceSlotType,
    SlotDefinition,
    default_slot_registry,
    register_slot,
)


def ensure_default_slots_registered() -> None:
    """Register the tracked slot definitions if they are not already present.

    ``opportunity`` only has a setting; it is intentionally absent here.
    """

    def _register(definition: SlotDefinition) -> None:
        if default_slot_registry.has(definition.slot_type):
            return
        register_slot(definition)

    _register(
        SlotDefinition(
            slot_type=ResourceSlotType.ACTION,
            label="Action - ",
            icon=f"modules/{MODULE_ID}/images/action.svg",
        )
    )
    _register(
        SlotDefinition(
            slot_type=ResourceSlotType.BONUS,
            label="Bonus Action: ",
            icon=f"modules/{MODULE_ID}/images/bonus.svg",
        )
    )
    _register(
        SlotDefinition(
            slot_type=ResourceSlotType.REACTION,
            label="Reaction: ",
            icon=f"modules/{MODULE_ID}/images/reaction.svg",
        )
    )
