from __future__ import annotations

from typing import Sequence

from action_economy.components.activity import Activity, SelfEffectTemplate
from action_economy.components.combat_pointer import CombatPointer
from action_economy.events.bus import EVENT_COMBAT_TURN_CHANGE, EventBus


class CombatDriver:
    """Stands in for the host's combat tracker: owns the turn order and round counter."""

    def __init__(self, event_bus: EventBus, order: Sequence[int], round: int = 1, turn: int = 0):
        self.event_bus = event_bus
        self.order = list(order)
        self.round = round
        self.turn = turn

    def pointer(self) -> CombatPointer:
        return CombatPointer(
            round=self.round,
            turn=self.turn,
            active_actor=self.order[self.turn],
            combatants=frozenset(self.order),
        )

    def advance(self) -> CombatPointer:
        self.turn += 1
        if self.turn >= len(self.order):
            self.turn = 0
            self.round += 1
        pointer = self.pointer()
        self.event_bus.emit(EVENT_COMBAT_TURN_CHANGE, combat=pointer)
        return pointer


def make_activity(
    item_name: str,
    activation: str | None = "action",
    *,
    kind: str = "utility",
    target_affects: str | None = None,
    range_units: str | None = None,
    effects: Sequence[SelfEffectTemplate] = (),
) -> Activity:
    slug = item_name.lower().replace(" ", "-")
    return Activity(
        name=f"Use {item_name}",
        item_name=item_name,
        item_uuid=f"Item.{slug}",
        activation=activation,
        kind=kind,
        target_affects=target_affects,
        range_units=range_units,
        effects=tuple(effects),
    )


def capture(event_bus: EventBus, name: str) -> list[dict]:
    received: list[dict] = []
    event_bus.subscribe(name, lambda sender, **payload: received.append(payload))
    return received
