from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SelfEffectTemplate:
    """Effect an activity grants to its own user."""

    slug: str
    label: str
    rounds: int | None = None


@dataclass(frozen=True, slots=True)
class Activity:
    """Snapshot of a host activity (an item's attack, spell cast, feature use).

    activation: the action-economy cost string reported by the host ("action",
    "bonus", "reaction", ...), or None for free activities.
    """

    name: str
    item_name: str
    item_uuid: str
    activation: str | None = None
    kind: str = "utility"
    target_affects: str | None = None
    range_units: str | None = None
    effects: tuple[SelfEffectTemplate, ...] = ()

    @property
    def is_attack(self) -> bool:
        return self.kind == "attack"

    @property
    def targets_self(self) -> bool:
        return self.target_affects == "self" or self.range_units == "self"
