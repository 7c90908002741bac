from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

MODULE_ID = "jay-helpers"


class ResourceSlotType(str, Enum):
    """Per-turn action-economy categories."""

    ACTION = "action"
    BONUS = "bonus"
    REACTION = "reaction"
    OPPORTUNITY = "opportunity"

    @classmethod
    def parse(cls, value: object) -> "ResourceSlotType | None":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class SlotDefinition:
    """Static description of a tracked slot type.

    ``label`` is a prefix; the marker label is the prefix followed by whatever
    consumed the slot, so the source name can be recovered from it.
    """

    slot_type: ResourceSlotType
    label: str
    icon: str
    description: str = "Action taken"
    rounds: int = 1

    def marker_label(self, source_label: str) -> str:
        return f"{self.label}{source_label}"


class SlotRegistry:
    """In-memory collection of slot definitions."""

    def __init__(self) -> None:
        self._definitions: dict[ResourceSlotType, SlotDefinition] = {}

    def register(self, definition: SlotDefinition) -> None:
        if definition.slot_type in self._definitions:
            raise ValueError(f"Slot '{definition.slot_type.value}' already registered")
        self._definitions[definition.slot_type] = definition

    def get(self, slot_type: ResourceSlotType) -> SlotDefinition:
        try:
            return self._definitions[slot_type]
        except KeyError as exc:
            raise KeyError(f"Slot '{slot_type}' is not registered") from exc

    def has(self, slot_type: ResourceSlotType | None) -> bool:
        return slot_type in self._definitions

    def all(self) -> Iterable[SlotDefinition]:
        return tuple(self._definitions.values())


default_slot_registry = SlotRegistry()


def register_slot(definition: SlotDefinition) -> None:
    default_slot_registry.register(definition)
