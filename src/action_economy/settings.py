"""Feature toggles read by the systems.

The host owns persistence; this module only describes the recognised options
and holds their current values.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from action_economy.slots.registry import ResourceSlotType

TRACK_ACTION = "trackAction"
TRACK_BONUS = "trackBonus"
TRACK_REACTION = "trackReaction"
TRACK_OPPORTUNITY = "trackOpportunity"
APPLY_SELF_EFFECTS = "applySelfEffects"
WARN_NO_TARGET = "warnNoTarget"
RED_BLOODIED = "redBloodied"
OVERLAY_BLOODIED = "overlayBloodied"
SYNC_DEFEATED = "syncDefeated"
SYNC_UNCONSCIOUS = "syncUnconscious"


@dataclass(frozen=True, slots=True)
class SettingDefinition:
    id: str
    default: bool
    scope: str = "client"
    requires_reload: bool = False


SETTINGS: tuple[SettingDefinition, ...] = (
    SettingDefinition(TRACK_ACTION, default=False),
    SettingDefinition(TRACK_BONUS, default=True),
    SettingDefinition(TRACK_REACTION, default=True),
    # Registered for the host's settings screen; no code path consumes it yet.
    SettingDefinition(TRACK_OPPORTUNITY, default=True),
    SettingDefinition(APPLY_SELF_EFFECTS, default=True),
    SettingDefinition(WARN_NO_TARGET, default=True),
    SettingDefinition(RED_BLOODIED, default=True, scope="world", requires_reload=True),
    SettingDefinition(OVERLAY_BLOODIED, default=True, scope="world", requires_reload=True),
    SettingDefinition(SYNC_DEFEATED, default=True, scope="world"),
    SettingDefinition(SYNC_UNCONSCIOUS, default=True, scope="world"),
    # preventIdentification is not registered: hiding the identify button is host UI.
)

SLOT_SETTINGS: Mapping[ResourceSlotType, str] = {
    ResourceSlotType.ACTION: TRACK_ACTION,
    ResourceSlotType.BONUS: TRACK_BONUS,
    ResourceSlotType.REACTION: TRACK_REACTION,
}


class Settings:
    """Current values for every registered setting, seeded from defaults."""

    def __init__(
        self,
        overrides: Mapping[str, bool] | None = None,
        definitions: Iterable[SettingDefinition] = SETTINGS,
    ) -> None:
        self._definitions: dict[str, SettingDefinition] = {d.id: d for d in definitions}
        self._values: dict[str, bool] = {d.id: d.default for d in self._definitions.values()}
        for key, value in (overrides or {}).items():
            self.set(key, value)

    def definition(self, setting_id: str) -> SettingDefinition:
        try:
            return self._definitions[setting_id]
        except KeyError as exc:
            raise KeyError(f"Setting '{setting_id}' is not registered") from exc

    def get(self, setting_id: str) -> bool:
        self.definition(setting_id)
        return self._values[setting_id]

    def set(self, setting_id: str, value: bool) -> None:
        self.definition(setting_id)
        if not isinstance(value, bool):
            raise TypeError(f"Setting '{setting_id}' expects a bool, got {type(value).__name__}")
        self._values[setting_id] = value

    def is_slot_tracked(self, slot_type: ResourceSlotType | None) -> bool:
        setting_id = SLOT_SETTINGS.get(slot_type) if slot_type is not None else None
        if setting_id is None:
            return False
        return self.get(setting_id)

    def as_dict(self) -> dict[str, bool]:
        return dict(self._values)
