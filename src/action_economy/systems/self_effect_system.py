from __future__ import annotations

import logging

from esper import World

from action_economy.components.activity import Activity
from action_economy.components.combat_pointer import CombatPointer
from action_economy.events.bus import EventBus, EVENT_EFFECT_APPLY, EVENT_POST_USE_ACTIVITY
from action_economy.settings import APPLY_SELF_EFFECTS, Settings

logger = logging.getLogger(__name__)


def self_effect_origin(activity: Activity, slug: str) -> str:
    return f"{activity.item_uuid}.{slug}"


class SelfEffectSystem:
    """Applies an activity's effects to its user when the activity targets itself."""

    def __init__(self, world: World, event_bus: EventBus, settings: Settings):
        self.world = world
        self.event_bus = event_bus
        self.settings = settings
        self.event_bus.subscribe(EVENT_POST_USE_ACTIVITY, self.on_post_use_activity)

    def on_post_use_activity(self, sender, **payload) -> None:
        actor = payload.get("actor")
        activity: Activity | None = payload.get("activity")
        combat: CombatPointer | None = payload.get("combat")
        if activity is None or combat is None or not combat.includes(actor):
            return
        if not activity.targets_self or not activity.effects:
            return
        if not self.settings.get(APPLY_SELF_EFFECTS):
            return
        logger.debug("Found self effects to apply for %s", activity.name)
        for template in activity.effects:
            logger.debug("Activate effect %s", template.slug)
            self.event_bus.emit(
                EVENT_EFFECT_APPLY,
                owner_entity=actor,
                slug=template.slug,
                label=template.label,
                origin=self_effect_origin(activity, template.slug),
                rounds=template.rounds,
                combat=combat,
            )
