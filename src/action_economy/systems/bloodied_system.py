from esper import World

from action_economy.components.effect import Effect
from action_economy.events.bus import EventBus, EVENT_EFFECT_APPLIED
from action_economy.settings import OVERLAY_BLOODIED, RED_BLOODIED, Settings
from action_economy.utils.statuses import BLOODIED

BLOODIED_TINT = "#FF0000"


class BloodiedSystem:
    """Styles the host's bloodied effect as it lands on an actor."""

    def __init__(self, world: World, event_bus: EventBus, settings: Settings):
        self.world = world
        self.event_bus = event_bus
        self.settings = settings
        self.event_bus.subscribe(EVENT_EFFECT_APPLIED, self.on_effect_applied)

    def on_effect_applied(self, sender, **payload):
        if payload.get("slug") != BLOODIED:
            return
        red = self.settings.get(RED_BLOODIED)
        overlay = self.settings.get(OVERLAY_BLOODIED)
        if not (red or overlay):
            return
        try:
            effect = self.world.component_for_entity(payload.get("effect_entity"), Effect)
        except KeyError:
            return
        if red:
            effect.tint = BLOODIED_TINT
        if overlay:
            effect.overlay = True
