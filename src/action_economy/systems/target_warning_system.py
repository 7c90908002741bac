from esper import World

from action_economy.components.activity import Activity
from action_economy.events.bus import EventBus, EVENT_POST_USE_ACTIVITY
from action_economy.settings import Settings, WARN_NO_TARGET
from action_economy.utils.notify import notify_warn

NO_TARGET_MESSAGE = "Don't forget to target an enemy."


class TargetWarningSystem:
    """Reminds the user to pick a target after an untargeted attack."""

    def __init__(self, world: World, event_bus: EventBus, settings: Settings):
        self.world = world
        self.event_bus = event_bus
        self.settings = settings
        self.event_bus.subscribe(EVENT_POST_USE_ACTIVITY, self.on_post_use_activity)

    def on_post_use_activity(self, sender, **payload):
        activity: Activity | None = payload.get("activity")
        combat = payload.get("combat")
        if activity is None or combat is None or not combat.includes(payload.get("actor")):
            return
        if not self.settings.get(WARN_NO_TARGET):
            return
        if activity.is_attack and not payload.get("targets", 0):
            notify_warn(self.event_bus, NO_TARGET_MESSAGE)
