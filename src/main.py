"""Entry point for a scripted action-economy session.

Sets up the ECS world, event bus and systems, then plays a short combat the
way the host would drive it, logging every user-facing notification.
"""
import logging

from action_economy.components.activity import Activity
from action_economy.components.actor_profile import ActorKind
from action_economy.components.combat_pointer import CombatPointer
from action_economy.events.bus import (
    EventBus,
    EVENT_COMBAT_TURN_CHANGE,
    EVENT_NOTIFY,
    EVENT_POST_USE_ACTIVITY,
    EVENT_PRE_ROLL_ATTACK,
    EVENT_PRE_USE_ACTIVITY,
    EVENT_ROLL_ATTACK,
)
from action_economy.factories.actors import create_actor
from action_economy.settings import Settings, TRACK_ACTION
from action_economy.world import create_world, install_systems

logger = logging.getLogger("action_economy.demo")


def use_activity(bus: EventBus, actor: int, activity: Activity, combat: CombatPointer) -> None:
    if bus.request(EVENT_PRE_USE_ACTIVITY, actor=actor, activity=activity, combat=combat):
        bus.emit(EVENT_POST_USE_ACTIVITY, actor=actor, activity=activity, combat=combat, targets=1)
    else:
        logger.info("%s cancelled", activity.name)


def roll_attack(bus: EventBus, actor: int, activity: Activity, combat: CombatPointer) -> None:
    if bus.request(EVENT_PRE_ROLL_ATTACK, actor=actor, activity=activity, combat=combat):
        bus.emit(EVENT_ROLL_ATTACK, actor=actor, activity=activity, combat=combat)
    else:
        logger.info("%s attack cancelled", activity.item_name)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s | %(message)s")
    bus = EventBus()
    world = create_world()
    install_systems(world, bus, Settings({TRACK_ACTION: True}))
    bus.subscribe(EVENT_NOTIFY, lambda sender, **p: logger.info("[%s] %s", p["level"], p["message"]))

    fighter = create_actor(world, "Fighter", max_hp=30)
    goblin = create_actor(world, "Goblin", kind=ActorKind.NPC, max_hp=7)
    combatants = frozenset({fighter, goblin})
    sword = Activity("Attack", "Longsword", "Item.longsword", activation="action", kind="attack")
    surge = Activity("Second Wind", "Second Wind", "Item.second-wind", activation="bonus", target_affects="self")
    scimitar = Activity("Attack", "Scimitar", "Item.scimitar", activation="action", kind="attack")

    combat = CombatPointer(round=1, turn=0, active_actor=fighter, combatants=combatants)
    bus.emit(EVENT_COMBAT_TURN_CHANGE, combat=combat)
    use_activity(bus, fighter, sword, combat)
    use_activity(bus, fighter, surge, combat)
    use_activity(bus, fighter, sword, combat)

    combat = CombatPointer(round=1, turn=1, active_actor=goblin, combatants=combatants)
    bus.emit(EVENT_COMBAT_TURN_CHANGE, combat=combat)
    use_activity(bus, goblin, scimitar, combat)
    roll_attack(bus, fighter, sword, combat)
    roll_attack(bus, fighter, sword, combat)

    combat = CombatPointer(round=2, turn=0, active_actor=fighter, combatants=combatants)
    bus.emit(EVENT_COMBAT_TURN_CHANGE, combat=combat)
    use_activity(bus, fighter, sword, combat)


if __name__ == "__main__":
    main()
