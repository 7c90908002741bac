from __future__ import annotations

import logging
from dataclasses import dataclass

from esper import World

from action_economy.events.bus import EventBus
from action_economy.settings import Settings
from action_economy.slots.factory import ensure_default_slots_registered
from action_economy.systems.action_usage_system import ActionUsageSystem
from action_economy.systems.action_usage_tracker import ActionUsageTracker
from action_economy.systems.bloodied_system import BloodiedSystem
from action_economy.systems.effect_lifecycle_system import EffectLifecycleSystem
from action_economy.systems.health_status_system import HealthStatusSystem
from action_economy.systems.opportunity_attack_system import OpportunityAttackSystem
from action_economy.systems.self_effect_system import SelfEffectSystem
from action_economy.systems.target_warning_system import TargetWarningSystem

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InstalledSystems:
    tracker: ActionUsageTracker
    effects: EffectLifecycleSystem
    action_usage: ActionUsageSystem
    opportunity_attacks: OpportunityAttackSystem
    self_effects: SelfEffectSystem
    target_warnings: TargetWarningSystem
    bloodied: BloodiedSystem
    health_status: HealthStatusSystem


def create_world() -> World:
    world = World()
    # Register core slot definitions if not already present.
    ensure_default_slots_registered()
    return world


def install_systems(
    world: World,
    event_bus: EventBus,
    settings: Settings | None = None,
    *,
    authoritative: bool = True,
) -> InstalledSystems:
    """Subscribe every system to the host hooks carried by ``event_bus``.

    Bloodied styling is registered before anything can apply effects so the
    first bloodied effect is already styled.
    """
    settings = settings or Settings()
    logger.info("Installing action economy systems")
    bloodied = BloodiedSystem(world, event_bus, settings)
    effects = EffectLifecycleSystem(world, event_bus)
    tracker = ActionUsageTracker(world, event_bus)
    action_usage = ActionUsageSystem(world, event_bus, settings, tracker)
    return InstalledSystems(
        tracker=tracker,
        effects=effects,
        action_usage=action_usage,
        opportunity_attacks=OpportunityAttackSystem(world, event_bus, settings, action_usage),
        self_effects=SelfEffectSystem(world, event_bus, settings),
        target_warnings=TargetWarningSystem(world, event_bus, settings),
        bloodied=bloodied,
        health_status=HealthStatusSystem(world, event_bus, settings, authoritative=authoritative),
    )
