from __future__ import annotations

from esper import World

from action_economy.components.status_set import StatusSet
from action_economy.events.bus import EVENT_STATUS_CHANGED, EventBus

UNCONSCIOUS = "unconscious"
DEFEATED = "defeated"
BLOODIED = "bloodied"


def get_or_create_statuses(world: World, actor: int) -> StatusSet:
    try:
        return world.component_for_entity(actor, StatusSet)
    except KeyError:
        statuses = StatusSet()
        world.add_component(actor, statuses)
        return statuses


def set_status(
    world: World,
    event_bus: EventBus,
    actor: int,
    status: str,
    active: bool,
    *,
    overlay: bool = False,
) -> bool:
    """Turn ``status`` on or off for ``actor``; returns True when something changed."""
    statuses = get_or_create_statuses(world, actor)
    if statuses.has(status) == active:
        return False
    if active:
        statuses.active.add(status)
        if overlay:
            statuses.overlays.add(status)
    else:
        statuses.active.discard(status)
        statuses.overlays.discard(status)
    event_bus.emit(EVENT_STATUS_CHANGED, actor=actor, status=status, active=active, overlay=overlay and active)
    return True
