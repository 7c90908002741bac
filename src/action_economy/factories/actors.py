from __future__ import annotations

from esper import World

from action_economy.components.actor_profile import ActorKind, ActorProfile
from action_economy.components.combatant import Combatant
from action_economy.components.effect_list import EffectList
from action_economy.components.health import Health
from action_economy.components.status_set import StatusSet


def create_actor(
    world: World,
    name: str,
    *,
    kind: ActorKind = ActorKind.CHARACTER,
    max_hp: int = 10,
    current_hp: int | None = None,
    important: bool = False,
    in_combat: bool = True,
) -> int:
    """Create an actor entity with the components the systems read."""
    components = [
        ActorProfile(name=name, kind=kind, important=important),
        Health(current=max_hp if current_hp is None else current_hp, max_hp=max_hp),
        EffectList(),
        StatusSet(),
    ]
    if in_combat:
        components.append(Combatant())
    return world.create_entity(*components)
