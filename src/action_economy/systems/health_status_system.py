from __future__ import annotations

import logging

from esper import World

from action_economy.components.actor_profile import ActorKind, ActorProfile
from action_economy.components.combat_pointer import CombatPointer
from action_economy.components.combatant import Combatant
from action_economy.components.effect import Effect
from action_economy.components.health import Health
from action_economy.components.status_set import StatusSet
from action_economy.events.bus import EventBus, EVENT_DAMAGE_APPLIED, EVENT_TOKEN_STATUS_TOGGLED
from action_economy.settings import OVERLAY_BLOODIED, SYNC_DEFEATED, SYNC_UNCONSCIOUS, Settings
from action_economy.utils.effects import find_effect
from action_economy.utils.statuses import BLOODIED, DEFEATED, UNCONSCIOUS, set_status

logger = logging.getLogger(__name__)


class HealthStatusSystem:
    """Keeps unconscious and defeated states in step with hit points.

    Player characters fall unconscious at 0 hp. Unimportant NPCs are flagged
    defeated at 0 hp, and toggling their defeated status moves their hp to
    match. Defeated syncing runs only where ``authoritative`` is set (the GM
    side of the host).
    """

    def __init__(self, world: World, event_bus: EventBus, settings: Settings, *, authoritative: bool = True):
        self.world = world
        self.event_bus = event_bus
        self.settings = settings
        self.authoritative = authoritative
        self.event_bus.subscribe(EVENT_DAMAGE_APPLIED, self.on_damage_applied)
        self.event_bus.subscribe(EVENT_TOKEN_STATUS_TOGGLED, self.on_token_status_toggled)

    def on_damage_applied(self, sender, **payload) -> None:
        actor = payload.get("actor")
        combat: CombatPointer | None = payload.get("combat")
        if combat is None or not combat.includes(actor):
            return
        profile = self._component(actor, ActorProfile)
        health = self._component(actor, Health)
        if profile is None or health is None:
            return
        is_dead = health.is_dead()

        if profile.kind is ActorKind.CHARACTER and self.settings.get(SYNC_UNCONSCIOUS):
            statuses = self._component(actor, StatusSet)
            is_unconscious = statuses is not None and statuses.has(UNCONSCIOUS)
            if is_dead != is_unconscious:
                set_status(self.world, self.event_bus, actor, UNCONSCIOUS, is_dead)

        if not self.authoritative:
            return

        important = profile.kind is not ActorKind.NPC or profile.important
        if important or not self.settings.get(SYNC_DEFEATED):
            return
        combatant = self._component(actor, Combatant)
        if combatant is None:
            return
        logger.debug("Checking defeated %s dead=%s defeated=%s", profile.name, is_dead, combatant.defeated)
        if combatant.defeated == is_dead:
            return
        combatant.defeated = is_dead
        set_status(self.world, self.event_bus, actor, DEFEATED, is_dead, overlay=True)
        self._sync_bloodied_overlay(actor, defeated=is_dead)
        logger.info("%s %s", profile.name, "defeated" if is_dead else "back in the fight")

    def on_token_status_toggled(self, sender, **payload) -> None:
        if not self.authoritative:
            return
        actor = payload.get("actor")
        combat: CombatPointer | None = payload.get("combat")
        if combat is None or not combat.includes(actor):
            return
        profile = self._component(actor, ActorProfile)
        health = self._component(actor, Health)
        if profile is None or health is None or profile.kind is not ActorKind.NPC:
            return
        if payload.get("status") != DEFEATED or not self.settings.get(SYNC_DEFEATED):
            return
        state = bool(payload.get("state"))
        logger.debug("Confirming defeated %s dead=%s", profile.name, health.is_dead())
        if state == health.is_dead():
            return
        health.current = 0 if state else 1
        health.temp = 0
        health.clamp()
        self._sync_bloodied_overlay(actor, defeated=state)

    def _sync_bloodied_overlay(self, actor: int, *, defeated: bool) -> None:
        if not self.settings.get(OVERLAY_BLOODIED):
            return
        bloodied = find_effect(self.world, actor, slug=BLOODIED)
        if bloodied is None:
            return
        self.world.component_for_entity(bloodied, Effect).overlay = not defeated

    def _component(self, entity, component_type):
        try:
            return self.world.component_for_entity(entity, component_type)
        except KeyError:
            return None
