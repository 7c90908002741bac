from action_economy.components.activity import SelfEffectTemplate
from action_economy.components.effect import Effect
from action_economy.events.bus import EVENT_NOTIFY, EVENT_POST_USE_ACTIVITY
from action_economy.factories.actors import create_actor
from action_economy.settings import APPLY_SELF_EFFECTS, WARN_NO_TARGET
from action_economy.systems.target_warning_system import NO_TARGET_MESSAGE
from action_economy.utils.effects import find_effect, iter_effects

from tests.helpers import CombatDriver, capture, make_activity

RAGE = SelfEffectTemplate(slug="rage", label="Rage", rounds=10)


def _labels(world, actor):
    return sorted(effect.label for _, (effect,) in iter_effects(world, actor, Effect))


def test_self_targeted_activity_applies_its_effects(plugin):
    bus, world, _systems = plugin
    aria = create_actor(world, "Aria")
    combat = CombatDriver(bus, [aria]).pointer()
    activity = make_activity("Rage", "bonus", target_affects="self", effects=[RAGE])

    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=activity, combat=combat, targets=0)

    effect_entity = find_effect(world, aria, slug="rage")
    assert effect_entity is not None
    assert world.component_for_entity(effect_entity, Effect).origin == "Item.rage.rage"
    assert _labels(world, aria) == ["Bonus Action: Rage", "Rage"]


def test_self_range_counts_as_self_target(plugin):
    bus, world, _systems = plugin
    aria = create_actor(world, "Aria")
    combat = CombatDriver(bus, [aria]).pointer()
    shield = SelfEffectTemplate(slug="shield", label="Shield", rounds=1)
    activity = make_activity("Shield", "reaction", range_units="self", effects=[shield])
    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=activity, combat=combat, targets=0)
    assert find_effect(world, aria, slug="shield") is not None


def test_reusing_self_effect_reenables_existing(plugin):
    bus, world, _systems = plugin
    aria = create_actor(world, "Aria")
    driver = CombatDriver(bus, [aria])
    activity = make_activity("Rage", "bonus", target_affects="self", effects=[RAGE])
    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=activity, combat=driver.pointer(), targets=0)
    effect_entity = find_effect(world, aria, slug="rage")
    world.component_for_entity(effect_entity, Effect).disabled = True

    driver.advance()
    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=activity, combat=driver.pointer(), targets=0)

    assert find_effect(world, aria, slug="rage") == effect_entity
    assert world.component_for_entity(effect_entity, Effect).disabled is False
    assert _labels(world, aria).count("Rage") == 1


def test_self_effects_disabled(plugin, settings):
    settings.set(APPLY_SELF_EFFECTS, False)
    bus, world, _systems = plugin
    aria = create_actor(world, "Aria")
    combat = CombatDriver(bus, [aria]).pointer()
    activity = make_activity("Rage", "bonus", target_affects="self", effects=[RAGE])
    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=activity, combat=combat, targets=0)
    assert find_effect(world, aria, slug="rage") is None


def test_other_targeted_activity_applies_nothing(plugin):
    bus, world, _systems = plugin
    aria = create_actor(world, "Aria")
    combat = CombatDriver(bus, [aria]).pointer()
    activity = make_activity("Bless", "action", target_affects="ally", effects=[SelfEffectTemplate("bless", "Bless")])
    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=activity, combat=combat, targets=1)
    assert find_effect(world, aria, slug="bless") is None


def test_untargeted_attack_warns(plugin):
    bus, world, _systems = plugin
    aria = create_actor(world, "Aria")
    combat = CombatDriver(bus, [aria]).pointer()
    notes = capture(bus, EVENT_NOTIFY)
    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=make_activity("Rapier", kind="attack"), combat=combat, targets=0)
    assert notes == [{"level": "warn", "message": NO_TARGET_MESSAGE}]


def test_targeted_attack_and_disabled_warning_stay_quiet(plugin, settings):
    bus, world, _systems = plugin
    aria = create_actor(world, "Aria")
    combat = CombatDriver(bus, [aria]).pointer()
    notes = capture(bus, EVENT_NOTIFY)
    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=make_activity("Rapier", kind="attack"), combat=combat, targets=1)
    settings.set(WARN_NO_TARGET, False)
    bus.emit(EVENT_POST_USE_ACTIVITY, actor=aria, activity=make_activity("Rapier", kind="attack"), combat=combat, targets=0)
    assert not notes
