from dataclasses import dataclass, field


@dataclass(slots=True)
class EffectList:
    """Holds references to effect entities attached to an actor."""

    effect_entities: list[int] = field(default_factory=list)
