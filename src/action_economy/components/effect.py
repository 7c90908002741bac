from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Effect:
    """An active effect attached to a single owner actor.

    The effect entity will typically also carry an ``EffectDuration`` and, for
    action-usage markers, a ``UsageMarker``.
    """

    slug: str
    owner_entity: int
    label: str = ""
    origin: str | None = None
    icon: str | None = None
    description: str = ""
    disabled: bool = False
    tint: str | None = None
    overlay: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
