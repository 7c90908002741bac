from dataclasses import dataclass


@dataclass(slots=True)
class Combatant:
    """Per-actor combat entry owned by the host."""

    defeated: bool = False
