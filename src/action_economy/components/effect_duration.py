from dataclasses import dataclass


@dataclass(slots=True)
class EffectDuration:
    """Effect duration in combat rounds, anchored to the pointer at creation."""

    rounds: int
    start_round: int = 0
    start_turn: int = 0
