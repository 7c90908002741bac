from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CombatPointer:
    """Read-only snapshot of the host's combat: round, turn and who is acting."""

    round: int
    turn: int
    active_actor: int | None
    combatants: frozenset[int] = field(default_factory=frozenset)

    def includes(self, actor: int | None) -> bool:
        return actor is not None and actor in self.combatants

    def is_active(self, actor: int | None) -> bool:
        return actor is not None and actor == self.active_actor
