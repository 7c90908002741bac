from dataclasses import dataclass, field


@dataclass(slots=True)
class StatusSet:
    """Status conditions active on an actor.

    overlays: subset of ``active`` that the host draws over the whole token.
    """

    active: set[str] = field(default_factory=set)
    overlays: set[str] = field(default_factory=set)

    def has(self, status: str) -> bool:
        return status in self.active
