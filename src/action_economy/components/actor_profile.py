from dataclasses import dataclass
from enum import Enum


class ActorKind(Enum):
    CHARACTER = "character"
    NPC = "npc"


@dataclass
class ActorProfile:
    """Identifies an actor and the traits the status sync cares about."""
    name: str
    kind: ActorKind = ActorKind.CHARACTER
    important: bool = False
