"""Body parts and their spawn costs."""

from collections.abc import Iterable
from enum import StrEnum


class BodyPart(StrEnum):
    """Capability part an agent can be built from."""

    MOVE = "move"
    WORK = "work"
    CARRY = "carry"
    ATTACK = "attack"
    RANGED_ATTACK = "ranged_attack"
    HEAL = "heal"
    CLAIM = "claim"
    TOUGH = "tough"


PART_COST: dict[BodyPart, int] = {
    BodyPart.MOVE: 50,
    BodyPart.WORK: 100,
    BodyPart.CARRY: 50,
    BodyPart.ATTACK: 80,
    BodyPart.RANGED_ATTACK: 150,
    BodyPart.HEAL: 250,
    BodyPart.CLAIM: 600,
    BodyPart.TOUGH: 10,
}


def loadout_cost(loadout: Iterable[BodyPart]) -> int:
    """Total energy needed to spawn an agent with these parts."""
    return sum(PART_COST[part] for part in loadout)
