"""Host return codes and the engine's outcome taxonomy.

Every directive sent to the host answers with a ReturnCode. The engine never
raises on these; it classifies them into an Outcome and decides on the spot
whether the task survives.
"""

from enum import Enum, IntEnum, auto


class ReturnCode(IntEnum):
    """Result codes returned by host directives."""

    OK = 0
    ERR_NOT_OWNER = -1
    ERR_NO_PATH = -2
    ERR_NAME_EXISTS = -3
    ERR_BUSY = -4
    ERR_NOT_FOUND = -5
    ERR_NOT_ENOUGH_RESOURCES = -6
    ERR_INVALID_TARGET = -7
    ERR_FULL = -8
    ERR_NOT_IN_RANGE = -9
    ERR_INVALID_ARGS = -10
    ERR_TIRED = -11
    ERR_NO_BODYPART = -12
    ERR_RCL_NOT_ENOUGH = -14


class Outcome(Enum):
    """What happened to an agent, task or spawn request during a tick."""

    SUCCESS = auto()
    """Terminal action succeeded; task continues next tick."""

    MOVING = auto()
    """Target out of range; a move directive was issued."""

    COMPLETED = auto()
    """Single-shot task finished and was evicted."""

    REFERENT_GONE = auto()
    """Stable handle no longer resolves; task evicted."""

    OUT_OF_RANGE = auto()
    """Host reported the target too far; never evicts."""

    ACTION_REJECTED = auto()
    """Host refused the action for any other reason; task evicted."""

    CREATION_REJECTED = auto()
    """Spawn directive failed; retried next tick."""

    EMPTY_CANDIDATE_SET = auto()
    """Selector found nothing to do; agent idles."""

    STALE = auto()
    """Task no longer matches the agent's load state; evicted."""

    @property
    def evicts(self) -> bool:
        """Whether this outcome removes the agent's task."""
        return self in _EVICTING


_EVICTING = frozenset(
    {Outcome.COMPLETED, Outcome.REFERENT_GONE, Outcome.ACTION_REJECTED, Outcome.STALE}
)


def classify(code: ReturnCode | int) -> Outcome:
    """Map a host return code to SUCCESS, OUT_OF_RANGE or ACTION_REJECTED."""
    if code == ReturnCode.OK:
        return Outcome.SUCCESS
    if code == ReturnCode.ERR_NOT_IN_RANGE:
        return Outcome.OUT_OF_RANGE
    return Outcome.ACTION_REJECTED


def code_name(code: int) -> str:
    """Readable name of a host return code."""
    try:
        return ReturnCode(code).name
    except ValueError:
        return str(code)
