"""Room positions, terrain and range checks.

Ranges follow the host's rules: Chebyshev distance inside one room, so a
diagonal step costs the same as a straight one.
"""

from dataclasses import dataclass
from enum import StrEnum


class Terrain(StrEnum):
    """Terrain class of a single tile."""

    PLAIN = "plain"
    SWAMP = "swamp"
    WALL = "wall"


@dataclass(frozen=True, slots=True)
class Position:
    """Tile coordinates inside a named room."""

    x: int
    y: int
    room: str

    def range_to(self, other: "Position") -> int:
        """Chebyshev distance to another position in the same room.

        Raises:
            ValueError: If the positions are in different rooms.
        """
        if other.room != self.room:
            raise ValueError(f"No range between rooms {self.room} and {other.room}")
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def in_range_to(self, other: "Position", distance: int) -> bool:
        """Check whether other is within distance tiles. Always False across rooms."""
        if other.room != self.room:
            return False
        return self.range_to(other) <= distance

    def is_near_to(self, other: "Position") -> bool:
        """Adjacency check used by contact actions."""
        return self.in_range_to(other, 1)

    def step_toward(self, other: "Position") -> "Position":
        """Position one tile closer to other (same room only)."""
        if other.room != self.room:
            return self
        dx = (other.x > self.x) - (other.x < self.x)
        dy = (other.y > self.y) - (other.y < self.y)
        return Position(self.x + dx, self.y + dy, self.room)
