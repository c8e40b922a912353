"""
geometry.py — Board coordinates and movement directions.

Classes:
    Coords      — immutable (x, y) board cell
    Direction   — immutable (dx, dy) unit vector
"""

from typing import Iterable, NamedTuple


class Coords(NamedTuple):
    """Zero-based board cell. Equality and hashing are by value."""
    x: int
    y: int

    def moved(self, direction: "Direction") -> "Coords":
        return Coords(self.x + direction.x, self.y + direction.y)

    def distance(self, other: "Coords") -> int:
        """Manhattan distance."""
        return abs(self.x - other.x) + abs(self.y - other.y)


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    UP    = None  # filled below after class definition
    RIGHT = None
    DOWN  = None
    LEFT  = None

    __slots__ = ("x", "y")

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    @property
    def is_horizontal(self) -> bool:
        return self.x != 0

    @property
    def is_vertical(self) -> bool:
        return self.y != 0

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.UP    = Direction( 0, -1)
Direction.RIGHT = Direction( 1,  0)
Direction.DOWN  = Direction( 0,  1)
Direction.LEFT  = Direction(-1,  0)
CARDINALS = [Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]


def contains(target: Coords, sequence: Iterable[Coords]) -> bool:
    """True iff some element of `sequence` equals `target`."""
    for item in sequence:
        if item == target:
            return True
    return False
