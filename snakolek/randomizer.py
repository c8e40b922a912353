"""
randomizer.py — Seeded source of randomness for a round.

All draws go through one random.Random instance so a round can be
replayed from a seed.
"""

import random
from typing import Collection, Optional

from .config import FULL_SCAN_OCCUPANCY, SPECIAL_THRESHOLD
from .geometry import CARDINALS, Coords, Direction, contains


class Randomizer:

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def random_direction(self) -> Direction:
        """One of the four cardinal directions, uniformly."""
        return CARDINALS[self._rng.randrange(4)]

    def random_empty_cell(
        self,
        width: int,
        height: int,
        occupied: Collection[Coords],
    ) -> Optional[Coords]:
        """
        Draw a uniformly random cell not in `occupied`.

        Rejection sampling while the board is mostly free; once occupancy
        passes FULL_SCAN_OCCUPANCY the free cells are enumerated instead.
        Returns None only when every cell is taken.
        """
        cells = width * height
        if cells <= 0:
            return None

        if len(occupied) < cells * FULL_SCAN_OCCUPANCY:
            while True:
                pos = Coords(self._rng.randrange(width), self._rng.randrange(height))
                if not contains(pos, occupied):
                    return pos

        taken = set(occupied)
        free = [
            Coords(x, y)
            for y in range(height)
            for x in range(width)
            if Coords(x, y) not in taken
        ]
        if not free:
            return None
        return self._rng.choice(free)

    def special_chance(self) -> bool:
        return self._rng.randrange(100) > SPECIAL_THRESHOLD
