"""Tests for snakolek/randomizer.py"""

from snakolek.geometry import CARDINALS, Coords
from snakolek.randomizer import Randomizer


class TestRandomDirection:
    def test_always_cardinal(self):
        rng = Randomizer(seed=3)
        assert all(rng.random_direction() in CARDINALS for _ in range(50))

    def test_all_four_reachable(self):
        rng = Randomizer(seed=3)
        assert {rng.random_direction() for _ in range(200)} == set(CARDINALS)

    def test_seed_is_reproducible(self):
        a, b = Randomizer(seed=42), Randomizer(seed=42)
        assert [a.random_direction() for _ in range(20)] == [b.random_direction() for _ in range(20)]


class TestRandomEmptyCell:
    def test_within_bounds_and_free(self):
        rng = Randomizer(seed=7)
        occupied = [Coords(x, 0) for x in range(10)]
        for _ in range(100):
            cell = rng.random_empty_cell(10, 5, occupied)
            assert 0 <= cell.x < 10 and 0 <= cell.y < 5
            assert cell not in occupied

    def test_crowded_board_scans_for_last_cell(self):
        rng = Randomizer(seed=7)
        occupied = [Coords(x, y) for x in range(3) for y in range(3) if (x, y) != (2, 2)]
        assert rng.random_empty_cell(3, 3, occupied) == Coords(2, 2)

    def test_full_board(self):
        rng = Randomizer(seed=7)
        occupied = [Coords(x, y) for x in range(2) for y in range(2)]
        assert rng.random_empty_cell(2, 2, occupied) is None

    def test_empty_board_size(self):
        assert Randomizer(seed=1).random_empty_cell(0, 5, []) is None


class TestSpecialChance:
    def test_roughly_fifteen_percent(self):
        rng = Randomizer(seed=11)
        hits = sum(rng.special_chance() for _ in range(2000))
        assert 200 < hits < 400
