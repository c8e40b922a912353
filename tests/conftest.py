"""
Shared fixtures: a recording terminal, a scripted randomizer, a fake score
client and an inline remote worker, plus a stub for pygame timers so no
test needs a display or a real SDL timer.
"""

from typing import Iterable, List, Optional

import pygame
import pytest

from snakolek.config import REMOTE_EVENT
from snakolek.geometry import Coords, Direction
from snakolek.model import Environment, GameModel
from snakolek.randomizer import Randomizer


class FakeTerminal:
    """Implements the draw contract in memory."""

    def __init__(self, cols: int = 20, rows: int = 11):
        self.cols = cols
        self.rows = rows
        self.cells = {}
        self.cursor = (0, 0)
        self.cursor_visible = False
        self.flushes = 0

    def size(self):
        return self.cols, self.rows

    def clear(self, fg=None, bg=None):
        self.cells = {}

    def set_cell(self, x, y, ch, fg, bg):
        self.cells[(x, y)] = (ch, fg, bg)

    def set_cursor(self, x, y):
        self.cursor = (x, y)

    def show_cursor(self):
        self.cursor_visible = True

    def hide_cursor(self):
        self.cursor_visible = False

    def flush(self):
        self.flushes += 1

    def row_text(self, y: int) -> str:
        return "".join(self.cells.get((x, y), (" ",))[0] for x in range(self.cols))

    def text(self) -> str:
        """Everything written, including cells off the visible grid, row by row."""
        rows = sorted({y for _, y in self.cells})
        lines = []
        for y in rows:
            xs = sorted(x for x, yy in self.cells if yy == y)
            lines.append("".join(self.cells[(x, y)][0] for x in xs))
        return "\n".join(lines)


class ScriptedRandomizer(Randomizer):
    """Randomizer whose direction, fruit cells and special flags are scripted."""

    def __init__(
        self,
        direction: Direction = Direction.UP,
        cells: Iterable[Coords] = (),
        specials: Iterable[bool] = (),
    ):
        super().__init__(seed=1)
        self.direction = direction
        self.cells = list(cells)
        self.specials = list(specials)

    def random_direction(self) -> Direction:
        return self.direction

    def random_empty_cell(self, width, height, occupied) -> Optional[Coords]:
        if self.cells:
            return self.cells.pop(0)
        return super().random_empty_cell(width, height, occupied)

    def special_chance(self) -> bool:
        if self.specials:
            return self.specials.pop(0)
        return False


class FakeClient:

    def __init__(self, post_ok: bool = True, scores=None, messages=None):
        self.post_ok = post_ok
        self.scores = scores
        self.messages = messages or []
        self.posted: List = []
        self.closed = False

    def post_high_score(self, score) -> bool:
        self.posted.append(score)
        return self.post_ok

    def fetch_high_scores(self, limit: int = 10):
        return self.scores

    def fetch_messages(self, app_version: str = "", goos: str = ""):
        return self.messages

    def close(self) -> None:
        self.closed = True


class InlineWorker:
    """Runs calls immediately; completion events are queued for the test to deliver."""

    def __init__(self):
        self.events: List[pygame.event.Event] = []

    def submit(self, kind, call):
        self.events.append(pygame.event.Event(REMOTE_EVENT, kind=kind, result=call()))


@pytest.fixture(autouse=True)
def timer_calls(monkeypatch):
    """Replace pygame.time.set_timer with a recorder."""
    calls = []
    monkeypatch.setattr(pygame.time, "set_timer", lambda event, millis: calls.append((event, millis)))
    return calls


@pytest.fixture
def env() -> Environment:
    """10 x 10 board."""
    return Environment(console_width=20, console_height=11)


@pytest.fixture
def model(env) -> GameModel:
    """Fresh model heading up from the centre (5, 5); first fruit goes to a corner."""
    return GameModel(env, ScriptedRandomizer(Direction.UP, cells=[Coords(0, 0)] * 20))
