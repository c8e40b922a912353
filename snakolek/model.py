"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the Controller to read/write.

Classes:
    Fruit       — the single fruit slot (position, special flag, age)
    Spinner     — busy indicator animation state
    Environment — process-wide settings that outlive a round
    RoundState  — everything reset when a new round starts
    StepResult  — what happened during one tick
    GameModel   — top-level model; runs the round state machine
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from .config import (
    BASE_TICK_DELAY, TICKER_FACTOR,
    FRUIT_POINTS, SPECIAL_MULTIPLIER, SPECIAL_EXPIRY_MARGIN,
    DEFAULT_FG, DEFAULT_BG,
    STATE_MENU, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .geometry import Coords, Direction, contains
from .randomizer import Randomizer

logger = logging.getLogger(__name__)

SPINNER_GLYPHS = "▘▝▗▖"


# ──────────────────────────── Fruit ──────────────────────────────
@dataclass
class Fruit:
    position: Coords
    special: bool = False
    distance: int = 0      # Manhattan distance from the head at spawn
    steps: int = 0         # ticks since spawn

    @property
    def expired(self) -> bool:
        return self.special and self.steps > self.distance + SPECIAL_EXPIRY_MARGIN


# ─────────────────────────── Spinner ─────────────────────────────
@dataclass
class Spinner:
    active: bool = False
    counter: int = 0
    x: int = 0
    y: int = 0
    fg: tuple = DEFAULT_FG
    bg: tuple = DEFAULT_BG

    def place(self, x: int, y: int, fg: tuple, bg: tuple) -> None:
        self.active = True
        self.x, self.y = x, y
        self.fg, self.bg = fg, bg

    def advance(self) -> str:
        """Move to the next animation frame and return its glyph."""
        self.counter = (self.counter + 1) % len(SPINNER_GLYPHS)
        return SPINNER_GLYPHS[self.counter]


# ───────────────────────── Environment ───────────────────────────
@dataclass
class Environment:
    """Lives for the whole process; board size is fixed at startup."""
    console_width: int
    console_height: int
    sound_on: bool = False
    ticker_factor: float = TICKER_FACTOR
    player_name: str = ""
    spinner: Spinner = field(default_factory=Spinner)
    server_content_shown: bool = False
    pending_request: Optional[str] = None
    request_result: bool = False

    @property
    def board_width(self) -> int:
        # each board cell is two console columns wide
        return self.console_width // 2

    @property
    def board_height(self) -> int:
        # top row is the status bar
        return self.console_height - 1

    @classmethod
    def from_console(cls, size: tuple) -> "Environment":
        cols, rows = size
        return cls(console_width=cols, console_height=rows)


# ────────────────────────── RoundState ───────────────────────────
@dataclass
class RoundState:
    direction: Direction = Direction.UP
    input_direction: Direction = Direction.UP
    snake: List[Coords] = field(default_factory=list)
    fruit: Optional[Fruit] = None
    score: int = 0
    tick_delay: float = BASE_TICK_DELAY
    fast_timer: bool = False
    eli_mode: bool = False
    state: str = STATE_MENU
    fruits: int = 0
    special_fruits: int = 0
    start_timestamp: int = 0
    end_timestamp: int = 0

    @property
    def head(self) -> Coords:
        return self.snake[-1]

    @property
    def started(self) -> bool:
        return self.state in (STATE_PLAYING, STATE_PAUSED)

    @property
    def paused(self) -> bool:
        return self.state == STATE_PAUSED

    @property
    def over(self) -> bool:
        return self.state == STATE_OVER


@dataclass
class StepResult:
    """Outcome of one tick, consumed by the controller."""
    moved: bool = False
    ate_fruit: bool = False
    special: bool = False
    score_delta: int = 0
    expired_fruit: bool = False
    spawned_fruit: bool = False
    game_over: bool = False


# ─────────────────────────── GameModel ───────────────────────────
class GameModel:
    """
    Top-level model. Owns the current round and the state machine
    menu -> playing <-> paused -> over -> menu.
    The controller calls step() once per timer tick.
    """

    def __init__(self, env: Environment, rng: Optional[Randomizer] = None):
        self.env = env
        self.rng = rng or Randomizer()
        self.round = RoundState()

    # ── Transitions ──────────────────────────────────────────────
    def start(self, eli_mode: bool = False) -> None:
        """Begin a fresh round; all round-scoped state is reset."""
        direction = self.rng.random_direction()
        head = Coords(self.env.board_width // 2, self.env.board_height // 2)
        self.round = RoundState(
            direction=direction,
            input_direction=direction,
            snake=[head],
            eli_mode=eli_mode,
            state=STATE_PLAYING,
            start_timestamp=int(time.time()),
        )
        logger.info("Round started (eli_mode=%s) heading %r", eli_mode, direction)

    def pause(self) -> bool:
        if self.round.state == STATE_PLAYING:
            self.round.state = STATE_PAUSED
            return True
        return False

    def resume(self) -> bool:
        if self.round.state == STATE_PAUSED:
            self.round.state = STATE_PLAYING
            return True
        return False

    def acknowledge(self) -> None:
        """Leave the game-over screen."""
        if self.round.state == STATE_OVER:
            self.round.state = STATE_MENU

    def forfeit_score(self) -> None:
        """Player declined to post; the round no longer counts."""
        self.round.score = 0

    def queue_direction(self, direction: Direction) -> bool:
        """
        Queue a turn for the next tick. Rejected when the active direction
        already moves along the same axis, which rules out reversals even if
        another turn is already queued this tick.
        """
        active = self.round.direction
        if direction.is_horizontal and active.x != 0:
            return False
        if direction.is_vertical and active.y != 0:
            return False
        self.round.input_direction = direction
        return True

    @property
    def timer_interval(self) -> float:
        if self.round.fast_timer:
            return self.round.tick_delay / 2
        return self.round.tick_delay

    # ── Tick ─────────────────────────────────────────────────────
    def step(self) -> StepResult:
        """Advance the snake one cell. No-op unless the round is running."""
        result = StepResult()
        rnd = self.round
        if rnd.state != STATE_PLAYING:
            return result

        rnd.direction = rnd.input_direction
        head = rnd.head.moved(rnd.direction)
        width, height = self.env.board_width, self.env.board_height

        if rnd.eli_mode:
            head = Coords(head.x % width, head.y % height)
        elif not (0 <= head.x < width and 0 <= head.y < height):
            self._end_round()
            result.game_over = True
            return result

        rnd.snake.append(head)
        result.moved = True
        if rnd.fruit is not None:
            rnd.fruit.steps += 1

            if rnd.fruit.expired:
                rnd.fruit = None
                result.expired_fruit = True

        if rnd.fruit is not None and head == rnd.fruit.position:
            self._eat(rnd.fruit, result)
        else:
            rnd.snake.pop(0)

        if contains(head, rnd.snake[:-1]):
            self._end_round()
            result.game_over = True
            return result

        if rnd.fruit is None and not result.expired_fruit:
            result.spawned_fruit = self._spawn_fruit()
        return result

    # ── Private helpers ──────────────────────────────────────────
    def _eat(self, fruit: Fruit, result: StepResult) -> None:
        rnd = self.round
        delta = FRUIT_POINTS * fruit.distance // fruit.steps
        if fruit.special:
            delta *= SPECIAL_MULTIPLIER
            rnd.special_fruits += 1
        else:
            rnd.fruits += 1
        rnd.score += delta
        rnd.tick_delay *= self.env.ticker_factor
        rnd.fast_timer = fruit.special
        rnd.fruit = None

        result.ate_fruit = True
        result.special = fruit.special
        result.score_delta = delta
        logger.debug("Fruit eaten (special=%s) +%d, score %d", fruit.special, delta, rnd.score)

    def _spawn_fruit(self) -> bool:
        rnd = self.round
        pos = self.rng.random_empty_cell(
            self.env.board_width, self.env.board_height, rnd.snake,
        )
        if pos is None:
            return False
        rnd.fruit = Fruit(
            position=pos,
            special=self.rng.special_chance(),
            distance=rnd.head.distance(pos),
        )
        return True

    def _end_round(self) -> None:
        rnd = self.round
        rnd.state = STATE_OVER
        rnd.end_timestamp = int(time.time())
        logger.info(
            "Round over: score %d, fruits %d, special %d",
            rnd.score, rnd.fruits, rnd.special_fruits,
        )
