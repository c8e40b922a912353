"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop. Key presses, timer ticks, spinner frames
    and remote-call completions all arrive through the one pygame event
    queue and are handled strictly one at a time.
  - Route keys through the InputRouter (or the name field after a
    scoring round) and carry out the resulting actions.
  - Drive the tick timer: start it with a round, restart it whenever
    the speed changes, stop it on game over.
  - Hand remote calls to the RemoteWorker and show the spinner while
    one is pending; the loop itself never waits on the network.
  - Own the beep (pygame mixer). If the mixer cannot start the game
    runs silently with a logged warning.

The controller is the only layer that reads pygame events directly.
"""

import logging
from array import array
from typing import Any, Optional

import pygame

from .config import (
    BEEP_FREQUENCY, BEEP_DURATION, MIXER_FREQUENCY, SPINNER_DELAY_MS,
    TICK_EVENT, SPINNER_EVENT, REMOTE_EVENT, KEY_QUIT,
    REQUEST_POST_SCORE, REQUEST_HIGH_SCORES, REQUEST_MESSAGES,
    STATE_MENU,
)
from .input_router import Action, InputRouter
from .model import Environment, GameModel
from .name_entry import CANCELLED, EDITING, SUBMITTED, NameEntry
from .randomizer import Randomizer
from .remote import HighScore, RemoteWorker, ScoreClient
from .scheduler import TickScheduler
from .view import CellTerminal, GameView

logger = logging.getLogger(__name__)

BLOCKING_REQUESTS = (REQUEST_POST_SCORE, REQUEST_HIGH_SCORES)


def _square_wave(frequency: int, duration: float, rate: int, channels: int) -> bytes:
    """Signed 16-bit square wave, interleaved for `channels`."""
    samples = array("h")
    period = rate / frequency
    amplitude = 6000
    for i in range(int(rate * duration)):
        value = amplitude if (i % period) < period / 2 else -amplitude
        samples.extend([value] * channels)
    return samples.tobytes()


class GameController:
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    """

    def __init__(
        self,
        terminal=None,
        client: Optional[ScoreClient] = None,
        worker: Optional[RemoteWorker] = None,
        rng: Optional[Randomizer] = None,
    ):
        pygame.mixer.pre_init(MIXER_FREQUENCY, -16, 1)
        pygame.init()
        self.term = terminal or CellTerminal()
        self.env = Environment.from_console(self.term.size())
        self.model = GameModel(self.env, rng)
        self.view = GameView(self.term, self.env)
        self.router = InputRouter(self.model, self.env)
        self.ticker = TickScheduler(TICK_EVENT)
        self.spinner_timer = TickScheduler(SPINNER_EVENT)
        self.client = client or ScoreClient()
        self.worker = worker or RemoteWorker()
        self.name_entry: Optional[NameEntry] = None
        self.name_field = (0, 0)
        self.running = False
        self._beep_sound = self._load_sound()

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        pygame.event.set_blocked(None)
        pygame.event.set_allowed(
            [pygame.QUIT, pygame.KEYDOWN, TICK_EVENT, SPINNER_EVENT, REMOTE_EVENT]
        )
        self.boot()
        try:
            while self.running:
                self.handle_event(pygame.event.wait())
                self.term.flush()
        finally:
            self.shutdown()

    def boot(self) -> None:
        """Draw the intro and ask the server for news in the background."""
        self.running = True
        self.view.clean_board(self.model.round)
        self.view.intro()
        self.term.hide_cursor()
        self.term.flush()
        self.worker.submit(REQUEST_MESSAGES, self.client.fetch_messages)

    def shutdown(self) -> None:
        self.ticker.stop()
        self.spinner_timer.stop()
        self.client.close()
        pygame.quit()

    # ── Event dispatch ────────────────────────────────────────────
    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event.key, getattr(event, "unicode", ""))
        elif event.type == TICK_EVENT:
            self._tick()
        elif event.type == SPINNER_EVENT:
            self.view.spinner(self.env.spinner)
        elif event.type == REMOTE_EVENT:
            self._remote_done(event.kind, event.result)

    def _handle_key(self, key: int, char: str) -> None:
        if self.name_entry is not None:
            self._handle_name_key(key, char)
            return

        if self.env.pending_request in BLOCKING_REQUESTS:
            if key == KEY_QUIT:
                self.running = False
            return

        action = self.router.route(key)
        if action is not None:
            self._perform(action)

    def _perform(self, action: Action) -> None:
        rnd = self.model.round
        if action is Action.RESUME:
            self.view.render_board(rnd)
        elif action is Action.PAUSE:
            self.view.paused_info()
        elif action is Action.SOUND:
            self.view.status_bar(rnd)
            self._beep()
        elif action is Action.CONTINUE:
            self._show_intro()
        elif action in (Action.START_NORMAL, Action.START_ELI):
            self._start_round(action is Action.START_ELI)
        elif action is Action.HIGH_SCORES:
            self._request(REQUEST_HIGH_SCORES, self.client.fetch_high_scores)
        elif action is Action.QUIT:
            self.running = False

    # ── Round flow ────────────────────────────────────────────────
    def _start_round(self, eli_mode: bool) -> None:
        self.model.start(eli_mode)
        self.view.render_board(self.model.round)
        self.ticker.restart(self.model.timer_interval)

    def _show_intro(self) -> None:
        self.model.acknowledge()
        self.env.server_content_shown = False
        self.view.clean_board(self.model.round)
        self.view.intro()

    def _tick(self) -> None:
        result = self.model.step()
        if result.game_over:
            self._game_over()
            return
        if not result.moved:
            return

        self.view.render_board(self.model.round)
        if result.ate_fruit:
            self.ticker.restart(self.model.timer_interval)
            self.view.status_bar(self.model.round)
            self._beep()

    def _game_over(self) -> None:
        self.ticker.stop()
        rnd = self.model.round
        self.view.render_board(rnd)

        if rnd.score > 0:
            self.name_field = self.view.game_summary(rnd.score, ask_name=True)
            self.name_entry = NameEntry(self.env.player_name)
            self.view.name_field(self.name_entry.name, *self.name_field)
        else:
            self.view.game_summary(rnd.score, ask_name=False)

    def _handle_name_key(self, key: int, char: str) -> None:
        status = self.name_entry.feed(key, char)
        if status == EDITING:
            self.view.name_field(self.name_entry.name, *self.name_field)
            return

        name = self.name_entry.name
        self.name_entry = None
        self.term.hide_cursor()

        if status == SUBMITTED:
            self.env.player_name = name
            score = self._high_score()
            self._request(REQUEST_POST_SCORE, lambda: self.client.post_high_score(score))
        elif status == CANCELLED:
            self.model.forfeit_score()
            self._show_intro()

    def _high_score(self) -> HighScore:
        rnd = self.model.round
        return HighScore(
            player_name=self.env.player_name,
            score=rnd.score,
            eli_mode=rnd.eli_mode,
            board_width=self.env.board_width,
            board_height=self.env.board_height,
            fruits=rnd.fruits,
            special_fruits=rnd.special_fruits,
            ticker_delay=int(rnd.tick_delay),
            start_timestamp=rnd.start_timestamp,
            end_timestamp=rnd.end_timestamp,
        )

    # ── Remote calls ──────────────────────────────────────────────
    def _request(self, kind: str, call) -> None:
        self.env.pending_request = kind
        self.spinner_timer.restart(SPINNER_DELAY_MS)
        self.worker.submit(kind, call)

    def _remote_done(self, kind: str, result: Any) -> None:
        rnd = self.model.round

        if kind == REQUEST_MESSAGES:
            idle = (
                rnd.state == STATE_MENU
                and self.env.pending_request is None
                and not self.env.server_content_shown
            )
            if result and idle:
                self.view.clean_board(rnd)
                self.view.messages(result)
                self.env.server_content_shown = True
            return

        if kind != self.env.pending_request:
            logger.debug("Ignoring stale %s completion", kind)
            return

        self.env.pending_request = None
        self.spinner_timer.stop()
        self.env.spinner.active = False

        if kind == REQUEST_POST_SCORE:
            self.env.request_result = bool(result)
            self.view.clean_board(rnd)
            self.view.post_result(self.env.request_result)
        elif kind == REQUEST_HIGH_SCORES:
            self.env.request_result = result is not None
            self.view.clean_board(rnd)
            self.view.high_scores(result)
            self.env.server_content_shown = True

    # ── Sound helpers ─────────────────────────────────────────────
    def _load_sound(self) -> Optional[pygame.mixer.Sound]:
        """Synthesise the beep. Returns None when no audio device is usable."""
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(MIXER_FREQUENCY, -16, 1)
            rate, _, channels = pygame.mixer.get_init()
            return pygame.mixer.Sound(
                buffer=_square_wave(BEEP_FREQUENCY, BEEP_DURATION, rate, channels)
            )
        except pygame.error as exc:
            logger.warning("[audio] Could not initialise sound: %s; running silent.", exc)
            return None

    def _beep(self) -> None:
        if self.env.sound_on and self._beep_sound is not None:
            self._beep_sound.play()
