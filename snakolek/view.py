"""
view.py — View layer.

Two pieces:
  - CellTerminal: a character-cell console drawn in a pygame window.
    It is the whole draw contract the game uses: clear, set_cell,
    flush, size, show/hide/set cursor.
  - GameView: every screen of the game (board, status bar, overlays,
    high-score table, news, spinner) expressed as cell writes.

Public API:
    CellTerminal(cols, rows)      — open the window
    GameView(terminal, env)       — bind screens to a terminal
"""

from typing import List, Optional, Sequence, Tuple

import pygame

from .config import (
    APP_NAME, APP_VERSION, HOST,
    CONSOLE_COLS, CONSOLE_ROWS, FONT_NAME, FONT_SIZE, WINDOW_TITLE,
    DEFAULT_FG, DEFAULT_BG, WHITE, YELLOW, BLUE, RED,
    MAX_NAME_LENGTH,
)
from .geometry import Coords
from .model import Environment, Fruit, RoundState, Spinner
from .remote import OnlineHighScore, OnlineMessage


Cell = Tuple[str, tuple, tuple]
DATE_FORMAT = "%Y-%m-%d %H:%M"


# ───────────────────────── CellTerminal ──────────────────────────
class CellTerminal:
    """Fixed-size grid of glyph cells, rendered on flush()."""

    def __init__(self, cols: int = CONSOLE_COLS, rows: int = CONSOLE_ROWS):
        self.cols = cols
        self.rows = rows
        self._init_font()
        self.cell_w, self.cell_h = self.font.size("M")
        self.screen = pygame.display.set_mode((cols * self.cell_w, rows * self.cell_h))
        pygame.display.set_caption(WINDOW_TITLE)
        self._cells: List[List[Cell]] = []
        self._cursor: Tuple[int, int] = (0, 0)
        self._cursor_visible = False
        self._glyphs = {}
        self.clear()

    def size(self) -> Tuple[int, int]:
        return self.cols, self.rows

    def clear(self, fg: tuple = DEFAULT_FG, bg: tuple = DEFAULT_BG) -> None:
        self._cells = [[(" ", fg, bg)] * self.cols for _ in range(self.rows)]

    def set_cell(self, x: int, y: int, ch: str, fg: tuple, bg: tuple) -> None:
        # off-screen writes are dropped, like a real console
        if 0 <= x < self.cols and 0 <= y < self.rows:
            self._cells[y][x] = (ch, fg, bg)

    def set_cursor(self, x: int, y: int) -> None:
        self._cursor = (x, y)

    def show_cursor(self) -> None:
        self._cursor_visible = True

    def hide_cursor(self) -> None:
        self._cursor_visible = False

    def flush(self) -> None:
        for y, row in enumerate(self._cells):
            for x, (ch, fg, bg) in enumerate(row):
                rect = (x * self.cell_w, y * self.cell_h, self.cell_w, self.cell_h)
                self.screen.fill(bg, rect)
                if ch != " ":
                    self.screen.blit(self._glyph(ch, fg), rect)
        if self._cursor_visible:
            cx, cy = self._cursor
            pygame.draw.rect(
                self.screen, WHITE,
                (cx * self.cell_w, (cy + 1) * self.cell_h - 2, self.cell_w, 2),
            )
        pygame.display.flip()

    def _glyph(self, ch: str, fg: tuple) -> pygame.Surface:
        key = (ch, fg)
        if key not in self._glyphs:
            self._glyphs[key] = self.font.render(ch, True, fg)
        return self._glyphs[key]

    def _init_font(self) -> None:
        try:
            self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        except Exception:
            self.font = pygame.font.SysFont(None, FONT_SIZE)


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """
    Draws game screens onto a terminal. Writes cells only; the caller
    decides when to flush.
    """

    def __init__(self, terminal, env: Environment):
        self.term = terminal
        self.env = env

    # ── Board ─────────────────────────────────────────────────────
    def clean_board(self, rnd: RoundState) -> None:
        self.term.clear(DEFAULT_FG, DEFAULT_BG)
        self.status_bar(rnd)
        self._filler_column()

    def render_board(self, rnd: RoundState) -> None:
        """Full redraw of the playing field."""
        self.clean_board(rnd)
        if rnd.fruit is not None:
            self.fruit(rnd.fruit)
        for segment in rnd.snake:
            self._board_cell(segment, WHITE)

    def fruit(self, fruit: Fruit) -> None:
        self._board_cell(fruit.position, RED if fruit.special else YELLOW)

    def _board_cell(self, pos: Coords, color: tuple) -> None:
        # board cells are two console columns wide, below the status bar
        self.term.set_cell(pos.x * 2, pos.y + 1, " ", color, color)
        self.term.set_cell(pos.x * 2 + 1, pos.y + 1, " ", color, color)

    def status_bar(self, rnd: RoundState) -> None:
        sound = "ON" if self.env.sound_on else "OFF"
        left = f" {APP_NAME} ver. {APP_VERSION} Sound: {sound}"
        if rnd.eli_mode:
            left += " (Eli mode)"
        right = f" Score: {rnd.score} "
        width = self.env.console_width
        line = left + " " * max(0, width - len(left) - len(right)) + right
        for i, ch in enumerate(line):
            self.term.set_cell(i, 0, ch, YELLOW, BLUE)

    def _filler_column(self) -> None:
        width, height = self.env.console_width, self.env.console_height
        if width % 2 != 0:
            for y in range(1, height):
                self.term.set_cell(width - 1, y, " ", WHITE, BLUE)

    # ── Windows ───────────────────────────────────────────────────
    def centered_window(self, lines: Sequence[str], fg: tuple, bg: tuple) -> Tuple[int, int, int]:
        """
        Draw `lines` in a box centred on the console with a one-cell shadow
        to the right and below. Returns (x, y, width) of the box.
        """
        width = max(len(line) for line in lines)
        x0 = (self.env.console_width - width) // 2
        y0 = (self.env.console_height - len(lines)) // 2

        for j, line in enumerate(lines):
            padded = line.ljust(width)
            for i, ch in enumerate(padded):
                self.term.set_cell(x0 + i, y0 + j, ch, fg, bg)
            if j > 0:
                for i in (width, width + 1):
                    self.term.set_cell(x0 + i, y0 + j, " ", DEFAULT_FG, fg)
        for i in range(2, width + 2):
            self.term.set_cell(x0 + i, y0 + len(lines), " ", DEFAULT_FG, fg)
        return x0, y0, width

    def intro(self) -> None:
        lines = [
            " ",
            f"  {APP_NAME} ver. {APP_VERSION}  ",
            " ",
            "  Press R to start normal mode.  ",
            "  Press E to start in Eli mode (go through walls).  ",
            "  Press H to see highscores.  ",
            " ",
            "  During game:  ",
            "  - press P to pause  ",
            "  - press S to toggle sound ON/OFF  ",
            "  - press Q to quit  ",
            " ",
            f"  Find out more at {HOST}  ",
            " ",
        ]
        x0, y0, _ = self.centered_window(lines, YELLOW, BLUE)
        # spinner sits right after the "see highscores" prompt
        self.env.spinner.place(x0 + len(lines[5]), y0 + 5, YELLOW, BLUE)

    def paused_info(self) -> None:
        self.centered_window(
            [" ", "  Game paused. Press arrow key to resume.  ", " "],
            YELLOW, BLUE,
        )

    def game_summary(self, score: int, ask_name: bool) -> Optional[Tuple[int, int]]:
        """
        Game-over window. When `ask_name` is set it includes the name prompt
        and returns the (x, y) of the input field.
        """
        lines = [" ", f"  Game over! Your score: {score}  ", " "]
        if ask_name:
            lines += [
                "  Enter your name and press enter to continue.  ",
                "  Or press Esc if your are too shy to post your score...  ",
                " ",
                " ",
                " ",
            ]
        else:
            lines += ["  Press space to continue.  ", " "]

        x0, y0, _ = self.centered_window(lines, YELLOW, RED)
        if not ask_name:
            return None

        field_x, field_y = x0 + 3, y0 + 6
        self.env.spinner.place(x0 + 24, field_y, YELLOW, RED)
        return field_x, field_y

    def name_field(self, name: str, x: int, y: int) -> None:
        for i in range(MAX_NAME_LENGTH):
            ch = name[i] if i < len(name) else " "
            self.term.set_cell(x + i, y, ch, DEFAULT_FG, DEFAULT_BG)
        self.term.set_cursor(x + len(name), y)
        self.term.show_cursor()

    def post_result(self, success: bool) -> None:
        if success:
            message, bg = "  Your highscore has been posted.  ", BLUE
        else:
            message, bg = "  Error while posting your highscore :(  ", RED
        self.centered_window(
            [" ", message, " ", "  Press space to continue.  ", "  "],
            YELLOW, bg,
        )

    def high_scores(self, scores: Optional[List[OnlineHighScore]]) -> None:
        if scores is not None:
            header = (
                f"{'Player name':>27}{'Score':>12}{'Eli':>5}"
                f"{'Duration':>12}{'Date':>18}"
            )
            lines = [
                "  ",
                f"  {APP_NAME} highscores:  ",
                "  ",
                header,
                "  " + "-" * 73 + "  ",
            ]
            lines += [high_score_line(i, entry) for i, entry in enumerate(scores, 1)]
            bg = BLUE
        else:
            lines = [" ", "  Error while fetching highscores from server :(  "]
            bg = RED

        lines += [
            " ",
            f"  More at {HOST}/high-scores  ",
            " ",
            "  Press space to continue.",
            " ",
        ]
        self.centered_window(lines, YELLOW, bg)

    def messages(self, messages: List[OnlineMessage]) -> None:
        lines = [" ", f"  News from {APP_NAME}:  "]
        for message in messages:
            stamp = message.created_at.strftime(DATE_FORMAT)
            lines += [" ", f"  {stamp}  {message.content}  ", " "]
        lines += [" ", "  Press space to continue.  ", " "]
        self.centered_window(lines, YELLOW, BLUE)

    # ── Spinner ───────────────────────────────────────────────────
    def spinner(self, spinner: Spinner) -> None:
        if spinner.active:
            glyph = spinner.advance()
            self.term.set_cell(spinner.x, spinner.y, glyph, spinner.fg, spinner.bg)


def high_score_line(rank: int, entry: OnlineHighScore) -> str:
    eli = "YES" if entry.eli_mode else "NO"
    return (
        f"  {rank:>2}.  {entry.player_name:>20}  {entry.score:>10}  "
        f"{eli:>3}  {entry.duration:>10}  {entry.created_at.strftime(DATE_FORMAT)}  "
    )
