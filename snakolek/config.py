"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

import os
import platform

import pygame

# ── App identity ──────────────────────────────────────────────────
APP_NAME     = "Snakolek"
APP_VERSION  = "0.991"
APP_PLATFORM = platform.system().lower()

# ── Remote API ────────────────────────────────────────────────────
HOST             = os.getenv("SNAKOLEK_HOST", "http://snakolek.ironsys.pl")
HIGH_SCORES_PATH = "/api/high-scores"
MESSAGES_PATH    = "/api/messages"
HIGH_SCORES_LIMIT = 10
REQUEST_TIMEOUT  = float(os.getenv("SNAKOLEK_TIMEOUT", "5.0"))   # seconds

# Signing key halves, concatenated as FLC + IRONSYS
SECRET_FLC     = os.getenv("SNAKOLEK_FLC", "")
SECRET_IRONSYS = os.getenv("SNAKOLEK_IRONSYS", "")

LOG_LEVEL = os.getenv("SNAKOLEK_LOG_LEVEL", "WARNING")

# ── Console & Window ──────────────────────────────────────────────
CONSOLE_COLS = 80
CONSOLE_ROWS = 30
FONT_NAME    = "courier"
FONT_SIZE    = 16
WINDOW_TITLE = f"{APP_NAME} ver. {APP_VERSION}"

# ── Colors (terminal palette) ─────────────────────────────────────
DEFAULT_FG = (200, 200, 200)
DEFAULT_BG = (0,   0,   0)
WHITE      = (255, 255, 255)
YELLOW     = (255, 228, 77)
BLUE       = (30,  60,  170)
RED        = (190, 30,  40)

# ── Timing ────────────────────────────────────────────────────────
BASE_TICK_DELAY  = 100.0     # ms between ticks at round start
TICKER_FACTOR    = 0.995     # tick delay multiplier per fruit eaten
MIN_TIMER_MS     = 1         # smallest interval pygame.time.set_timer accepts
SPINNER_DELAY_MS = 100

# ── Gameplay ──────────────────────────────────────────────────────
FRUIT_POINTS          = 10
SPECIAL_MULTIPLIER    = 10
SPECIAL_EXPIRY_MARGIN = 10   # extra steps a special fruit survives past its distance
SPECIAL_THRESHOLD     = 84   # randrange(100) above this spawns a special fruit
FULL_SCAN_OCCUPANCY   = 0.75 # board fraction above which fruit placement scans
MAX_NAME_LENGTH       = 20

# ── Sound ─────────────────────────────────────────────────────────
BEEP_FREQUENCY  = 880        # Hz
BEEP_DURATION   = 0.06       # seconds
MIXER_FREQUENCY = 22050

# ── Custom events ─────────────────────────────────────────────────
TICK_EVENT    = pygame.USEREVENT + 1
SPINNER_EVENT = pygame.USEREVENT + 2
REMOTE_EVENT  = pygame.USEREVENT + 3

# ── Remote request kinds ──────────────────────────────────────────
REQUEST_POST_SCORE  = "post_score"
REQUEST_HIGH_SCORES = "high_scores"
REQUEST_MESSAGES    = "messages"

# ── Key bindings ──────────────────────────────────────────────────
KEY_PAUSE       = pygame.K_p
KEY_SOUND       = pygame.K_s
KEY_CONTINUE    = pygame.K_SPACE
KEY_START       = pygame.K_r
KEY_START_ELI   = pygame.K_e
KEY_HIGH_SCORES = pygame.K_h
KEY_QUIT        = pygame.K_q

# ── Game States ───────────────────────────────────────────────────
STATE_MENU    = "menu"
STATE_PLAYING = "playing"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"
