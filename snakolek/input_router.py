"""
input_router.py — Translate key presses into game actions.

The router knows which keys are allowed in which phase. Direction keys are
applied to the model right here (they only touch the queued direction);
everything else is returned as an Action for the controller to carry out.
"""

from enum import Enum
from typing import Optional

import pygame

from .config import (
    KEY_PAUSE, KEY_SOUND, KEY_CONTINUE, KEY_START, KEY_START_ELI,
    KEY_HIGH_SCORES, KEY_QUIT,
    STATE_MENU, STATE_PLAYING, STATE_OVER,
)
from .geometry import Direction
from .model import Environment, GameModel

DIRECTION_KEYS = {
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
}


class Action(Enum):
    TURN         = "turn"
    RESUME       = "resume"
    PAUSE        = "pause"
    SOUND        = "sound"
    CONTINUE     = "continue"
    START_NORMAL = "start_normal"
    START_ELI    = "start_eli"
    HIGH_SCORES  = "high_scores"
    QUIT         = "quit"


class InputRouter:

    def __init__(self, model: GameModel, env: Environment):
        self.model = model
        self.env = env

    def route(self, key: int) -> Optional[Action]:
        """Return the accepted action for `key`, or None if it is ignored."""
        state = self.model.round.state

        if key in DIRECTION_KEYS:
            resumed = self.model.resume()
            self.model.queue_direction(DIRECTION_KEYS[key])
            return Action.RESUME if resumed else Action.TURN

        if key == KEY_QUIT:
            return Action.QUIT

        if key == KEY_SOUND:
            self.env.sound_on = not self.env.sound_on
            return Action.SOUND

        if key == KEY_PAUSE:
            if state == STATE_PLAYING and self.model.pause():
                return Action.PAUSE
            return None

        if key == KEY_CONTINUE:
            if state == STATE_OVER or self.env.server_content_shown:
                return Action.CONTINUE
            return None

        if key in (KEY_START, KEY_START_ELI):
            if state == STATE_MENU and not self.env.server_content_shown:
                return Action.START_ELI if key == KEY_START_ELI else Action.START_NORMAL
            return None

        if key == KEY_HIGH_SCORES:
            if state == STATE_MENU:
                return Action.HIGH_SCORES
            return None

        return None
