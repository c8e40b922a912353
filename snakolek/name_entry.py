"""
name_entry.py — Player name field shown after a scoring round.

Only [A-Za-z0-9_-] is accepted, up to MAX_NAME_LENGTH characters.
Enter submits a non-empty name, Escape cancels.
"""

import string

import pygame

from .config import MAX_NAME_LENGTH

ALLOWED_CHARS = frozenset(string.ascii_letters + string.digits + "_-")

EDITING   = "editing"
SUBMITTED = "submitted"
CANCELLED = "cancelled"


class NameEntry:

    def __init__(self, initial: str = ""):
        self.name = "".join(c for c in initial if c in ALLOWED_CHARS)[:MAX_NAME_LENGTH]
        self.status = EDITING

    @property
    def valid(self) -> bool:
        return 0 < len(self.name) <= MAX_NAME_LENGTH

    def feed(self, key: int, char: str = "") -> str:
        """Apply one key press and return the resulting status."""
        if self.status != EDITING:
            return self.status

        if char and char in ALLOWED_CHARS:
            if len(self.name) < MAX_NAME_LENGTH:
                self.name += char
        elif key == pygame.K_BACKSPACE:
            self.name = self.name[:-1]
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if self.valid:
                self.status = SUBMITTED
        elif key == pygame.K_ESCAPE:
            self.status = CANCELLED
        return self.status
