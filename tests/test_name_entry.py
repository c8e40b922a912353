"""Tests for snakolek/name_entry.py"""

import pygame

from snakolek.name_entry import CANCELLED, EDITING, SUBMITTED, NameEntry


def type_text(entry: NameEntry, text: str) -> None:
    for ch in text:
        entry.feed(pygame.K_UNKNOWN, ch)


def press(entry: NameEntry, key: int) -> str:
    return entry.feed(key, "")


class TestNameEntry:
    def test_backspace_then_name(self):
        entry = NameEntry()
        type_text(entry, "a")
        press(entry, pygame.K_BACKSPACE)
        type_text(entry, "Bob-1")
        assert press(entry, pygame.K_RETURN) == SUBMITTED
        assert entry.name == "Bob-1"

    def test_rejects_characters_outside_alphabet(self):
        entry = NameEntry()
        type_text(entry, "a b!c.d_é")
        assert entry.name == "abcd_"

    def test_caps_at_twenty(self):
        entry = NameEntry()
        type_text(entry, "x" * 25)
        assert entry.name == "x" * 20

    def test_enter_needs_a_name(self):
        entry = NameEntry()
        assert press(entry, pygame.K_RETURN) == EDITING
        press(entry, pygame.K_BACKSPACE)
        assert entry.status == EDITING

    def test_escape_cancels(self):
        entry = NameEntry("Bob")
        assert press(entry, pygame.K_ESCAPE) == CANCELLED

    def test_prefilled_with_previous_name(self):
        entry = NameEntry("Alice")
        type_text(entry, "2")
        press(entry, pygame.K_KP_ENTER)
        assert entry.status == SUBMITTED
        assert entry.name == "Alice2"

    def test_keys_ignored_once_finished(self):
        entry = NameEntry("Bob")
        press(entry, pygame.K_RETURN)
        type_text(entry, "zzz")
        assert press(entry, pygame.K_ESCAPE) == SUBMITTED
        assert entry.name == "Bob"
