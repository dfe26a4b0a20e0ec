"""Screen logic that can run without a display (no Tk root is created)."""

from types import SimpleNamespace

import pytest

pytest.importorskip("tkinter")

from engine import Phase  # noqa: E402
from game import WordCatchGame  # noqa: E402


class FakeAudio:
    def __init__(self):
        self.menu_music_plays = 0

    def play_menu_music(self):
        self.menu_music_plays += 1


def make_screen(session=None, pending="after#1"):
    cancelled = []
    screen = SimpleNamespace(session=session, audio=FakeAudio(),
                             _menu_music_after=pending,
                             after_cancel=cancelled.append)
    return screen, cancelled


def test_menu_music_returns_after_round_over():
    screen, _ = make_screen(session=SimpleNamespace(phase=Phase.OVER))
    WordCatchGame._on_menu_music_due(screen)
    assert screen.audio.menu_music_plays == 1
    assert screen._menu_music_after is None


def test_menu_music_skipped_once_next_round_started():
    screen, _ = make_screen(session=SimpleNamespace(phase=Phase.RUNNING))
    WordCatchGame._on_menu_music_due(screen)
    assert screen.audio.menu_music_plays == 0


def test_menu_music_plays_on_home_screen():
    screen, _ = make_screen(session=None)
    WordCatchGame._on_menu_music_due(screen)
    assert screen.audio.menu_music_plays == 1


def test_starting_a_round_cancels_pending_menu_music():
    screen, cancelled = make_screen()
    WordCatchGame._cancel_menu_music(screen)
    assert cancelled == ["after#1"]
    assert screen._menu_music_after is None

    WordCatchGame._cancel_menu_music(screen)
    assert cancelled == ["after#1"]
