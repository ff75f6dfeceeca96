"""
Pytest configuration and shared fixtures for the Memoji bot.
"""
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from games.game_1001_memoji.game_1001 import MemojiGame, NullRenderer  # noqa: E402
from utils.card import Card  # noqa: E402

DOG = "🐶"
CAT = "🐱"


class RecordingRenderer(NullRenderer):
    """Renderer that remembers what it was asked to draw."""
    def __init__(self):
        self.boards = 0
        self.timers = []
        self.outcomes = []

    def render_board(self, game):
        self.boards += 1

    def render_timer(self, text):
        self.timers.append(text)

    def render_outcome(self, outcome):
        self.outcomes.append(outcome)


def deal(game, symbols):
    """Replaces the dealt board with cards in a known order."""
    game.cards = [Card(symbol, index) for index, symbol in enumerate(symbols)]
    return game.cards


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def small_game(renderer):
    """Four-card game laid out as dog, cat, dog, cat."""
    game = MemojiGame([DOG, CAT], board_size=4, round_duration=60, renderer=renderer, tick_interval=60)
    deal(game, [DOG, CAT, DOG, CAT])
    return game
