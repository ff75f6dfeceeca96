"""
Game logic for the Memoji memory game (ID: 1001).
"""
import enum
import logging
import random

from common.config import (
    EMOJIES, BOARD_SIZE, ROUND_DURATION_SECONDS, TICK_INTERVAL_SECONDS,
    validate_round_config, InsufficientAlphabet
)
from utils.card import Card
from utils.timer import CountdownTimer

logger = logging.getLogger("memoji_bot")

GAME_ID = "1001"


class RoundOutcome(enum.Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class NullRenderer:
    """Renderer that draws nothing. Subclass it and override what you need."""
    def render_board(self, game):
        pass

    def render_timer(self, text):
        pass

    def render_outcome(self, outcome):
        pass


def deal_symbols(alphabet, pair_count, rng=random):
    """Picks pair_count distinct symbols and returns them duplicated and shuffled.

    Raises:
        InsufficientAlphabet: the alphabet has fewer than pair_count distinct symbols.
    """
    distinct = list(dict.fromkeys(alphabet))
    if len(distinct) < pair_count:
        raise InsufficientAlphabet(
            f"Alphabet has {len(distinct)} distinct symbols but {pair_count} pairs are needed"
        )

    symbols = rng.sample(distinct, pair_count) * 2
    rng.shuffle(symbols)
    return symbols


class MemojiGame:
    """Owns the board and the countdown of one Memoji round at a time.

    The caller feeds it card selections and restart requests; the renderer
    is told about every change to the board, the timer and the outcome.
    """
    def __init__(self, alphabet=None, board_size=BOARD_SIZE, round_duration=ROUND_DURATION_SECONDS,
                 renderer=None, tick_interval=TICK_INTERVAL_SECONDS, rng=None):
        self.alphabet = list(alphabet) if alphabet is not None else list(EMOJIES)
        self.pair_count = validate_round_config(self.alphabet, board_size, round_duration)
        self.board_size = board_size
        self.round_duration = round_duration
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.rng = rng if rng is not None else random.Random()

        self.timer = CountdownTimer(round_duration, tick_interval, on_tick=self._on_timer_tick)
        self.cards = []
        self.pending_card = None
        self.outcome = RoundOutcome.IN_PROGRESS
        self.round_number = 0

        self.init()
        logger.info(f"Memoji game created: {board_size} cards, {round_duration}s per round")

    def init(self):
        """Deals a fresh board and puts the timer back to its full duration."""
        symbols = deal_symbols(self.alphabet, self.pair_count, self.rng)
        self.cards = [Card(symbol, index) for index, symbol in enumerate(symbols)]
        self.timer.reset()
        self.pending_card = None
        self.outcome = RoundOutcome.IN_PROGRESS
        self.round_number += 1

        logger.info(f"Dealt round {self.round_number} with symbols {' '.join(symbols)}")
        self.renderer.render_board(self)
        self.renderer.render_timer(self.timer.format_remaining())

    def request_restart(self):
        """Discards the current round and deals a new one."""
        logger.info(f"Restart requested during round {self.round_number} ({self.outcome.value})")
        self.init()

    def stop(self):
        """Halts the countdown without deciding the round."""
        self.timer.stop()

    @property
    def is_over(self):
        return self.outcome is not RoundOutcome.IN_PROGRESS

    @property
    def is_won(self):
        return self.outcome is RoundOutcome.WON

    @property
    def is_lost(self):
        return self.outcome is RoundOutcome.LOST

    @property
    def matched_pairs(self):
        return sum(1 for card in self.cards if card.matched) // 2

    @property
    def remaining_time(self):
        return self.timer.remaining

    def get_card(self, card_id):
        """Gets the card with the given id. Unknown ids raise IndexError."""
        if not isinstance(card_id, int) or not 0 <= card_id < len(self.cards):
            raise IndexError(f"No card with id {card_id!r} on a board of {len(self.cards)}")
        return self.cards[card_id]

    def select_card(self, card_id):
        """Handles a card-selected event coming from the input source."""
        self.handle_card_selected(self.get_card(card_id))

    def handle_card_selected(self, card):
        """Resolves one click on a card.

        The first card of a turn becomes the pending card. The second one is
        compared with it and both are marked matched or mismatched. A failed
        pair stays face-up until the next reveal, which flips it back.
        """
        if self.is_over:
            return

        if self.timer.is_idle:
            self.timer.start(self._on_timeout)

        if card.matched:
            return
        if card.revealed:
            assert card is self.pending_card or card.mismatched, f"{card!r} is face-up without a turn"
            return

        card.reveal()
        self._conceal_mismatched()

        if self.pending_card is None:
            self.pending_card = card
        else:
            pending, self.pending_card = self.pending_card, None
            if pending.symbol == card.symbol:
                pending.mark_matched()
                card.mark_matched()
                logger.info(f"Pair found: {card.symbol} at {pending.index} and {card.index}")
            else:
                pending.mark_mismatched()
                card.mark_mismatched()

        if all(c.matched for c in self.cards):
            self.timer.stop()
            self.outcome = RoundOutcome.WON
            logger.info(f"Round {self.round_number} won with {self.timer.format_remaining()} left")
            self.renderer.render_board(self)
            self.renderer.render_outcome(self.outcome)
            return

        self.renderer.render_board(self)

    def _conceal_mismatched(self):
        for card in self.cards:
            if card.mismatched:
                card.conceal()

    def _on_timer_tick(self, timer):
        self.renderer.render_timer(timer.format_remaining())

    def _on_timeout(self):
        if self.is_over:
            return
        self.outcome = RoundOutcome.LOST
        logger.info(f"Round {self.round_number} lost with {self.matched_pairs}/{self.pair_count} pairs found")
        self.renderer.render_outcome(self.outcome)
