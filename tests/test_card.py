"""
Tests for the Card state transitions.
"""
from utils.card import Card


def test_new_card_is_hidden():
    card = Card("🐶", 0)
    assert card.symbol == "🐶"
    assert not card.revealed
    assert not card.matched
    assert not card.mismatched
    assert card.state == "hidden"
    assert card.get_display("❓") == "❓"


def test_reveal_shows_symbol():
    card = Card("🐶", 0)
    card.reveal()
    assert card.revealed
    assert card.state == "revealed"
    assert card.get_display("❓") == "🐶"


def test_conceal_clears_outcome_flags():
    card = Card("🐶", 0)
    card.reveal()
    card.mark_matched()
    card.mark_mismatched()
    card.conceal()
    assert not card.revealed
    assert not card.matched
    assert not card.mismatched


def test_marks_ignored_while_concealed():
    card = Card("🐶", 0)
    card.mark_matched()
    card.mark_mismatched()
    assert not card.matched
    assert not card.mismatched
    assert card.state == "hidden"


def test_flip_toggles():
    card = Card("🐱", 3)
    card.flip()
    assert card.revealed
    card.mark_mismatched()
    assert card.state == "mismatched"
    card.flip()
    assert not card.revealed
    assert not card.mismatched


def test_matched_state():
    card = Card("🐱", 1)
    card.reveal()
    card.mark_matched()
    assert card.state == "matched"


def test_change_listener_sees_every_transition():
    seen = []
    card = Card("🐶", 0, on_change=lambda c: seen.append(c.state))
    card.reveal()
    card.mark_mismatched()
    card.conceal()
    assert seen == ["revealed", "mismatched", "hidden"]
