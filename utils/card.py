"""
Defines the Card class for the Memoji game.
"""
from common.config import CARD_BACK


class Card:
    """Represents a single card on the Memoji board.

    A card holds one symbol and three flags. ``matched`` and ``mismatched``
    can only be set while the card is face-up, and concealing the card
    always clears both of them.
    """
    def __init__(self, symbol, index=None, on_change=None):
        self._symbol = symbol
        self.index = index  # Position in display order
        self._revealed = False
        self._matched = False
        self._mismatched = False
        self.on_change = on_change  # Called with the card after every state change

    @property
    def symbol(self):
        return self._symbol

    @property
    def revealed(self):
        return self._revealed

    @property
    def matched(self):
        return self._matched

    @property
    def mismatched(self):
        return self._mismatched

    @property
    def state(self):
        """Short state name used by renderers and logs."""
        if not self._revealed:
            return "hidden"
        if self._matched:
            return "matched"
        if self._mismatched:
            return "mismatched"
        return "revealed"

    def reveal(self):
        """Turns the card face-up."""
        self._set_revealed(True)

    def conceal(self):
        """Turns the card face-down, clearing both outcome flags."""
        self._set_revealed(False)

    def flip(self):
        """Toggles the card between face-up and face-down."""
        self._set_revealed(not self._revealed)

    def mark_matched(self):
        """Locks a face-up card as part of a found pair. No-op while concealed."""
        if not self._revealed:
            return
        self._matched = True
        self._notify()

    def mark_mismatched(self):
        """Flags a face-up card as part of a failed pair. No-op while concealed."""
        if not self._revealed:
            return
        self._mismatched = True
        self._notify()

    def _set_revealed(self, revealed):
        self._revealed = revealed
        if not revealed:
            self._matched = False
            self._mismatched = False
        self._notify()

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self)

    def get_display(self, card_back=CARD_BACK):
        """Returns the symbol to display based on state."""
        if self._revealed:
            return self._symbol
        return card_back

    def __str__(self):
        """String representation."""
        return self.get_display()

    def __repr__(self):
        """Developer representation."""
        return f"Card(symbol='{self._symbol}', index={self.index}, state='{self.state}')"
