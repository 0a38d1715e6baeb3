"""Turn, result and game state values."""

from dataclasses import dataclass, field
from enum import Enum

from core.cards import Card, Deck
from core.hand import Hand

DECK_SIZE = 52


class Turn(Enum):
    """
    Turn phases.

    Flow: PLAYER_TURN → DEALER_TURN. Only a new deal goes back to PLAYER_TURN.
    """

    PLAYER_TURN = "player_turn"
    DEALER_TURN = "dealer_turn"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class GameResult(Enum):
    """Outcome of comparing the two hands."""

    PLAYER_WIN = "player_win"
    DEALER_WIN = "dealer_win"
    DRAW = "draw"
    NO_RESULT = "no_result"

    @property
    def is_decided(self) -> bool:
        return self is not GameResult.NO_RESULT


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of one game.

    Every action returns a new snapshot. For a dealt game the two hands and
    the remaining deck always account for all 52 cards.
    """

    player_hand: Hand
    dealer_hand: Hand
    card_deck: Deck = field(default_factory=tuple)
    turn: Turn = Turn.PLAYER_TURN

    def __post_init__(self) -> None:
        object.__setattr__(self, "card_deck", tuple(self.card_deck))

    @property
    def total_cards(self) -> int:
        """Return the number of cards across both hands and the deck."""
        return len(self.player_hand) + len(self.dealer_hand) + len(self.card_deck)

    @property
    def cards_remaining(self) -> int:
        return len(self.card_deck)

    @property
    def dealer_upcard(self) -> Card | None:
        """The dealer card shown face-up while the first one is hidden."""
        if len(self.dealer_hand) < 2:
            return None
        return self.dealer_hand.cards[1]

