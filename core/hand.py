"""Hand representation and scoring."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from core.cards import Card, Rank

BLACKJACK = 21

# Point values for every non-ace rank. Aces are valued by ``score``.
RANK_POINTS: dict[Rank, int] = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}


@dataclass(frozen=True)
class Hand:
    """An immutable hand of cards held by the player or the dealer."""

    cards: tuple[Card, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple
        object.__setattr__(self, "cards", tuple(self.cards))

    def with_card(self, card: Card) -> "Hand":
        """Return a new hand with ``card`` appended."""
        return Hand(self.cards + (card,))

    @property
    def value(self) -> int:
        """Return the hand score."""
        return score(self)

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand has exactly two cards."""
        return is_blackjack(self)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > BLACKJACK

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({list(self.cards)!r}, value={self.value})"


def score(hand: Hand | Iterable[Card]) -> int:
    """
    Calculate the value of a hand.

    Non-ace cards are summed first. Each ace is then valued in hand order:
    1 if 11 would bust, 1 if 11 would land exactly on 21 while another ace
    is still to be valued, otherwise 11. Busted totals are returned as is.
    """
    cards = list(hand)
    total = sum(RANK_POINTS[card.rank] for card in cards if not card.is_ace)

    aces_left = sum(1 for card in cards if card.is_ace)
    while aces_left:
        if total + 11 > BLACKJACK:
            total += 1
        elif total + 11 == BLACKJACK and aces_left > 1:
            total += 1
        else:
            total += 11
        aces_left -= 1

    return total


def is_blackjack(hand: Hand | Iterable[Card]) -> bool:
    """
    Check the two-card blackjack shape.

    Only the card count is checked; callers compare the score against 21
    where a natural matters.
    """
    return len(list(hand)) == 2
