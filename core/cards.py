"""Card, Rank, Suit and the immutable deck operations."""

from dataclasses import dataclass
from enum import Enum
from random import Random

from core.errors import DeckExhausted, InvalidRank


class Suit(Enum):
    """Card suits."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @classmethod
    def _missing_(cls, value: object) -> "Suit":
        raise InvalidRank(f"Invalid suit: {value!r}")

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks.

    A rank is only a symbol; converting it to points is done by the
    scoring code in ``core.hand``.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @classmethod
    def _missing_(cls, value: object) -> "Rank":
        raise InvalidRank(f"Invalid rank: {value!r}")

    def __str__(self) -> str:
        return self.value

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self is Rank.ACE

    @property
    def is_face(self) -> bool:
        """Check if this rank is a Jack, Queen or King."""
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise InvalidRank(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise InvalidRank(f"Invalid suit: {self.suit!r}")

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh' or '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise InvalidRank(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {rank.value: rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise InvalidRank(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise InvalidRank(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


# Ordered remaining cards; the last element is drawn first.
Deck = tuple[Card, ...]


def new_deck() -> Deck:
    """Return all 52 cards in order: every rank of the first suit, then the next."""
    return tuple(Card(rank, suit) for suit in Suit for rank in Rank)


def shuffle(deck: Deck, rng: Random | None = None) -> Deck:
    """
    Return a uniformly random permutation of ``deck``.

    The input is left untouched. ``random.Random.shuffle`` is a
    Fisher-Yates shuffle, so pass a seeded ``Random`` for reproducible deals.
    """
    rng = rng or Random()
    cards = list(deck)
    rng.shuffle(cards)
    return tuple(cards)


def take_card(deck: Deck) -> tuple[Card, Deck]:
    """
    Draw the card at the end of the deck.

    Returns:
        The drawn card and the remaining deck

    Raises:
        DeckExhausted: if the deck is empty
    """
    if not deck:
        raise DeckExhausted()
    return deck[-1], deck[:-1]
