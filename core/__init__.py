"""Blackjack rules engine - pure game logic, UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit, new_deck, shuffle, take_card
from core.errors import DeckExhausted, GameError, InvalidRank
from core.hand import Hand, is_blackjack, score
from core.rules import RuleSet

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "new_deck",
    "shuffle",
    "take_card",
    "DeckExhausted",
    "GameError",
    "InvalidRank",
    "Hand",
    "is_blackjack",
    "score",
    "RuleSet",
]
