"""Pytest fixtures for blackjack rules engine tests."""

import pytest
from random import Random

from core.cards import Card, Rank, Suit
from core.game import BlackjackGame, GameState, Turn
from core.hand import Hand
from core.rules import RuleSet


def make_hand(*codes: str) -> Hand:
    """Build a hand from card strings like 'AS', '10H'."""
    return Hand(tuple(Card.from_string(code) for code in codes))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def hand_of():
    """Factory building a hand from card strings."""
    return make_hand


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10S", "6H", "KC")


@pytest.fixture
def stacked_state():
    """
    A dealt game with a known deck.

    Player 10-7 (17), dealer 10-6 (16); the next draws are 5♣ then 9♦.
    """
    return GameState(
        player_hand=make_hand("10C", "7D"),
        dealer_hand=make_hand("10H", "6S"),
        card_deck=(Card(Rank.NINE, Suit.DIAMONDS), Card(Rank.FIVE, Suit.CLUBS)),
        turn=Turn.PLAYER_TURN,
    )


@pytest.fixture
def game(rng):
    """A new game instance."""
    return BlackjackGame(rng=rng)

