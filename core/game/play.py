"""Dealing and the two player actions.

All functions are pure: they take a ``GameState`` and return a new one.
"""

from dataclasses import replace
from random import Random

from core.cards import new_deck, shuffle, take_card
from core.game.state import GameState, Turn
from core.hand import Hand
from core.rules import RuleSet


def setup_game(rng: Random | None = None) -> GameState:
    """
    Deal a new game from a freshly shuffled deck.

    The last two cards of the shuffled deck go to the player and the two
    before them to the dealer; the rest stays in the deck.

    Args:
        rng: Random number generator for reproducible deals
    """
    card_deck = shuffle(new_deck(), rng)
    return GameState(
        player_hand=Hand(card_deck[-2:]),
        dealer_hand=Hand(card_deck[-4:-2]),
        card_deck=card_deck[:-4],
        turn=Turn.PLAYER_TURN,
    )


def player_hits(state: GameState) -> GameState:
    """Draw one card into the player's hand. The turn is unchanged."""
    card, remaining = take_card(state.card_deck)
    return replace(
        state,
        card_deck=remaining,
        player_hand=state.player_hand.with_card(card),
    )


def player_stands(state: GameState, rules: RuleSet | None = None) -> GameState:
    """
    End the player's turn.

    If the dealer is at or below the draw threshold the dealer takes one
    card first (or keeps drawing when the rules say so), then the turn
    passes to the dealer.
    """
    rules = rules or RuleSet()
    dealer_hand = state.dealer_hand
    card_deck = state.card_deck

    while dealer_hand.value <= rules.dealer_draw_threshold:
        card, card_deck = take_card(card_deck)
        dealer_hand = dealer_hand.with_card(card)
        if not rules.dealer_draws_to_completion:
            break

    return replace(
        state,
        dealer_hand=dealer_hand,
        card_deck=card_deck,
        turn=Turn.DEALER_TURN,
    )
