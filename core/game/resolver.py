"""Outcome resolution."""

from core.game.state import GameResult, GameState
from core.hand import BLACKJACK, is_blackjack, score
from core.rules import RuleSet


def resolve(state: GameState, rules: RuleSet | None = None) -> GameResult:
    """
    Compare the dealer and player hands.

    Rules are checked in order and the first match wins:
    both bust; player bust or dealer ahead; dealer bust or player ahead;
    equal scores. A 21-21 tie is settled by the two-card hands.

    The result is only final once the turn has passed to the dealer, but
    the function may be called at any time.
    """
    rules = rules or RuleSet()
    dealer_total = score(state.dealer_hand)
    player_total = score(state.player_hand)

    if dealer_total > BLACKJACK and player_total > BLACKJACK:
        return GameResult.NO_RESULT

    if player_total > BLACKJACK or (
        dealer_total > player_total and dealer_total <= BLACKJACK
    ):
        return GameResult.DEALER_WIN

    if dealer_total > BLACKJACK or (
        player_total > dealer_total and player_total <= BLACKJACK
    ):
        return GameResult.PLAYER_WIN

    if player_total != BLACKJACK:
        return GameResult.DRAW

    player_bj = is_blackjack(state.player_hand)
    dealer_bj = is_blackjack(state.dealer_hand)

    if player_bj and dealer_bj:
        return GameResult.DRAW
    if player_bj:
        return GameResult.PLAYER_WIN
    if dealer_bj:
        return GameResult.DEALER_WIN

    # 21 each, neither on two cards
    if rules.equal_21_is_draw:
        return GameResult.DRAW
    return GameResult.NO_RESULT
