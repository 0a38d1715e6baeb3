"""Game session driven by a turn state machine."""

from random import Random
from typing import Callable

from transitions import Machine

from core.game.events import EventEmitter, EventType, GameEvent
from core.game.play import player_hits, player_stands, setup_game
from core.game.resolver import resolve
from core.game.state import GameResult, GameState, Turn
from core.hand import BLACKJACK, Hand
from core.rules import RuleSet

_RESULT_EVENTS = {
    GameResult.PLAYER_WIN: EventType.PLAYER_WINS,
    GameResult.DEALER_WIN: EventType.DEALER_WINS,
    GameResult.DRAW: EventType.DRAW,
}


def _is_natural(hand: Hand) -> bool:
    return hand.is_blackjack and hand.value == BLACKJACK


class BlackjackGame:
    """
    One player's game against the dealer.

    Owns a single immutable ``GameState`` and replaces it on every action.
    The state machine gates the actions: hit and stand are only accepted
    during the player's turn, and only a new deal returns to it.
    Communication happens through events and return values only.
    """

    # State machine states
    STATES = [t.value for t in Turn]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "end_player_turn", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "new_deal", "source": "*", "dest": "player_turn"},
    ]

    def __init__(
        self,
        rules: RuleSet | None = None,
        rng: Random | None = None,
        state: GameState | None = None,
    ) -> None:
        """
        Initialize a game session.

        Args:
            rules: Dealer and tie-break rules (defaults if not provided)
            rng: Random number generator for reproducible deals
            state: Existing state to resume; a new game is dealt if omitted
        """
        self.rules = rules or RuleSet()
        self._rng = rng or Random()
        self.events = EventEmitter()

        initial = state.turn if state is not None else Turn.PLAYER_TURN
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=initial.value,
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        if state is None:
            self.reset()
        else:
            self._state = state

    @classmethod
    def from_state(
        cls,
        state: GameState,
        rules: RuleSet | None = None,
        rng: Random | None = None,
    ) -> "BlackjackGame":
        """Resume a session from a stored state."""
        return cls(rules=rules, rng=rng, state=state)

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._state

    @property
    def turn(self) -> Turn:
        """Current turn as enum."""
        return Turn(self._machine_state)  # type: ignore[attr-defined]

    @property
    def result(self) -> GameResult:
        """Outcome of the current hands."""
        return resolve(self._state, self.rules)

    @property
    def status(self) -> str:
        """The result once the dealer has played and it is decided, else the turn."""
        result = self.result
        if self.turn is Turn.DEALER_TURN and result.is_decided:
            return result.value
        return self.turn.value

    @property
    def cards_remaining(self) -> int:
        return self._state.cards_remaining

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.turn is Turn.PLAYER_TURN

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.turn is Turn.PLAYER_TURN

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def reset(self) -> None:
        """Throw the current game away and deal a new one."""
        self._state = setup_game(self._rng)
        self.new_deal()

        self.events.emit_new(EventType.DECK_SHUFFLED)
        dealer_hand = self._state.dealer_hand
        player_hand = self._state.player_hand
        # Dealer's first card stays face down until the dealer's turn
        self.events.emit_new(EventType.CARD_DEALT, card="??", hand="dealer")
        self.events.emit_new(
            EventType.CARD_DEALT, card=str(dealer_hand.cards[1]), hand="dealer"
        )
        for card in player_hand:
            self.events.emit_new(EventType.CARD_DEALT, card=str(card), hand="player")

        self.events.emit_new(
            EventType.GAME_STARTED,
            player_value=player_hand.value,
            cards_remaining=self.cards_remaining,
        )
        if _is_natural(player_hand):
            self.events.emit_new(EventType.PLAYER_BLACKJACK)

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        if not self.can_hit:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot hit in current turn",
                turn=self.turn.name,
            )
            return False

        self._state = player_hits(self._state)
        hand = self._state.player_hand
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(hand.cards[-1]),
            hand="player",
            hand_value=hand.value,
        )
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=hand.value)

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=hand.value)
        return True

    def stand(self) -> bool:
        """Player stands and the dealer plays."""
        if not self.can_stand:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot stand in current turn",
                turn=self.turn.name,
            )
            return False

        dealt_before = len(self._state.dealer_hand)
        self._state = player_stands(self._state, self.rules)
        self.end_player_turn()

        self.events.emit_new(
            EventType.PLAYER_STAND, hand_value=self._state.player_hand.value
        )
        self._report_dealer(dealt_before)
        self._report_result()
        return True

    def _report_dealer(self, dealt_before: int) -> None:
        """Emit the dealer's reveal, draws and final position."""
        dealer_hand = self._state.dealer_hand
        opening = Hand(dealer_hand.cards[:dealt_before])
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(dealer_hand.cards[0]),
            hand_value=opening.value,
        )

        for card in dealer_hand.cards[dealt_before:]:
            opening = opening.with_card(card)
            self.events.emit_new(
                EventType.CARD_DEALT,
                card=str(card),
                hand="dealer",
                hand_value=opening.value,
            )
            self.events.emit_new(EventType.DEALER_HITS, hand_value=opening.value)

        if dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer_hand.value)

    def _report_result(self) -> None:
        if _is_natural(self._state.dealer_hand):
            self.events.emit_new(EventType.DEALER_BLACKJACK)

        result = self.result
        event_type = _RESULT_EVENTS.get(result)
        if event_type is not None:
            self.events.emit_new(
                event_type,
                player_value=self._state.player_hand.value,
                dealer_value=self._state.dealer_hand.value,
            )
