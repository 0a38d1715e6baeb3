"""Pydantic schemas for API requests and responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand"]


class SessionResponse(BaseModel):
    """A newly created game session."""

    session_id: str


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    label: str


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    is_blackjack: bool
    is_busted: bool


class GameStateResponse(BaseModel):
    """Current game state as a table view sees it.

    The dealer's full hand is withheld until the dealer's turn; only the
    face-up card is shown before that.
    """

    turn: Literal["player_turn", "dealer_turn"]
    player_hand: HandResponse
    dealer_hand: HandResponse | None
    dealer_showing: CardResponse | None
    cards_remaining: int
    result: Literal["player_win", "dealer_win", "draw", "no_result"]
    status: str
    can_hit: bool
    can_stand: bool
