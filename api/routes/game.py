"""Game API endpoints."""

import time
from random import Random
from typing import Annotated, Any

from fastapi import APIRouter, Header, HTTPException

from api.schemas import (
    ActionRequest,
    CardResponse,
    GameStateResponse,
    HandResponse,
    SessionResponse,
)
from api.session import (
    create_session,
    extract_session_id,
    get_session,
    get_session_store,
    update_session,
)
from config import config
from core.cards import Card, Rank, Suit
from core.game import BlackjackGame, GameResult, GameState, Turn
from core.hand import Hand

router = APIRouter()

# In-memory game cache, backed by the session store
_games: dict[str, BlackjackGame] = {}

# Session data keys
SESSION_KEY_GAME = "game"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def _serialize_card(card: Card) -> dict[str, str]:
    """Serialize a card to a dict."""
    return {"rank": card.rank.value, "suit": card.suit.value}


def _deserialize_card(data: dict[str, str]) -> Card:
    """Deserialize a card; unknown ranks or suits raise InvalidRank."""
    return Card(Rank(data["rank"]), Suit(data["suit"]))


def _serialize_state(state: GameState) -> dict[str, Any]:
    """Serialize game state for session storage."""
    return {
        "turn": state.turn.value,
        "player_hand": [_serialize_card(c) for c in state.player_hand],
        "dealer_hand": [_serialize_card(c) for c in state.dealer_hand],
        "card_deck": [_serialize_card(c) for c in state.card_deck],
    }


def _deserialize_state(data: dict[str, Any]) -> GameState:
    """Restore game state from session data."""
    return GameState(
        player_hand=Hand(tuple(_deserialize_card(c) for c in data["player_hand"])),
        dealer_hand=Hand(tuple(_deserialize_card(c) for c in data["dealer_hand"])),
        card_deck=tuple(_deserialize_card(c) for c in data["card_deck"]),
        turn=Turn(data["turn"]),
    )


def _new_game() -> BlackjackGame:
    """Deal a new game with the configured rules."""
    seed = config.game.seed
    rng = Random(seed) if seed is not None else None
    return BlackjackGame(rules=config.game.rules(), rng=rng)


async def _load_game(session_id: str) -> BlackjackGame | None:
    """Load game from session store."""
    session_data = await get_session(session_id)
    if session_data and SESSION_KEY_GAME in session_data:
        state = _deserialize_state(session_data[SESSION_KEY_GAME])
        return BlackjackGame.from_state(state, rules=config.game.rules())
    return None


async def _save_game(session_id: str, game: BlackjackGame) -> None:
    """Save game to session store."""
    session_data = await get_session(session_id) or {}
    session_data[SESSION_KEY_GAME] = _serialize_state(game.state)
    session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    if SESSION_KEY_CREATED_AT not in session_data:
        session_data[SESSION_KEY_CREATED_AT] = int(time.time())
    await update_session(session_id, session_data)


def _require_session(token: str) -> str:
    """Reject tokens that were not issued by this server or have expired."""
    if extract_session_id(token) is None:
        _games.pop(token, None)
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return token


async def _evict_expired() -> None:
    """Drop expired sessions from the store and their cached games."""
    store = await get_session_store()
    for session_id in await store.cleanup_expired():
        _games.pop(session_id, None)


async def _get_game(session_id: str) -> BlackjackGame:
    """Get or create a game for the session."""
    # A cached game is only valid while its session is still stored
    if await get_session(session_id) is None:
        _games.pop(session_id, None)
    elif session_id in _games:
        return _games[session_id]

    game = await _load_game(session_id)
    if game is None:
        game = _new_game()
        await _save_game(session_id, game)

    _games[session_id] = game
    return game


def _card_to_response(card: Card) -> CardResponse:
    return CardResponse(rank=card.rank.value, suit=card.suit.value, label=str(card))


def _hand_to_response(hand: Hand) -> HandResponse:
    """Convert a Hand to HandResponse."""
    return HandResponse(
        cards=[_card_to_response(c) for c in hand],
        value=hand.value,
        is_blackjack=hand.is_blackjack,
        is_busted=hand.is_busted,
    )


def _game_state_response(game: BlackjackGame) -> GameStateResponse:
    """Convert game state to response, hiding the dealer's hole card."""
    state = game.state
    dealer_turn = game.turn is Turn.DEALER_TURN

    dealer_showing = None
    if not dealer_turn and state.dealer_upcard is not None:
        dealer_showing = _card_to_response(state.dealer_upcard)

    result = game.result if dealer_turn else GameResult.NO_RESULT

    return GameStateResponse(
        turn=game.turn.value,
        player_hand=_hand_to_response(state.player_hand),
        dealer_hand=_hand_to_response(state.dealer_hand) if dealer_turn else None,
        dealer_showing=dealer_showing,
        cards_remaining=game.cards_remaining,
        result=result.value,
        status=game.status,
        can_hit=game.can_hit,
        can_stand=game.can_stand,
    )


@router.post("/new")
async def new_game() -> SessionResponse:
    """Create a new game session and deal."""
    await _evict_expired()
    session_id = await create_session()

    game = _new_game()
    _games[session_id] = game
    await _save_game(session_id, game)

    return SessionResponse(session_id=session_id)


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Get current game state."""
    game = await _get_game(_require_session(session_id))
    return _game_state_response(game)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Execute a player action."""
    game = await _get_game(_require_session(session_id))

    actions = {
        "hit": game.hit,
        "stand": game.stand,
    }

    if not actions[request.action]():
        raise HTTPException(status_code=400, detail=f"Cannot {request.action} now")

    await _save_game(session_id, game)
    return _game_state_response(game)


@router.post("/reset")
async def reset_game(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Discard the current game and deal a new one."""
    game = await _get_game(_require_session(session_id))
    game.reset()
    await _save_game(session_id, game)
    return _game_state_response(game)
