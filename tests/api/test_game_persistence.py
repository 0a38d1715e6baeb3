"""Tests for game state serialization in the session store."""

import pytest

from api.routes.game import (
    _deserialize_card,
    _deserialize_state,
    _load_game,
    _save_game,
    _serialize_card,
    _serialize_state,
)
from api.session import create_session
from core.cards import Card, Rank, Suit
from core.errors import InvalidRank
from core.game import BlackjackGame, Turn, setup_game


class TestCardSerialization:
    """Tests for card serialization."""

    def test_serialize_card_structure(self):
        serialized = _serialize_card(Card(Rank.TEN, Suit.DIAMONDS))
        assert serialized == {"rank": "10", "suit": "diamonds"}

    def test_every_card_restores(self):
        for suit in Suit:
            for rank in Rank:
                card = Card(rank, suit)
                assert _deserialize_card(_serialize_card(card)) == card

    def test_bad_card_data_rejected(self):
        with pytest.raises(InvalidRank):
            _deserialize_card({"rank": "1", "suit": "hearts"})
        with pytest.raises(InvalidRank):
            _deserialize_card({"rank": "A", "suit": "stars"})


class TestStateSerialization:
    """Tests for whole-state serialization."""

    def test_state_restores_exactly(self, rng):
        state = setup_game(rng)
        assert _deserialize_state(_serialize_state(state)) == state

    def test_state_keeps_deck_order(self, rng):
        state = setup_game(rng)
        restored = _deserialize_state(_serialize_state(state))
        assert restored.card_deck[-1] == state.card_deck[-1]

    def test_turn_serialized_by_value(self, rng):
        game = BlackjackGame(rng=rng)
        game.stand()
        data = _serialize_state(game.state)
        assert data["turn"] == "dealer_turn"
        assert _deserialize_state(data).turn is Turn.DEALER_TURN

    @pytest.mark.asyncio
    async def test_save_and_load_game(self, rng):
        session_id = await create_session()
        game = BlackjackGame(rng=rng)
        game.hit()

        await _save_game(session_id, game)
        loaded = await _load_game(session_id)

        assert loaded is not None
        assert loaded.state == game.state
        assert loaded.turn is Turn.PLAYER_TURN
        assert loaded.can_hit

    @pytest.mark.asyncio
    async def test_load_missing_game(self):
        assert await _load_game("no-such-session") is None
