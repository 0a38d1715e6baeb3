"""Game state, turn progression and outcome resolution."""

from core.game.events import GameEvent, EventEmitter, EventType
from core.game.state import GameResult, GameState, Turn
from core.game.play import player_hits, player_stands, setup_game
from core.game.resolver import resolve
from core.game.engine import BlackjackGame

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "GameResult",
    "GameState",
    "Turn",
    "player_hits",
    "player_stands",
    "setup_game",
    "resolve",
    "BlackjackGame",
]
