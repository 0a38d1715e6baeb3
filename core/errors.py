"""Game error types."""


class GameError(Exception):
    """Base class for rule engine errors."""


class DeckExhausted(GameError, IndexError):
    """Raised when drawing from an empty deck.

    Fatal to the current game; the caller must deal a new one.
    """

    def __init__(self, message: str = "Cannot draw from empty deck") -> None:
        super().__init__(message)


class InvalidRank(GameError, ValueError):
    """Raised when a rank or suit outside the standard set is constructed."""
