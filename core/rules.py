"""Table rule variations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleSet:
    """
    Dealer and tie-break rules.

    The defaults are the house rules of this table: one
    dealer draw on stand, and no decision for a 21-21 tie reached without
    a two-card hand on either side.
    """

    # Dealer draws while at or below this score
    dealer_draw_threshold: int = 16

    # Keep drawing until above the threshold instead of a single draw
    dealer_draws_to_completion: bool = False

    # Equal 21 with no two-card hand on either side counts as a draw
    equal_21_is_draw: bool = False

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if not 0 < self.dealer_draw_threshold < 21:
            raise ValueError("dealer_draw_threshold must be between 1 and 20")

    @classmethod
    def standard(cls) -> "RuleSet":
        """Casino rules: dealer draws to 17, every 21-21 tie is a draw."""
        return cls(
            dealer_draw_threshold=16,
            dealer_draws_to_completion=True,
            equal_21_is_draw=True,
        )
