"""Blackjack table rule configuration."""

from dataclasses import dataclass, fields, replace
from typing import Any


@dataclass(frozen=True)
class Rules:
    """
    Blackjack table rules configuration.

    Every option the round engine consults lives here; anything else passed
    as an override is rejected.
    """

    # Deck configuration
    decks: int = 6
    penetration: float = 0.75  # Fraction of the shoe dealt before a forced reshuffle

    # Dealer rules
    dealer_stands_on_soft_17: bool = True  # S17 vs H17

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    # Player options
    allow_surrender: bool = True
    allow_double: bool = True
    allow_split: bool = True
    allow_resplit_aces: bool = False  # RSA
    allow_hit_split_aces: bool = False  # Usually only one card to split aces
    allow_double_after_split: bool = True  # DAS
    allow_insurance: bool = True

    max_hands: int = 4  # Maximum hands a seat can hold after splitting

    # Totals a hand may double on; None means any two-card total
    double_allowed_totals: frozenset[int] | None = None

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        for name in ("decks", "max_hands"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer")
        if self.decks < 1 or self.decks > 8:
            raise ValueError("decks must be between 1 and 8")
        if not 0.0 < self.penetration <= 1.0:
            raise ValueError("penetration must be between 0 and 1")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.max_hands < 1:
            raise ValueError("max_hands must be at least 1")
        if self.double_allowed_totals is not None and not isinstance(
            self.double_allowed_totals, frozenset
        ):
            object.__setattr__(
                self, "double_allowed_totals", frozenset(self.double_allowed_totals)
            )

    @classmethod
    def option_names(cls) -> frozenset[str]:
        """Return the names of every recognized option."""
        return frozenset(f.name for f in fields(cls))

    def with_overrides(self, **overrides: Any) -> "Rules":
        """
        Return a copy with some options replaced.

        Raises:
            ValueError: If an override names an unknown option or an invalid value
        """
        unknown = set(overrides) - self.option_names()
        if unknown:
            raise ValueError(f"Unknown rule options: {', '.join(sorted(unknown))}")
        return replace(self, **overrides)

    @classmethod
    def from_overrides(cls, overrides: dict[str, Any] | None = None) -> "Rules":
        """Build rules from the defaults plus optional overrides."""
        return cls().with_overrides(**(overrides or {}))

    def allows_double_on(self, total: int) -> bool:
        """Check the allowed-totals restriction for doubling."""
        return self.double_allowed_totals is None or total in self.double_allowed_totals

