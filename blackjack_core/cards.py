"""Card values plus pure shoe construction, shuffling and drawing."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable

CARDS_PER_DECK = 52


class EmptyShoeError(AssertionError):
    """Raised when a card is drawn from an empty shoe.

    This only happens when the caller skipped the reshuffle the penetration
    rule demands, so it is treated as an assertion failure, not a game event.
    """


class Suit(Enum):
    """Card suits."""

    SPADES = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.blackjack_value == 10


_RANK_CODES = {
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

_SUIT_CODES = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        """Check if this card has a value of 10."""
        return self.rank.is_ten_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_CODES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_CODES[rank_str], _SUIT_CODES[suit_str])


def parse_cards(codes: str) -> tuple[Card, ...]:
    """Parse a whitespace separated list like 'AS 9H KD 7C'."""
    return tuple(Card.from_string(code) for code in codes.split())


def build_deck() -> tuple[Card, ...]:
    """Return one ordered 52-card deck."""
    return tuple(Card(rank, suit) for suit in Suit for rank in Rank)


def build_shoe(num_decks: int) -> tuple[Card, ...]:
    """Concatenate ``num_decks`` ordered decks."""
    if num_decks < 1:
        raise ValueError("Shoe must have at least 1 deck")
    return build_deck() * num_decks


def shuffle_cards(cards: Iterable[Card], seed: int) -> tuple[Card, ...]:
    """
    Return a seeded Fisher-Yates permutation of ``cards``.

    The same seed always produces the same order, which is what makes a
    recorded action log replayable.

    Args:
        cards: Cards to permute
        seed: Seed for the pseudo-random generator

    Returns:
        A new tuple holding exactly the input cards in shuffled order
    """
    result = list(cards)
    Random(seed).shuffle(result)
    return tuple(result)


def fresh_shoe(num_decks: int, seed: int) -> tuple[Card, ...]:
    """Build and shuffle a full shoe."""
    return shuffle_cards(build_shoe(num_decks), seed)


def next_seed(seed: int) -> int:
    """Derive the seed for the following shuffle from the current one."""
    return Random(seed).getrandbits(32)


def draw_card(shoe: tuple[Card, ...]) -> tuple[Card, tuple[Card, ...]]:
    """
    Take the top card of the shoe.

    Returns:
        The drawn card and the remaining shoe

    Raises:
        EmptyShoeError: If the shoe has no cards left
    """
    if not shoe:
        raise EmptyShoeError("Cannot draw from empty shoe")
    return shoe[0], shoe[1:]
