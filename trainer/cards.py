"""Playing cards and the single-deck shoe the trainer deals from."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterator

logger = logging.getLogger(__name__)


class Suit(Enum):
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    def __str__(self) -> str:
        return self.symbol


class Rank(Enum):
    """Card ranks. Values follow the printed order, Ace low."""

    ACE = 1
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

    @property
    def symbol(self) -> str:
        return _FACE_SYMBOLS.get(self, str(self.value))

    @property
    def blackjack_value(self) -> int:
        """Points for this rank; an Ace counts 11 until a hand needs it low."""
        return 11 if self is Rank.ACE else min(self.value, 10)

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

_FACE_SYMBOLS = {
    Rank.ACE: "A",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

# Accepted spellings for Card.from_string, e.g. "AS", "10d", "Td", "K♥"
_RANK_NOTATION = {rank.symbol: rank for rank in Rank} | {"T": Rank.TEN}
_SUIT_NOTATION = {suit.name[0]: suit for suit in Suit} | {
    symbol: suit for suit, symbol in _SUIT_SYMBOLS.items()
}


@dataclass(frozen=True, slots=True)
class Card:
    """A single card. Equal cards compare and hash equal."""

    rank: Rank
    suit: Suit

    @property
    def value(self) -> int:
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        return self.value == 10

    @classmethod
    def from_string(cls, notation: str) -> "Card":
        """
        Parse short notation: rank then suit letter or symbol.

        Raises:
            ValueError: If either part is not recognised
        """
        text = notation.strip().upper()
        rank = _RANK_NOTATION.get(text[:-1])
        suit = _SUIT_NOTATION.get(text[-1:])
        if rank is None or suit is None:
            raise ValueError(f"Invalid card notation: {notation!r}")
        return cls(rank, suit)

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"


class Deck:
    """
    One 52-card deck owned by a single trainer.

    Drawing from an empty deck rebuilds and reshuffles it, so callers never
    see an exhausted shoe. ``reshuffles`` counts how often that happened.
    """

    SIZE = 52

    def __init__(self, rng: Random | None = None) -> None:
        """
        Args:
            rng: Source of randomness for shuffling; seed it for
                reproducible deals
        """
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reshuffles = 0
        self.reset()

    def reset(self) -> None:
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        if not self._cards:
            self.reset()
            self.reshuffles += 1
            logger.debug("Deck exhausted, reshuffle #%d", self.reshuffles)
        return self._cards.pop()

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
