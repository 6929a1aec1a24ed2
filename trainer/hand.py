"""Blackjack hand totals."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from trainer.cards import Card


def _evaluate(cards: Iterable[Card]) -> tuple[int, bool]:
    """Return (total, soft) with aces high until the hand would bust."""
    total = 0
    high_aces = 0
    for card in cards:
        total += card.value
        high_aces += card.is_ace

    while total > 21 and high_aces:
        total -= 10
        high_aces -= 1

    return total, high_aces > 0


def hand_total(cards: Iterable[Card]) -> int:
    """
    Best blackjack total for ``cards``.

    Aces are counted as 11 and lowered to 1 one at a time while the hand is
    over 21, so {A, A, 9} is 21 and {A, A, A, 9} is 12. A total above 21 means
    every ace is already low.
    """
    return _evaluate(cards)[0]


@dataclass
class Hand:
    """Cards held by the player."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        self.cards.append(card)

    def clear(self) -> None:
        self.cards.clear()

    @property
    def value(self) -> int:
        return hand_total(self.cards)

    @property
    def has_ace(self) -> bool:
        return any(card.is_ace for card in self.cards)

    @property
    def is_soft(self) -> bool:
        """True while an ace is still counted as 11."""
        return _evaluate(self.cards)[1]

    @property
    def is_hard(self) -> bool:
        return not self.is_soft

    @property
    def is_pair(self) -> bool:
        """Exactly two cards of identical rank (J-Q is not a pair)."""
        return len(self.cards) == 2 and self.cards[0].rank == self.cards[1].rank

    @property
    def is_natural(self) -> bool:
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_busted(self) -> bool:
        return self.value > 21

    @property
    def can_double(self) -> bool:
        # Only on the opening two cards
        return len(self.cards) == 2

    @property
    def can_split(self) -> bool:
        return self.is_pair

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        total, soft = _evaluate(self.cards)
        if total > 21:
            label = "BUST"
        elif soft:
            label = f"soft {total}"
        else:
            label = str(total)
        return " ".join(str(card) for card in self.cards) + f" ({label})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
