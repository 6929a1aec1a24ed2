"""Basic strategy tables for blackjack."""

from enum import Enum
from typing import Mapping, Sequence

from trainer.cards import Card


class Action(Enum):
    """Player decisions, valued by their strategy-chart code."""

    HIT = "H"
    STAND = "S"
    DOUBLE_DOWN = "D"
    SPLIT = "P"

    # Conditional action (fallback if doubling is not allowed)
    DOUBLE_OR_STAND = "DS"

    def __str__(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        """Return the wording used in trainer feedback."""
        return {
            Action.HIT: "Hit",
            Action.STAND: "Stand",
            Action.DOUBLE_DOWN: "Double Down",
            Action.SPLIT: "Split",
            Action.DOUBLE_OR_STAND: "Double Down if allowed, otherwise Stand",
        }[self]

    def resolve(self, can_double: bool = True) -> "Action":
        """Resolve a conditional action to the move actually playable."""
        if self == Action.DOUBLE_OR_STAND:
            return Action.DOUBLE_DOWN if can_double else Action.STAND
        return self


# Dealer upcards in chart column order: 2, 3, 4, 5, 6, 7, 8, 9, 10, A(11)
DEALER_UPCARDS: tuple[int, ...] = tuple(range(2, 12))


class BasicStrategy:
    """
    Basic strategy lookup tables.

    Pre-computed dictionaries keyed by ``(player key, dealer upcard value)``
    for O(1) lookup. Pairs are checked first, then soft totals, then hard
    totals.
    """

    def __init__(self) -> None:
        self._hard_table = self._build_hard_table()
        self._soft_table = self._build_soft_table()
        self._pair_table = self._build_pair_table()

    def get_action(
        self,
        player_cards: Sequence[Card],
        dealer_upcard: int | None,
    ) -> Action:
        """
        Get the basic strategy action for a two-card hand.

        Args:
            player_cards: The player's cards
            dealer_upcard: Dealer's upcard value (2-11, Ace=11), or None

        Returns:
            The recommended action. A missing upcard yields STAND.
        """
        if dealer_upcard is None:
            return Action.STAND

        if len(player_cards) == 2 and player_cards[0].rank == player_cards[1].rank:
            action = self._pair_table.get((player_cards[0].value, dealer_upcard))
            if action:
                return action

        if any(card.is_ace for card in player_cards):
            # One ace counts 11; the other card supplies the rest
            other = next((c.value for c in player_cards if not c.is_ace), 0)
            soft_total = 11 + other
            return self._soft_table.get((soft_total, dealer_upcard), Action.HIT)

        player_total = sum(card.value for card in player_cards)
        action = self._hard_table.get((player_total, dealer_upcard))
        if action:
            return action

        # Default actions for edge cases
        if player_total >= 17:
            return Action.STAND
        return Action.HIT

    def _build_hard_table(self) -> Mapping[tuple[int, int], Action]:
        """Build hard totals strategy table."""
        H = Action.HIT
        S = Action.STAND
        D = Action.DOUBLE_DOWN

        table: dict[tuple[int, int], Action] = {}

        # Hard 4-8: Always hit
        for total in range(4, 9):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = H

        # Hard 9
        for dealer in DEALER_UPCARDS:
            table[(9, dealer)] = D if 3 <= dealer <= 6 else H

        # Hard 10
        for dealer in DEALER_UPCARDS:
            table[(10, dealer)] = D if dealer <= 9 else H

        # Hard 11: Always double
        for dealer in DEALER_UPCARDS:
            table[(11, dealer)] = D

        # Hard 12
        for dealer in DEALER_UPCARDS:
            table[(12, dealer)] = S if 4 <= dealer <= 6 else H

        # Hard 13-16
        for total in range(13, 17):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S if dealer <= 6 else H

        # Hard 17+: Always stand
        for total in range(17, 22):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_soft_table(self) -> Mapping[tuple[int, int], Action]:
        """Build soft totals strategy table."""
        H = Action.HIT
        S = Action.STAND
        D = Action.DOUBLE_DOWN
        Ds = Action.DOUBLE_OR_STAND

        table: dict[tuple[int, int], Action] = {}

        # Soft 13-14 (A,2 and A,3)
        for total in (13, 14):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = D if dealer in (5, 6) else H

        # Soft 15-16 (A,4 and A,5)
        for total in (15, 16):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = D if 4 <= dealer <= 6 else H

        # Soft 17 (A,6)
        for dealer in DEALER_UPCARDS:
            table[(17, dealer)] = D if 3 <= dealer <= 6 else H

        # Soft 18 (A,7)
        for dealer in range(2, 7):
            table[(18, dealer)] = Ds
        for dealer in (7, 8):
            table[(18, dealer)] = S
        for dealer in (9, 10, 11):
            table[(18, dealer)] = H

        # Soft 19-21: Always stand
        for total in (19, 20, 21):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_pair_table(self) -> Mapping[tuple[int, int], Action]:
        """Build pair splitting strategy table."""
        H = Action.HIT
        S = Action.STAND
        P = Action.SPLIT
        D = Action.DOUBLE_DOWN

        table: dict[tuple[int, int], Action] = {}

        # Pair of 2s and 3s
        for pair in (2, 3):
            for dealer in DEALER_UPCARDS:
                table[(pair, dealer)] = P if dealer <= 7 else H

        # Pair of 4s
        for dealer in DEALER_UPCARDS:
            table[(4, dealer)] = P if dealer in (5, 6) else H

        # Pair of 5s: Never split, play as hard 10
        for dealer in DEALER_UPCARDS:
            table[(5, dealer)] = D if dealer <= 9 else H

        # Pair of 6s
        for dealer in DEALER_UPCARDS:
            table[(6, dealer)] = P if dealer <= 6 else H

        # Pair of 7s
        for dealer in DEALER_UPCARDS:
            table[(7, dealer)] = P if dealer <= 7 else H

        # Pair of 8s: Always split
        for dealer in DEALER_UPCARDS:
            table[(8, dealer)] = P

        # Pair of 9s: Stand against 7, 10 and Ace
        for dealer in DEALER_UPCARDS:
            table[(9, dealer)] = S if dealer in (7, 10, 11) else P

        # Pair of 10s: Never split
        for dealer in DEALER_UPCARDS:
            table[(10, dealer)] = S

        # Pair of Aces: Always split
        for dealer in DEALER_UPCARDS:
            table[(11, dealer)] = P

        return table

    @property
    def hard_table(self) -> Mapping[tuple[int, int], Action]:
        """Return the hard totals strategy table."""
        return self._hard_table

    @property
    def soft_table(self) -> Mapping[tuple[int, int], Action]:
        """Return the soft totals strategy table."""
        return self._soft_table

    @property
    def pair_table(self) -> Mapping[tuple[int, int], Action]:
        """Return the pair splitting strategy table."""
        return self._pair_table


_default_strategy = BasicStrategy()


def correct_action(player_cards: Sequence[Card], dealer_upcard: int | None) -> Action:
    """Return the basic strategy action using the shared default tables."""
    return _default_strategy.get_action(player_cards, dealer_upcard)

