"""Printable basic strategy chart shown alongside the trainer.

Columns are dealer upcards 2, 3, 4, 5, 6, 7, 8, 9, 10, A. Codes match
``Action`` values: H hit, S stand, D double, P split, DS double else stand.

The printed chart is reference material for the player. Judgement uses
``BasicStrategy``, whose threshold rules differ from this chart in two cells
(hard 11 against an Ace, and 6,6 against a 7).
"""

from dataclasses import dataclass

from trainer.strategy.basic import Action

CHART_COLUMNS: tuple[str, ...] = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "A")


@dataclass(frozen=True)
class ChartRow:
    """One labelled row of the chart."""

    hand: str
    codes: tuple[str, ...]

    @property
    def actions(self) -> tuple[Action, ...]:
        """Return the row as ``Action`` members."""
        return tuple(Action(code) for code in self.codes)


def _row(hand: str, codes: str) -> ChartRow:
    return ChartRow(hand, tuple(codes.split(",")))


HARD_TOTALS: tuple[ChartRow, ...] = (
    _row("17+", "S,S,S,S,S,S,S,S,S,S"),
    _row("16", "S,S,S,S,S,H,H,H,H,H"),
    _row("15", "S,S,S,S,S,H,H,H,H,H"),
    _row("14", "S,S,S,S,S,H,H,H,H,H"),
    _row("13", "S,S,S,S,S,H,H,H,H,H"),
    _row("12", "H,H,S,S,S,H,H,H,H,H"),
    _row("11", "D,D,D,D,D,D,D,D,D,H"),
    _row("10", "D,D,D,D,D,D,D,H,H,H"),
    _row("9", "H,D,D,D,D,H,H,H,H,H"),
    _row("8", "H,H,H,H,H,H,H,H,H,H"),
)

SOFT_TOTALS: tuple[ChartRow, ...] = (
    _row("A,9", "S,S,S,S,S,S,S,S,S,S"),
    _row("A,8", "S,S,S,S,S,S,S,S,S,S"),
    _row("A,7", "DS,DS,DS,DS,DS,S,S,H,H,H"),
    _row("A,6", "H,D,D,D,D,H,H,H,H,H"),
    _row("A,5", "H,H,D,D,D,H,H,H,H,H"),
    _row("A,4", "H,H,D,D,D,H,H,H,H,H"),
    _row("A,3", "H,H,H,D,D,H,H,H,H,H"),
    _row("A,2", "H,H,H,D,D,H,H,H,H,H"),
)

PAIRS: tuple[ChartRow, ...] = (
    _row("A,A", "P,P,P,P,P,P,P,P,P,P"),
    _row("10,10", "S,S,S,S,S,S,S,S,S,S"),
    _row("9,9", "P,P,P,P,P,S,P,P,S,S"),
    _row("8,8", "P,P,P,P,P,P,P,P,P,P"),
    _row("7,7", "P,P,P,P,P,P,H,H,H,H"),
    _row("6,6", "P,P,P,P,P,P,H,H,H,H"),
    _row("5,5", "D,D,D,D,D,D,D,D,H,H"),
    _row("4,4", "H,H,H,P,P,H,H,H,H,H"),
    _row("3,3", "P,P,P,P,P,P,H,H,H,H"),
    _row("2,2", "P,P,P,P,P,P,H,H,H,H"),
)

STRATEGY_CHART: dict[str, tuple[ChartRow, ...]] = {
    "Hard Totals": HARD_TOTALS,
    "Soft Totals": SOFT_TOTALS,
    "Pairs": PAIRS,
}


def strategy_chart() -> dict[str, tuple[ChartRow, ...]]:
    """Return the chart sections in display order."""
    return dict(STRATEGY_CHART)
