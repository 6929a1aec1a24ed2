"""Basic strategy tables, lookup and printable chart."""

from trainer.strategy.basic import Action, BasicStrategy, DEALER_UPCARDS, correct_action
from trainer.strategy.chart import CHART_COLUMNS, ChartRow, STRATEGY_CHART, strategy_chart

__all__ = [
    "Action",
    "BasicStrategy",
    "DEALER_UPCARDS",
    "correct_action",
    "CHART_COLUMNS",
    "ChartRow",
    "STRATEGY_CHART",
    "strategy_chart",
]
