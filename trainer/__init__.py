"""Basic strategy trainer engine - 100% UI-agnostic."""

from trainer.cards import Card, Deck, Rank, Suit
from trainer.hand import Hand, hand_total
from trainer.practice import PracticeMode
from trainer.stats import DecisionStats, StatsTracker

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
    "hand_total",
    "PracticeMode",
    "DecisionStats",
    "StatsTracker",
]
