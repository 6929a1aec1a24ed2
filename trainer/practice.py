"""Practice modes that restrict which hands the trainer deals."""

from enum import Enum

from trainer.hand import Hand


class PracticeMode(Enum):
    """Hand categories the player can choose to drill."""

    ALL = "all"
    HARD_TOTALS = "hard"
    SOFT_TOTALS = "soft"
    PAIRS = "pairs"

    def __str__(self) -> str:
        return self.description

    @property
    def description(self) -> str:
        return {
            PracticeMode.ALL: "Practice All",
            PracticeMode.HARD_TOTALS: "Hard Totals",
            PracticeMode.SOFT_TOTALS: "Soft Totals",
            PracticeMode.PAIRS: "Pairs",
        }[self]

    def accepts(self, hand: Hand) -> bool:
        """Check whether a dealt player hand belongs to this mode."""
        if self == PracticeMode.HARD_TOTALS:
            return not hand.has_ace
        if self == PracticeMode.SOFT_TOTALS:
            return hand.has_ace
        if self == PracticeMode.PAIRS:
            return hand.is_pair
        return True
