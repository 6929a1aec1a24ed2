"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Trainer state machine states.

    Flow: WAITING → PLAYING → FINISHED, and back to PLAYING on every new hand.
    """

    # No hand dealt yet
    WAITING = auto()

    # Hand dealt, waiting for the player's decision
    PLAYING = auto()

    # Decision judged, waiting for the next deal
    FINISHED = auto()

    def __str__(self) -> str:
        return self.name.title()

