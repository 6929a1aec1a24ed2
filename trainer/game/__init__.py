"""Trainer engine and state management."""

from trainer.game.events import GameEvent, EventType
from trainer.game.state import GameState
from trainer.game.engine import DecisionResult, StrategyTrainer

__all__ = [
    "GameEvent",
    "EventType",
    "GameState",
    "DecisionResult",
    "StrategyTrainer",
]
