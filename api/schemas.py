"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


# Trainer schemas
class ActionRequest(BaseModel):
    """Request for a player decision."""

    action: Literal["hit", "stand", "double", "split"]


class PracticeModeRequest(BaseModel):
    """Request to change the practice mode."""

    mode: Literal["all", "hard", "soft", "pairs"]


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int


class DecisionResponse(BaseModel):
    """Judgement of the last decision."""

    action: str
    correct_action: str
    is_correct: bool
    feedback: str


class StatsResponse(BaseModel):
    """Decision statistics for a session."""

    correct_decisions: int = 0
    total_decisions: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    decision_accuracy: float = Field(default=0.0, ge=0.0, le=100.0)
    best_streak: int = 0


class TrainerStateResponse(BaseModel):
    """Current trainer state."""

    state: str
    player_hand: list[CardResponse]
    dealer_upcard: CardResponse | None
    player_score: int
    is_soft: bool
    is_pair: bool
    feedback: str | None
    practice_mode: str
    practice_mode_description: str
    can_hit: bool
    can_stand: bool
    can_double: bool
    can_split: bool
    last_decision: DecisionResponse | None = None
    stats: StatsResponse


# Strategy schemas
class ChartRowResponse(BaseModel):
    """One row of the strategy chart."""

    hand: str
    actions: list[str]


class StrategyChartResponse(BaseModel):
    """Printable basic strategy chart."""

    columns: list[str]
    sections: dict[str, list[ChartRowResponse]]
    legend: dict[str, str]


class AdviceResponse(BaseModel):
    """Basic strategy advice for an arbitrary hand."""

    player_cards: list[CardResponse]
    dealer_upcard: CardResponse
    player_value: int
    is_soft: bool
    is_pair: bool
    correct_action: str
    description: str
