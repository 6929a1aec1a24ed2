"""Trainer API endpoints."""

import asyncio
import time
from fastapi import APIRouter, HTTPException, Header
from fastapi.concurrency import run_in_threadpool
from typing import Annotated, Any

from api.schemas import (
    ActionRequest,
    PracticeModeRequest,
    CardResponse,
    DecisionResponse,
    StatsResponse,
    TrainerStateResponse,
)
from api.session import (
    create_session,
    extract_session_id,
    get_best_streak_store,
    get_session_store,
)
from config import config
from trainer.cards import Card, Rank, Suit
from trainer.game import DecisionResult, StrategyTrainer
from trainer.hand import Hand
from trainer.practice import PracticeMode
from trainer.stats import DecisionStats, StatsTracker
from trainer.strategy import Action

router = APIRouter()

# In-memory trainer cache (for performance, backed by session store)
_trainers: dict[str, StrategyTrainer] = {}
# session id -> monotonic time of last use, for evicting idle trainers
_last_access: dict[str, float] = {}

# Serializes decision commands, which run in a worker thread
_command_lock = asyncio.Lock()

# Session data keys
SESSION_KEY_TRAINER = "trainer"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def _serialize_card(card: Card) -> dict[str, int]:
    """Serialize a card to a dict."""
    return {"rank": card.rank.value, "suit": card.suit.value}


def _deserialize_card(data: dict[str, int]) -> Card:
    """Deserialize a card from a dict."""
    return Card(Rank(data["rank"]), Suit(data["suit"]))


def _serialize_decision(decision: DecisionResult | None) -> dict[str, Any] | None:
    if decision is None:
        return None
    return {
        "action": decision.action.value,
        "correct_action": decision.correct_action.value,
        "is_correct": decision.is_correct,
        "feedback": decision.feedback,
    }


def _deserialize_decision(data: dict[str, Any] | None) -> DecisionResult | None:
    if data is None:
        return None
    return DecisionResult(
        action=Action(data["action"]),
        correct_action=Action(data["correct_action"]),
        is_correct=data["is_correct"],
        feedback=data["feedback"],
    )


def _serialize_trainer(trainer: StrategyTrainer) -> dict[str, Any]:
    """Serialize trainer state for session storage."""
    return {
        "state": trainer._machine_state,
        "practice_mode": trainer.practice_mode.value,
        "player_hand": [_serialize_card(c) for c in trainer.player_hand],
        "dealer_upcard": (
            _serialize_card(trainer.dealer_upcard) if trainer.dealer_upcard else None
        ),
        "feedback": trainer.feedback,
        "last_decision": _serialize_decision(trainer.last_decision),
        "deck_cards": [_serialize_card(c) for c in trainer.deck],
        "deck_reshuffles": trainer.deck.reshuffles,
        "stats": {
            "correct_decisions": trainer.stats.correct_decisions,
            "total_decisions": trainer.stats.total_decisions,
            "current_streak": trainer.stats.current_streak,
            "longest_streak": trainer.stats.longest_streak,
        },
    }


def _deserialize_trainer(data: dict[str, Any]) -> StrategyTrainer:
    """Restore trainer from session data."""
    tracker = StatsTracker(get_best_streak_store())
    stats = data["stats"]
    tracker.stats = DecisionStats(
        correct_decisions=stats["correct_decisions"],
        total_decisions=stats["total_decisions"],
        current_streak=stats["current_streak"],
        # The store may hold a newer record set by another session
        longest_streak=max(stats["longest_streak"], tracker.stats.longest_streak),
    )

    trainer = StrategyTrainer(
        tracker=tracker,
        practice_mode=PracticeMode(data["practice_mode"]),
    )

    # Restore state machine state
    trainer._machine_state = data["state"]

    trainer.player_hand = Hand([_deserialize_card(c) for c in data["player_hand"]])
    if data["dealer_upcard"] is not None:
        trainer.dealer_upcard = _deserialize_card(data["dealer_upcard"])
    trainer.feedback = data["feedback"]
    trainer.last_decision = _deserialize_decision(data.get("last_decision"))

    # Restore deck cards
    trainer.deck._cards = [_deserialize_card(c) for c in data["deck_cards"]]
    trainer.deck.reshuffles = data.get("deck_reshuffles", 0)

    return trainer


def _new_trainer() -> StrategyTrainer:
    return StrategyTrainer(tracker=StatsTracker(get_best_streak_store()))


async def _load_trainer(session_id: str) -> StrategyTrainer | None:
    """Load trainer from session store."""
    store = await get_session_store()
    session_data = await store.get(session_id)
    if session_data and SESSION_KEY_TRAINER in session_data:
        return _deserialize_trainer(session_data[SESSION_KEY_TRAINER])
    return None


async def save_trainer(session_id: str, trainer: StrategyTrainer) -> None:
    """Save trainer to session store."""
    store = await get_session_store()
    session_data = await store.get(session_id) or {}
    session_data[SESSION_KEY_TRAINER] = _serialize_trainer(trainer)
    session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    if SESSION_KEY_CREATED_AT not in session_data:
        session_data[SESSION_KEY_CREATED_AT] = int(time.time())
    await store.set(session_id, session_data)


def _require_session(session_id: str) -> None:
    """Reject tokens that were not issued by this server."""
    if extract_session_id(session_id) is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")


def _cache_trainer(session_id: str, trainer: StrategyTrainer) -> None:
    _trainers[session_id] = trainer
    _last_access[session_id] = time.monotonic()


def evict_idle_trainers() -> int:
    """Drop cached trainers unused for longer than the session TTL."""
    cutoff = time.monotonic() - config.session_ttl
    idle = [sid for sid, used in _last_access.items() if used < cutoff]
    for sid in idle:
        _trainers.pop(sid, None)
        del _last_access[sid]
    return len(idle)


async def get_trainer(session_id: str) -> StrategyTrainer:
    """Get or create a trainer for the session."""
    _require_session(session_id)
    evict_idle_trainers()

    # Check memory cache first
    if session_id in _trainers:
        _last_access[session_id] = time.monotonic()
        return _trainers[session_id]

    # Try to load from session store
    trainer = await _load_trainer(session_id)
    if trainer is not None:
        _cache_trainer(session_id, trainer)
        return trainer

    # Create new trainer
    trainer = _new_trainer()
    _cache_trainer(session_id, trainer)
    await save_trainer(session_id, trainer)
    return trainer


def _card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.value)


def stats_to_response(trainer: StrategyTrainer) -> StatsResponse:
    """Convert trainer statistics to response."""
    stats = trainer.stats
    return StatsResponse(
        correct_decisions=stats.correct_decisions,
        total_decisions=stats.total_decisions,
        current_streak=stats.current_streak,
        longest_streak=stats.longest_streak,
        decision_accuracy=stats.decision_accuracy,
        best_streak=trainer.tracker.best_streak,
    )


def _trainer_state_response(trainer: StrategyTrainer) -> TrainerStateResponse:
    """Convert trainer state to response."""
    last_decision = None
    if trainer.last_decision is not None:
        last_decision = DecisionResponse(
            action=trainer.last_decision.action.name,
            correct_action=trainer.last_decision.correct_action.name,
            is_correct=trainer.last_decision.is_correct,
            feedback=trainer.last_decision.feedback,
        )

    return TrainerStateResponse(
        state=trainer.state.name,
        player_hand=[_card_to_response(c) for c in trainer.player_hand],
        dealer_upcard=(
            _card_to_response(trainer.dealer_upcard) if trainer.dealer_upcard else None
        ),
        player_score=trainer.player_score,
        is_soft=trainer.player_hand.is_soft,
        is_pair=trainer.player_hand.is_pair,
        feedback=trainer.feedback,
        practice_mode=trainer.practice_mode.value,
        practice_mode_description=trainer.practice_mode.description,
        can_hit=trainer.can_hit,
        can_stand=trainer.can_stand,
        can_double=trainer.can_double_down,
        can_split=trainer.can_split,
        last_decision=last_decision,
        stats=stats_to_response(trainer),
    )


@router.post("/new")
async def new_trainer() -> dict[str, str]:
    """Create a new trainer session."""
    session_id = await create_session()
    evict_idle_trainers()

    trainer = _new_trainer()
    _cache_trainer(session_id, trainer)
    await save_trainer(session_id, trainer)

    return {"session_id": session_id}


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TrainerStateResponse:
    """Get current trainer state."""
    trainer = await get_trainer(session_id)
    return _trainer_state_response(trainer)


@router.post("/deal")
async def deal(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TrainerStateResponse:
    """Deal a new hand."""
    trainer = await get_trainer(session_id)
    trainer.start_new_hand()
    await save_trainer(session_id, trainer)
    return _trainer_state_response(trainer)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TrainerStateResponse:
    """Submit the player's decision for the current hand."""
    trainer = await get_trainer(session_id)

    actions = {
        "hit": trainer.hit,
        "stand": trainer.stand,
        "double": trainer.double_down,
        "split": trainer.split,
    }

    async with _command_lock:
        accepted = await run_in_threadpool(actions[request.action])
    if not accepted:
        raise HTTPException(status_code=400, detail=f"Cannot {request.action} now")

    await save_trainer(session_id, trainer)
    return _trainer_state_response(trainer)


@router.put("/practice-mode")
async def set_practice_mode(
    request: PracticeModeRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TrainerStateResponse:
    """Change which hands future deals produce."""
    trainer = await get_trainer(session_id)
    trainer.set_practice_mode(PracticeMode(request.mode))
    await save_trainer(session_id, trainer)
    return _trainer_state_response(trainer)
