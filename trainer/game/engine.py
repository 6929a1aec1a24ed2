"""Strategy trainer engine with state machine."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Any, Callable

from transitions import Machine

from trainer.cards import Card, Deck
from trainer.hand import Hand
from trainer.practice import PracticeMode
from trainer.stats import DecisionStats, StatsTracker
from trainer.strategy.basic import Action, BasicStrategy
from trainer.game.events import EventEmitter, EventType, GameEvent
from trainer.game.state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecisionResult:
    """Outcome of judging one player decision."""

    action: Action
    correct_action: Action
    is_correct: bool
    feedback: str


class StrategyTrainer:
    """
    Basic strategy trainer using a state machine.

    Deals a two-card player hand against one dealer upcard, accepts exactly
    one decision per hand and judges it against basic strategy. This is the
    core trainer logic, completely UI-agnostic. Communication happens through
    events, properties and return values only.

    Commands that are not allowed in the current state (or for the current
    hand) are no-ops that return False, mirroring a UI that disables the
    matching buttons.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "hand_dealt", "source": "*", "dest": "playing"},
        {"trigger": "decision_made", "source": "playing", "dest": "finished"},
    ]

    def __init__(
        self,
        tracker: StatsTracker | None = None,
        practice_mode: PracticeMode = PracticeMode.ALL,
        strategy: BasicStrategy | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new trainer.

        Args:
            tracker: Statistics tracker (in-memory store if not provided)
            practice_mode: Which hands to deal
            strategy: Strategy tables used for judgement
            rng: Random number generator for reproducible deals
        """
        self.tracker = tracker or StatsTracker()
        self.strategy = strategy or BasicStrategy()
        self.deck = Deck(rng=rng)
        self.events = EventEmitter()

        self.player_hand = Hand()
        self.dealer_upcard: Card | None = None
        self.feedback: str | None = None
        self.last_decision: DecisionResult | None = None
        self._practice_mode = practice_mode

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current trainer state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    @property
    def stats(self) -> DecisionStats:
        """Session statistics."""
        return self.tracker.stats

    @property
    def practice_mode(self) -> PracticeMode:
        return self._practice_mode

    @property
    def player_score(self) -> int:
        """Blackjack total of the player's hand."""
        return self.player_hand.value

    @property
    def can_double_down(self) -> bool:
        return self.state == GameState.PLAYING and self.player_hand.can_double

    @property
    def can_split(self) -> bool:
        return self.state == GameState.PLAYING and self.player_hand.can_split

    @property
    def can_hit(self) -> bool:
        return self.state == GameState.PLAYING

    @property
    def can_stand(self) -> bool:
        return self.state == GameState.PLAYING

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to trainer events."""
        self.events.subscribe(handler, event_type)

    def set_practice_mode(self, mode: PracticeMode) -> None:
        """Choose which hands future deals produce."""
        self._practice_mode = mode
        self.events.emit_new(EventType.PRACTICE_MODE_CHANGED, mode=mode.value)

    def start_new_hand(self) -> None:
        """
        Deal a new hand, from any state.

        Re-deals until the player hand fits the practice mode and is not a
        natural, then waits for the player's decision.
        """
        reshuffles = self.deck.reshuffles
        deals = 0

        while True:
            deals += 1
            self.player_hand = Hand([self.deck.draw(), self.deck.draw()])
            self.dealer_upcard = self.deck.draw()
            if self._practice_mode.accepts(self.player_hand) and not self.player_hand.is_natural:
                break

        if self.deck.reshuffles != reshuffles:
            self.events.emit_new(EventType.SHOE_SHUFFLED)

        self.feedback = None
        self.last_decision = None
        self.hand_dealt()  # Trigger state transition

        logger.debug(
            "Dealt %s against %s after %d deal(s)",
            self.player_hand,
            self.dealer_upcard,
            deals,
        )
        self.events.emit_new(
            EventType.HAND_DEALT,
            player_cards=[str(c) for c in self.player_hand],
            dealer_upcard=str(self.dealer_upcard),
            player_score=self.player_score,
            practice_mode=self._practice_mode.value,
        )

    def hit(self) -> bool:
        """Player hits."""
        return self._decide(Action.HIT)

    def stand(self) -> bool:
        """Player stands."""
        return self._decide(Action.STAND)

    def double_down(self) -> bool:
        """Player doubles down; only on the first two cards."""
        if self.state == GameState.PLAYING and not self.player_hand.can_double:
            return self._reject(Action.DOUBLE_DOWN, "Cannot double")
        return self._decide(Action.DOUBLE_DOWN)

    def split(self) -> bool:
        """Player splits; only a pair can be split."""
        if self.state == GameState.PLAYING and not self.player_hand.can_split:
            return self._reject(Action.SPLIT, "Cannot split")
        return self._decide(Action.SPLIT)

    def correct_action(self) -> Action:
        """Return the basic strategy action for the current hand."""
        upcard = self.dealer_upcard.value if self.dealer_upcard is not None else None
        return self.strategy.get_action(self.player_hand.cards, upcard)

    def _decide(self, action: Action) -> bool:
        """Judge a decision, record it and finish the hand."""
        if self.state != GameState.PLAYING:
            return self._reject(action, "No hand in play")

        reference = self.correct_action()
        # Doubling is always allowed on the two-card hands the trainer deals
        is_correct = action == reference.resolve(can_double=True)
        new_best = self.tracker.record_decision(is_correct)

        verdict = "Correct!" if is_correct else "Incorrect!"
        self.feedback = f"{verdict} Basic strategy says to {reference.description}."
        self.last_decision = DecisionResult(
            action=action,
            correct_action=reference,
            is_correct=is_correct,
            feedback=self.feedback,
        )
        self.decision_made()  # Trigger state transition

        logger.debug("%s -> %s (expected %s)", self.player_hand, action.name, reference.name)
        self.events.emit_new(
            EventType.DECISION_JUDGED,
            action=action.value,
            correct_action=reference.value,
            is_correct=is_correct,
            current_streak=self.stats.current_streak,
        )
        if new_best:
            self.events.emit_new(EventType.NEW_BEST_STREAK, streak=self.stats.longest_streak)

        return True

    def _reject(self, action: Action, message: str) -> bool:
        self.events.emit_new(
            EventType.INVALID_ACTION,
            action=action.value,
            message=message,
            state=self.state.name,
        )
        return False

    def snapshot(self) -> dict[str, Any]:
        """Return the observable trainer state as plain data."""
        return {
            "state": self.state.name,
            "player_hand": [str(c) for c in self.player_hand],
            "dealer_upcard": str(self.dealer_upcard) if self.dealer_upcard else None,
            "player_score": self.player_score,
            "feedback": self.feedback,
            "practice_mode": self._practice_mode.value,
            "can_double_down": self.can_double_down,
            "can_split": self.can_split,
            "stats": {
                "correct_decisions": self.stats.correct_decisions,
                "total_decisions": self.stats.total_decisions,
                "current_streak": self.stats.current_streak,
                "longest_streak": self.stats.longest_streak,
                "decision_accuracy": self.stats.decision_accuracy,
            },
        }
