"""Pytest fixtures for strategy trainer tests."""

import pytest
from random import Random

from trainer.cards import Card, Deck, Rank, Suit
from trainer.hand import Hand
from trainer.game import StrategyTrainer
from trainer.stats import StatsTracker
from trainer.storage import InMemoryBestStreakStore
from trainer.strategy import BasicStrategy


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def natural_hand():
    """A natural 21 (A-K)."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand([Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand([Card(Rank.EIGHT, Suit.SPADES), Card(Rank.EIGHT, Suit.HEARTS)])


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(
        [
            Card(Rank.TEN, Suit.SPADES),
            Card(Rank.SIX, Suit.HEARTS),
            Card(Rank.KING, Suit.CLUBS),
        ]
    )


@pytest.fixture
def basic_strategy():
    """Basic strategy tables."""
    return BasicStrategy()


@pytest.fixture
def store():
    """An empty in-memory best streak store."""
    return InMemoryBestStreakStore()


@pytest.fixture
def tracker(store):
    """A statistics tracker backed by the in-memory store."""
    return StatsTracker(store)


@pytest.fixture
def trainer(tracker, rng):
    """A new trainer instance."""
    return StrategyTrainer(tracker=tracker, rng=rng)


@pytest.fixture
def put_in_play(trainer):
    """Put a specific hand in play, e.g. put_in_play(["AS", "7H"], "6D")."""

    def _put_in_play(player: list[str], dealer: str) -> StrategyTrainer:
        trainer.start_new_hand()
        trainer.player_hand = Hand([Card.from_string(n) for n in player])
        trainer.dealer_upcard = Card.from_string(dealer)
        return trainer

    return _put_in_play
