"""Tests for trainer state persistence (serialization/deserialization)."""

import json

import pytest

import api.session
from api.routes.trainer import (
    _deserialize_card,
    _deserialize_trainer,
    _serialize_card,
    _serialize_trainer,
)
from trainer.cards import Card, Rank, Suit
from trainer.game import GameState
from trainer.practice import PracticeMode
from trainer.storage import InMemoryBestStreakStore
from trainer.strategy import Action


@pytest.fixture(autouse=True)
def best_streak_store(monkeypatch):
    store = InMemoryBestStreakStore()
    monkeypatch.setattr(api.session, "_best_streak_store", store)
    return store


class TestCardSerialization:
    """Tests for card serialization."""

    def test_serialize_card_structure(self):
        """Test that a card is stored as enum values."""
        serialized = _serialize_card(Card(Rank.SEVEN, Suit.DIAMONDS))
        assert serialized == {"rank": Rank.SEVEN.value, "suit": Suit.DIAMONDS.value}

    def test_face_cards_keep_their_rank(self):
        """Test that ten-valued cards are not collapsed."""
        for rank in (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING):
            restored = _deserialize_card(_serialize_card(Card(rank, Suit.CLUBS)))
            assert restored.rank == rank


class TestTrainerSerialization:
    """Tests for full trainer serialization."""

    def test_waiting_trainer(self, trainer):
        """Test a trainer that has not dealt yet."""
        data = _serialize_trainer(trainer)

        assert data["state"] == "waiting"
        assert data["player_hand"] == []
        assert data["dealer_upcard"] is None
        assert len(data["deck_cards"]) == 52

        restored = _deserialize_trainer(data)
        assert restored.state == GameState.WAITING

    def test_serialized_trainer_is_json(self, put_in_play):
        """Test that session data survives a JSON round trip."""
        trainer = put_in_play(["AS", "7H"], "4D")
        trainer.double_down()

        data = json.loads(json.dumps(_serialize_trainer(trainer)))
        restored = _deserialize_trainer(data)

        assert restored.state == GameState.FINISHED
        assert restored.feedback == trainer.feedback
        assert restored.last_decision == trainer.last_decision
        assert restored.last_decision.correct_action == Action.DOUBLE_OR_STAND

    def test_hand_in_play(self, put_in_play):
        """Test a hand awaiting a decision can be resumed."""
        trainer = put_in_play(["8S", "8H"], "10D")
        restored = _deserialize_trainer(_serialize_trainer(trainer))

        assert restored.state == GameState.PLAYING
        assert list(restored.player_hand) == list(trainer.player_hand)
        assert restored.dealer_upcard == trainer.dealer_upcard
        assert restored.can_split

        assert restored.split()
        assert restored.last_decision.is_correct

    def test_deck_order_preserved(self, trainer):
        """Test that the remaining shoe deals the same cards after restore."""
        for _ in range(20):
            trainer.start_new_hand()
        restored = _deserialize_trainer(_serialize_trainer(trainer))

        assert list(restored.deck) == list(trainer.deck)
        assert restored.deck.reshuffles == trainer.deck.reshuffles
        assert restored.deck.draw() == trainer.deck.draw()

    def test_practice_mode_and_stats(self, trainer):
        """Test mode and counters are restored."""
        trainer.set_practice_mode(PracticeMode.SOFT_TOTALS)
        trainer.start_new_hand()
        trainer.stand()

        restored = _deserialize_trainer(_serialize_trainer(trainer))

        assert restored.practice_mode == PracticeMode.SOFT_TOTALS
        assert restored.stats.total_decisions == 1
        assert restored.stats.correct_decisions == trainer.stats.correct_decisions
        assert restored.stats.current_streak == trainer.stats.current_streak

    def test_stored_record_wins_over_session(self, trainer, best_streak_store):
        """Test that a higher record from another session is picked up."""
        data = _serialize_trainer(trainer)
        best_streak_store.save(9)

        restored = _deserialize_trainer(data)

        assert restored.stats.longest_streak == 9
