"""Tests for Card and Deck classes."""

import pytest
from random import Random

from trainer.cards import Card, Deck, Rank, Suit


class TestCard:
    """Tests for the Card class."""

    def test_frozen(self):
        """Test that a dealt card cannot be altered."""
        card = Card.from_string("AS")
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    @pytest.mark.parametrize(
        "rank, value",
        [(Rank.ACE, 11), (Rank.TWO, 2), (Rank.NINE, 9)]
        + [(r, 10) for r in (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING)],
    )
    def test_points(self, rank, value):
        card = Card(rank, Suit.CLUBS)
        assert card.value == value
        assert card.is_ten_value == (value == 10)
        assert card.is_ace == (rank is Rank.ACE)

    @pytest.mark.parametrize(
        "notation, rank, suit",
        [
            ("AS", Rank.ACE, Suit.SPADES),
            ("2h", Rank.TWO, Suit.HEARTS),
            ("10D", Rank.TEN, Suit.DIAMONDS),
            ("td", Rank.TEN, Suit.DIAMONDS),
            (" qc ", Rank.QUEEN, Suit.CLUBS),
            ("A♠", Rank.ACE, Suit.SPADES),
            ("K♥", Rank.KING, Suit.HEARTS),
        ],
    )
    def test_from_string(self, notation, rank, suit):
        assert Card.from_string(notation) == Card(rank, suit)

    @pytest.mark.parametrize("notation", ["", "A", "1S", "11H", "AX", "ZZ"])
    def test_from_string_invalid(self, notation):
        """Test that malformed notation is rejected."""
        with pytest.raises(ValueError):
            Card.from_string(notation)

    def test_display(self):
        """Test the short form used in feedback and the API."""
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.DIAMONDS)) == "10♦"
        assert repr(Card(Rank.QUEEN, Suit.HEARTS)) == "Card(QUEEN, HEARTS)"

    def test_cards_are_values(self):
        """Test equality and hashing ignore identity."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("AS") != Card.from_string("KS")
        assert len({Card.from_string("AS"), Card.from_string("A♠")}) == 1


class TestDeck:
    """Tests for the Deck class."""

    def test_deck_creation(self):
        """Test creating a new deck."""
        deck = Deck()
        assert len(deck) == 52
        assert deck.cards_remaining == 52

    def test_deck_has_all_cards(self):
        """Test that deck contains one of each rank and suit."""
        cards = list(Deck())
        assert len(set(cards)) == 52
        assert {c.rank for c in cards} == set(Rank)
        assert {c.suit for c in cards} == set(Suit)

    def test_deck_is_shuffled(self):
        """Test that a new deck is not in factory order."""
        deck = Deck(rng=Random(42))
        factory_order = [Card(rank, suit) for suit in Suit for rank in Rank]
        assert list(deck) != factory_order

    def test_seeded_decks_deal_identically(self):
        """Test that the same seed reproduces the same deal."""
        deck1 = Deck(rng=Random(7))
        deck2 = Deck(rng=Random(7))
        assert [deck1.draw() for _ in range(52)] == [deck2.draw() for _ in range(52)]

    def test_deck_draw(self):
        """Test drawing cards from deck."""
        deck = Deck()
        card = deck.draw()
        assert isinstance(card, Card)
        assert len(deck) == 51

    def test_deck_draw_all_unique(self):
        """Test drawing all cards from deck."""
        deck = Deck()
        cards = [deck.draw() for _ in range(52)]
        assert len(deck) == 0
        assert len(set(cards)) == 52

    def test_draw_from_empty_deck_reshuffles(self):
        """Test that drawing from an exhausted deck reshuffles instead of failing."""
        deck = Deck(rng=Random(1))
        for _ in range(52):
            deck.draw()
        assert deck.reshuffles == 0

        card = deck.draw()

        assert isinstance(card, Card)
        assert len(deck) == 51
        assert deck.reshuffles == 1

    def test_deck_reset(self):
        """Test resetting deck."""
        deck = Deck()
        deck.draw()
        deck.draw()
        assert len(deck) == 50

        deck.reset()
        assert len(deck) == 52
        assert len(set(deck)) == 52
