import random
import unittest
from collections import Counter

from spider_engine.cards import SUITS, Card, IdGenerator, card_label, create_deck, shuffle_deck


class DeckTestCase(unittest.TestCase):
    def test_deck_always_has_104_face_down_cards(self):
        for suit_count, repeats in ((1, 8), (2, 4), (4, 2)):
            deck = create_deck(suit_count)
            self.assertEqual(104, len(deck))
            self.assertTrue(all(not card.face_up for card in deck))
            counts = Counter((card.suit, card.rank) for card in deck)
            self.assertEqual(13 * suit_count, len(counts))
            self.assertEqual({repeats}, set(counts.values()))
            self.assertEqual(set(SUITS[:suit_count]), {card.suit for card in deck})

    def test_deck_ids_are_unique_and_threaded_through_generator(self):
        ids = IdGenerator(100)
        deck = create_deck(2, ids)
        self.assertEqual("card_101", deck[0].id)
        self.assertEqual("card_204", deck[-1].id)
        self.assertEqual(204, ids.counter)
        self.assertEqual(104, len({card.id for card in deck}))

    def test_unsupported_suit_count_is_rejected(self):
        with self.assertRaises(ValueError):
            create_deck(3)

    def test_shuffle_is_a_permutation_and_leaves_input_alone(self):
        deck = create_deck(4)
        before = [card.id for card in deck]
        shuffled = shuffle_deck(deck, random.Random(5))
        self.assertEqual(before, [card.id for card in deck])
        self.assertEqual(len(deck), len(shuffled))
        self.assertEqual(sorted(before), sorted(card.id for card in shuffled))

    def test_seeded_shuffle_is_reproducible(self):
        deck = create_deck(1)
        first = [card.id for card in shuffle_deck(deck, random.Random(20260210))]
        second = [card.id for card in shuffle_deck(deck, random.Random(20260210))]
        self.assertEqual(first, second)


class CardTestCase(unittest.TestCase):
    def test_equality_ignores_id(self):
        self.assertEqual(Card("card_1", "spades", "K", True), Card("card_9", "spades", "K", True))
        self.assertNotEqual(Card("card_1", "spades", "K", True), Card("card_1", "spades", "K", False))

    def test_flipped_returns_new_card(self):
        card = Card("card_1", "hearts", "7", False)
        up = card.flipped()
        self.assertFalse(card.face_up)
        self.assertTrue(up.face_up)
        self.assertEqual("card_1", up.id)
        self.assertIs(up, up.flipped(True))

    def test_value_and_label(self):
        self.assertEqual(1, Card("a", "clubs", "A").value)
        self.assertEqual(13, Card("k", "clubs", "K").value)
        self.assertEqual("10♥", card_label(Card("t", "hearts", "10", True)))
        self.assertEqual("---", card_label(Card("t", "hearts", "10", False)))


if __name__ == "__main__":
    unittest.main()
