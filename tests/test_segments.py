import random
import unittest

from spider_engine.cards import RANKS, SUITS, Card
from spider_layout.calculator import calculate_smart_overlap, calculate_stack_height
from spider_layout.segments import (
    RUN,
    SINGLETON,
    calculate_segment_layout,
    card_index_at_offset,
    card_top_offsets,
    find_segments,
    segment_stack_offsets,
)

CARD_WIDTH = 60
CARD_HEIGHT = 80


def up(rank, suit="spades"):
    return Card(f"{suit}-{rank}", suit, rank, True)


def down(rank, suit="clubs"):
    return Card(f"{suit}-{rank}-h", suit, rank, False)


def sample_column():
    return [down("K"), down("Q"), up("9"), up("8"), up("7"), up("6"), up("3", "hearts")]


class FindSegmentsTestCase(unittest.TestCase):
    def test_runs_and_singletons(self):
        segments = find_segments(sample_column())
        self.assertEqual([SINGLETON, SINGLETON, RUN, SINGLETON], [s.kind for s in segments])
        self.assertEqual([(0, 0), (1, 1), (2, 5), (6, 6)], [(s.start_index, s.end_index) for s in segments])
        self.assertEqual("9-6", segments[2].label)
        self.assertEqual("3", segments[3].label)

    def test_two_card_runs_stay_singletons(self):
        segments = find_segments([up("9"), up("8"), up("2", "hearts")])
        self.assertEqual([SINGLETON] * 3, [s.kind for s in segments])

    def test_mixed_suits_break_runs(self):
        segments = find_segments([up("9"), up("8", "hearts"), up("7", "hearts")])
        self.assertEqual([SINGLETON] * 3, [s.kind for s in segments])

    def test_compression_off_gives_one_segment_per_card(self):
        column = sample_column()
        segments = find_segments(column, use_compression=False)
        self.assertEqual(len(column), len(segments))
        self.assertTrue(all(s.kind == SINGLETON for s in segments))

    def test_empty_column(self):
        self.assertEqual((), find_segments([]))


class SegmentLayoutTestCase(unittest.TestCase):
    def test_ideal_layout(self):
        layout = calculate_segment_layout(sample_column(), CARD_HEIGHT, 1000, card_width=CARD_WIDTH)
        self.assertTrue(layout.has_runs)
        self.assertFalse(layout.needs_scroll)
        self.assertAlmostEqual(16.8, layout.run_top_peek)
        self.assertAlmostEqual(10, layout.run_middle_height)
        expected = [0, 8, 16, 64.8]
        for want, got in zip(expected, layout.segment_offsets):
            self.assertAlmostEqual(want, got)
        self.assertAlmostEqual(144.8, layout.total_height)

    def test_card_top_offsets_cover_every_card(self):
        layout = calculate_segment_layout(sample_column(), CARD_HEIGHT, 1000, card_width=CARD_WIDTH)
        tops = card_top_offsets(layout)
        self.assertEqual(7, len(tops))
        for want, got in zip([0, 8, 16, 32.8, 37.8, 42.8, 64.8], tops):
            self.assertAlmostEqual(want, got)

    def test_without_runs_matches_plain_stack(self):
        column = sample_column()
        layout = calculate_segment_layout(column, CARD_HEIGHT, 150, use_compression=False, card_width=CARD_WIDTH)
        offsets = calculate_smart_overlap(column, CARD_HEIGHT, 150)
        self.assertFalse(layout.has_runs)
        self.assertEqual(offsets, segment_stack_offsets(layout))
        self.assertAlmostEqual(calculate_stack_height(column, CARD_HEIGHT, offsets), layout.total_height)

    def test_tight_budget_shrinks_run_bands(self):
        layout = calculate_segment_layout(sample_column(), CARD_HEIGHT, 100, card_width=CARD_WIDTH)
        self.assertLess(layout.run_top_peek, 16.8)
        self.assertLess(layout.run_middle_height, 10)
        self.assertAlmostEqual(100, layout.total_height)

    def test_no_room_needs_scroll(self):
        layout = calculate_segment_layout(sample_column(), CARD_HEIGHT, 50, card_width=CARD_WIDTH)
        self.assertTrue(layout.needs_scroll)
        self.assertEqual(2, layout.run_top_peek)
        self.assertEqual(2, layout.run_middle_height)

    def test_deep_columns_fit_their_budget(self):
        rng = random.Random(3)
        for n in range(0, 41):
            hidden = rng.randint(0, min(n, 6))
            column = [down("5") for _ in range(hidden)]
            for i in range(n - hidden):
                suit = SUITS[(i // rng.randint(2, 6)) % 2]
                column.append(up(RANKS[12 - i % 13], suit))
            for max_height in range(CARD_HEIGHT + 1, 900, 41):
                layout = calculate_segment_layout(column, CARD_HEIGHT, max_height, card_width=CARD_WIDTH)
                self.assertLessEqual(layout.total_height, max_height + 1e-6, (n, max_height))
                self.assertEqual(len(column), len(card_top_offsets(layout)))


class CardIndexAtOffsetTestCase(unittest.TestCase):
    def setUp(self):
        self.layout = calculate_segment_layout(sample_column(), CARD_HEIGHT, 1000, card_width=CARD_WIDTH)

    def test_singletons(self):
        self.assertEqual(0, card_index_at_offset(self.layout, 1))
        self.assertEqual(1, card_index_at_offset(self.layout, 9))
        self.assertEqual(6, card_index_at_offset(self.layout, 70))
        self.assertEqual(6, card_index_at_offset(self.layout, 144))

    def test_run_regions(self):
        self.assertEqual(2, card_index_at_offset(self.layout, 20))
        self.assertEqual(3, card_index_at_offset(self.layout, 33))
        self.assertEqual(4, card_index_at_offset(self.layout, 41))
        self.assertEqual(5, card_index_at_offset(self.layout, 50))

    def test_outside_the_column(self):
        self.assertIsNone(card_index_at_offset(self.layout, -1))
        self.assertIsNone(card_index_at_offset(self.layout, 145))
        empty = calculate_segment_layout([], CARD_HEIGHT, 1000)
        self.assertIsNone(card_index_at_offset(empty, 0))


if __name__ == "__main__":
    unittest.main()
