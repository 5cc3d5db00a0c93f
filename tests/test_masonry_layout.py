import random
import unittest

from app.cardlayout.layout.config import LayoutConfig
from app.cardlayout.layout.masonry import pack_masonry
from app.cardlayout.layout.models import CardDescriptor


def cards_with_heights(heights):
    return [CardDescriptor(f"c{i}", min_height=h) for i, h in enumerate(heights)]


class TestMasonryLayout(unittest.TestCase):
    def test_basic_positions_shortest_column(self):
        cards = cards_with_heights([100, 100, 100])
        placements, total = pack_masonry(
            cards, columns=2, card_width=100, config=LayoutConfig(gap=20, padding=0)
        )
        self.assertEqual([p.width for p in placements], [100, 100, 100])

        # First card in col0 at y=0
        self.assertEqual((placements[0].column, placements[0].x, placements[0].y), (0, 0, 0))
        # Second card in col1 at y=0
        self.assertEqual((placements[1].column, placements[1].x, placements[1].y), (1, 120, 0))
        # Third card goes back to col0 (tie resolved to lowest index)
        self.assertEqual((placements[2].column, placements[2].x, placements[2].y), (0, 0, 120))

        # Total height: max(column heights) minus gap
        self.assertEqual(total, 220)

    def test_column_heights_evolve_greedily(self):
        cards = cards_with_heights([100, 50, 80, 60, 90])
        placements, total = pack_masonry(
            cards, columns=2, card_width=100, config=LayoutConfig(gap=0, padding=0)
        )
        # [0,0] -> [100,0] -> [100,50] -> [100,130] -> [160,130] -> [160,220]
        self.assertEqual(
            [(p.column, p.y) for p in placements],
            [(0, 0), (1, 0), (1, 50), (0, 100), (1, 130)],
        )
        self.assertEqual(total, 220)

    def test_padding_offsets_every_column(self):
        cards = cards_with_heights([40, 40, 40, 40])
        placements, total = pack_masonry(
            cards, columns=3, card_width=50, config=LayoutConfig(gap=5, padding=10)
        )
        self.assertEqual([(p.x, p.y) for p in placements], [(10, 10), (65, 10), (120, 10), (10, 55)])
        # 10 + 40 + 5 + 40 + 10
        self.assertEqual(total, 105)

    def test_masonry_positions_have_no_row(self):
        placements, _ = pack_masonry(
            cards_with_heights([10]), columns=1, card_width=10, config=LayoutConfig()
        )
        self.assertIsNone(placements[0].row)

    def test_fallback_height_when_unknown(self):
        cards = [CardDescriptor("x", min_height=0)]
        placements, total = pack_masonry(
            cards, columns=3, card_width=100, config=LayoutConfig(gap=0, padding=0, default_card_height=333)
        )
        self.assertEqual(placements[0].height, 333)
        self.assertEqual(total, 333)

    def test_zero_columns_places_nothing(self):
        placements, total = pack_masonry(
            cards_with_heights([10, 20]), columns=0, card_width=100, config=LayoutConfig()
        )
        self.assertEqual(placements, [])
        self.assertEqual(total, 0)

    def test_balance_is_bounded_by_one_card(self):
        rng = random.Random(7)
        heights = [rng.uniform(90, 110) for _ in range(200)]
        gap = 12
        placements, _ = pack_masonry(
            cards_with_heights(heights), columns=4, card_width=100, config=LayoutConfig(gap=gap, padding=0)
        )

        bottoms = {}
        for p in placements:
            bottoms[p.column] = max(bottoms.get(p.column, 0), p.y + p.height + gap)
        self.assertEqual(len(bottoms), 4)
        self.assertLessEqual(max(bottoms.values()) - min(bottoms.values()), max(heights) + gap)

    def test_invalid_inputs(self):
        with self.assertRaises(ValueError):
            pack_masonry([], columns=-1, card_width=100, config=LayoutConfig())
        with self.assertRaises(ValueError):
            pack_masonry([], columns=2, card_width=0, config=LayoutConfig())
        with self.assertRaises(ValueError):
            pack_masonry(cards_with_heights([-5]), columns=2, card_width=10, config=LayoutConfig())


if __name__ == "__main__":
    unittest.main()
