import unittest

from app.cardlayout.layout.models import CardPosition, ViewportSize
from app.cardlayout.layout.validation import (
    clamp_position,
    containment_overshoot,
    find_overlap,
    is_in_viewport,
    is_overlapping,
)


def pos(card_id, x, y, w=100, h=100, column=0, row=None):
    return CardPosition(card_id, x, y, w, h, column, row)


class TestGeometryHelpers(unittest.TestCase):
    def test_touching_edges_do_not_overlap(self):
        self.assertFalse(is_overlapping(pos("a", 0, 0), pos("b", 100, 0)))
        self.assertFalse(is_overlapping(pos("a", 0, 0), pos("b", 0, 100)))

    def test_overlap(self):
        self.assertTrue(is_overlapping(pos("a", 0, 0), pos("b", 50, 50)))
        self.assertTrue(is_overlapping(pos("a", 0, 0), pos("b", 10, 10, 10, 10)))

    def test_in_viewport(self):
        vp = ViewportSize(200, 200)
        self.assertTrue(is_in_viewport(pos("a", 100, 100), vp))
        self.assertTrue(is_in_viewport(pos("a", 100.0000001, 0), vp))
        self.assertFalse(is_in_viewport(pos("a", 150, 0), vp))
        self.assertFalse(is_in_viewport(pos("a", -1, 0), vp))

    def test_clamp_position(self):
        vp = ViewportSize(200, 200)
        clamped = clamp_position(pos("a", 150, 180), vp)
        self.assertEqual((clamped.x, clamped.y), (100, 100))
        self.assertEqual((clamped.width, clamped.height), (100, 100))

    def test_clamp_leaves_scroll_axis_open(self):
        vp = ViewportSize(200, 200)
        clamped = clamp_position(pos("a", 150, 500), vp, scroll_axis="y")
        self.assertEqual((clamped.x, clamped.y), (100, 500))
        clamped = clamp_position(pos("a", 500, -3), vp, scroll_axis="x")
        self.assertEqual((clamped.x, clamped.y), (500, 0))

    def test_clamp_returns_same_object_when_inside(self):
        p = pos("a", 10, 10)
        self.assertIs(clamp_position(p, ViewportSize(200, 200)), p)

    def test_containment_overshoot(self):
        vp = ViewportSize(200, 200)
        self.assertEqual(containment_overshoot(pos("a", 0, 900), vp, "y"), 0)
        self.assertEqual(containment_overshoot(pos("a", 130, 0), vp, "y"), 30)
        self.assertEqual(containment_overshoot(pos("a", 900, 120), vp, "x"), 20)
        self.assertEqual(containment_overshoot(pos("a", -5, 0), vp, "x"), 5)


class TestFindOverlap(unittest.TestCase):
    def test_clean_grid(self):
        cards = [pos(f"c{i}", 10 + (i % 3) * 110, 10 + (i // 3) * 110, column=i % 3) for i in range(9)]
        self.assertIsNone(find_overlap(cards))

    def test_same_column_overlap(self):
        cards = [pos("a", 0, 0), pos("b", 0, 300), pos("c", 0, 50)]
        a, b = find_overlap(cards)
        self.assertEqual({a.card_id, b.card_id}, {"a", "c"})

    def test_cross_column_overlap(self):
        cards = [pos("a", 0, 0, column=0), pos("b", 50, 20, column=1), pos("c", 300, 0, column=2)]
        a, b = find_overlap(cards)
        self.assertEqual({a.card_id, b.card_id}, {"a", "b"})

    def test_empty(self):
        self.assertIsNone(find_overlap([]))


if __name__ == "__main__":
    unittest.main()
