from __future__ import annotations

import random
import unittest

from github_trending.viewport import Viewport


def assert_invariants(case: unittest.TestCase, view: Viewport) -> None:
    case.assertGreaterEqual(view.cursor, 0)
    case.assertLessEqual(view.cursor, max(0, view.length - 1))
    case.assertGreaterEqual(view.origin, 0)
    if view.length > 0:
        case.assertLessEqual(view.origin, view.cursor)
        case.assertLessEqual(view.cursor, view.origin + view.height - 1)


class ViewportTests(unittest.TestCase):
    def test_set_cursor_clamps_to_content(self) -> None:
        view = Viewport(height=5, length=3)
        view.set_cursor(10)
        self.assertEqual(view.cursor, 2)
        view.set_cursor(-4)
        self.assertEqual(view.cursor, 0)

    def test_empty_viewport_stays_at_zero(self) -> None:
        view = Viewport(height=5, length=0)
        self.assertFalse(view.move(1))
        self.assertFalse(view.move(-1))
        self.assertEqual((view.origin, view.cursor), (0, 0))

    def test_origin_scrolls_one_row_past_bottom_edge(self) -> None:
        view = Viewport(height=3, length=10)
        for _ in range(3):
            view.move(1)
        self.assertEqual(view.cursor, 3)
        self.assertEqual(view.origin, 1)

    def test_origin_scrolls_back_when_cursor_moves_above_it(self) -> None:
        view = Viewport(height=3, length=10)
        view.set_cursor(9)
        self.assertEqual(view.origin, 7)
        view.set_cursor(5)
        self.assertEqual(view.origin, 5)

    def test_move_reports_whether_cursor_changed(self) -> None:
        view = Viewport(height=3, length=2)
        self.assertTrue(view.move(1))
        self.assertFalse(view.move(1))

    def test_reset_with_new_length_returns_to_top(self) -> None:
        view = Viewport(height=3, length=10)
        view.set_cursor(9)
        view.reset(length=2)
        self.assertEqual((view.origin, view.cursor, view.length), (0, 0, 2))
        self.assertTrue(view.move(5))
        self.assertEqual(view.cursor, 1)

    def test_reducing_height_keeps_cursor_visible(self) -> None:
        view = Viewport(height=10, length=20)
        view.set_cursor(8)
        view.set_height(4)
        assert_invariants(self, view)
        self.assertEqual(view.origin, 5)

    def test_visible_range_is_limited_by_content(self) -> None:
        view = Viewport(height=5, length=3)
        self.assertEqual(list(view.visible_range()), [0, 1, 2])
        self.assertEqual(list(Viewport(height=5, length=0).visible_range()), [])

    def test_random_moves_preserve_invariants(self) -> None:
        rng = random.Random(7)
        for length in (0, 1, 2, 5, 40):
            view = Viewport(height=rng.randint(1, 6), length=length)
            for _ in range(200):
                op = rng.choice(("move", "set", "height"))
                if op == "move":
                    view.move(rng.choice((-3, -1, 1, 3)))
                elif op == "set":
                    view.set_cursor(rng.randint(-5, length + 5))
                else:
                    view.set_height(rng.randint(1, 8))
                assert_invariants(self, view)


if __name__ == "__main__":
    unittest.main()
