import unittest

import numpy as np

from lib_order.config import DRAWING
from lib_order.deal import DealScheduler, compute_positions, grid_rows, scatter_range
from lib_order.game_state import Icon
from lib_order.scheduler import Scheduler


def make_icons(count):
    return [Icon(id=i, category="circle") for i in range(count)]


class GridRowsTestCase(unittest.TestCase):
    def test_rows_follow_half_of_count_capped_at_three(self):
        self.assertEqual(1, grid_rows(3))
        self.assertEqual(2, grid_rows(6))
        self.assertEqual(3, grid_rows(7))
        self.assertEqual(3, grid_rows(20))

    def test_small_counts_give_no_rows(self):
        self.assertEqual(0, grid_rows(1))
        self.assertEqual(0, grid_rows(2))
        self.assertEqual(-1, grid_rows(0))


class ComputePositionsTestCase(unittest.TestCase):
    def test_six_items_fill_each_cell_once_within_jitter(self):
        size = (480, 800)
        positions = compute_positions(size, 6, np.random.default_rng(1))
        self.assertEqual(6, len(positions))

        column = 480 // 2
        low, high = scatter_range(column)
        self.assertEqual((50, 160), (low, high))

        cells = []
        for x, y in positions:
            col, x_jitter = divmod(x, column)
            line, y_jitter = divmod(y - DRAWING.icons_top_offset, column)
            self.assertTrue(low <= x_jitter <= high)
            self.assertTrue(low <= y_jitter <= high)
            cells.append((col, line))
        self.assertEqual(sorted((i % 2, i // 2) for i in range(6)), sorted(cells))

    def test_same_seed_gives_same_layout(self):
        a = compute_positions((480, 800), 9, np.random.default_rng(42))
        b = compute_positions((480, 800), 9, np.random.default_rng(42))
        self.assertEqual(a, b)

    def test_single_item_uses_one_column(self):
        positions = compute_positions((480, 800), 1, np.random.default_rng(3))
        self.assertEqual(1, len(positions))
        x, y = positions[0]
        self.assertTrue(50 <= x <= 480 - DRAWING.icon_side)
        self.assertTrue(200 <= y <= 150 + 480 - DRAWING.icon_side)

    def test_two_items_do_not_divide_by_zero(self):
        self.assertEqual(2, len(compute_positions((480, 800), 2, np.random.default_rng(0))))

    def test_no_items_gives_no_positions(self):
        self.assertEqual([], compute_positions((480, 800), 0))
        self.assertEqual([], compute_positions((480, 800), -3))

    def test_narrow_container_collapses_jitter(self):
        positions = compute_positions((200, 800), 8, np.random.default_rng(5))
        column = 200 // 3
        self.assertEqual({50, 50 + column, 50 + 2 * column}, {x for x, _ in positions})


class DealSchedulerTestCase(unittest.TestCase):
    def setUp(self):
        self.scheduler = Scheduler()
        self.dealer = DealScheduler(self.scheduler)
        self.revealed = []

    def reveal(self, icon, position, is_last):
        self.revealed.append((icon.id, position, is_last, self.scheduler.now))

    def test_reveals_are_spaced_by_fixed_delay(self):
        icons = make_icons(6)
        positions = [(i, i) for i in range(6)]
        calls = self.dealer.deal(icons, positions, self.reveal)

        self.assertEqual(6, len(calls))
        for index, call in enumerate(calls):
            self.assertAlmostEqual(0.8 * (index + 1), call.when)

    def test_each_icon_revealed_once_in_game_order_and_last_flagged_once(self):
        icons = make_icons(6)
        positions = [(10 * i, 20 * i) for i in range(6)]
        self.dealer.deal(icons, positions, self.reveal)

        self.scheduler.advance(0.5)
        self.assertEqual([], self.revealed)
        self.scheduler.advance(5.0)

        self.assertEqual(list(range(6)), [r[0] for r in self.revealed])
        self.assertEqual(positions, [r[1] for r in self.revealed])
        self.assertEqual([False] * 5 + [True], [r[2] for r in self.revealed])

    def test_reveal_waits_for_its_delay(self):
        self.dealer.deal(make_icons(3), [(0, 0)] * 3, self.reveal)
        self.scheduler.advance(0.81)
        self.assertEqual(1, len(self.revealed))
        self.scheduler.advance(0.8)
        self.assertEqual(2, len(self.revealed))

    def test_nothing_to_deal_completes_immediately(self):
        done = []
        calls = self.dealer.deal([], [], self.reveal, on_empty=lambda: done.append(True))
        self.assertEqual([], calls)
        self.assertEqual([True], done)
        self.assertEqual([], self.scheduler.pending())


if __name__ == "__main__":
    unittest.main()
