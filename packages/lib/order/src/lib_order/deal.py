"""Icon layout and the timed deal that reveals icons one by one."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .config import DRAWING, DrawingConst
from .game_state import Icon
from .scheduler import ScheduledCall, Scheduler

Point = Tuple[int, int]

MAX_ROWS = 3


def grid_rows(item_count: int) -> int:
    """Icons per grid line: ``min((item_count - 1) // 2, 3)``.

    This is zero or negative for fewer than three items; layout code
    clamps it to one.
    """
    return min((item_count - 1) // 2, MAX_ROWS)


def scatter_range(column: int, const: DrawingConst = DRAWING) -> Tuple[int, int]:
    low = const.min_icon_scattering
    high = max(column - const.icon_side, low)
    return low, high


def compute_positions(
    size: Tuple[int, int],
    item_count: int,
    rng: Optional[np.random.Generator] = None,
    const: DrawingConst = DRAWING,
) -> List[Point]:
    """Scatter ``item_count`` icon centers over a grid, then shuffle them.

    Cell i sits at column ``i % rows`` and line ``i // rows``; both
    coordinates get a random offset in ``scatter_range``. The list is
    shuffled so the deal order does not walk the grid.
    """
    if item_count <= 0:
        return []

    rng = rng if rng is not None else np.random.default_rng()
    rows = max(grid_rows(item_count), 1)
    column = int(size[0]) // rows
    low, high = scatter_range(column, const)

    positions: List[Point] = []
    for index in range(item_count):
        x = int(rng.integers(low, high, endpoint=True)) + (index % rows) * column
        y = (
            (index // rows) * column
            + int(rng.integers(low, high, endpoint=True))
            + const.icons_top_offset
        )
        positions.append((x, y))

    order = rng.permutation(item_count)
    return [positions[int(i)] for i in order]


RevealCallback = Callable[[Icon, Point, bool], None]


class DealScheduler:
    """Queues one reveal per icon at a fixed cadence.

    Icon i is revealed ``delay * (i + 1)`` seconds after ``deal`` is
    called; ``reveal`` gets ``is_last=True`` only for the final icon.
    """

    def __init__(self, scheduler: Scheduler, delay: float = DRAWING.deal_animation_delay):
        self.scheduler = scheduler
        self.delay = delay

    def deal(
        self,
        icons: Sequence[Icon],
        positions: Sequence[Point],
        reveal: RevealCallback,
        on_empty: Optional[Callable[[], None]] = None,
    ) -> List[ScheduledCall]:
        count = min(len(icons), len(positions))
        if count == 0:
            if on_empty is not None:
                on_empty()
            return []

        calls = []
        for index in range(count):
            calls.append(
                self.scheduler.call_later(
                    self.delay * (index + 1),
                    _bind(reveal, icons[index], positions[index], index == count - 1),
                )
            )
        return calls


def _bind(reveal: RevealCallback, icon: Icon, position: Point, is_last: bool):
    def fire() -> None:
        reveal(icon, position, is_last)

    return fire
