from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .game_state import GameStatus, Icon

CATEGORIES = ("circle", "square", "triangle", "diamond", "ring", "cross")


class FollowTheOrderGame:
    """Tap the icons back in the order they were dealt.

    Icons are dealt in the order of ``icons``. Tapping an icon that was
    already selected (or any icon once the game is over) is rejected.
    Any other tap is accepted; a tap out of order loses the game and
    selecting every icon in order wins it.
    """

    def __init__(
        self, number_of_items: int = 6, rng: Optional[np.random.Generator] = None
    ) -> None:
        rng = rng if rng is not None else np.random.default_rng()
        count = max(int(number_of_items), 0)
        picks = rng.integers(0, len(CATEGORIES), size=count)
        self._icons = tuple(
            Icon(id=index, category=CATEGORIES[int(pick)])
            for index, pick in enumerate(picks)
        )
        self._selected: List[int] = []
        self._status = GameStatus.PROGRESSING

    @property
    def number_of_items(self) -> int:
        return len(self._icons)

    @property
    def icons(self) -> Sequence[Icon]:
        return self._icons

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def number_of_selected_items(self) -> int:
        return len(self._selected)

    def tap(self, icon_id: int) -> bool:
        if self._status is not GameStatus.PROGRESSING:
            return False
        if icon_id in self._selected:
            return False
        if all(icon.id != icon_id for icon in self._icons):
            return False

        expected = self._icons[len(self._selected)].id
        self._selected.append(icon_id)
        if icon_id != expected:
            self._status = GameStatus.LOST
        elif len(self._selected) == len(self._icons):
            self._status = GameStatus.WON
        return True
