from __future__ import annotations

from typing import Callable, Iterable, Optional, Tuple

import pygame

from .config import DRAWING, DrawingConst
from .game_state import GameState, GameStatus
from .nodes import IconNode, SelectionIndicatorNode
from .sound import SoundBank

Point = Tuple[int, int]

UNKNOWN_SELECTION_COUNT = -1


class InputBridge:
    """Turns taps into ``GameState.tap`` calls and shows the feedback.

    ``nodes`` is the scene's draw group; icons are looked up there and
    new indicators are passed to ``add_indicator``. ``finish`` is called
    with the status as soon as an accepted tap ends the game.
    """

    def __init__(
        self,
        game: Optional[GameState],
        nodes: pygame.sprite.LayeredUpdates,
        sounds: SoundBank,
        add_indicator: Callable[[SelectionIndicatorNode], None],
        finish: Callable[[GameStatus], None],
        const: DrawingConst = DRAWING,
    ) -> None:
        self.game = game
        self.nodes = nodes
        self.sounds = sounds
        self.add_indicator = add_indicator
        self.finish = finish
        self.const = const

    def icon_at(self, location: Point) -> Optional[IconNode]:
        # get_sprites_at lists bottom layer first
        for sprite in reversed(self.nodes.get_sprites_at(location)):
            if isinstance(sprite, IconNode):
                return sprite
        return None

    def handle_taps(self, locations: Iterable[Point]) -> int:
        """Process each tap independently; returns how many were accepted."""
        accepted = 0
        for location in locations:
            if self.handle_tap(location):
                accepted += 1
        return accepted

    def handle_tap(self, location: Point) -> bool:
        icon = self.icon_at(location)
        if icon is None or self.game is None:
            return False
        if not self.game.tap(icon.icon.id):
            return False

        icon.run_scale(self.const.select_scale, self.const.select_scale_duration)
        self.sounds.play("select")
        self.add_indicator(self._make_indicator(location))

        status = self.game.status
        if status.is_terminal:
            self.finish(status)
        return True

    def _make_indicator(self, location: Point) -> SelectionIndicatorNode:
        count = getattr(self.game, "number_of_selected_items", None)
        if count is None:
            count = UNKNOWN_SELECTION_COUNT
        return SelectionIndicatorNode(
            at=location,
            radius=self.const.icon_side / 4.0,
            value=str(count),
        )
