from __future__ import annotations

import sys
from typing import Any, Callable, List, Optional, Tuple

import numpy as np
import pygame

from ..config import DRAWING, DrawingConst
from ..deal import DealScheduler, compute_positions
from ..effects import load_emitter
from ..fortune import FortuneProvider
from ..game_state import EndGameDescriptor, GameState, GameStatus, Icon
from ..input_bridge import InputBridge
from ..nodes import IconNode, SelectionIndicatorNode
from ..rules import FollowTheOrderGame
from ..scheduler import Scheduler
from ..sequence import SceneInterface, SequenceManager
from ..sound import SoundBank
from ..transition import DoorsTransition, doors_close_horizontal, doors_open_horizontal

ICON_LAYER = 0
PARTICLE_LAYER = 1
INDICATOR_LAYER = 2

BACKGROUND = (24, 26, 33)


class GameScene(SceneInterface):
    """Deals the icons, forwards taps to the game and ends the round.

    Input is ignored while icons are being dealt and after the game has
    finished. Delayed callbacks are bound to the scene generation at the
    time they were scheduled and do nothing once the scene has exited or
    restarted.
    """

    def __init__(
        self,
        manager: Optional[SequenceManager] = None,
        *,
        size: Tuple[int, int] = (480, 800),
        game_factory: Optional[Callable[[], GameState]] = None,
        fortune_provider: Optional[FortuneProvider] = None,
        rng: Optional[np.random.Generator] = None,
        const: DrawingConst = DRAWING,
    ) -> None:
        super().__init__(manager)
        self.size = size
        self.const = const
        self.fortune_provider = (
            fortune_provider if fortune_provider is not None else FortuneProvider()
        )
        self._game_factory = game_factory if game_factory is not None else FollowTheOrderGame
        self._rng = rng if rng is not None else np.random.default_rng()

        self.game: Optional[GameState] = None
        self.nodes = pygame.sprite.LayeredUpdates()
        self.icon_nodes: List[IconNode] = []
        self.selection_indicators: List[SelectionIndicatorNode] = []
        self.dealing = False
        self.finished = False
        self._generation = 0
        self._bridge: Optional[InputBridge] = None
        self._font = None

    @property
    def user_interaction_enabled(self) -> bool:
        return self._bridge is not None and not self.dealing and not self.finished

    def enter(self, context: Any = None) -> None:
        print("GameScene: enter")
        if self.manager is None:
            raise RuntimeError("GameScene: no manager assigned")

        self._generation += 1
        self._clear_nodes()
        self.finished = False
        self.game = self._game_factory()
        self._bridge = InputBridge(
            self.game,
            self.nodes,
            self._sounds,
            self._add_selection_indicator,
            self._finish_game,
            self.const,
        )
        if not pygame.font.get_init():
            pygame.font.init()
        self._font = pygame.font.Font(None, 32)
        self._create_icons()

    def exit(self) -> None:
        print("GameScene: exit")
        self._generation += 1
        self._clear_nodes()
        self.dealing = False
        self._bridge = None
        self._font = None

    def update(self, dt: float) -> None:
        self.nodes.update(dt)

    def render(self, surface) -> None:
        if surface is None:
            return

        try:
            surface.fill(BACKGROUND)
            self.nodes.draw(surface)
            if self._font is not None and not self.finished:
                hint = "Watch the order..." if self.dealing else "Tap them in the same order"
                label = self._font.render(hint, True, (220, 220, 220))
                surface.blit(label, label.get_rect(midtop=(surface.get_width() // 2, 24)))
        except Exception as e:
            print("GameScene: render failed:", e)

    def handle_event(self, event) -> None:
        if event is None:
            return

        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            if self.manager is not None:
                self.manager.start("start")
            return

        if not self.user_interaction_enabled:
            return

        locations = self._tap_locations(event)
        if locations and self._bridge is not None:
            self._bridge.handle_taps(locations)

    # -- icons

    def _create_icons(self) -> None:
        game = self.game
        if game is None:
            return

        self.dealing = True
        positions = compute_positions(self.size, game.number_of_items, self._rng, self.const)
        DealScheduler(self._scheduler, self.const.deal_animation_delay).deal(
            list(game.icons),
            positions,
            self._guarded(self._reveal_icon),
            on_empty=self._finish_dealing,
        )

    def _reveal_icon(self, icon: Icon, position: Tuple[int, int], is_last: bool) -> None:
        node = IconNode(icon, position, self.const.icon_size)
        self.icon_nodes.append(node)
        self.nodes.add(node, layer=ICON_LAYER)
        if is_last:
            self._finish_dealing()
            self._sounds.play("deal_last")
        else:
            self._sounds.play("deal")

    def _finish_dealing(self) -> None:
        self.dealing = False

    def _add_selection_indicator(self, node: SelectionIndicatorNode) -> None:
        self.selection_indicators.append(node)
        self.nodes.add(node, layer=INDICATOR_LAYER)

    def _tap_locations(self, event) -> List[Tuple[int, int]]:
        if event.type == pygame.MOUSEBUTTONUP:
            # SDL mirrors touches as mouse events; those come through FINGERUP
            if event.button != 1 or getattr(event, "touch", False):
                return []
            return [tuple(event.pos)]
        if event.type == pygame.FINGERUP:
            width, height = self.size
            return [(int(event.x * width), int(event.y * height))]
        return []

    # -- game ending

    def _finish_game(self, status: GameStatus) -> None:
        self.finished = True
        if status is GameStatus.WON:
            self._win()
        elif status is GameStatus.LOST:
            self._lose()

    def _win(self) -> None:
        self._remove_with_particles("VictoryExplosion")
        present = self._guarded(self._present_end_game)
        scheduler = self._scheduler
        fallback = self.const.win_fallback_text
        duration = self.const.transition_duration

        def on_fortune(text: Optional[str], error: Optional[Exception]) -> None:
            if error is not None or not text:
                print(f"GameScene: something went wrong getting fortune: {error}", file=sys.stderr)
                text = fallback
            scheduler.call_soon_threadsafe(
                lambda: present(text, doors_open_horizontal(duration))
            )

        self.fortune_provider.request_fortune(on_fortune)

    def _lose(self) -> None:
        self._remove_with_particles("LoseExplosion")
        present = self._guarded(self._present_end_game)
        text = self.const.lose_text
        transition = doors_close_horizontal(self.const.transition_duration)
        self._scheduler.call_later(
            self.const.lose_transition_delay, lambda: present(text, transition)
        )

    def _present_end_game(self, text: str, transition: DoorsTransition) -> None:
        if self.manager is None:
            return
        status = self.game.status if self.game is not None else GameStatus.PROGRESSING
        self.manager.present("end_game", EndGameDescriptor(status=status, text=text), transition)

    def _remove_with_particles(self, name: str) -> None:
        for indicator in self.selection_indicators:
            indicator.kill()
        self.selection_indicators.clear()

        for icon in self.icon_nodes:
            particles = load_emitter(name, icon.position, self._rng)
            if particles is not None:
                self.nodes.add(particles, layer=PARTICLE_LAYER)
                self._scheduler.call_later(self.const.particle_lifetime, particles.kill)
            icon.kill()
        self.icon_nodes.clear()

    # -- helpers

    def _clear_nodes(self) -> None:
        self.nodes.empty()
        self.icon_nodes.clear()
        self.selection_indicators.clear()

    def _guarded(self, callback: Callable[..., None]) -> Callable[..., None]:
        generation = self._generation

        def run(*args) -> None:
            if generation != self._generation:
                return
            callback(*args)

        return run

    @property
    def _scheduler(self) -> Scheduler:
        if self.manager is None:
            raise RuntimeError("GameScene: no manager assigned")
        return self.manager.scheduler

    @property
    def _sounds(self) -> SoundBank:
        if self.manager is None:
            return SoundBank(enabled=False)
        return self.manager.global_state.sounds
