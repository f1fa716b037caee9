import contextlib
import io
import unittest

import numpy as np
import pygame

from lib_order.effects import ParticleNode
from lib_order.game_state import EndGameDescriptor, GameStatus
from lib_order.nodes import IconNode
from lib_order.rules import FollowTheOrderGame
from lib_order.scenes.game import GameScene
from lib_order.sequence import GlobalState, SceneInterface, SequenceManager

DEAL_TIME = 0.8 * 6 + 0.01


class RecordingScene(SceneInterface):
    def __init__(self, manager=None):
        super().__init__(manager)
        self.contexts = []

    def enter(self, context=None):
        self.contexts.append(context)


class FakeFortuneProvider:
    def __init__(self, text=None, error=None, respond=True):
        self.text = text
        self.error = error
        self.respond = respond
        self.calls = 0

    def request_fortune(self, callback):
        self.calls += 1
        if self.respond:
            callback(self.text, self.error)


class RecordingSounds:
    def __init__(self):
        self.played = []

    def play(self, name):
        self.played.append(name)


class CountingGame(FollowTheOrderGame):
    def __init__(self):
        super().__init__(6, np.random.default_rng(0))
        self.tap_calls = 0

    def tap(self, icon_id):
        self.tap_calls += 1
        return super().tap(icon_id)


def click(position):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, pos=position, button=1, touch=False)


class GameSceneTestCase(unittest.TestCase):
    def setUp(self):
        self.fortune = FakeFortuneProvider(text="Fortune favours the bold")
        self.sounds = RecordingSounds()
        self.manager = SequenceManager(GlobalState(self.sounds))
        self.manager.initialize()
        self.scene = GameScene(
            size=(480, 800),
            game_factory=CountingGame,
            fortune_provider=self.fortune,
            rng=np.random.default_rng(7),
        )
        self.end = RecordingScene()
        self.start_scene = RecordingScene()
        self.manager.register_scene("start", self.start_scene)
        self.manager.register_scene("game", self.scene)
        self.manager.register_scene("end_game", self.end)
        with contextlib.redirect_stdout(io.StringIO()):
            self.manager.start("game")

    def update(self, dt):
        with contextlib.redirect_stdout(io.StringIO()):
            self.manager.update(dt)

    def tap_icon(self, icon_id):
        node = next(n for n in self.scene.icon_nodes if n.icon.id == icon_id)
        with contextlib.redirect_stdout(io.StringIO()):
            self.manager.handle_event(click(node.position))

    def test_enter_schedules_one_reveal_per_icon(self):
        delays = [call.when for call in self.manager.scheduler.pending()]
        self.assertEqual(6, len(delays))
        for index, when in enumerate(delays):
            self.assertAlmostEqual(0.8 * (index + 1), when)
        self.assertTrue(self.scene.dealing)
        self.assertFalse(self.scene.user_interaction_enabled)

    def test_dealing_creates_one_node_per_item_then_enables_input(self):
        self.update(DEAL_TIME)
        self.assertEqual(self.scene.game.number_of_items, len(self.scene.icon_nodes))
        self.assertEqual([0, 1, 2, 3, 4, 5], [n.icon.id for n in self.scene.icon_nodes])
        self.assertFalse(self.scene.dealing)
        self.assertTrue(self.scene.user_interaction_enabled)

    def test_only_the_last_reveal_plays_the_final_cue(self):
        self.update(0.81)
        self.assertEqual(["deal"], self.sounds.played)
        self.update(DEAL_TIME)
        self.assertEqual(["deal"] * 5 + ["deal_last"], self.sounds.played)

    def test_zero_items_finish_dealing_on_enter(self):
        scene = GameScene(
            size=(480, 800),
            game_factory=lambda: FollowTheOrderGame(0),
            fortune_provider=self.fortune,
            rng=np.random.default_rng(7),
        )
        sounds = RecordingSounds()
        manager = SequenceManager(GlobalState(sounds))
        manager.initialize()
        manager.register_scene("game", scene)
        with contextlib.redirect_stdout(io.StringIO()):
            manager.start("game")

        self.assertFalse(scene.dealing)
        self.assertTrue(scene.user_interaction_enabled)
        self.assertEqual([], scene.icon_nodes)
        self.assertEqual([], manager.scheduler.pending())
        self.assertEqual([], sounds.played)

    def test_taps_during_dealing_are_ignored(self):
        self.update(0.81)
        self.assertEqual(1, len(self.scene.icon_nodes))
        self.tap_icon(0)
        self.assertEqual(0, self.scene.game.tap_calls)
        self.assertEqual([], self.scene.selection_indicators)

    def test_accepted_tap_while_progressing_keeps_playing(self):
        self.update(DEAL_TIME)
        self.tap_icon(0)

        self.assertEqual(1, self.scene.game.tap_calls)
        self.assertEqual(["1"], [n.value for n in self.scene.selection_indicators])
        self.assertEqual(GameStatus.PROGRESSING, self.scene.game.status)
        self.assertEqual("game", self.manager.current_name)
        self.update(5.0)
        self.assertEqual([], self.end.contexts)

    def test_rejected_tap_adds_no_indicator(self):
        self.update(DEAL_TIME)
        self.tap_icon(0)
        self.tap_icon(0)
        self.assertEqual(2, self.scene.game.tap_calls)
        self.assertEqual(1, len(self.scene.selection_indicators))

    def test_win_fetches_fortune_once_and_presents_it(self):
        self.update(DEAL_TIME)
        for icon_id in range(6):
            self.tap_icon(icon_id)

        self.assertEqual(GameStatus.WON, self.scene.game.status)
        self.assertEqual(1, self.fortune.calls)
        self.assertEqual([], self.scene.icon_nodes)
        self.assertEqual([], self.scene.selection_indicators)
        particles = [n for n in self.scene.nodes if isinstance(n, ParticleNode)]
        self.assertEqual(6, len(particles))
        self.assertFalse(any(isinstance(n, IconNode) for n in self.scene.nodes))

        self.update(0.0)
        self.assertEqual(
            [EndGameDescriptor(status=GameStatus.WON, text="Fortune favours the bold")],
            self.end.contexts,
        )
        self.assertEqual("end_game", self.manager.current_name)
        self.assertTrue(self.manager.transition.opening)
        self.assertEqual(1, self.fortune.calls)

    def test_fortune_failure_falls_back_to_fixed_text(self):
        self.fortune.text = None
        self.fortune.error = RuntimeError("offline")
        self.update(DEAL_TIME)

        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            for icon_id in range(6):
                self.tap_icon(icon_id)
        self.update(0.0)

        self.assertIn("offline", stderr.getvalue())
        self.assertEqual("You rule!", self.end.contexts[0].text)
        self.assertEqual(GameStatus.WON, self.end.contexts[0].status)

    def test_particles_are_removed_after_one_second(self):
        self.fortune.respond = False
        self.update(DEAL_TIME)
        for icon_id in range(6):
            self.tap_icon(icon_id)

        self.update(0.5)
        self.assertEqual(6, sum(isinstance(n, ParticleNode) for n in self.scene.nodes))
        self.update(0.51)
        self.assertEqual(0, sum(isinstance(n, ParticleNode) for n in self.scene.nodes))
        self.assertEqual([], self.end.contexts)

    def test_lose_presents_fixed_text_after_delay(self):
        self.update(DEAL_TIME)
        self.tap_icon(1)

        self.assertEqual(GameStatus.LOST, self.scene.game.status)
        self.assertFalse(self.scene.user_interaction_enabled)
        self.assertEqual([], self.scene.icon_nodes)
        self.assertEqual(0, self.fortune.calls)

        self.update(0.99)
        self.assertEqual([], self.end.contexts)
        self.update(0.02)
        self.assertEqual(
            [EndGameDescriptor(status=GameStatus.LOST, text="Oooops")], self.end.contexts
        )
        self.assertFalse(self.manager.transition.opening)

    def test_pending_transition_is_dropped_when_scene_exits(self):
        self.update(DEAL_TIME)
        self.tap_icon(1)
        with contextlib.redirect_stdout(io.StringIO()):
            self.manager.start("start")

        self.update(2.0)
        self.assertEqual([], self.end.contexts)
        self.assertEqual("start", self.manager.current_name)

    def test_restart_drops_reveals_of_previous_round(self):
        self.update(1.7)
        with contextlib.redirect_stdout(io.StringIO()):
            self.manager.start("game")
        self.update(DEAL_TIME)
        self.assertEqual(6, len(self.scene.icon_nodes))

    def test_escape_returns_to_start(self):
        with contextlib.redirect_stdout(io.StringIO()):
            self.manager.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        self.assertEqual("start", self.manager.current_name)

    def test_render_draws_without_errors(self):
        self.update(DEAL_TIME)
        surface = pygame.Surface((480, 800))
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.scene.render(surface)
        self.assertNotIn("render failed", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
