"""App entrypoint: opens the window and runs the scene sequence.

    python packages/app/main.py --items 8 --seed 3
"""

import argparse
import os
import sys

import numpy as np
import pygame
from lib_order import (
    AppConfig,
    EndGameScene,
    FollowTheOrderGame,
    FortuneProvider,
    GameScene,
    GlobalState,
    SequenceManager,
    SoundBank,
    StartScene,
)


def parse_size(value):
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("window size must be positive")
    return width, height


def parse_args(argv=None) -> AppConfig:
    defaults = AppConfig()
    parser = argparse.ArgumentParser(description="Follow the Order memory game")
    parser.add_argument("--items", type=int, default=defaults.number_of_items)
    parser.add_argument("--size", type=parse_size, default=defaults.window_size)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--mute", action="store_true")
    parser.add_argument("--fortune-url", default=defaults.fortune_url)
    args = parser.parse_args(argv)
    if args.items < 1:
        parser.error("--items must be at least 1")
    return AppConfig(
        window_size=args.size,
        number_of_items=args.items,
        fortune_url=args.fortune_url,
        seed=args.seed,
        sound_enabled=not args.mute,
    )


def main(argv=None):
    config = parse_args(argv)
    rng = np.random.default_rng(config.seed)

    os.environ.setdefault("SDL_VIDEO_WINDOW_POS", "%d,%d" % (100, 50))
    pygame.init()
    screen = pygame.display.set_mode(config.window_size)
    pygame.display.set_caption("Follow the Order")

    sounds = SoundBank(enabled=config.sound_enabled)
    sounds.load()

    manager = SequenceManager(GlobalState(sounds=sounds))
    manager.initialize()

    manager.register_scene("start", StartScene())
    manager.register_scene(
        "game",
        GameScene(
            size=config.window_size,
            game_factory=lambda: FollowTheOrderGame(config.number_of_items, rng),
            fortune_provider=FortuneProvider(config.fortune_url, config.fortune_timeout),
            rng=rng,
        ),
    )
    manager.register_scene("end_game", EndGameScene())

    manager.start("start")

    clock = pygame.time.Clock()
    running = True
    while running and manager.running:
        dt = clock.tick(config.fps) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            manager.handle_event(event)

        manager.update(dt)
        manager.render(screen)
        pygame.display.flip()

    manager.shutdown()

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
