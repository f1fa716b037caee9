from __future__ import annotations

from typing import Any, List, Optional

import pygame

from ..game_state import EndGameDescriptor, GameStatus
from ..sequence import SceneInterface, SequenceManager

HEADLINES = {
    GameStatus.WON: "You won!",
    GameStatus.LOST: "You lost",
    GameStatus.PROGRESSING: "Game over",
}
BACKGROUNDS = {
    GameStatus.WON: (28, 64, 48),
    GameStatus.LOST: (70, 28, 32),
    GameStatus.PROGRESSING: (24, 26, 33),
}


def wrap_text(font: pygame.font.Font, text: str, max_width: int) -> List[str]:
    """Greedy word wrap; a single word wider than ``max_width`` keeps its own line."""
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and font.size(candidate)[0] > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


class EndGameScene(SceneInterface):
    """Shows how the round ended together with its message.

    Tap or SPACE starts a new round, Q or ESC quits.
    """

    def __init__(self, manager: Optional[SequenceManager] = None) -> None:
        super().__init__(manager)
        self.descriptor: Optional[EndGameDescriptor] = None
        self._title_font = None
        self._text_font = None

    @property
    def status(self) -> Optional[GameStatus]:
        return self.descriptor.status if self.descriptor is not None else None

    @property
    def text(self) -> str:
        return self.descriptor.text if self.descriptor is not None else ""

    def enter(self, context: Any = None) -> None:
        print("EndGameScene: enter")
        self.descriptor = context if isinstance(context, EndGameDescriptor) else None
        if not pygame.font.get_init():
            pygame.font.init()
        self._title_font = pygame.font.Font(None, 72)
        self._text_font = pygame.font.Font(None, 36)

    def exit(self) -> None:
        print("EndGameScene: exit")
        self.descriptor = None
        self._title_font = None
        self._text_font = None

    def render(self, surface) -> None:
        if surface is None:
            return
        if self._title_font is None or self._text_font is None:
            return

        status = self.status or GameStatus.PROGRESSING
        try:
            surface.fill(BACKGROUNDS[status])
            surf_w, surf_h = surface.get_size()

            title = self._title_font.render(HEADLINES[status], True, (255, 255, 255))
            surface.blit(title, title.get_rect(center=(surf_w // 2, surf_h // 3)))

            y = surf_h // 3 + title.get_height()
            for line in wrap_text(self._text_font, self.text, int(surf_w * 0.85)):
                label = self._text_font.render(line, True, (235, 235, 235))
                surface.blit(label, label.get_rect(midtop=(surf_w // 2, y)))
                y += label.get_height() + 6

            hint = self._text_font.render("Tap to play again / Q to quit", True, (170, 170, 170))
            surface.blit(hint, hint.get_rect(midbottom=(surf_w // 2, surf_h - 32)))
        except Exception as e:
            print("EndGameScene: render failed:", e)

    def handle_event(self, event) -> None:
        if event is None:
            return

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self._restart()
            elif event.key in (pygame.K_q, pygame.K_ESCAPE):
                self._request_quit()
        elif event.type == pygame.MOUSEBUTTONUP:
            # touches also arrive as FINGERUP
            if event.button == 1 and not getattr(event, "touch", False):
                self._restart()
        elif event.type == pygame.FINGERUP:
            self._restart()

    def _restart(self) -> None:
        if self.manager is not None:
            self.manager.start("game")

    def _request_quit(self) -> None:
        if self.manager is not None:
            self.manager.running = False
