from typing import Any, Optional

import pygame

from ..sequence import SceneInterface


class StartScene(SceneInterface):
    def __init__(self, manager=None):
        super().__init__(manager)
        self._title_font = None
        self._hint_font = None

    def enter(self, context: Any = None):
        """Prepare fonts for the title screen."""
        if not pygame.font.get_init():
            pygame.font.init()
        self._title_font = pygame.font.Font(None, 64)
        self._hint_font = pygame.font.Font(None, 32)

        print("StartScene: enter")

    def exit(self):
        self._title_font = None
        self._hint_font = None
        print("StartScene: exit")

    def render(self, surface: Optional[pygame.Surface]) -> None:
        """Render the title and a short hint centered on the surface.

        If `surface` is None (fallback mode) this prints a short message
        instead of raising.
        """
        if surface is None:
            print("StartScene: render (no surface)")
            return

        if self._title_font is None or self._hint_font is None:
            return

        try:
            surf_w, surf_h = surface.get_size()
            surface.fill((24, 26, 33))
            title = self._title_font.render("Follow the Order", True, (255, 255, 255))
            surface.blit(title, title.get_rect(center=(surf_w // 2, surf_h // 2 - 40)))
            lines = ("Remember the order the icons appear,", "then tap them back. Tap to start.")
            y = surf_h // 2 + 10
            for line in lines:
                label = self._hint_font.render(line, True, (180, 180, 180))
                surface.blit(label, label.get_rect(midtop=(surf_w // 2, y)))
                y += label.get_height() + 4
        except Exception as e:
            print("StartScene: render failed:", e)

    def handle_event(self, event) -> None:
        """Handle events on the start screen.

        Pressing the 's' key or tapping transitions to the game scene via
        the registered sequence manager.
        """
        if event is None:
            return None

        start = False
        if event.type == pygame.KEYDOWN:
            start = event.key == pygame.K_s
        elif event.type == pygame.MOUSEBUTTONUP:
            start = event.button == 1 and not getattr(event, "touch", False)
        elif event.type == pygame.FINGERUP:
            start = True

        if start and self.manager is not None:
            self.manager.start("game")
