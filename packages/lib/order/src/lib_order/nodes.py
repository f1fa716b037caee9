from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

import pygame

from .game_state import Icon

CATEGORY_COLORS: Dict[str, Tuple[int, int, int]] = {
    "circle": (235, 87, 87),
    "square": (242, 201, 76),
    "triangle": (111, 207, 151),
    "diamond": (86, 204, 242),
    "ring": (187, 107, 217),
    "cross": (242, 153, 74),
}
_FALLBACK_COLOR = (200, 200, 200)


def _draw_icon(category: str, side: int) -> pygame.Surface:
    surface = pygame.Surface((side, side), pygame.SRCALPHA)
    color = CATEGORY_COLORS.get(category, _FALLBACK_COLOR)
    pygame.draw.rect(surface, (40, 44, 52), surface.get_rect(), border_radius=side // 6)

    inner = surface.get_rect().inflate(-side // 3, -side // 3)
    if category == "circle":
        pygame.draw.circle(surface, color, inner.center, inner.width // 2)
    elif category == "square":
        pygame.draw.rect(surface, color, inner)
    elif category == "triangle":
        pygame.draw.polygon(
            surface, color, [inner.midtop, inner.bottomright, inner.bottomleft]
        )
    elif category == "diamond":
        pygame.draw.polygon(
            surface, color, [inner.midtop, inner.midright, inner.midbottom, inner.midleft]
        )
    elif category == "ring":
        pygame.draw.circle(surface, color, inner.center, inner.width // 2, width=side // 10)
    elif category == "cross":
        bar = max(side // 8, 2)
        pygame.draw.line(surface, color, inner.topleft, inner.bottomright, bar)
        pygame.draw.line(surface, color, inner.topright, inner.bottomleft, bar)
    else:
        pygame.draw.circle(surface, color, inner.center, inner.width // 4)
    return surface


class IconNode(pygame.sprite.Sprite):
    """Sprite showing one game icon, positioned by its center."""

    def __init__(
        self, icon: Icon, position: Tuple[int, int], size: Tuple[int, int]
    ) -> None:
        super().__init__()
        self.icon = icon
        self.size = size
        self.scale = 1.0
        self._base_image = _draw_icon(icon.category, min(size))
        if self._base_image.get_size() != tuple(size):
            self._base_image = pygame.transform.smoothscale(self._base_image, size)
        self.image = self._base_image
        self.rect = self.image.get_rect(center=position)

        self._scale_from = 1.0
        self._scale_to = 1.0
        self._scale_duration = 0.0
        self._scale_elapsed = 0.0

    @property
    def position(self) -> Tuple[int, int]:
        return self.rect.center

    @property
    def animating(self) -> bool:
        return self._scale_elapsed < self._scale_duration

    def run_scale(self, factor: float, duration: float) -> None:
        """Scale relative to the current scale over ``duration`` seconds."""
        self._scale_from = self.scale
        self._scale_to = self.scale * factor
        self._scale_duration = max(duration, 0.0)
        self._scale_elapsed = 0.0
        if self._scale_duration == 0.0:
            self._apply_scale(self._scale_to)

    def update(self, dt: float = 0.0) -> None:
        if not self.animating:
            return
        self._scale_elapsed = min(self._scale_elapsed + dt, self._scale_duration)
        t = self._scale_elapsed / self._scale_duration
        self._apply_scale(self._scale_from + (self._scale_to - self._scale_from) * t)

    def _apply_scale(self, scale: float) -> None:
        self.scale = scale
        width = max(int(round(self.size[0] * scale)), 1)
        height = max(int(round(self.size[1] * scale)), 1)
        center = self.rect.center
        self.image = pygame.transform.smoothscale(self._base_image, (width, height))
        self.rect = self.image.get_rect(center=center)


class SelectionIndicatorNode(pygame.sprite.Sprite):
    """Numbered badge left where an accepted tap landed."""

    def __init__(
        self,
        at: Tuple[int, int],
        radius: float,
        value: str,
        font: Optional[pygame.font.Font] = None,
    ) -> None:
        super().__init__()
        self.value = value
        self.radius = radius

        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(None, max(int(radius * 1.4), 8))

        side = int(math.ceil(radius * 2)) + 2
        self.image = pygame.Surface((side, side), pygame.SRCALPHA)
        center = (side // 2, side // 2)
        pygame.draw.circle(self.image, (255, 255, 255), center, int(radius))
        pygame.draw.circle(self.image, (30, 30, 30), center, int(radius), width=2)
        label = font.render(value, True, (30, 30, 30))
        self.image.blit(label, label.get_rect(center=center))
        self.rect = self.image.get_rect(center=at)

    @property
    def position(self) -> Tuple[int, int]:
        return self.rect.center
