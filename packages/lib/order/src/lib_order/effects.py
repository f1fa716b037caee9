"""Named particle effects.

Effects are looked up by name, the way the scenes ask for a resource.
An unknown name resolves to ``None`` and the caller simply skips it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
import pygame


@dataclass(frozen=True)
class EmitterPreset:
    colors: Sequence[Tuple[int, int, int]]
    count: int
    speed: Tuple[float, float]
    lifetime: float
    size: Tuple[float, float]
    gravity: float = 0.0
    extent: int = 240


EMITTERS: Dict[str, EmitterPreset] = {
    "VictoryExplosion": EmitterPreset(
        colors=((255, 215, 0), (255, 255, 255), (111, 207, 151), (86, 204, 242)),
        count=48,
        speed=(60.0, 220.0),
        lifetime=0.9,
        size=(2.0, 5.0),
        gravity=160.0,
    ),
    "LoseExplosion": EmitterPreset(
        colors=((120, 120, 120), (70, 70, 70), (235, 87, 87)),
        count=32,
        speed=(20.0, 110.0),
        lifetime=1.0,
        size=(3.0, 7.0),
        gravity=-40.0,
    ),
}


class ParticleNode(pygame.sprite.Sprite):
    """A burst of particles drawn onto one sprite centered at ``position``."""

    def __init__(
        self,
        preset: EmitterPreset,
        position: Tuple[int, int],
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__()
        rng = rng if rng is not None else np.random.default_rng()
        self.preset = preset
        self.position = position

        angles = rng.uniform(0.0, 2.0 * np.pi, preset.count)
        speeds = rng.uniform(preset.speed[0], preset.speed[1], preset.count)
        self.offsets = np.zeros((preset.count, 2), dtype=float)
        self.velocities = np.column_stack(
            (np.cos(angles) * speeds, np.sin(angles) * speeds)
        )
        self.sizes = rng.uniform(preset.size[0], preset.size[1], preset.count)
        self.color_index = rng.integers(0, len(preset.colors), preset.count)
        self.age = 0.0

        self.image = pygame.Surface((preset.extent, preset.extent), pygame.SRCALPHA)
        self.rect = self.image.get_rect(center=position)
        self._redraw()

    @property
    def alive_fraction(self) -> float:
        if self.preset.lifetime <= 0:
            return 0.0
        return max(0.0, 1.0 - self.age / self.preset.lifetime)

    def update(self, dt: float = 0.0) -> None:
        self.age += dt
        self.velocities[:, 1] += self.preset.gravity * dt
        self.offsets += self.velocities * dt
        self._redraw()

    def _redraw(self) -> None:
        self.image.fill((0, 0, 0, 0))
        fade = self.alive_fraction
        if fade <= 0.0:
            return
        half = self.preset.extent / 2.0
        alpha = int(255 * fade)
        for (dx, dy), size, color_idx in zip(self.offsets, self.sizes, self.color_index):
            x, y = half + dx, half + dy
            if not (0 <= x < self.preset.extent and 0 <= y < self.preset.extent):
                continue
            r, g, b = self.preset.colors[int(color_idx)]
            pygame.draw.circle(
                self.image, (r, g, b, alpha), (int(x), int(y)), max(int(size * fade), 1)
            )


def load_emitter(
    name: str,
    position: Tuple[int, int],
    rng: Optional[np.random.Generator] = None,
) -> Optional[ParticleNode]:
    preset = EMITTERS.get(name)
    if preset is None:
        return None
    return ParticleNode(preset, position, rng)
