from __future__ import annotations

from typing import Optional

import pygame


class DoorsTransition:
    """Horizontal doors wipe between two frames.

    Opening doors split the outgoing frame into a top and a bottom half
    that move apart; closing doors bring the halves of the incoming frame
    together over the outgoing one.
    """

    def __init__(self, opening: bool, duration: float) -> None:
        self.opening = opening
        self.duration = max(duration, 0.0)
        self.elapsed = 0.0

    @property
    def progress(self) -> float:
        if self.duration == 0.0:
            return 1.0
        return min(self.elapsed / self.duration, 1.0)

    @property
    def done(self) -> bool:
        return self.progress >= 1.0

    def advance(self, dt: float) -> None:
        self.elapsed += max(dt, 0.0)

    def compose(
        self,
        target: pygame.Surface,
        outgoing: Optional[pygame.Surface],
        incoming: pygame.Surface,
    ) -> None:
        # ease out
        p = 1.0 - (1.0 - self.progress) ** 2
        if self.opening:
            target.blit(incoming, (0, 0))
            if outgoing is not None:
                self._blit_doors(target, outgoing, p)
        else:
            if outgoing is not None:
                target.blit(outgoing, (0, 0))
            else:
                target.fill((0, 0, 0))
            self._blit_doors(target, incoming, 1.0 - p)

    @staticmethod
    def _blit_doors(target: pygame.Surface, frame: pygame.Surface, openness: float) -> None:
        width = min(target.get_width(), frame.get_width())
        height = min(target.get_height(), frame.get_height())
        half = height // 2
        if width == 0 or half == 0:
            return
        shift = int(round(half * openness))
        top = frame.subsurface(pygame.Rect(0, 0, width, half))
        bottom = frame.subsurface(pygame.Rect(0, half, width, height - half))
        target.blit(top, (0, -shift))
        target.blit(bottom, (0, half + shift))


def doors_open_horizontal(duration: float) -> DoorsTransition:
    return DoorsTransition(opening=True, duration=duration)


def doors_close_horizontal(duration: float) -> DoorsTransition:
    return DoorsTransition(opening=False, duration=duration)
