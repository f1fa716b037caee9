"""Drawing, timing and application settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_FORTUNE_URL = "https://api.adviceslip.com/advice"


@dataclass(frozen=True)
class DrawingConst:
    icons_top_offset: int = 150
    icon_side: int = 80
    min_icon_scattering: int = 50
    deal_animation_delay: float = 0.8

    select_scale: float = 0.9
    select_scale_duration: float = 0.15
    particle_lifetime: float = 1.0
    lose_transition_delay: float = 1.0
    transition_duration: float = 0.5

    win_fallback_text: str = "You rule!"
    lose_text: str = "Oooops"

    @property
    def icon_size(self) -> Tuple[int, int]:
        return (self.icon_side, self.icon_side)


DRAWING = DrawingConst()


@dataclass
class AppConfig:
    """Options of the application entry point."""

    window_size: Tuple[int, int] = (480, 800)
    number_of_items: int = 6
    fps: int = 60
    fortune_url: str = DEFAULT_FORTUNE_URL
    fortune_timeout: float = 5.0
    seed: Optional[int] = None
    sound_enabled: bool = True
