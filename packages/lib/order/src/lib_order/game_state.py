"""Types shared between the scenes and the game rules."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol, Sequence


class GameStatus(enum.Enum):
    PROGRESSING = "progressing"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.PROGRESSING


@dataclass(frozen=True)
class Icon:
    id: int
    category: str


class GameState(Protocol):
    """What the game scene needs from a rules engine.

    The scene only reads these attributes and calls ``tap``; it never
    decides whether a selection is valid or the game is over.
    """

    @property
    def number_of_items(self) -> int: ...

    @property
    def icons(self) -> Sequence[Icon]: ...

    @property
    def status(self) -> GameStatus: ...

    @property
    def number_of_selected_items(self) -> int: ...

    def tap(self, icon_id: int) -> bool: ...


@dataclass(frozen=True)
class EndGameDescriptor:
    """Hand-off from the game scene to the end-of-game scene."""

    status: GameStatus
    text: str
