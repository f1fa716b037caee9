"""lib_order package exports.

Scenes and building blocks of the "Follow the Order" memory game: icons
are dealt one after another and have to be tapped back in the same order.
"""

from .config import DRAWING, AppConfig, DrawingConst
from .deal import DealScheduler, compute_positions, grid_rows
from .fortune import FortuneProvider
from .game_state import EndGameDescriptor, GameState, GameStatus, Icon
from .input_bridge import InputBridge
from .rules import FollowTheOrderGame
from .scenes.end_game import EndGameScene
from .scenes.game import GameScene
from .scenes.start import StartScene
from .scheduler import Scheduler
from .sequence import GlobalState, SceneInterface, SequenceManager
from .sound import SoundBank

__all__ = [
    "AppConfig",
    "DRAWING",
    "DrawingConst",
    "DealScheduler",
    "compute_positions",
    "grid_rows",
    "FortuneProvider",
    "EndGameDescriptor",
    "GameState",
    "GameStatus",
    "Icon",
    "InputBridge",
    "FollowTheOrderGame",
    "Scheduler",
    "SequenceManager",
    "SceneInterface",
    "GlobalState",
    "SoundBank",
    "StartScene",
    "GameScene",
    "EndGameScene",
]
