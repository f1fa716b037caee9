"""Sequence manager and Scene interface for lib_order.

Scenes are registered by name; the manager switches between them, forwards
update/render/event calls to the active one and owns the main-loop
scheduler. Switching with ``present`` can run a wipe transition between the
last frame of the old scene and the new one.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, Optional

import pygame

from .scheduler import Scheduler
from .sound import SoundBank
from .transition import DoorsTransition


class SceneInterface(abc.ABC):
    """Abstract interface for a scene.

    Implementations override the lifecycle methods they need; the defaults
    are no-ops.
    """

    def __init__(self, manager: Optional["SequenceManager"] = None) -> None:
        self.manager = manager

    def enter(self, context: Any = None) -> None:
        """Called when the scene becomes active.

        context is whatever the previous scene handed over, or None.
        """
        return None

    def exit(self) -> None:
        """Called when the scene is no longer active."""
        return None

    def update(self, dt: float) -> None:
        """Update scene logic. dt is seconds since last update."""
        return None

    def render(self, surface: Optional[pygame.Surface]) -> None:
        """Render the scene to the given drawing surface (pygame.Surface).

        surface may be None in non-graphical tests.
        """
        return None

    def handle_event(self, event: Optional[pygame.event.Event]) -> None:
        """Handle an input/event object (pygame.Event or similar)."""
        return None


class GlobalState:
    """Services shared by every scene for the whole session."""

    def __init__(self, sounds: Optional[SoundBank] = None) -> None:
        self.sounds = sounds if sounds is not None else SoundBank(enabled=False)


class SequenceManager:
    """Simple manager for scenes/sequences.

    Responsibilities:
    - register scenes
    - switch active scene, optionally through a transition
    - advance the scheduler once per frame
    - forward update/render/event calls
    """

    def __init__(self, global_state: Optional[GlobalState] = None) -> None:
        self._scenes: Dict[str, SceneInterface] = {}
        self._current: Optional[SceneInterface] = None
        self._current_name: Optional[str] = None
        self.running: bool = False
        self.global_state = global_state if global_state is not None else GlobalState()
        self.scheduler = Scheduler()

        self._transition: Optional[DoorsTransition] = None
        self._outgoing_frame: Optional[pygame.Surface] = None
        self._last_surface: Optional[pygame.Surface] = None

    @property
    def current(self) -> Optional[SceneInterface]:
        return self._current

    @property
    def current_name(self) -> Optional[str]:
        return self._current_name

    @property
    def transition(self) -> Optional[DoorsTransition]:
        return self._transition

    def initialize(self) -> None:
        """Initialize manager resources. Call before starting the loop."""
        self.running = True

    def register_scene(self, name: str, scene: SceneInterface) -> None:
        """Register a scene instance under a name."""
        scene.manager = self
        self._scenes[name] = scene

    def start(self, name: str, context: Any = None) -> None:
        """Switch to the named scene, calling lifecycle hooks."""
        if self._current is not None:
            self._current.exit()

        self._current = self._scenes.get(name)
        self._current_name = name if self._current is not None else None
        if self._current is not None:
            self._current.enter(context)

    def present(
        self,
        name: str,
        context: Any = None,
        transition: Optional[DoorsTransition] = None,
    ) -> None:
        """Switch scenes like ``start``, wiping from the last rendered frame."""
        self._outgoing_frame = None
        if transition is not None and self._last_surface is not None:
            self._outgoing_frame = self._last_surface.copy()
        self._transition = transition
        self.start(name, context)

    def update(self, dt: float) -> None:
        """Run due callbacks, advance any transition, then update the scene.

        A transition started by one of this frame's callbacks starts moving
        on the next frame, so its first frame is drawn at progress zero.
        """
        ongoing = self._transition
        self.scheduler.advance(dt)

        if ongoing is not None and ongoing is self._transition:
            ongoing.advance(dt)

        if self._current is not None:
            self._current.update(dt)

    def render(self, surface: Any) -> None:
        """Forward render to current scene."""
        if self._current is None:
            return

        transition = self._transition
        if transition is None or surface is None:
            self._current.render(surface)
        else:
            incoming = pygame.Surface(surface.get_size())
            self._current.render(incoming)
            transition.compose(surface, self._outgoing_frame, incoming)
            if transition.done:
                self._transition = None
                self._outgoing_frame = None

        if surface is not None:
            self._last_surface = surface

    def handle_event(self, event: Any) -> None:
        """Forward event to current scene; input is held back mid-transition."""
        if self._current is None:
            return
        if self._transition is not None and not self._transition.done:
            if event is not None and event.type in _INPUT_EVENTS:
                return
        self._current.handle_event(event)

    def shutdown(self) -> None:
        """Shutdown manager and active scene."""
        if self._current is not None:
            self._current.exit()
        self._current = None
        self._current_name = None
        self.running = False


_INPUT_EVENTS = frozenset(
    (
        pygame.MOUSEBUTTONDOWN,
        pygame.MOUSEBUTTONUP,
        pygame.FINGERDOWN,
        pygame.FINGERUP,
        pygame.KEYDOWN,
    )
)
