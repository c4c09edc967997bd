"""Scenes, the results they return each frame, and sprite loaders."""

from __future__ import annotations

import abc
import enum
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from meez3d.rendercontext import RenderContext
    from meez3d.soundmanager import SoundManager


class SceneResultKind(enum.Enum):
    CONTINUE = "continue"
    POP = "pop"
    POP_TWO = "pop_two"
    PUSH_MENU = "push_menu"
    PUSH_LEVEL = "push_level"
    RELOAD_LEVEL = "reload_level"
    PUSH_KILL_SCREEN = "push_kill_screen"
    PUSH_PAUSE = "push_pause"


@dataclass(frozen=True)
class SceneResult:
    """What the scene stack should do after a scene's update."""

    kind: SceneResultKind
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is SceneResultKind.PUSH_KILL_SCREEN:
            if self.text is None:
                raise ValueError("a kill screen result needs text")
        elif self.text is not None:
            raise ValueError(f"{self.kind.name} results carry no text")

    @classmethod
    def kill_screen(cls, text: str) -> SceneResult:
        return cls(SceneResultKind.PUSH_KILL_SCREEN, text)


class Scene(abc.ABC):
    """One screen of the game: a level, a menu and the like."""

    @abc.abstractmethod
    def update(
        self, context: RenderContext, inputs: Any, sounds: SoundManager
    ) -> SceneResult:
        """Advance one frame and say what should happen next."""

    @abc.abstractmethod
    def draw(
        self, context: RenderContext, font: Any, previous: Optional[Scene]
    ) -> None:
        """Queue this scene's drawing, optionally over a previous scene."""


class Renderer(abc.ABC):
    """A backend able to load sprites from image files."""

    @abc.abstractmethod
    def load_sprite(self, path: Union[str, os.PathLike]) -> Any:
        """Load the image at path and return a sprite for it."""