"""Sound effects and the players that produce them."""

from __future__ import annotations

import abc
import enum


class Sound(enum.IntEnum):
    """Sound effects the game can play."""

    CLICK = 0


class SoundPlayer(abc.ABC):
    """Something that can play a sound effect."""

    @abc.abstractmethod
    def play(self, sound: Sound) -> None:
        """Start playing the given sound."""


class NoopSoundPlayer(SoundPlayer):
    """A player that plays nothing."""

    def play(self, sound: Sound) -> None:
        return None


class SoundManager:
    """Front end that forwards sound requests to a player."""

    def __init__(self, internal: SoundPlayer) -> None:
        self._internal = internal

    @classmethod
    def noop_manager(cls) -> SoundManager:
        return cls(NoopSoundPlayer())

    def play(self, sound: Sound) -> None:
        self._internal.play(sound)