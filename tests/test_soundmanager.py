import pytest

from meez3d.soundmanager import NoopSoundPlayer, Sound, SoundManager, SoundPlayer


class RecordingPlayer(SoundPlayer):
    def __init__(self):
        self.played = []

    def play(self, sound):
        self.played.append(sound)


def test_manager_forwards_to_player():
    player = RecordingPlayer()
    manager = SoundManager(player)
    manager.play(Sound.CLICK)
    manager.play(Sound.CLICK)
    assert player.played == [Sound.CLICK, Sound.CLICK]


def test_noop_player_returns_nothing():
    assert NoopSoundPlayer().play(Sound.CLICK) is None
    assert SoundManager.noop_manager().play(Sound.CLICK) is None


def test_sound_player_requires_play():
    class Incomplete(SoundPlayer):
        pass

    with pytest.raises(TypeError):
        SoundManager(Incomplete())


def test_click_is_first_sound():
    assert Sound(0) is Sound.CLICK