import pytest

from meez3d.rendercontext import RenderContext
from meez3d.scene import Renderer, Scene, SceneResult, SceneResultKind
from meez3d.soundmanager import SoundManager


class CountingScene(Scene):
    def __init__(self):
        self.updates = 0
        self.drawn_over = []

    def update(self, context, inputs, sounds):
        self.updates += 1
        if self.updates >= 2:
            return SceneResult(SceneResultKind.POP)
        return SceneResult(SceneResultKind.CONTINUE)

    def draw(self, context, font, previous):
        self.drawn_over.append(previous)


def test_kill_screen_carries_text():
    result = SceneResult.kill_screen("hello world")
    assert result.kind is SceneResultKind.PUSH_KILL_SCREEN
    assert result.text == "hello world"


def test_plain_results_have_no_text():
    result = SceneResult(SceneResultKind.PUSH_LEVEL)
    assert result.text is None
    assert result == SceneResult(SceneResultKind.PUSH_LEVEL)


def test_kill_screen_without_text_rejected():
    with pytest.raises(ValueError):
        SceneResult(SceneResultKind.PUSH_KILL_SCREEN)


def test_text_on_other_kind_rejected():
    with pytest.raises(ValueError):
        SceneResult(SceneResultKind.POP, "oops")


def test_scene_is_abstract():
    with pytest.raises(TypeError):
        Scene()


def test_renderer_is_abstract():
    with pytest.raises(TypeError):
        Renderer()


def test_subclassed_scene_update_and_draw():
    scene = CountingScene()
    context = RenderContext(640, 400, 0)
    sounds = SoundManager.noop_manager()
    first = scene.update(context, None, sounds)
    second = scene.update(context, None, sounds)
    assert first.kind is SceneResultKind.CONTINUE
    assert second.kind is SceneResultKind.POP
    other = CountingScene()
    scene.draw(context, None, other)
    assert scene.drawn_over == [other]