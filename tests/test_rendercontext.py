import pytest

from meez3d.constants import CIRCLE_STEPS, MAX_LIGHTS
from meez3d.geometry import Point, Rect
from meez3d.rendercontext import (
    Color,
    FillRectEntry,
    FillTriangleEntry,
    Light,
    LineEntry,
    RenderContext,
    RenderLayer,
    SpriteBatch,
    SpriteEntry,
)

RED = Color(255, 0, 0, 255)
SPRITE = object()


def test_new_batch_is_empty_and_transparent():
    batch = SpriteBatch()
    assert batch.entries == []
    assert batch.clear_color == Color(0, 0, 0, 0)


def test_draw_appends_sprite_entry():
    batch = SpriteBatch()
    dst = Rect(1, 2, 3, 4)
    src = Rect(5, 6, 7, 8)
    batch.draw(SPRITE, dst, src, True)
    assert batch.entries == [SpriteEntry(SPRITE, src, dst, True)]


def test_fill_rect_and_triangle():
    batch = SpriteBatch()
    rect = Rect(0, 0, 10, 10)
    batch.fill_rect(rect, RED)
    batch.fill_triangle(Point(0, 0), Point(1, 0), Point(0, 1), RED)
    assert batch.entries == [
        FillRectEntry(rect, RED),
        FillTriangleEntry(Point(0, 0), Point(1, 0), Point(0, 1), RED),
    ]


def test_horizontal_line_becomes_rect():
    batch = SpriteBatch()
    batch.draw_line(Point(10, 20), Point(40, 20), RED, 3)
    assert batch.entries == [FillRectEntry(Rect(10, 19, 30, 3), RED)]


def test_horizontal_line_direction_does_not_matter():
    forward = SpriteBatch()
    backward = SpriteBatch()
    forward.draw_line(Point(10, 20), Point(40, 20), RED, 4)
    backward.draw_line(Point(40, 20), Point(10, 20), RED, 4)
    assert forward.entries == backward.entries


def test_vertical_line_becomes_rect_covering_endpoints():
    forward = SpriteBatch()
    backward = SpriteBatch()
    forward.draw_line(Point(5, 10), Point(5, 30), RED, 1)
    backward.draw_line(Point(5, 30), Point(5, 10), RED, 1)
    assert forward.entries == backward.entries
    (entry,) = forward.entries
    assert isinstance(entry, FillRectEntry)
    assert entry.destination.w == 1
    assert entry.destination.contains(Point(5, 10))
    assert entry.destination.contains(Point(5, 30))


def test_diagonal_line_is_line_entry():
    batch = SpriteBatch()
    batch.draw_line(Point(0, 0), Point(3, 7), RED, 2)
    assert batch.entries == [LineEntry(Point(0, 0), Point(3, 7), RED, 2)]


def test_fill_circle_fans_from_center():
    batch = SpriteBatch()
    center = Point(100, 50)
    batch.fill_circle(center, 10.0, RED)
    assert CIRCLE_STEPS <= len(batch.entries) <= CIRCLE_STEPS + 1
    assert all(isinstance(e, FillTriangleEntry) for e in batch.entries)
    assert all(e.p1 == center for e in batch.entries)
    assert batch.entries[0].p3 == Point(110, 50)


def test_fill_arc_consecutive_triangles_share_points():
    batch = SpriteBatch()
    batch.fill_arc(Point(0, 0), 20.0, 0.0, 1.0, RED)
    assert batch.entries
    for prev, nxt in zip(batch.entries, batch.entries[1:]):
        assert prev.p2 == nxt.p3


def test_fill_arc_with_end_before_start_draws_nothing():
    batch = SpriteBatch()
    batch.fill_arc(Point(0, 0), 5.0, 1.0, 0.5, RED)
    assert batch.entries == []


def test_draw_circle_outline_entries():
    batch = SpriteBatch()
    batch.draw_circle(Point(0, 0), 15.0, RED, 1)
    assert CIRCLE_STEPS <= len(batch.entries) <= CIRCLE_STEPS + 1
    assert all(isinstance(e, (FillRectEntry, LineEntry)) for e in batch.entries)


def test_logical_area():
    context = RenderContext(640, 400, 7)
    assert context.logical_area() == Rect(0, 0, 640, 400)
    assert context.frame == 7
    assert context.is_dark is False


def test_draw_routes_by_layer():
    context = RenderContext(10, 10, 0)
    dst = Rect(0, 0, 1, 1)
    src = Rect(0, 0, 2, 2)
    context.draw(SPRITE, RenderLayer.PLAYER, dst, src)
    context.draw_reversed(SPRITE, RenderLayer.HUD, dst, src)
    assert context.player_batch.entries == [SpriteEntry(SPRITE, src, dst, False)]
    assert context.hud_batch.entries == [SpriteEntry(SPRITE, src, dst, True)]


def test_fill_rect_routes_by_layer():
    context = RenderContext(10, 10, 0)
    rect = Rect(1, 1, 2, 2)
    context.fill_rect(rect, RenderLayer.HUD, RED)
    assert context.hud_batch.entries == [FillRectEntry(rect, RED)]
    assert context.player_batch.entries == []


def test_clear_resets_entries_and_colors():
    context = RenderContext(10, 10, 0)
    context.fill_rect(Rect(0, 0, 1, 1), RenderLayer.PLAYER, RED)
    context.fill_rect(Rect(0, 0, 1, 1), RenderLayer.HUD, RED)
    context.clear()
    assert context.player_batch.entries == []
    assert context.hud_batch.entries == []
    assert context.player_batch.clear_color == Color(0, 0, 0, 255)
    assert context.hud_batch.clear_color == Color(0, 0, 0, 0)


def test_add_light_caps_at_max():
    context = RenderContext(10, 10, 0)
    for i in range(MAX_LIGHTS + 5):
        context.add_light(Point(i, i), 3)
    assert len(context.lights) == MAX_LIGHTS
    assert context.lights[0] == Light(Point(0, 0), 3)


def test_invalid_layer_rejected():
    context = RenderContext(10, 10, 0)
    with pytest.raises(ValueError):
        context.fill_rect(Rect(0, 0, 1, 1), "player", RED)