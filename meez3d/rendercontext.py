"""Per-frame draw lists for the player and HUD layers."""

from __future__ import annotations

import enum
import logging
import math
import struct
from dataclasses import dataclass, field
from typing import Any, List, Union

from meez3d.constants import CIRCLE_STEPS, MAX_LIGHTS
from meez3d.geometry import Point, Rect

logger = logging.getLogger(__name__)


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


_PI = _f32(math.pi)
_TWO_PI = _f32(2.0 * _PI)


def _half(width: int) -> int:
    """Halve an integer, rounding toward zero."""
    return int(width / 2)


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int


@dataclass(frozen=True)
class SpriteEntry:
    sprite: Any
    source: Rect
    destination: Rect
    reversed: bool


@dataclass(frozen=True)
class FillRectEntry:
    destination: Rect
    color: Color


@dataclass(frozen=True)
class FillTriangleEntry:
    p1: Point
    p2: Point
    p3: Point
    color: Color


@dataclass(frozen=True)
class LineEntry:
    start: Point
    end: Point
    color: Color
    width: int


SpriteBatchEntry = Union[SpriteEntry, FillRectEntry, FillTriangleEntry, LineEntry]


def _transparent() -> Color:
    return Color(0, 0, 0, 0)


@dataclass
class SpriteBatch:
    """An ordered list of drawing operations for one layer."""

    clear_color: Color = field(default_factory=_transparent)
    entries: List[SpriteBatchEntry] = field(default_factory=list)

    def draw(self, sprite: Any, dst: Rect, src: Rect, reversed: bool) -> None:
        self.entries.append(SpriteEntry(sprite, src, dst, reversed))

    def fill_rect(self, rect: Rect, color: Color) -> None:
        self.entries.append(FillRectEntry(rect, color))

    def fill_triangle(self, p1: Point, p2: Point, p3: Point, color: Color) -> None:
        self.entries.append(FillTriangleEntry(p1, p2, p3, color))

    def draw_line(self, point1: Point, point2: Point, color: Color, width: int) -> None:
        """Draw a line; horizontal and vertical lines become filled rectangles."""
        if point1.y == point2.y:
            left, right = sorted((point1, point2), key=lambda p: p.x)
            rect = Rect(left.x, left.y - _half(width), right.x - left.x, width)
            self.fill_rect(rect, color)
        elif point1.x == point2.x:
            top, bottom = sorted((point1, point2), key=lambda p: p.y)
            rect = Rect(top.x - _half(width), top.y, width, bottom.y - top.y)
            self.fill_rect(rect, color)
        else:
            self.entries.append(LineEntry(point1, point2, color, width))

    def fill_circle(self, center: Point, radius: float, color: Color) -> None:
        self.fill_arc(center, radius, 0.0, _TWO_PI, color)

    def _ring_points(self, center: Point, radius: float, start: float, end: float):
        """Yield successive pairs of points on a circle from start up to end."""
        radius = _f32(radius)
        dtheta = _f32(_TWO_PI / CIRCLE_STEPS)
        theta = _f32(start)
        current = (_f32(math.cos(theta)), _f32(math.sin(theta)))
        while theta <= end:
            next_theta = _f32(theta + dtheta)
            nxt = (_f32(math.cos(next_theta)), _f32(math.sin(next_theta)))
            p1 = Point(
                int(_f32(current[0] * radius)) + center.x,
                int(_f32(current[1] * radius)) + center.y,
            )
            p2 = Point(
                int(_f32(nxt[0] * radius)) + center.x,
                int(_f32(nxt[1] * radius)) + center.y,
            )
            yield p1, p2
            current = nxt
            theta = next_theta

    def fill_arc(
        self,
        center: Point,
        radius: float,
        start_theta: float,
        end_theta: float,
        color: Color,
    ) -> None:
        """Fill a pie slice with triangles fanning out from the centre."""
        for p1, p2 in self._ring_points(center, radius, start_theta, _f32(end_theta)):
            self.fill_triangle(center, p2, p1, color)

    def draw_circle(self, center: Point, radius: float, color: Color, width: int) -> None:
        """Outline a circle with line segments."""
        for p1, p2 in self._ring_points(center, radius, 0.0, _TWO_PI):
            self.draw_line(p1, p2, color, width)


@dataclass(frozen=True)
class Light:
    position: Point
    radius: int


class RenderLayer(enum.Enum):
    PLAYER = "player"
    HUD = "hud"


class RenderContext:
    """Everything drawn in one frame, split into player and HUD layers."""

    def __init__(self, width: int, height: int, frame: int) -> None:
        self.player_batch = SpriteBatch()
        self.hud_batch = SpriteBatch()
        self.width = width
        self.height = height
        self.frame = frame
        self.lights: List[Light] = []
        self.is_dark = False

    def _batch(self, layer: RenderLayer) -> SpriteBatch:
        if layer is RenderLayer.PLAYER:
            return self.player_batch
        if layer is RenderLayer.HUD:
            return self.hud_batch
        raise ValueError(f"unknown render layer: {layer!r}")

    def logical_area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def draw(self, sprite: Any, layer: RenderLayer, dst: Rect, src: Rect) -> None:
        self._batch(layer).draw(sprite, dst, src, False)

    def draw_reversed(self, sprite: Any, layer: RenderLayer, dst: Rect, src: Rect) -> None:
        self._batch(layer).draw(sprite, dst, src, True)

    def fill_rect(self, rect: Rect, layer: RenderLayer, color: Color) -> None:
        self._batch(layer).fill_rect(rect, color)

    def clear(self) -> None:
        """Drop all queued drawing and reset the clear colours."""
        self.player_batch.entries.clear()
        self.hud_batch.entries.clear()
        self.player_batch.clear_color = Color(0, 0, 0, 255)
        self.hud_batch.clear_color = Color(0, 0, 0, 0)

    def add_light(self, position: Point, radius: int) -> None:
        if len(self.lights) >= MAX_LIGHTS:
            logger.warning("too many lights set")
            return
        self.lights.append(Light(position, radius))