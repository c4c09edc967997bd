"""A ray-cast first-person level on a random tile map."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from meez3d.constants import RENDER_HEIGHT, RENDER_WIDTH
from meez3d.geometry import Point, Rect
from meez3d.rendercontext import Color, RenderContext
from meez3d.scene import Scene, SceneResult, SceneResultKind
from meez3d.soundmanager import SoundManager

TOLERANCE = 0.0001
PLAYER_SIZE = 0.8
MOVE_SPEED = 0.05
TURN_SPEED = 0.02

_PI = math.pi
_HALF_PI = math.pi / 2.0
_TAU = 2.0 * math.pi

BACKGROUND_PATH = Path("assets/spacebg.png")


def _hex_color(text: str) -> Color:
    """Parse '#rrggbb' or '#aarrggbb' into a Color."""
    digits = text.lstrip("#")
    if len(digits) == 6:
        a = 255
        rgb = digits
    elif len(digits) == 8:
        a = int(digits[0:2], 16)
        rgb = digits[2:]
    else:
        raise ValueError(f"invalid color: {text!r}")
    return Color(int(rgb[0:2], 16), int(rgb[2:4], 16), int(rgb[4:6], 16), a)


def _index(value: float) -> int:
    """Convert a coordinate to a non-negative tile index, saturating at zero."""
    return max(0, int(value))


@dataclass(frozen=True)
class Tile:
    """A map tile; empty when it has no colour."""

    color: Optional[Color] = None


EMPTY = Tile()


@dataclass
class Map:
    """A tile-based map. Top-left is (0, 0); tiles are indexed [row][column]."""

    tiles: List[List[Tile]]
    width: int
    height: int


@dataclass(frozen=True)
class Projection:
    """Where a ray hit a solid tile, and the normal of the face it crossed."""

    x: float
    y: float
    color: Color
    normal: float


@dataclass(frozen=True)
class PathIndex:
    row: int
    column: int


def _random_color() -> Color:
    return Color(
        int(random.uniform(0.0, 256.0)) % 256,
        int(random.uniform(0.0, 256.0)) % 256,
        int(random.uniform(0.0, 256.0)) % 256,
        255,
    )


def _random_row(width: int, border: Tile) -> List[Tile]:
    inner = [
        Tile(_random_color()) if random.random() < 0.025 else EMPTY
        for _ in range(width - 2)
    ]
    return [border, *inner, border]


def create_random_map(width: int, height: int) -> Map:
    """Build a map with a white border and a few randomly coloured blocks."""
    if width < 2 or height < 2:
        raise ValueError(f"map must be at least 2x2, got {width}x{height}")
    border = Tile(_hex_color("#ffffff"))
    tiles = [[border] * width]
    tiles.extend(_random_row(width, border) for _ in range(height - 2))
    tiles.append([border] * width)
    return Map(tiles, width, height)


def _float_eq(a: float, b: float) -> bool:
    return abs(b - a) < TOLERANCE


class Level(Scene):
    """The player walking around a tile map, drawn in 3D and as a mini-map."""

    def __init__(self, images: Any, tile_map: Optional[Map] = None) -> None:
        self.map = tile_map if tile_map is not None else create_random_map(32, 32)
        self.player_x = 15.5
        self.player_y = 15.5
        self.player_angle = 0.0
        self.background = images.load_sprite(BACKGROUND_PATH)

    def _is_empty(self, row: int, column: int) -> bool:
        return self.map.tiles[row][column].color is None

    def can_move_to(self, x: float, y: float) -> bool:
        """Whether the player fits at (x, y) without overlapping a solid tile."""
        lower = PLAYER_SIZE / 2.0
        upper = 1.0 - PLAYER_SIZE / 2.0
        row = _index(y)
        col = _index(x)
        x_frac = x - col
        y_frac = y - row
        if not self._is_empty(row, col):
            return False
        if x_frac < lower and (col == 0 or not self._is_empty(row, col - 1)):
            return False
        if y_frac < lower and (row == 0 or not self._is_empty(row - 1, col)):
            return False
        if x_frac > upper and (
            col >= self.map.width - 1 or not self._is_empty(row, col + 1)
        ):
            return False
        if y_frac > upper and (
            row >= self.map.height - 1 or not self._is_empty(row + 1, col)
        ):
            return False
        return True

    def project(
        self,
        angle: float,
        x: float,
        y: float,
        path: Optional[List[PathIndex]] = None,
    ) -> Optional[Projection]:
        """Cast a ray from (x, y) at angle (0 right, clockwise positive).

        Returns where it hits a solid tile, or None if it leaves the map.
        Each tile visited is appended to path, if one is given.
        """
        column = _index(x)
        row = _index(y)
        fx = x - column
        fy = y - row
        normal = -angle

        while True:
            if row >= self.map.height or column >= self.map.width:
                return None
            if path is not None:
                path.append(PathIndex(row, column))

            color = self.map.tiles[row][column].color
            if color is not None:
                return Projection(column + fx, row + fy, color, normal)

            if _float_eq(angle, 0.0):
                column, fx, normal = column + 1, 0.0, _PI
                continue
            if _float_eq(angle, _PI):
                if column == 0:
                    return None
                column, fx, normal = column - 1, 1.0, 0.0
                continue
            if _float_eq(angle, _HALF_PI):
                row, fy, normal = row + 1, 0.0, 3.0 * _HALF_PI
                continue
            if _float_eq(angle, 3.0 * _HALF_PI):
                if row == 0:
                    return None
                row, fy, normal = row - 1, 1.0, _HALF_PI
                continue

            if angle < _PI:
                # Pointing downward.
                tan = math.tan(angle)
                x_intercept = fx + (1.0 - fy) / tan
                if x_intercept < 0.0:
                    if column == 0:
                        return None
                    y_intercept = 1.0 - ((1.0 - fy) + fx * tan)
                    column, fx, fy, normal = column - 1, 1.0, y_intercept, 0.0
                elif x_intercept < 1.0:
                    row, fx, fy, normal = row + 1, x_intercept, 0.0, 3.0 * _HALF_PI
                else:
                    y_intercept = fy + (1.0 - fx) * tan
                    column, fx, fy, normal = column + 1, 0.0, y_intercept, _PI
            else:
                # Pointing upward.
                tan = math.tan(_TAU - angle)
                x_intercept = fx + fy / tan
                if x_intercept < 0.0:
                    if column == 0:
                        return None
                    y_intercept = 1.0 - ((1.0 - fy) - fx * tan)
                    column, fx, fy, normal = column - 1, 1.0, y_intercept, 0.0
                elif x_intercept < 1.0:
                    if row == 0:
                        return None
                    row, fx, fy, normal = row - 1, x_intercept, 1.0, _HALF_PI
                else:
                    y_intercept = fy - (1.0 - fx) * tan
                    column, fx, fy, normal = column + 1, 0.0, y_intercept, _PI

    def update(
        self, context: RenderContext, inputs: Any, sounds: SoundManager
    ) -> SceneResult:
        if inputs.ok_clicked:
            return SceneResult.kill_screen("hello world")

        if inputs.player_turn_left_down:
            self.player_angle -= TURN_SPEED
        if inputs.player_turn_right_down:
            self.player_angle += TURN_SPEED
        while self.player_angle >= _TAU:
            self.player_angle -= _TAU
        while self.player_angle < 0.0:
            self.player_angle += _TAU

        cx = math.cos(self.player_angle)
        cy = math.sin(self.player_angle)
        dx = 0.0
        dy = 0.0
        if inputs.player_forward_down:
            dx += MOVE_SPEED * cx
            dy += MOVE_SPEED * cy
        if inputs.player_backward_down:
            dx -= MOVE_SPEED * cx
            dy -= MOVE_SPEED * cy
        if inputs.player_strafe_left_down:
            dx += MOVE_SPEED * cy
            dy -= MOVE_SPEED * cx
        if inputs.player_strafe_right_down:
            dx -= MOVE_SPEED * cy
            dy += MOVE_SPEED * cx
        if self.can_move_to(self.player_x, self.player_y + dy):
            self.player_y += dy
        if self.can_move_to(self.player_x + dx, self.player_y):
            self.player_x += dx

        return SceneResult(SceneResultKind.CONTINUE)

    def draw(
        self, context: RenderContext, font: Any, previous: Optional[Scene]
    ) -> None:
        batch = context.player_batch
        batch.fill_rect(Rect(0, 0, RENDER_WIDTH, RENDER_HEIGHT), _hex_color("#333333"))
        self._draw_background(context)
        self._draw_walls(context)
        self._draw_minimap(context)

    def _draw_background(self, context: RenderContext) -> None:
        batch = context.player_batch
        if self.player_angle < _PI:
            fraction = -1.0 * self.player_angle / _PI
        else:
            fraction = 1.0 - (self.player_angle - _PI) / _PI
        offset = int(RENDER_WIDTH * fraction)

        half_height = RENDER_HEIGHT // 2
        src = Rect(0, 0, 640, max(half_height, 400))
        dst = Rect(offset, 0, RENDER_WIDTH, half_height)
        batch.draw(self.background, dst, src, False)

        wrapped_x = dst.x + RENDER_WIDTH if dst.x < 0 else dst.x - RENDER_WIDTH
        batch.draw(
            self.background, Rect(wrapped_x, 0, RENDER_WIDTH, half_height), src, True
        )

    def _draw_walls(self, context: RenderContext) -> None:
        batch = context.player_batch
        for column in range(640):
            angle = self.player_angle + (column / 640.0) * _HALF_PI - _PI / 4.0
            while angle >= _TAU:
                angle -= _TAU
            while angle < 0.0:
                angle += _TAU

            projection = self.project(angle, self.player_x, self.player_y)
            if projection is None:
                continue

            pdx = self.player_x - projection.x
            pdy = self.player_y - projection.y
            distance = math.sqrt(pdx * pdx + pdy * pdy)
            # Remove the fisheye effect.
            distance *= math.cos(self.player_angle - angle)

            scale = 1.0 if distance < 1.0 else 1.0 / distance
            height = int(RENDER_HEIGHT * scale)
            offset = (RENDER_HEIGHT - height) // 2

            angle_diff = abs(math.atan2(pdy, pdx) - projection.normal)
            diffusion = min(max(math.cos(angle_diff), 0.5), 1.0)
            light = min(max(diffusion, 0.0), 1.0)

            base = projection.color
            color = Color(
                int(base.r * light), int(base.g * light), int(base.b * light), base.a
            )
            batch.draw_line(
                Point(column, offset), Point(column, offset + height), color, 1
            )

            reflection_height = height // 3
            reflection = dataclasses.replace(color, a=0x22)
            batch.draw_line(
                Point(column, offset + height),
                Point(column, offset + height + reflection_height),
                reflection,
                1,
            )

    def _draw_minimap(self, context: RenderContext) -> None:
        batch = context.player_batch
        w = 2
        h = 2
        empty_color = _hex_color("#000000")
        for i, row in enumerate(self.map.tiles):
            for j, tile in enumerate(row):
                color = tile.color if tile.color is not None else empty_color
                batch.fill_rect(Rect(j * w, i * h, w, h), color)

        player_point = Point(int(self.player_x * w), int(self.player_y * h))
        batch.fill_circle(player_point, 1.0, _hex_color("#ffffff"))
        batch.fill_arc(
            player_point,
            15.0,
            self.player_angle - _PI / 4.0,
            self.player_angle + _PI / 4.0,
            _hex_color("#7fff0000"),
        )

        path: List[PathIndex] = []
        looking_at = self.project(self.player_angle, self.player_x, self.player_y, path)
        path_color = _hex_color("#44ffffff")
        for index in path:
            batch.fill_rect(Rect(index.column * w, index.row * h, w, h), path_color)
        if looking_at is not None:
            batch.draw_line(
                Point(int(w * self.player_x), int(h * self.player_y)),
                Point(int(w * looking_at.x), int(h * looking_at.y)),
                _hex_color("#FFFFFF"),
                1,
            )