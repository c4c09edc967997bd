"""Simple 2D points and axis-aligned rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True)
class Point:
    """A 2D point or offset."""

    x: Number
    y: Number

    @classmethod
    def zero(cls) -> Point:
        return cls(0, 0)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def __add__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: Number) -> Point:
        if isinstance(factor, Point):
            return NotImplemented
        return Point(self.x * factor, self.y * factor)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: Number
    y: Number
    w: Number
    h: Number

    def top(self) -> Number:
        return self.y

    def left(self) -> Number:
        return self.x

    def right(self) -> Number:
        return self.x + self.w

    def bottom(self) -> Number:
        return self.y + self.h

    def top_left(self) -> Point:
        return Point(self.x, self.y)

    def intersects(self, other: Rect) -> bool:
        """True if the rectangles overlap or touch."""
        return (
            self.right() >= other.left()
            and self.left() <= other.right()
            and self.bottom() >= other.top()
            and self.top() <= other.bottom()
        )

    def contains(self, point: Point) -> bool:
        """True if the point lies inside the rectangle or on its edge."""
        return (
            self.left() <= point.x <= self.right()
            and self.top() <= point.y <= self.bottom()
        )

    def __add__(self, offset: Point) -> Rect:
        if not isinstance(offset, Point):
            return NotImplemented
        return Rect(self.x + offset.x, self.y + offset.y, self.w, self.h)