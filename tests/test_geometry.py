import pytest

from meez3d.geometry import Point, Rect


def test_rect_getters():
    r = Rect(x=10, y=20, w=3, h=4)
    assert r.x == 10
    assert r.y == 20
    assert r.w == 3
    assert r.h == 4
    assert r.left() == 10
    assert r.top() == 20
    assert r.right() == 13
    assert r.bottom() == 24


def test_rect_add_point():
    r = Rect(x=10, y=20, w=3, h=4)
    p = Point(100, 200)
    r = r + p
    assert r.x == 110
    assert r.y == 220
    assert r.w == 3
    assert r.h == 4
    assert r.left() == 110
    assert r.top() == 220
    assert r.right() == 113
    assert r.bottom() == 224


def test_rect_add_assign_point():
    r = Rect(1, 2, 3, 4)
    r += Point(10, 20)
    assert r == Rect(11, 22, 3, 4)


def test_rect_top_left():
    assert Rect(5, 6, 7, 8).top_left() == Point(5, 6)


def test_point_zero():
    z = Point.zero()
    assert z == Point(0, 0)
    assert z.is_zero()
    assert not Point(0, 1).is_zero()
    assert not Point(1, 0).is_zero()


def test_point_arithmetic():
    a = Point(3, 4)
    b = Point(1, 2)
    assert a + b == Point(4, 6)
    assert a - b == Point(2, 2)
    assert a * 3 == Point(9, 12)
    assert Point(1.0, 0.5) * 2.0 == Point(2.0, 1.0)


def test_point_add_assign_and_sub_assign():
    p = Point(1, 1)
    p += Point(2, 3)
    assert p == Point(3, 4)
    p -= Point(1, 1)
    assert p == Point(2, 3)


def test_point_add_wrong_type():
    with pytest.raises(TypeError):
        Point(1, 2) + 5


@pytest.mark.parametrize(
    "other, expected",
    [
        (Rect(5, 5, 10, 10), True),
        (Rect(10, 10, 5, 5), True),
        (Rect(11, 0, 5, 5), False),
        (Rect(0, 11, 5, 5), False),
        (Rect(-5, -5, 4, 4), False),
        (Rect(-5, -5, 5, 5), True),
    ],
)
def test_rect_intersects(other, expected):
    r = Rect(0, 0, 10, 10)
    assert r.intersects(other) is expected
    assert other.intersects(r) is expected


@pytest.mark.parametrize(
    "point, expected",
    [
        (Point(0, 0), True),
        (Point(10, 10), True),
        (Point(5, 5), True),
        (Point(11, 5), False),
        (Point(5, -1), False),
    ],
)
def test_rect_contains(point, expected):
    assert Rect(0, 0, 10, 10).contains(point) is expected