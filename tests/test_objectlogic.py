import math

import pytest

from asteroidfield.collision import init_collider
from asteroidfield.objectlogic import (
    init_object,
    init_shape,
    resize_shape,
    rotate_object,
    update_object_pos,
)
from asteroidfield.structs import (
    PLAYER_SHAPE_POINTS,
    PROJECTILE_SHAPE_POINTS,
    ObjectType,
    ObjWrap,
    Request,
    Vector2,
)


def make_wrap(points=PLAYER_SHAPE_POINTS, pos=(5000.0, 5000.0), speed=(0.0, 0.0),
              kind=ObjectType.ASTEROID, collidable=True):
    obj = init_object(init_shape(points, 1.0), Vector2(*pos), Vector2(*speed), 0.0)
    wrap = ObjWrap(object_type=kind, request=Request.UPDATE, obj=obj)
    if collidable:
        wrap.collider = init_collider(1.0, None)
    return wrap


def test_resize_shape_identity_at_size_one():
    resized = resize_shape(PLAYER_SHAPE_POINTS, 1.0)
    assert [(p.x, p.y) for p in resized] == list(PLAYER_SHAPE_POINTS)


def test_resize_shape_rounds_half_away_from_zero():
    resized = resize_shape([(1.0, -1.0), (3.0, -3.0)], 0.5)
    assert [(p.x, p.y) for p in resized] == [(1.0, -1.0), (2.0, -2.0)]


def test_resize_shape_accepts_vectors():
    resized = resize_shape([Vector2(10.0, 20.0)], 2.0)
    assert (resized[0].x, resized[0].y) == (20.0, 40.0)


def test_init_shape_points_copy_ref_points():
    shape = init_shape(PROJECTILE_SHAPE_POINTS, 2.0)
    assert shape.size_mult == 2.0
    assert shape.array_length == len(PROJECTILE_SHAPE_POINTS)
    assert shape.points == shape.ref_points
    assert all(p is not r for p, r in zip(shape.points, shape.ref_points))


def test_init_shape_none_is_empty():
    shape = init_shape(None, 1.5)
    assert shape.points == [] and shape.ref_points == []
    assert shape.size_mult == 1.5


def test_init_object_sets_fields():
    pos = Vector2(1.0, 2.0)
    obj = init_object(init_shape(PLAYER_SHAPE_POINTS, 1.0), pos, Vector2(3.0, 4.0), 5.0)
    assert obj.heading == 0.0
    assert obj.rotate_speed == 5.0
    assert obj.position == Vector2(1.0, 2.0)
    assert obj.position is not pos
    assert obj.speed == Vector2(3.0, 4.0)


def test_rotate_preserves_distances():
    wrap = make_wrap(collidable=False)
    rotate_object(wrap, 1.3, 1.0)
    assert wrap.obj.heading == pytest.approx(1.3)
    for p, r in zip(wrap.obj.shape.points, wrap.obj.shape.ref_points):
        assert math.hypot(p.x, p.y) == pytest.approx(math.hypot(r.x, r.y))


def test_rotate_zero_keeps_points():
    wrap = make_wrap(collidable=False)
    rotate_object(wrap, 0.0, 1.0)
    for p, r in zip(wrap.obj.shape.points, wrap.obj.shape.ref_points):
        assert (p.x, p.y) == pytest.approx((r.x, r.y))


def test_rotate_heading_rolls_over():
    wrap = make_wrap(collidable=False)
    rotate_object(wrap, 7.0, 1.0)
    assert wrap.obj.heading == 0.0


def test_rotate_updates_collider_when_collidable():
    wrap = make_wrap()
    rotate_object(wrap, 0.5, 1.0)
    xs = [p.x for p in wrap.obj.shape.points]
    ys = [p.y for p in wrap.obj.shape.points]
    assert wrap.collider.rect.x == pytest.approx(min(xs) * 0.9)
    assert wrap.collider.rect.y == pytest.approx(min(ys) * 0.9)
    assert wrap.collider.rect.width == pytest.approx((max(xs) - min(xs)) * 0.9)


def test_update_moves_by_speed_times_frame_time():
    wrap = make_wrap(speed=(10.0, 20.0))
    update_object_pos(wrap, 0.5)
    assert wrap.obj.position.x == pytest.approx(5000.0 + 10.0 * 0.5)
    assert wrap.obj.position.y == pytest.approx(5000.0 + 20.0 * 0.5)


def test_player_speed_is_damped():
    wrap = make_wrap(speed=(100.0, -100.0), kind=ObjectType.PLAYER)
    update_object_pos(wrap, 0.0)
    assert wrap.obj.speed.x == pytest.approx(100.0 * 0.995)
    assert wrap.obj.speed.y == pytest.approx(-100.0 * 0.995)


def test_projectile_leaving_world_is_deleted():
    wrap = make_wrap(pos=(10.0, 5000.0), speed=(-300.0, 0.0), kind=ObjectType.PROJECTILE)
    update_object_pos(wrap, 1.0)
    assert wrap.request == Request.DELETE
    assert wrap.obj.position.x == 10.0


def test_left_wall_pushes_back():
    wrap = make_wrap(pos=(10.0, 5000.0), speed=(-50.0, 0.0))
    update_object_pos(wrap, 0.1)
    assert wrap.obj.speed.x > 0
    assert wrap.obj.position.x > 10.0
    assert wrap.request == Request.UPDATE


def test_right_wall_pushes_back():
    wrap = make_wrap(pos=(9990.0, 5000.0), speed=(50.0, 0.0))
    update_object_pos(wrap, 0.1)
    assert wrap.obj.speed.x < 0
    assert wrap.obj.position.x < 9990.0