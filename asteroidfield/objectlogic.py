"""Shapes, objects, rotation and movement inside the world bounds."""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Union

from .autils import roll_over_float
from .collision import update_collider
from .structs import (
    WORLD_POS_MAX_X,
    WORLD_POS_MAX_Y,
    WORLD_POS_MIN_X,
    WORLD_POS_MIN_Y,
    GameObject,
    ObjectType,
    ObjWrap,
    Request,
    Shape,
    Vector2,
)

PointLike = Union[Vector2, Sequence[float]]

_PUSHBACK_STEP = 1.0
_MAX_PUSHBACK_SPEED = 200.0
_PLAYER_DAMPING = 0.995


def _xy(point: PointLike) -> tuple[float, float]:
    if isinstance(point, Vector2):
        return point.x, point.y
    x, y = point
    return float(x), float(y)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _is_outside_for_projectile(wrap: ObjWrap) -> bool:
    obj = wrap.obj
    rect = wrap.collider.rect
    pos, speed = obj.position, obj.speed
    return (
        (pos.x + rect.x < WORLD_POS_MIN_X and speed.x < 0)
        or (pos.y + rect.y < WORLD_POS_MIN_Y and speed.y < 0)
        or (pos.x > WORLD_POS_MAX_X - (rect.x + rect.height) and speed.x > 0)
        or (pos.y > WORLD_POS_MAX_Y - (rect.y + rect.height) and speed.y > 0)
    )


def update_object_pos(wrap: ObjWrap, frame_time: float) -> None:
    """Advance the object by its speed, pushing it back from the world edges.

    Players lose a little speed every frame; projectiles leaving the world are
    marked for deletion instead of being moved.
    """
    obj = wrap.obj
    speed = obj.speed
    rect = wrap.collider.rect

    if wrap.object_type == ObjectType.PLAYER:
        speed.x *= _PLAYER_DAMPING
        speed.y *= _PLAYER_DAMPING

    if wrap.object_type == ObjectType.PROJECTILE and _is_outside_for_projectile(wrap):
        wrap.request = Request.DELETE
        return

    pos = obj.position
    if pos.x + rect.x <= WORLD_POS_MIN_X:
        speed.x *= -1 if speed.x < 0 else 1
        speed.x += _PUSHBACK_STEP if speed.x < _MAX_PUSHBACK_SPEED else 0

    if pos.y + rect.y <= WORLD_POS_MIN_Y:
        speed.y *= -1 if speed.y < 0 else 1
        speed.y += _PUSHBACK_STEP if speed.y < _MAX_PUSHBACK_SPEED else 0

    if pos.x >= WORLD_POS_MAX_X - (rect.x + rect.width):
        speed.x *= -1 if speed.x > 0 else 1
        speed.x += -_PUSHBACK_STEP if speed.x > -_MAX_PUSHBACK_SPEED else 0

    if pos.y >= WORLD_POS_MAX_Y - (rect.y + rect.height):
        speed.y *= -1 if speed.y > 0 else 1
        speed.y += -_PUSHBACK_STEP if speed.y > -_MAX_PUSHBACK_SPEED else 0

    pos.x += speed.x * frame_time
    pos.y += speed.y * frame_time


def rotate_object(wrap: ObjWrap, rotate_by: float, frame_time: float) -> None:
    """Turn the object by ``rotate_by`` radians per second and refresh its points."""
    obj = wrap.obj
    obj.heading = roll_over_float(obj.heading + rotate_by * frame_time, 0.0, math.pi * 2.0)
    cos_h = math.cos(obj.heading)
    sin_h = math.sin(obj.heading)
    shape = obj.shape
    shape.points = [
        Vector2(ref.x * cos_h - ref.y * sin_h, ref.x * sin_h + ref.y * cos_h)
        for ref in shape.ref_points
    ]
    if wrap.collider.is_collidable:
        update_collider(wrap)


def resize_shape(points: Iterable[PointLike], size: float) -> list[Vector2]:
    """Scale points by ``size``, rounding each coordinate half away from zero."""
    resized = []
    for point in points:
        x, y = _xy(point)
        resized.append(Vector2(_round_half_away(x * size), _round_half_away(y * size)))
    return resized


def init_shape(points: Iterable[PointLike] | None, size_mult: float) -> Shape:
    """Build a shape whose current points start as a copy of its scaled outline."""
    if points is None:
        return Shape(size_mult=size_mult)
    ref_points = resize_shape(points, size_mult)
    return Shape(
        size_mult=size_mult,
        points=[p.copy() for p in ref_points],
        ref_points=ref_points,
    )


def init_object(
    shape: Shape, position: Vector2, speed: Vector2, rotate_speed: float
) -> GameObject:
    """Create an object with heading zero."""
    return GameObject(
        rotate_speed=rotate_speed,
        heading=0.0,
        position=position.copy(),
        speed=speed.copy(),
        shape=shape,
    )