"""Creating, spawning and splitting asteroids."""

from __future__ import annotations

import math
from typing import Optional

from .autils import clamp_float, get_random_float
from .collision import bounce, find_any_collision, init_collider
from .objecthandler import TrackerError, add_wrap_to_list, init_wrap
from .objectlogic import init_object, init_shape
from .structs import (
    ASTEROID_CORNERS_COUNT,
    ASTEROID_HEIGHT_VARIATION,
    WORLD_POS_MAX_X,
    WORLD_POS_MAX_Y,
    WORLD_POS_MIN_X,
    WORLD_POS_MIN_Y,
    LogLevel,
    ObjectType,
    ObjWrap,
    Request,
    Tracker,
    Vector2,
)

_SPAWN_RADIUS = 3000
_MIN_PLAYER_DISTANCE = 400
_SPAWN_RETRIES = 5
_SEPARATION_ADDS_SPEED = 50.0


def generate_asteroid_shape() -> list[Vector2]:
    """A rough circle of corners with randomly varied distance from the centre."""
    step = math.pi / (ASTEROID_CORNERS_COUNT / 2.0)
    corners = []
    for i in range(ASTEROID_CORNERS_COUNT):
        angle = step * i
        x = (50 + get_random_float(-ASTEROID_HEIGHT_VARIATION, ASTEROID_HEIGHT_VARIATION)) * math.sin(angle)
        y = (50 + get_random_float(-ASTEROID_HEIGHT_VARIATION, ASTEROID_HEIGHT_VARIATION)) * math.cos(angle)
        corners.append(Vector2(x, y))
    return corners


def create_asteroid(
    tracker: Tracker,
    position: Vector2,
    speed: Vector2,
    rotation_speed: float,
    size: float,
) -> Optional[ObjWrap]:
    """Create and track a ready-to-use asteroid, or return ``None`` if it cannot be added."""
    asteroid = init_wrap()
    asteroid.object_type = ObjectType.ASTEROID
    try:
        add_wrap_to_list(tracker, asteroid)
    except TrackerError:
        return None

    asteroid.obj = init_object(
        init_shape(generate_asteroid_shape(), size), position, speed, rotation_speed
    )
    asteroid.request = Request.CREATE
    asteroid.update_position = True
    asteroid.draw = True
    asteroid.is_rotatable_by_game = True
    asteroid.collider = init_collider(0.85 * asteroid.obj.shape.size_mult, bounce)
    asteroid.lives_left = 2
    return asteroid


def _too_close(position: Vector2, player_pos: Optional[Vector2]) -> bool:
    if player_pos is None:
        return False
    return (
        abs(position.x - player_pos.x) < _MIN_PLAYER_DISTANCE
        or abs(position.y - player_pos.y) < _MIN_PLAYER_DISTANCE
    )


def asteroid_safe_spawn(tracker: Tracker) -> Optional[ObjWrap]:
    """Spawn an asteroid where it collides with nothing and keeps off the player.

    Near a player, the asteroid is placed within a window around it and
    thrown roughly along the line to the player. After a few failed tries
    the asteroid is marked for deletion and ``None`` is returned.
    """
    wrap = create_asteroid(
        tracker,
        Vector2(0.0, 0.0),
        Vector2(0.0, 0.0),
        get_random_float(-3, 3),
        get_random_float(1, 3),
    )
    if wrap is None:
        tracker.session.logger.log(
            LogLevel.WARNING, "Cannot create an asteroid, got a NULL pointer"
        )
        return None

    min_x, max_x = float(WORLD_POS_MIN_X), float(WORLD_POS_MAX_X)
    min_y, max_y = float(WORLD_POS_MIN_Y), float(WORLD_POS_MAX_Y)
    player_pos: Optional[Vector2] = None
    if tracker.player is not None:
        player_pos = tracker.player.obj.position
        min_x = clamp_float(player_pos.x - _SPAWN_RADIUS, WORLD_POS_MIN_X, WORLD_POS_MAX_X)
        max_x = clamp_float(player_pos.x + _SPAWN_RADIUS, WORLD_POS_MIN_X, WORLD_POS_MAX_X)
        min_y = clamp_float(player_pos.y - _SPAWN_RADIUS, WORLD_POS_MIN_Y, WORLD_POS_MAX_Y)
        max_y = clamp_float(player_pos.y + _SPAWN_RADIUS, WORLD_POS_MIN_Y, WORLD_POS_MAX_Y)

    for _ in range(_SPAWN_RETRIES):
        wrap.obj.position = Vector2(
            get_random_float(min_x, max_x), get_random_float(min_y, max_y)
        )
        if not find_any_collision(tracker, wrap) and not _too_close(
            wrap.obj.position, player_pos
        ):
            break
    else:
        wrap.request = Request.DELETE
        return None

    position = wrap.obj.position
    if player_pos is not None:
        gamma = math.atan2(player_pos.y - position.y, player_pos.x - position.x)
    else:
        gamma = get_random_float(0, math.pi)
    wrap.obj.speed = Vector2(
        math.cos(gamma) * get_random_float(-500, 500),
        math.sin(gamma) * get_random_float(-500, 500),
    )
    return wrap


def separate(tracker: Tracker, parent: ObjWrap) -> list[ObjWrap]:
    """Split an asteroid in two halves and mark it for deletion.

    An asteroid with no lives left is only marked for deletion. Returns the
    new halves, or an empty list when none were made.
    """
    logger = tracker.session.logger
    if parent.object_type != ObjectType.ASTEROID:
        logger.log(LogLevel.ERROR, "Asteroid separate function called on non-asteroid object")
        raise ValueError("only asteroids can be separated")

    if parent.lives_left == 0:
        parent.request = Request.DELETE
        return []

    source = parent.obj
    left = create_asteroid(
        tracker, source.position.copy(), source.speed.copy(), -source.rotate_speed, 1
    )
    right = create_asteroid(
        tracker, source.position.copy(), source.speed.copy(), source.rotate_speed, 1
    )
    if left is None or right is None:
        logger.log(
            LogLevel.WARNING, "Create asteroid returned null, removing the parent"
        )
        parent.request = Request.DELETE
        return []

    rect = parent.collider.rect
    sin_h = math.sin(source.heading)
    cos_h = math.cos(source.heading)
    shift_x = sin_h * (rect.x + rect.width)
    shift_y = cos_h * (rect.y + rect.height)
    push_x = _SEPARATION_ADDS_SPEED * sin_h
    push_y = _SEPARATION_ADDS_SPEED * cos_h

    half = source.shape.array_length // 2
    halves = (
        (left, -1, source.shape.ref_points[half : 2 * half]),
        (right, 1, source.shape.ref_points[:half]),
    )
    for child, sign, ref_points in halves:
        child.lives_left = parent.lives_left
        child.obj.heading = source.heading
        child.obj.position.x += sign * shift_x
        child.obj.position.y += sign * shift_y
        child.obj.speed.x += sign * push_x
        child.obj.speed.y += sign * push_y
        child.collider.mass /= 2
        child.obj.shape.ref_points = [p.copy() for p in ref_points]
        child.obj.shape.points = child.obj.shape.points[:half]

    logger.log(
        LogLevel.DEBUG,
        f"\nAsteroidLeft speed x: {left.obj.speed.x:f}\n"
        f"AsteroidRight speed x {right.obj.speed.x:f}",
    )
    parent.request = Request.DELETE
    return [left, right]