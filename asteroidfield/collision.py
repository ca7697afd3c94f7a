"""Collision detection between tracked objects and the responses to it."""

from __future__ import annotations

import random
from typing import Optional

from .autils import clamp_float
from .structs import (
    Collider,
    CollisionAction,
    GameState,
    LogLevel,
    ObjectType,
    ObjWrap,
    Rect,
    Request,
    Tracker,
    Vector2,
)

BOUNCE_CONSTANT = 100


def _bounds(wrap: ObjWrap) -> tuple[float, float, float, float]:
    pos = wrap.obj.position
    rect = wrap.collider.rect
    start_x = pos.x + rect.x
    start_y = pos.y + rect.y
    return start_x, start_y, start_x + rect.width, start_y + rect.height


def check_if_collide(first: ObjWrap, second: ObjWrap) -> bool:
    """True when the two colliders overlap on both axes (touching is not enough)."""
    f_sx, f_sy, f_ex, f_ey = _bounds(first)
    s_sx, s_sy, s_ex, s_ey = _bounds(second)
    return f_sx < s_ex and s_sx < f_ex and f_sy < s_ey and s_sy < f_ey


def find_any_collision(tracker: Tracker, first: Optional[ObjWrap]) -> bool:
    """True if ``first`` overlaps any other collidable tracked object."""
    if len(tracker.objects) < 2 or first is None:
        return False
    return any(
        second is not None
        and second is not first
        and second.collider.is_collidable
        and check_if_collide(first, second)
        for second in tracker.objects
    )


def find_collision_pos(tracker: Tracker, pos: Vector2) -> Optional[ObjWrap]:
    """Return the first collidable object whose collider contains ``pos``."""
    for second in tracker.objects:
        if second is None or not second.collider.is_collidable:
            continue
        sx, sy, ex, ey = _bounds(second)
        if sx < pos.x < ex and sy < pos.y < ey:
            return second
    return None


def sort_list_by_x(tracker: Tracker) -> None:
    """Order tracked objects by x position, keeping the order of equal ones."""
    tracker.objects.sort(key=lambda wrap: wrap.obj.position.x)


def fast_find_collisions(tracker: Tracker, index: int) -> None:
    """Run collision responses between the object at ``index`` and those after it.

    Of each colliding pair, the object with the higher type handles the hit.
    Two projectiles never hit each other.
    """
    objects = tracker.objects
    if len(objects) < 2:
        return
    current = objects[index]
    if current is None or current.request == Request.DELETE:
        return

    for j in range(index + 1, len(objects)):
        nxt = objects[j]
        if (
            nxt is None
            or nxt is current
            or nxt.request != Request.UPDATE
            or not nxt.collider.is_collidable
        ):
            continue

        rect = current.collider.rect
        if rect.x + rect.width <= nxt.collider.rect.x:
            break
        if not check_if_collide(current, nxt):
            continue
        if current.object_type == nxt.object_type == ObjectType.PROJECTILE:
            continue

        if current.object_type > nxt.object_type:
            current.collider.action(tracker, current, nxt)
        else:
            nxt.collider.action(tracker, nxt, current)


def apply_mass_based_rand_rotation(wrap: ObjWrap) -> None:
    """Give the object a random spin, smaller the heavier it is."""
    mass_mod = 1 / wrap.collider.mass
    random_mod = random.randint(-1000, 1000) / 1000
    wrap.obj.rotate_speed = 2 * random_mod * mass_mod


def _exchange(first: ObjWrap, second: ObjWrap, axis: str, logger) -> None:
    sa = getattr(first.obj.speed, axis)
    sb = getattr(second.obj.speed, axis)
    ma = clamp_float(first.collider.mass, 1, 1024)
    mb = clamp_float(second.collider.mass, 1, 1024)
    setattr(first.obj.speed, axis, sa + (sb - sa) / ma)
    setattr(second.obj.speed, axis, sb + (sa - sb) / mb)
    logger.log(LogLevel.TRACE, f"MASSES:\n A == {ma:f}\n B == {mb:f}")
    logger.log(LogLevel.TRACE, f"SPEEDS BEFORE:\n First == {sa:f}\n Second == {sb:f}")
    logger.log(
        LogLevel.TRACE,
        "SPEEDS AFTER:\n First == "
        f"{getattr(first.obj.speed, axis):f}\n Second == {getattr(second.obj.speed, axis):f}",
    )


def bounce(tracker: Tracker, first: ObjWrap, second: ObjWrap) -> None:
    """Exchange speed between two objects by mass and push them apart."""
    session = tracker.session
    frame_time = session.frame_time
    logger = session.logger

    left = first if first.obj.position.x < second.obj.position.x else second
    right = second if left is first else first
    above = first if first.obj.position.y < second.obj.position.y else second
    below = second if above is first else first

    _exchange(first, second, "x", logger)
    left.obj.position.x -= BOUNCE_CONSTANT * frame_time
    right.obj.position.x += BOUNCE_CONSTANT * frame_time

    _exchange(first, second, "y", logger)
    above.obj.position.y -= BOUNCE_CONSTANT * frame_time
    below.obj.position.y += BOUNCE_CONSTANT * frame_time


def get_shot(tracker: Tracker, projectile: ObjWrap, victim: ObjWrap) -> None:
    """A projectile hit something: remove it and damage or split the victim."""
    projectile.request = Request.DELETE
    if victim.object_type == ObjectType.PROJECTILE:
        victim.request = Request.DELETE
    if victim.object_type == ObjectType.ASTEROID:
        victim.lives_left -= 1
        victim.request = Request.SEPARATE
        tracker.score += 1 * int(tracker.session.difficulty)


def init_collider(size_mult: float, action: Optional[CollisionAction]) -> Collider:
    """A collidable square box scaled by ``size_mult`` with mass ``size_mult**2``."""
    return Collider(
        is_collidable=True,
        rect=Rect(-50 * size_mult, -50 * size_mult, 100 * size_mult, 100 * size_mult),
        mass=size_mult * size_mult,
        action=action,
    )


def update_collider(wrap: ObjWrap) -> None:
    """Fit the collider box to 90% of the object's current outline."""
    left, right = 10000.0, -10000.0
    top, bottom = 10000.0, -10000.0
    shape = wrap.obj.shape
    for point in shape.points[: shape.array_length]:
        left = min(point.x, left)
        right = max(point.x, right)
        top = min(point.y, top)
        bottom = max(point.y, bottom)

    rect = wrap.collider.rect
    rect.x = left * 0.9
    rect.y = top * 0.9
    rect.width = abs(left - right) * 0.9
    rect.height = abs(top - bottom) * 0.9


def player_collision(tracker: Tracker, player: ObjWrap, offender: ObjWrap) -> None:
    """The player was hit: lose a life, end the game at zero."""
    player.lives_left -= 1
    if not player.lives_left:
        tracker.session.game_state = GameState.GAME_OVER
        return
    if offender.object_type == ObjectType.PROJECTILE:
        offender.request = Request.DELETE
    if offender.object_type == ObjectType.ASTEROID:
        bounce(tracker, player, offender)