"""Adding, creating and removing tracked objects."""

from __future__ import annotations

from typing import Optional

from .collision import get_shot, init_collider, player_collision
from .objectlogic import init_object, init_shape
from .structs import (
    MAX_OBJECT_COUNT,
    PLAYER_SHAPE_POINTS,
    PROJECTILE_SHAPE_POINTS,
    PROJECTILE_SIZE,
    PROJECTILE_SPEED,
    SOFT_MAX_ASTEROIDS,
    Camera,
    LogLevel,
    ObjectType,
    ObjWrap,
    Request,
    Session,
    Tracker,
    Vector2,
)

_PROJECTILE_ROTATE_SPEED = 5.0


class TrackerError(Exception):
    """An object could not be added to the tracker."""


class TooManyObjectsError(TrackerError):
    """The tracker already holds as many objects as it may."""


class PlayerAlreadyPresentError(TrackerError):
    """A second player was added to a tracker that has one."""


def init_tracker(session: Optional[Session] = None) -> Tracker:
    """Create an empty tracker for ``session`` (a fresh one if not given)."""
    return Tracker(
        session=session if session is not None else Session(),
        camera=Camera(zoom=1.0),
    )


def init_wrap() -> ObjWrap:
    """A wrapper with no type, no object and collisions disabled."""
    return ObjWrap()


def add_wrap_to_list(tracker: Tracker, wrap: Optional[ObjWrap]) -> None:
    """Start tracking ``wrap``, enforcing the object limits and a single player."""
    logger = tracker.session.logger
    count = len(tracker.objects)

    if wrap is None:
        logger.log(LogLevel.ERROR, "Got null pointer instead of wrap")
        raise TrackerError("cannot track a missing object")

    if wrap.object_type == ObjectType.ASTEROID and count >= SOFT_MAX_ASTEROIDS:
        logger.log(LogLevel.ERROR, f"Too many asteroids, list length is at {count}")
        raise TooManyObjectsError(f"too many asteroids: {count} objects tracked")

    if count >= MAX_OBJECT_COUNT:
        logger.log(LogLevel.ERROR, f"Too many objects, list length is at {count}")
        raise TooManyObjectsError(f"too many objects: {count} objects tracked")

    if wrap.object_type == ObjectType.PLAYER:
        if tracker.player is not None:
            logger.log(LogLevel.ERROR, "Player is already present in the list")
            raise PlayerAlreadyPresentError("player is already present")
        tracker.player = wrap

    tracker.objects.append(wrap)


def create_player(tracker: Tracker, position: Vector2, size: float) -> Optional[ObjWrap]:
    """Create and track the player ship, pointing the camera at it.

    Returns ``None`` if the player could not be added.
    """
    player = init_wrap()
    player.object_type = ObjectType.PLAYER
    try:
        add_wrap_to_list(tracker, player)
    except TrackerError:
        return None

    player.obj = init_object(
        init_shape(PLAYER_SHAPE_POINTS, size), position, Vector2(0.0, 0.0), 0.0
    )
    player.request = Request.CREATE
    player.is_rotatable_by_game = False
    player.update_position = True
    player.draw = True
    player.collider = init_collider(player.obj.shape.size_mult, player_collision)
    player.collider.mass = 1.0
    player.lives_left = 2

    session = tracker.session
    camera = tracker.camera
    camera.target = player.obj.position.copy()
    camera.offset = Vector2(session.screen_width / 2.0, session.screen_height / 2.0)
    camera.rotation = 0.0
    camera.zoom = 1.0
    return player


def create_projectile(tracker: Tracker, parent: ObjWrap) -> Optional[ObjWrap]:
    """Fire a projectile from the front of ``parent``, inheriting its speed.

    Returns ``None`` if the projectile could not be added.
    """
    projectile = init_wrap()
    try:
        add_wrap_to_list(tracker, projectile)
    except TrackerError:
        return None

    source = parent.obj
    front = source.shape.points[0]
    projectile.obj = init_object(
        init_shape(PROJECTILE_SHAPE_POINTS, PROJECTILE_SIZE),
        Vector2(source.position.x + front.x * 2.0, source.position.y + front.y * 2.0),
        Vector2(
            front.x * PROJECTILE_SPEED + source.speed.x,
            front.y * PROJECTILE_SPEED + source.speed.y,
        ),
        _PROJECTILE_ROTATE_SPEED,
    )
    projectile.object_type = ObjectType.PROJECTILE
    projectile.request = Request.CREATE
    projectile.update_position = True
    projectile.draw = True
    projectile.is_rotatable_by_game = True
    projectile.collider = init_collider(projectile.obj.shape.size_mult, get_shot)
    return projectile


def delete_tracked_object(tracker: Tracker, index: int) -> None:
    """Empty the slot at ``index``; the list is compacted later."""
    wrap = tracker.objects[index]
    if wrap is not None and wrap is tracker.player:
        tracker.player = None
    tracker.objects[index] = None