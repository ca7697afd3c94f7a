import pytest

from asteroidfield.collision import get_shot, player_collision
from asteroidfield.objecthandler import (
    PlayerAlreadyPresentError,
    TooManyObjectsError,
    TrackerError,
    add_wrap_to_list,
    create_player,
    create_projectile,
    delete_tracked_object,
    init_tracker,
    init_wrap,
)
from asteroidfield.objectlogic import resize_shape
from asteroidfield.structs import (
    MAX_OBJECT_COUNT,
    PLAYER_SHAPE_POINTS,
    PROJECTILE_SIZE,
    SOFT_MAX_ASTEROIDS,
    ObjectType,
    Request,
    Session,
    Vector2,
)


@pytest.fixture
def tracker():
    return init_tracker(Session())


def test_init_tracker_is_empty():
    session = Session()
    tracker = init_tracker(session)
    assert tracker.session is session
    assert tracker.objects == []
    assert tracker.player is None
    assert tracker.camera.zoom == 1.0
    assert tracker.score == 0


def test_init_wrap_defaults():
    wrap = init_wrap()
    assert wrap.object_type == ObjectType.NOTYPE
    assert wrap.request == Request.IGNORE
    assert wrap.obj is None
    assert wrap.collider.is_collidable is False
    assert wrap.lives_left == 0


def test_add_wrap_appends(tracker):
    wrap = init_wrap()
    add_wrap_to_list(tracker, wrap)
    assert tracker.objects == [wrap]


def test_add_missing_wrap_raises(tracker):
    with pytest.raises(TrackerError):
        add_wrap_to_list(tracker, None)


def test_asteroid_soft_limit(tracker):
    tracker.objects = [init_wrap() for _ in range(SOFT_MAX_ASTEROIDS)]
    asteroid = init_wrap()
    asteroid.object_type = ObjectType.ASTEROID
    with pytest.raises(TooManyObjectsError):
        add_wrap_to_list(tracker, asteroid)
    other = init_wrap()
    add_wrap_to_list(tracker, other)
    assert tracker.objects[-1] is other
    assert len(tracker.objects) == SOFT_MAX_ASTEROIDS + 1


def test_object_hard_limit(tracker):
    tracker.objects = [init_wrap() for _ in range(MAX_OBJECT_COUNT)]
    with pytest.raises(TooManyObjectsError):
        add_wrap_to_list(tracker, init_wrap())
    assert len(tracker.objects) == MAX_OBJECT_COUNT


def test_second_player_rejected(tracker):
    first = init_wrap()
    first.object_type = ObjectType.PLAYER
    add_wrap_to_list(tracker, first)
    second = init_wrap()
    second.object_type = ObjectType.PLAYER
    with pytest.raises(PlayerAlreadyPresentError):
        add_wrap_to_list(tracker, second)
    assert tracker.player is first
    assert len(tracker.objects) == 1


def test_create_player(tracker):
    position = Vector2(1000.0, 2000.0)
    player = create_player(tracker, position, 0.5)
    assert tracker.player is player
    assert player.object_type == ObjectType.PLAYER
    assert player.request == Request.CREATE
    assert player.lives_left == 2
    assert player.collider.mass == 1.0
    assert player.collider.action is player_collision
    assert player.is_rotatable_by_game is False
    assert player.obj.shape.ref_points == resize_shape(PLAYER_SHAPE_POINTS, 0.5)
    assert player.obj.position == position
    assert tracker.camera.target == position
    session = tracker.session
    assert tracker.camera.offset == Vector2(
        session.screen_width / 2, session.screen_height / 2
    )


def test_create_second_player_returns_none(tracker):
    create_player(tracker, Vector2(0.0, 0.0), 0.5)
    assert create_player(tracker, Vector2(10.0, 10.0), 0.5) is None
    assert len(tracker.objects) == 1


def test_create_projectile_in_front_of_parent(tracker):
    player = create_player(tracker, Vector2(1000.0, 1000.0), 0.5)
    projectile = create_projectile(tracker, player)
    assert tracker.objects[-1] is projectile
    assert projectile.object_type == ObjectType.PROJECTILE
    assert projectile.request == Request.CREATE
    assert projectile.collider.action is get_shot
    assert projectile.obj.shape.size_mult == PROJECTILE_SIZE
    assert projectile.obj.rotate_speed == 5
    assert projectile.obj.position.x == player.obj.position.x
    assert projectile.obj.position.y < player.obj.position.y
    assert projectile.obj.speed.x == 0
    assert projectile.obj.speed.y < 0


def test_create_projectile_when_full(tracker):
    player = create_player(tracker, Vector2(1000.0, 1000.0), 0.5)
    tracker.objects.extend(init_wrap() for _ in range(MAX_OBJECT_COUNT - 1))
    assert create_projectile(tracker, player) is None
    assert len(tracker.objects) == MAX_OBJECT_COUNT


def test_delete_tracked_object_clears_slot_and_player(tracker):
    player = create_player(tracker, Vector2(0.0, 0.0), 0.5)
    other = init_wrap()
    add_wrap_to_list(tracker, other)
    delete_tracked_object(tracker, 0)
    assert tracker.objects == [None, other]
    assert tracker.player is None
    assert player not in tracker.objects