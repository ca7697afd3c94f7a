import random

import pytest

from asteroidfield.asteroid import (
    asteroid_safe_spawn,
    create_asteroid,
    generate_asteroid_shape,
    separate,
)
from asteroidfield.collision import bounce, find_any_collision, init_collider
from asteroidfield.objecthandler import create_player, init_tracker, init_wrap
from asteroidfield.structs import (
    ASTEROID_CORNERS_COUNT,
    ASTEROID_HEIGHT_VARIATION,
    SOFT_MAX_ASTEROIDS,
    WORLD_POS_MAX_X,
    WORLD_POS_MAX_Y,
    WORLD_POS_MIN_X,
    WORLD_POS_MIN_Y,
    ObjectType,
    Request,
    Session,
    Vector2,
)


@pytest.fixture
def tracker():
    random.seed(1234)
    return init_tracker(Session())


def test_generate_asteroid_shape_bounds():
    random.seed(7)
    corners = generate_asteroid_shape()
    assert len(corners) == ASTEROID_CORNERS_COUNT
    limit = 50 + ASTEROID_HEIGHT_VARIATION
    assert all(abs(c.x) <= limit and abs(c.y) <= limit for c in corners)
    assert corners[0].x == 0
    assert 50 - ASTEROID_HEIGHT_VARIATION <= corners[0].y <= limit


def test_create_asteroid(tracker):
    asteroid = create_asteroid(tracker, Vector2(100.0, 200.0), Vector2(1.0, 2.0), 0.5, 2)
    assert tracker.objects == [asteroid]
    assert asteroid.object_type == ObjectType.ASTEROID
    assert asteroid.request == Request.CREATE
    assert asteroid.lives_left == 2
    assert asteroid.update_position and asteroid.draw and asteroid.is_rotatable_by_game
    assert asteroid.obj.position == Vector2(100.0, 200.0)
    assert asteroid.obj.speed == Vector2(1.0, 2.0)
    assert asteroid.obj.rotate_speed == 0.5
    assert asteroid.obj.shape.size_mult == 2
    assert asteroid.obj.shape.array_length == ASTEROID_CORNERS_COUNT
    expected = init_collider(0.85 * 2, bounce)
    assert asteroid.collider.rect == expected.rect
    assert asteroid.collider.mass == pytest.approx(expected.mass)
    assert asteroid.collider.action is bounce


def test_create_asteroid_over_limit_returns_none(tracker):
    tracker.objects = [init_wrap() for _ in range(SOFT_MAX_ASTEROIDS)]
    assert create_asteroid(tracker, Vector2(), Vector2(), 0, 1) is None
    assert len(tracker.objects) == SOFT_MAX_ASTEROIDS


def test_safe_spawn_without_player_stays_in_world(tracker):
    spawned = [asteroid_safe_spawn(tracker) for _ in range(10)]
    placed = [w for w in spawned if w is not None]
    assert placed
    for wrap in placed:
        assert WORLD_POS_MIN_X <= wrap.obj.position.x <= WORLD_POS_MAX_X
        assert WORLD_POS_MIN_Y <= wrap.obj.position.y <= WORLD_POS_MAX_Y


def test_safe_spawn_keeps_away_from_player(tracker):
    player = create_player(tracker, Vector2(5000.0, 5000.0), 0.5)
    placed = 0
    for _ in range(20):
        wrap = asteroid_safe_spawn(tracker)
        if wrap is None:
            assert tracker.objects[-1].request == Request.DELETE
            continue
        placed += 1
        pos = wrap.obj.position
        assert abs(pos.x - player.obj.position.x) >= 400
        assert abs(pos.y - player.obj.position.y) >= 400
        assert abs(pos.x - player.obj.position.x) <= 3000
        assert abs(pos.y - player.obj.position.y) <= 3000
        assert not find_any_collision(tracker, wrap)
    assert placed > 0


def test_separate_rejects_non_asteroid(tracker):
    with pytest.raises(ValueError):
        separate(tracker, init_wrap())


def test_separate_without_lives_only_deletes(tracker):
    parent = create_asteroid(tracker, Vector2(500.0, 500.0), Vector2(), 0, 2)
    parent.lives_left = 0
    assert separate(tracker, parent) == []
    assert parent.request == Request.DELETE
    assert tracker.objects == [parent]


def test_separate_splits_in_halves(tracker):
    parent = create_asteroid(tracker, Vector2(5000.0, 5000.0), Vector2(10.0, 20.0), 1.5, 2)
    parent.lives_left = 1
    children = separate(tracker, parent)
    left, right = children
    assert parent.request == Request.DELETE
    assert tracker.objects[1:] == children

    half = parent.obj.shape.array_length // 2
    assert right.obj.shape.ref_points == parent.obj.shape.ref_points[:half]
    assert left.obj.shape.ref_points == parent.obj.shape.ref_points[half:]
    assert left.obj.shape.array_length == half

    for child in children:
        assert child.lives_left == 1
        assert child.obj.heading == parent.obj.heading
        assert child.obj.speed.x == parent.obj.speed.x
        assert child.obj.position.x == parent.obj.position.x
        assert child.collider.mass == pytest.approx(init_collider(0.85, bounce).mass / 2)

    assert left.obj.rotate_speed == -1.5
    assert right.obj.rotate_speed == 1.5
    mid_y = (left.obj.position.y + right.obj.position.y) / 2
    assert mid_y == pytest.approx(parent.obj.position.y)
    assert right.obj.speed.y - parent.obj.speed.y == pytest.approx(
        parent.obj.speed.y - left.obj.speed.y
    )
    assert right.obj.speed.y > left.obj.speed.y


def test_separate_when_full_deletes_parent(tracker):
    tracker.objects = [init_wrap() for _ in range(SOFT_MAX_ASTEROIDS - 1)]
    parent = create_asteroid(tracker, Vector2(500.0, 500.0), Vector2(), 0, 2)
    parent.lives_left = 1
    assert separate(tracker, parent) == []
    assert parent.request == Request.DELETE
    assert len(tracker.objects) == SOFT_MAX_ASTEROIDS