import random

import pytest

from asteroidfield.actionlist import delete_tracker, run_action_list, update_obj
from asteroidfield.asteroid import create_asteroid
from asteroidfield.autils import f_cut_off
from asteroidfield.objecthandler import create_player, init_tracker
from asteroidfield.structs import Request, Session, Vector2


@pytest.fixture
def tracker():
    random.seed(42)
    session = Session()
    session.frame_time = 1 / 60
    return init_tracker(session)


def test_create_becomes_update(tracker):
    asteroid = create_asteroid(tracker, Vector2(100.0, 100.0), Vector2(), 0, 1)
    run_action_list(tracker)
    assert asteroid.request == Request.UPDATE
    assert tracker.objects == [asteroid]


def test_deleted_objects_are_removed(tracker):
    keep = create_asteroid(tracker, Vector2(100.0, 100.0), Vector2(), 0, 1)
    drop = create_asteroid(tracker, Vector2(3000.0, 3000.0), Vector2(), 0, 1)
    drop.request = Request.DELETE
    run_action_list(tracker)
    assert tracker.objects == [keep]


def test_list_is_sorted_by_x(tracker):
    far = create_asteroid(tracker, Vector2(5000.0, 100.0), Vector2(), 0, 1)
    near = create_asteroid(tracker, Vector2(1000.0, 100.0), Vector2(), 0, 1)
    run_action_list(tracker)
    assert tracker.objects == [near, far]


def test_separate_request_replaces_parent(tracker):
    parent = create_asteroid(tracker, Vector2(5000.0, 5000.0), Vector2(), 0, 2)
    parent.lives_left = 1
    parent.request = Request.SEPARATE
    run_action_list(tracker)
    assert parent not in tracker.objects
    assert len(tracker.objects) == 2
    assert all(w.request == Request.UPDATE for w in tracker.objects)
    assert all(w.lives_left == 1 for w in tracker.objects)


def test_update_obj_moves_by_speed(tracker):
    asteroid = create_asteroid(tracker, Vector2(5000.0, 5000.0), Vector2(60.0, -120.0), 0, 1)
    asteroid.request = Request.UPDATE
    update_obj(tracker, 0)
    frame_time = tracker.session.frame_time
    assert asteroid.obj.position.x == pytest.approx(5000.0 + 60.0 * frame_time)
    assert asteroid.obj.position.y == pytest.approx(5000.0 - 120.0 * frame_time)


def test_delete_tracker_empties_everything(tracker):
    create_player(tracker, Vector2(5000.0, 5000.0), 0.5)
    create_asteroid(tracker, Vector2(100.0, 100.0), Vector2(), 0, 1)
    delete_tracker(tracker)
    assert tracker.objects == []
    assert tracker.player is None


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_collision(seed):
    random.seed(seed)
    session = Session()
    session.frame_time = 1 / 60
    tracker = init_tracker(session)
    small_speed = 90.0

    asteroids = [
        create_asteroid(tracker, Vector2(300, 600), Vector2(0, 0), 0, 2),
        create_asteroid(tracker, Vector2(500, 600), Vector2(-small_speed, 0), 0, 1),
        create_asteroid(tracker, Vector2(500, 900), Vector2(0, 0), 0, 2),
        create_asteroid(tracker, Vector2(300, 900), Vector2(small_speed, 0), 0, 1),
    ]

    while session.game_time_passed < 2.0:
        run_action_list(tracker)
        session.game_time_passed += session.frame_time

    assert f_cut_off(asteroids[0].obj.speed.x, 3) == -f_cut_off(
        small_speed / asteroids[0].collider.mass, 3
    )
    assert asteroids[1].obj.speed.x == 0
    assert asteroids[2].obj.speed.x == -asteroids[0].obj.speed.x
    assert asteroids[3].obj.speed.x == -asteroids[1].obj.speed.x

    delete_tracker(tracker)
    assert tracker.objects == []