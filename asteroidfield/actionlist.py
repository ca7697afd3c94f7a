"""The per-frame pass over tracked objects."""

from __future__ import annotations

from typing import Optional

from .asteroid import separate
from .autils import cleanup_memory
from .collision import fast_find_collisions, sort_list_by_x
from .objecthandler import delete_tracked_object
from .objectlogic import rotate_object, update_object_pos
from .structs import Request, Tracker


def update_obj(tracker: Tracker, index: int) -> None:
    """Collide, rotate and move the object at ``index``."""
    wrap = tracker.objects[index]
    frame_time = tracker.session.frame_time
    if wrap.collider.is_collidable:
        fast_find_collisions(tracker, index)
    if wrap.is_rotatable_by_game:
        rotate_object(wrap, wrap.obj.rotate_speed, frame_time)
    if wrap.update_position:
        update_object_pos(wrap, frame_time)


def run_action_list(tracker: Tracker) -> None:
    """Carry out every object's pending request, then compact the list.

    Objects created during the pass are handled in the same pass.
    """
    sort_list_by_x(tracker)
    objects = tracker.objects
    index = 0
    while index < len(objects):
        current = objects[index]
        if current is None:
            index += 1
            continue

        request = current.request
        if request == Request.CREATE:
            current.request = Request.UPDATE
        elif request == Request.DELETE:
            delete_tracked_object(tracker, index)
        elif request == Request.SEPARATE:
            separate(tracker, current)
            continue  # the parent is now marked for deletion; revisit it
        elif request == Request.UPDATE:
            update_obj(tracker, index)
        index += 1

    cleanup_memory(tracker)


def delete_tracker(tracker: Optional[Tracker]) -> None:
    """Delete every tracked object, leaving the tracker empty."""
    if tracker is None:
        return
    cleanup_memory(tracker)
    for wrap in tracker.objects:
        wrap.request = Request.DELETE
    run_action_list(tracker)
    tracker.objects.clear()
    tracker.player = None