"""Player input handling, new games and timed asteroid spawning."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .asteroid import asteroid_safe_spawn, create_asteroid
from .autils import clamp_float, get_time_mics, roll_over_int
from .collision import find_collision_pos
from .menulogic import DIFFICULTY_MENU, MAIN_MENU, MenuParent, select_current
from .objecthandler import create_player, create_projectile
from .objectlogic import rotate_object
from .structs import (
    MAX_OBJECT_COUNT,
    PLAYER_MOVE_SPEED,
    PLAYER_ROTATION_SPEED,
    RATE_OF_FIRE,
    SOFT_MAX_ASTEROIDS,
    WORLD_POS_MAX_X,
    WORLD_POS_MAX_Y,
    GameObject,
    GameState,
    LogLevel,
    ObjWrap,
    Request,
    Session,
    Tracker,
    Vector2,
)

LEFT_MOUSE = 0
RIGHT_MOUSE = 1


def _frozen(keys: Iterable) -> frozenset:
    return keys if isinstance(keys, frozenset) else frozenset(keys)


@dataclass
class InputState:
    """A snapshot of the keyboard and mouse for one frame.

    Keys are named by their character ("W", "1", "=", "-") or by a name
    ("SPACE", "ESCAPE", "ENTER", "LEFT_CONTROL"). Mouse button 0 is the left
    one, 1 the right one. ``now_us`` overrides the clock used for firing.
    """

    down: frozenset = field(default_factory=frozenset)
    pressed: frozenset = field(default_factory=frozenset)
    mouse_down: frozenset = field(default_factory=frozenset)
    mouse_position: Vector2 = field(default_factory=Vector2)
    mouse_delta: Vector2 = field(default_factory=Vector2)
    wheel: float = 0.0
    now_us: Optional[int] = None

    def __post_init__(self) -> None:
        self.down = _frozen(self.down)
        self.pressed = _frozen(self.pressed)
        self.mouse_down = _frozen(self.mouse_down)

    def is_down(self, key: str) -> bool:
        return key in self.down

    def is_pressed(self, key: str) -> bool:
        return key in self.pressed

    def is_mouse_down(self, button: int) -> bool:
        return button in self.mouse_down

    def now(self) -> int:
        return self.now_us if self.now_us is not None else get_time_mics()


def on_player_accelerate(obj: GameObject, speed: float, frame_time: float) -> None:
    """Push the object along its front point; gaining speed gets harder past 500."""
    mult_x = 1.0
    mult_y = 1.0
    if abs(obj.speed.x + speed) > abs(obj.speed.x):
        mult_x = max(abs(obj.speed.x / 500.0), 1.0)
    if abs(obj.speed.y + speed) > abs(obj.speed.y):
        mult_y = max(abs(obj.speed.y / 500.0), 1.0)

    front = obj.shape.points[0]
    obj.speed.x += (speed / mult_x) * frame_time * front.x
    obj.speed.y += (speed / mult_y) * frame_time * front.y


def ship_controls(tracker: Tracker, inputs: InputState) -> None:
    """Thrust, turn and fire the player ship."""
    player = tracker.player
    if player is None:
        return
    session = tracker.session
    frame_time = session.frame_time

    if inputs.is_down("W"):
        on_player_accelerate(player.obj, PLAYER_MOVE_SPEED, frame_time)
    if inputs.is_down("S"):
        on_player_accelerate(player.obj, -PLAYER_MOVE_SPEED, frame_time)
    if inputs.is_down("D"):
        rotate_object(player, PLAYER_ROTATION_SPEED, frame_time)
    if inputs.is_down("A"):
        rotate_object(player, -PLAYER_ROTATION_SPEED, frame_time)

    if inputs.is_down("SPACE"):
        now = inputs.now()
        if now - session.last_shot > 1_000_000 // RATE_OF_FIRE:
            session.last_shot = now
            create_projectile(tracker, player)


def menu_controls(
    session: Session, menu: MenuParent, highlighted: int, inputs: InputState
) -> tuple[MenuParent, int]:
    """Move the highlight or select; returns the menu to show and its highlight."""
    last = menu.option_list_len - 1
    if inputs.is_pressed("W"):
        highlighted = roll_over_int(highlighted - 1, 0, last)
        session.logger.log(LogLevel.DEBUG, f"menu highlighted == {highlighted}")
    if inputs.is_pressed("S"):
        highlighted = roll_over_int(highlighted + 1, 0, last)
        session.logger.log(LogLevel.DEBUG, f"menu highlighted == {highlighted}")

    if inputs.is_pressed("ESCAPE") and menu.name == DIFFICULTY_MENU.name:
        return MAIN_MENU, 0

    if inputs.is_pressed("ENTER") or inputs.is_pressed("SPACE"):
        return select_current(session, menu, highlighted), 0

    return menu, highlighted


def player_runtime_controls(tracker: Tracker, inputs: InputState) -> None:
    """Pause toggling and camera follow, drag and zoom."""
    session = tracker.session
    camera = tracker.camera

    if tracker.player is not None and inputs.is_pressed("C"):
        session.camera_follow = not session.camera_follow

    if inputs.is_pressed("ESCAPE"):
        if session.game_state == GameState.PAUSE:
            session.logger.log(LogLevel.DEBUG, "Resuming the game")
            session.game_state = GameState.RUNNING
        elif session.game_state == GameState.RUNNING:
            session.logger.log(LogLevel.DEBUG, "Pauseing the game")
            session.game_state = GameState.PAUSE

    if inputs.is_mouse_down(RIGHT_MOUSE):
        session.camera_follow = False
        camera.target.x -= inputs.mouse_delta.x / camera.zoom
        camera.target.y -= inputs.mouse_delta.y / camera.zoom

    if tracker.player is not None and session.camera_follow:
        camera.target.x = tracker.player.obj.position.x
        camera.target.y = tracker.player.obj.position.y

    camera.zoom = clamp_float(camera.zoom + inputs.wheel / 10, 0.3, 3)


_DEBUG_SPAWNS = {
    "1": ((200, 0, 0, 0, 1, 1),),
    "2": (
        (300, 600, 0, 0, 0, 2),
        (500, 600, -90, 0, 0, 1),
        (300, 900, 90, 0, 0, 1),
        (500, 900, 0, 0, 0, 2),
    ),
    "3": ((300, 900, -30, 0, 0, 4), (600, 900, -90, 0, 0, 1)),
    "4": ((400, 300, 120, 0, 0, 1), (600, 300, -120, 0, 0, 2)),
    "5": (
        (100, 300, 30, 0, 0, 2),
        (400, 300, 0, 0, 0, 1),
        (900, 300, -120, 0, 0, 2),
    ),
}


def _cursor_world_pos(tracker: Tracker, inputs: InputState) -> Vector2:
    camera = tracker.camera
    return Vector2(
        (inputs.mouse_position.x - camera.offset.x) / camera.zoom + camera.target.x,
        (inputs.mouse_position.y - camera.offset.y) / camera.zoom + camera.target.y,
    )


def _drag(tracker: Tracker, inputs: InputState) -> None:
    session = tracker.session
    cursor = _cursor_world_pos(tracker, inputs)
    if inputs.is_mouse_down(LEFT_MOUSE):
        found = find_collision_pos(tracker, cursor)
        if found is not None:
            session.last_dragged = found
        target: Optional[ObjWrap] = found or session.last_dragged
        if target is not None:
            target.obj.position.x = cursor.x
            target.obj.position.y = cursor.y

    if session.last_dragged is not None and not inputs.is_mouse_down(LEFT_MOUSE):
        frame_time = session.frame_time
        if frame_time > 0:
            session.last_dragged.obj.speed = Vector2(
                inputs.mouse_delta.x / frame_time, inputs.mouse_delta.y / frame_time
            )
        session.last_dragged = None


def _toggle_bench(tracker: Tracker) -> None:
    session = tracker.session
    if not session.bench_running:
        session.bench_running = True
        for _ in range(MAX_OBJECT_COUNT - 1):
            asteroid_safe_spawn(tracker)
        return
    session.bench_running = False
    for wrap in tracker.objects[:0:-1]:
        if wrap is None or wrap is tracker.player:
            continue
        wrap.request = Request.DELETE


def debugging_key_handler(tracker: Tracker, inputs: InputState) -> None:
    """Developer controls: dragging objects, spawning, deleting and toggles."""
    session = tracker.session
    _drag(tracker, inputs)

    if inputs.is_down("LEFT_CONTROL") and inputs.is_pressed("C"):
        session.logger.log(LogLevel.DEBUG, "CTRL and C is pressed")
        session.game_state = GameState.EXIT

    if inputs.is_pressed("L"):
        session.fps_target = 0 if session.fps_target else 75

    if inputs.is_pressed("T"):
        session.gdb_break = not session.gdb_break
        print("Breakpoint says hi")

    if inputs.is_pressed("V"):
        session.visual_debug = not session.visual_debug

    if inputs.is_pressed("O") and tracker.objects and tracker.objects[0] is not None:
        tracker.objects[0].obj.position = Vector2(0.0, 0.0)
        tracker.objects[0].obj.speed = Vector2(0.0, 0.0)

    if session.game_state != GameState.RUNNING:
        return

    if inputs.is_pressed("P"):
        session.debug_pause = not session.debug_pause

    for key, spawns in _DEBUG_SPAWNS.items():
        if inputs.is_pressed(key):
            for px, py, sx, sy, rot, size in spawns:
                create_asteroid(tracker, Vector2(px, py), Vector2(sx, sy), rot, size)

    if inputs.is_pressed("9"):
        for _ in range(SOFT_MAX_ASTEROIDS - 1):
            asteroid_safe_spawn(tracker)

    if (
        session.benchmarking
        and inputs.is_pressed("B")
        and session.logger.bench_file is not None
    ):
        _toggle_bench(tracker)

    if inputs.is_pressed("0"):
        for wrap in tracker.objects:
            if wrap is None or wrap is tracker.player:
                continue
            wrap.request = Request.DELETE

    if inputs.is_pressed("="):
        asteroid_safe_spawn(tracker)

    if inputs.is_pressed("-") and len(tracker.objects) > 1:
        to_delete = tracker.objects[-1]
        if to_delete is tracker.player:
            to_delete = tracker.objects[-2]
        if to_delete is not None:
            to_delete.request = Request.DELETE


def new_game(tracker: Tracker) -> Optional[ObjWrap]:
    """Reset the fire timer and put the player in the middle of the world."""
    tracker.session.last_shot = 0
    return create_player(
        tracker, Vector2(WORLD_POS_MAX_X / 2.0, WORLD_POS_MAX_Y / 2.0), 0.5
    )


def spawn_asteroid_on_time(tracker: Tracker) -> Optional[ObjWrap]:
    """Spawn an asteroid once its time has come; a higher score spawns sooner.

    Returns the new asteroid, or ``None`` when it is not yet time or the
    spawn failed.
    """
    session = tracker.session
    if session.next_asteroid_spawn >= session.game_time_passed:
        return None
    session.last_asteroid_spawn = session.game_time_passed
    session.next_asteroid_spawn = session.last_asteroid_spawn + (
        (2.0 / math.log(tracker.score / 100.0 + 1.2)) - 1
    )
    return asteroid_safe_spawn(tracker)