"""Core game types, constants and per-run session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .logger import Logger


class LogLevel(IntEnum):
    NOLOG = 0
    FATAL = 1
    ERROR = 2
    WARNING = 3
    BENCH = 4
    INFO = 5
    TEST_FAIL = 6
    TEST_PASS = 7
    FIXME = 8
    DEBUG = 9
    TRACE = 10
    ALL = 11

    @property
    def label(self) -> str:
        """Plain name used in log files."""
        return _LABELS[self][0]

    @property
    def colored(self) -> str:
        """Name with terminal colour codes, used on the console."""
        return _LABELS[self][1]


_LABELS = {
    LogLevel.NOLOG: ("NOLOG", "NOLOG"),
    LogLevel.FATAL: ("FATAL", "\033[1;31mFATAL\033[0;37m"),
    LogLevel.ERROR: ("ERROR", "\033[0;31mERROR\033[0;37m"),
    LogLevel.WARNING: ("WARNING", "\033[1;33mWARNING\033[0;37m"),
    LogLevel.BENCH: ("BENCH", "\033[0;33mBENCH\033[0;37m"),
    LogLevel.INFO: ("INFO", "\033[0;32mINFO\033[0;37m"),
    LogLevel.TEST_FAIL: ("TEST FAIL", "\033[1;31mTEST FAIL\033[0;37m"),
    LogLevel.TEST_PASS: ("TEST PASS", "\033[0;32mTEST PASS\033[0;37m"),
    LogLevel.FIXME: ("FIXME", "\033[0;34mFIXME\033[0;37m"),
    LogLevel.DEBUG: ("DEBUG", "\033[1;35mDEBUG\033[0;37m"),
    LogLevel.TRACE: ("TRACE", "\033[0;35mTRACE\033[0;37m"),
    LogLevel.ALL: ("ALL", "ALL"),
}


class GameState(IntEnum):
    INIT = 0
    MAIN_MENU = 1
    START_NEW = 2
    GAME_OVER = 3
    RUNNING = 4
    TESTING = 5
    PAUSE = 6
    EXIT = -1
    CLEANUP = -2
    NOOP = -255


class Difficulty(IntEnum):
    GAME_JOURNALIST = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    VERY_HIGH = 4
    INSANE = 5
    DOFH = 10


class MenuOptionType(IntEnum):
    DUMMY = -1
    SUBMENU = 1
    FUNCTION = 2


class Request(IntEnum):
    """What the action list does with an object on its next pass."""

    IGNORE = 0
    UPDATE = 1
    SEPARATE = 2
    CREATE = 3
    DELETE = -1


class ObjectType(IntEnum):
    NOTYPE = 0
    ASTEROID = 1
    PROJECTILE = 2
    PLAYER = 3


# Physics
ELASTICITY_FACTOR = 0.5

WORLD_POS_MIN_X = 0
WORLD_POS_MAX_X = 10000
WORLD_POS_MIN_Y = 0
WORLD_POS_MAX_Y = 10000

SOFT_MAX_ASTEROIDS = 1000
MAX_OBJECT_COUNT = 1024

# Player
RATE_OF_FIRE = 5
PROJECTILE_SPEED = 20
PROJECTILE_SIZE = 0.1
PLAYER_ROTATION_SPEED = 5
PLAYER_MOVE_SPEED = 20
BASE_ROTATE = 5

DEFAULT_LOG_LEVEL = LogLevel.WARNING

MAX_MENU_STACK_SIZE = 32

ASTEROID_SPAWN_DELAY = 10
ASTEROID_CORNERS_COUNT = 20
ASTEROID_HEIGHT_VARIATION = 15.0

BENCH_LOG_FILE_NAME = "asteroids-benchlog.log"
SAMPLES = 1024

# The first player point is the front of the ship and gives its heading.
PLAYER_SHAPE_POINTS = ((0.0, -50.0), (50.0, 50.0), (0.0, 20.0), (-50.0, 50.0))
ASTEROID_SHAPE_POINTS = ((-50.0, 50.0), (50.0, 50.0), (50.0, -50.0), (-50.0, -50.0))
PROJECTILE_SHAPE_POINTS = (
    (0.0, -50.0),
    (-30.0, 40.0),
    (45.0, -15.0),
    (-45.0, -15.0),
    (30.0, 40.0),
)


@dataclass
class Vector2:
    x: float = 0.0
    y: float = 0.0

    def copy(self) -> Vector2:
        return Vector2(self.x, self.y)


@dataclass
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class Camera:
    offset: Vector2 = field(default_factory=Vector2)
    target: Vector2 = field(default_factory=Vector2)
    rotation: float = 0.0
    zoom: float = 1.0


@dataclass
class Shape:
    """Outline of an object: reference points and their rotated copies."""

    size_mult: float = 1.0
    points: list[Vector2] = field(default_factory=list)
    ref_points: list[Vector2] = field(default_factory=list)

    @property
    def array_length(self) -> int:
        return len(self.ref_points)


@dataclass(eq=False)
class GameObject:
    rotate_speed: float = 0.0
    heading: float = 0.0
    position: Vector2 = field(default_factory=Vector2)
    speed: Vector2 = field(default_factory=Vector2)
    shape: Shape = field(default_factory=Shape)


CollisionAction = Callable[["Tracker", "ObjWrap", "ObjWrap"], None]


@dataclass(eq=False)
class Collider:
    is_collidable: bool = False
    rect: Rect = field(default_factory=Rect)
    mass: float = 0.0
    action: Optional[CollisionAction] = None


@dataclass(eq=False)
class ObjWrap:
    """A tracked game object together with its bookkeeping flags."""

    object_type: ObjectType = ObjectType.NOTYPE
    request: Request = Request.IGNORE
    update_position: bool = False
    draw: bool = False
    is_rotatable_by_game: bool = False
    obj: Optional[GameObject] = None
    collider: Collider = field(default_factory=Collider)
    lives_left: int = 0


def _default_logger() -> Logger:
    from .logger import Logger

    return Logger()


@dataclass(eq=False)
class Session:
    """Mutable state shared by the whole run of the game."""

    logger: Logger = field(default_factory=_default_logger)
    screen_width: int = 1600
    screen_height: int = 900
    fps_target: int = 75
    last_shot: int = 0
    camera_follow: bool = True
    last_asteroid_spawn: float = 0.0
    next_asteroid_spawn: float = 0.0
    game_time_passed: float = 0.0
    difficulty: Difficulty = Difficulty.GAME_JOURNALIST
    game_state: GameState = GameState.INIT
    next_state: GameState = GameState.NOOP
    frame_time: float = 0.0
    log_file_name: str = ""

    debugging: bool = False
    last_dragged: Optional[ObjWrap] = None
    speed_prev: Vector2 = field(default_factory=Vector2)
    gdb_break: bool = False
    debug_pause: bool = False
    visual_debug_show_points: bool = False
    visual_debug: bool = False

    benchmarking: bool = False
    bench_running: bool = False
    bench_collider_time: int = 0


@dataclass(eq=False)
class Tracker:
    """All tracked objects, the player, the camera and the score."""

    session: Session = field(default_factory=Session)
    player: Optional[ObjWrap] = None
    camera: Camera = field(default_factory=Camera)
    objects: list[Optional[ObjWrap]] = field(default_factory=list)
    score: int = 0