"""Drawing the world, the on-screen information and the menus."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import pygame

from .menulogic import MenuParent
from .structs import (
    WORLD_POS_MAX_X,
    WORLD_POS_MAX_Y,
    WORLD_POS_MIN_X,
    WORLD_POS_MIN_Y,
    Camera,
    LogLevel,
    ObjWrap,
    Request,
    Session,
    Tracker,
    Vector2,
)

Color = Sequence[int]

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
RAYWHITE = (245, 245, 245)
RED = (230, 41, 55)
LIME = (0, 158, 47)
WORLD_BACKGROUND = (18, 18, 18)
GRID_COLOR = (38, 38, 38)
MENU_BACKDROP = (38, 38, 38, 190)

_TITLE_FONT_SIZE = 42
_MENU_FONT_SIZE = 32
_TITLE_POS = 100


def world_to_screen(camera: Camera, pos: Vector2) -> Vector2:
    """Map a world position to the screen through ``camera``."""
    return Vector2(
        (pos.x - camera.target.x) * camera.zoom + camera.offset.x,
        (pos.y - camera.target.y) * camera.zoom + camera.offset.y,
    )


def screen_to_world(camera: Camera, pos: Vector2) -> Vector2:
    """Map a screen position back into the world through ``camera``."""
    return Vector2(
        (pos.x - camera.offset.x) / camera.zoom + camera.target.x,
        (pos.y - camera.offset.y) / camera.zoom + camera.target.y,
    )


def _point(camera: Camera, x: float, y: float) -> tuple[int, int]:
    screen = world_to_screen(camera, Vector2(x, y))
    return int(screen.x), int(screen.y)


class Renderer:
    """Draws game state onto a pygame surface."""

    def __init__(self, surface: pygame.Surface, session: Session) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self.surface = surface
        self.session = session
        self.mouse_position = Vector2()
        self._fonts: dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def measure_text(self, text: str, font_size: int) -> int:
        """Width in pixels of the widest line of ``text``."""
        font = self._font(font_size)
        return max(font.size(line)[0] for line in text.split("\n"))

    def _centered_x(self, text: str, font_size: int) -> int:
        return int((self.session.screen_width - self.measure_text(text, font_size)) / 2)

    def display_text(
        self, pos: Vector2, font_size: int, color: Color, text: str
    ) -> pygame.Rect:
        """Draw ``text`` with its top left at ``pos``; returns the area covered."""
        font = self._font(font_size)
        x, y = int(pos.x), int(pos.y)
        covered = pygame.Rect(x, y, 0, 0)
        for line in text.split("\n"):
            rendered = font.render(line, False, color)
            covered.union_ip(self.surface.blit(rendered, (x, y)))
            y += font.get_linesize()
        return covered

    def debug_display_text(
        self, pos: Vector2, font_size: int, color: Color, text: str
    ) -> Optional[pygame.Rect]:
        """Draw ``text`` only while visual debugging is on."""
        if not self.session.visual_debug:
            return None
        return self.display_text(pos, font_size, color, text)

    def _draw_fps(self) -> None:
        frame_time = self.session.frame_time
        fps = round(1 / frame_time) if frame_time > 0 else 0
        self.display_text(Vector2(0, 0), 20, LIME, f"{fps:2d} FPS")

    def _draw_object_debug(self, wrap: ObjWrap, camera: Camera) -> None:
        obj = wrap.obj
        rect = wrap.collider.rect
        pos = obj.position
        if self.session.visual_debug:
            left, top = _point(camera, rect.x + pos.x, rect.y + pos.y)
            box = pygame.Rect(
                left, top, int(rect.width * camera.zoom), int(rect.height * camera.zoom)
            )
            pygame.draw.rect(self.surface, RED, box, 1)

        self.debug_display_text(
            world_to_screen(camera, Vector2(pos.x, pos.y + 50)),
            18,
            WHITE,
            f"Heading: {obj.heading:f}\nIsCollidable: {int(wrap.collider.is_collidable)}\n"
            f"Speed.x: {obj.speed.x:f}\nSpeed.y: {obj.speed.y:f}",
        )

        if self.session.visual_debug_show_points:
            self.debug_display_text(
                world_to_screen(camera, Vector2(pos.x, pos.y + 118)), 18, WHITE, "Points Pos:"
            )
            for i, point in enumerate(obj.shape.points):
                self.debug_display_text(
                    world_to_screen(camera, Vector2(pos.x, pos.y + 136 + i * 18)),
                    18,
                    WHITE,
                    f"x: {point.x:f} y: {point.y:f}",
                )

    def draw_object(self, wrap: ObjWrap, camera: Camera) -> None:
        """Draw the closed outline of the object's current points."""
        if self.session.debugging:
            self._draw_object_debug(wrap, camera)

        obj = wrap.obj
        points = obj.shape.points
        if not points:
            self.session.logger.log(LogLevel.WARNING, "Attempting to draw an empty shape")
            return

        coords = [_point(camera, p.x + obj.position.x, p.y + obj.position.y) for p in points]
        if len(coords) == 1:
            self.surface.set_at(coords[0], RAYWHITE)
            return
        pygame.draw.lines(self.surface, RAYWHITE, True, coords)

    def _world_line(
        self, camera: Camera, start: tuple[float, float], end: tuple[float, float], color: Color
    ) -> None:
        pygame.draw.line(
            self.surface, color, _point(camera, *start), _point(camera, *end)
        )

    def draw_grid_2d(self, camera: Camera, dist: int, color: Color) -> None:
        """Draw grid lines across the world and a white border around it."""
        shifted = abs(WORLD_POS_MIN_X) + abs(WORLD_POS_MAX_X)
        if shifted % dist:
            dist += shifted % dist

        for current in range(0, shifted, dist):
            self._world_line(
                camera,
                (WORLD_POS_MIN_X + current, WORLD_POS_MIN_Y),
                (WORLD_POS_MIN_X + current, WORLD_POS_MAX_Y),
                color,
            )
            self._world_line(
                camera,
                (WORLD_POS_MIN_X, WORLD_POS_MIN_Y + current),
                (WORLD_POS_MAX_X, WORLD_POS_MIN_Y + current),
                color,
            )

        corners = (
            (WORLD_POS_MIN_X, WORLD_POS_MIN_Y),
            (WORLD_POS_MIN_X, WORLD_POS_MAX_Y),
            (WORLD_POS_MAX_X, WORLD_POS_MAX_Y),
            (WORLD_POS_MAX_X, WORLD_POS_MIN_Y),
        )
        for start, end in zip(corners, corners[1:] + corners[:1]):
            self._world_line(camera, start, end, WHITE)

    def run_world_render(self, tracker: Tracker) -> int:
        """Draw the world and every visible object; returns how many were drawn."""
        camera = tracker.camera
        session = self.session

        left, top = _point(camera, WORLD_POS_MIN_X, WORLD_POS_MIN_Y)
        width = (abs(WORLD_POS_MIN_X) + abs(WORLD_POS_MAX_X)) * camera.zoom
        height = (abs(WORLD_POS_MIN_Y) + abs(WORLD_POS_MAX_Y)) * camera.zoom
        pygame.draw.rect(
            self.surface, WORLD_BACKGROUND, pygame.Rect(left, top, int(width), int(height))
        )
        self.draw_grid_2d(camera, 200, GRID_COLOR)

        start_x = camera.target.x - camera.offset.x / camera.zoom
        start_y = camera.target.y - camera.offset.y / camera.zoom
        end_x = start_x + session.screen_width / camera.zoom
        end_y = start_y + session.screen_height / camera.zoom

        drawn = 0
        for wrap in tracker.objects:
            if wrap is None or not wrap.draw or wrap.request != Request.UPDATE:
                continue
            pos = wrap.obj.position
            rect = wrap.collider.rect
            col_start_x = pos.x + rect.x
            col_start_y = pos.y + rect.y
            col_end_x = col_start_x + rect.width
            col_end_y = col_start_y + rect.height
            if (
                col_end_x < start_x
                or end_x < col_start_x
                or col_end_y < start_y
                or end_y < col_start_y
            ):
                continue
            self.draw_object(wrap, camera)
            drawn += 1

        if session.debugging and session.visual_debug:
            cursor = screen_to_world(camera, self.mouse_position)
            size = 20
            cx, cy = _point(camera, int(cursor.x) - size / 2, int(cursor.y) - size / 2)
            side = int(size * camera.zoom)
            pygame.draw.rect(self.surface, RED, pygame.Rect(cx, cy, side, side))
        return drawn

    def run_screen_render(self, tracker: Tracker) -> None:
        """Draw lives, score and status text, and recentre the camera offset."""
        session = self.session
        session.screen_width, session.screen_height = self.surface.get_size()
        tracker.camera.offset.x = session.screen_width / 2
        tracker.camera.offset.y = session.screen_height / 2

        if tracker.player is not None:
            self.display_text(
                Vector2(20, 50), 24, RED, f"LIVES LEFT: {tracker.player.lives_left}"
            )
        self.display_text(Vector2(20, 78), 20, WHITE, f"PLAYER SCORE: {tracker.score}")

        if session.benchmarking and session.bench_running:
            self.display_text(
                Vector2(session.screen_width / 2 - self.measure_text("BENCHMARKING", 36), 40),
                36,
                RED,
                "BENCHMARKING",
            )

        if session.debugging:
            if tracker.player is not None:
                speed = tracker.player.obj.speed
                self.debug_display_text(
                    Vector2(20, 110), 18, WHITE,
                    f"Acceleration: {speed.x - session.speed_prev.x:f}",
                )
                self.debug_display_text(
                    Vector2(20, 130), 18, WHITE,
                    f"Acceleration: {speed.y - session.speed_prev.y:f}",
                )
            self.debug_display_text(
                Vector2(20, 150), 18, WHITE, f"Cur Difficulty: {int(session.difficulty)}"
            )
            self.debug_display_text(
                Vector2(20, 20), 18, WHITE, f"Length of the list: {len(tracker.objects)}"
            )
            self.debug_display_text(
                Vector2(20, 32), 18, WHITE,
                "Time untill next asteroid: "
                f"{session.next_asteroid_spawn - session.game_time_passed:f}",
            )
        self._draw_fps()

    def run_menu_render(
        self, menu: MenuParent, highlighted: int, subtitles: Iterable[str] = ()
    ) -> None:
        """Draw a menu over a translucent panel with the highlighted option in red."""
        session = self.session
        # The option block is placed using the height known before this frame.
        start = session.screen_height // 2 - menu.option_list_len * _MENU_FONT_SIZE // 2
        session.screen_width, session.screen_height = self.surface.get_size()
        width, height = session.screen_width, session.screen_height

        backdrop = pygame.Surface((width // 3, height // 2), pygame.SRCALPHA)
        backdrop.fill(MENU_BACKDROP)
        self.surface.blit(backdrop, (width // 3, height // 4))

        self.display_text(
            Vector2(self._centered_x(menu.name, _TITLE_FONT_SIZE), _TITLE_POS),
            _TITLE_FONT_SIZE,
            WHITE,
            menu.name,
        )

        for i, subtitle in enumerate(subtitles):
            self.display_text(
                Vector2(
                    self._centered_x(subtitle, _MENU_FONT_SIZE),
                    _MENU_FONT_SIZE * (i + 1) + _TITLE_POS + 12,
                ),
                _MENU_FONT_SIZE,
                WHITE,
                subtitle,
            )

        for i, option in enumerate(menu.options):
            color = RED if i == highlighted else WHITE
            self.display_text(
                Vector2(
                    self._centered_x(option.name, _MENU_FONT_SIZE),
                    start + _MENU_FONT_SIZE * i,
                ),
                _MENU_FONT_SIZE,
                color,
                option.name,
            )