"""The game's state machine, its entry points and the benchmark run."""

from __future__ import annotations

import signal
import string
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

import pygame

from .actionlist import delete_tracker, run_action_list
from .asteroid import asteroid_safe_spawn
from .autils import BenchTimer, create_log_file, get_time_mics, parse_startup_arguments
from .gamelogic import (
    LEFT_MOUSE,
    RIGHT_MOUSE,
    InputState,
    debugging_key_handler,
    menu_controls,
    new_game,
    player_runtime_controls,
    ship_controls,
    spawn_asteroid_on_time,
)
from .menulogic import MAIN_MENU, PAUSE_MENU, MenuParent
from .objecthandler import init_tracker
from .render import BLACK, RAYWHITE, Renderer
from .structs import (
    BENCH_LOG_FILE_NAME,
    SOFT_MAX_ASTEROIDS,
    WORLD_POS_MAX_X,
    WORLD_POS_MAX_Y,
    GameState,
    LogLevel,
    Session,
    Tracker,
    Vector2,
)

_WINDOW_TITLE = "asteroids without asteroids"
_BENCH_RUN_FOR = 20.0

_KEY_NAMES = {
    **{getattr(pygame, f"K_{c}"): c.upper() for c in string.ascii_lowercase + string.digits},
    pygame.K_EQUALS: "=",
    pygame.K_MINUS: "-",
    pygame.K_SPACE: "SPACE",
    pygame.K_ESCAPE: "ESCAPE",
    pygame.K_RETURN: "ENTER",
    pygame.K_KP_ENTER: "ENTER",
    pygame.K_LCTRL: "LEFT_CONTROL",
}


class StateMachine:
    """Drives the game from menu to play to cleanup, one frame per step."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.tracker: Optional[Tracker] = None
        self.menu: MenuParent = MAIN_MENU
        self.highlighted = 0
        self._bench = BenchTimer(session.logger)

    def _run_frame(self, inputs: InputState) -> None:
        session = self.session
        tracker = self.tracker
        if session.benchmarking:
            session.logger.log(LogLevel.BENCH, "<--- Started frame cycle --->")
            self._bench.start()

        advance = True
        if session.debugging:
            if tracker.player is not None:
                session.speed_prev = tracker.player.obj.speed.copy()
            debugging_key_handler(tracker, inputs)
            advance = not session.debug_pause
        if advance:
            if tracker.player is not None:
                spawn_asteroid_on_time(tracker)
            run_action_list(tracker)
            session.game_time_passed += session.frame_time

        player_runtime_controls(tracker, inputs)
        ship_controls(tracker, inputs)

    def _cleanup(self) -> None:
        session = self.session
        self.menu = MAIN_MENU
        delete_tracker(self.tracker)
        self.tracker = None
        if session.next_state == GameState.NOOP:
            session.game_state = GameState.EXIT
        session.game_time_passed = 0.0
        session.game_state = session.next_state
        session.next_state = GameState.NOOP

    def step(self, inputs: Optional[InputState] = None) -> bool:
        """Handle one frame of game logic; returns ``False`` once the game exits."""
        inputs = inputs if inputs is not None else InputState()
        session = self.session
        state = session.game_state

        if state == GameState.INIT:
            session.game_state = GameState.MAIN_MENU
        elif state == GameState.MAIN_MENU:
            self.menu, self.highlighted = menu_controls(
                session, self.menu, self.highlighted, inputs
            )
        elif state == GameState.TESTING:
            self.tracker = init_tracker(session)
            session.game_state = GameState.RUNNING
        elif state == GameState.START_NEW:
            self.tracker = init_tracker(session)
            new_game(self.tracker)
            session.game_state = GameState.RUNNING
        elif state == GameState.GAME_OVER:
            _, self.highlighted = menu_controls(session, self.menu, self.highlighted, inputs)
        elif state == GameState.RUNNING:
            self._run_frame(inputs)
        elif state == GameState.PAUSE:
            if session.debugging:
                debugging_key_handler(self.tracker, inputs)
            self.menu = PAUSE_MENU
            player_runtime_controls(self.tracker, inputs)
            _, self.highlighted = menu_controls(session, self.menu, self.highlighted, inputs)
        elif state == GameState.EXIT:
            return False
        elif state == GameState.CLEANUP:
            self._cleanup()
        elif state == GameState.NOOP:
            raise RuntimeError("Game is stuck in noop! This state is not supposed to be used")
        return True

    def _render(self, renderer: Renderer, state: GameState) -> None:
        tracker = self.tracker
        if state == GameState.MAIN_MENU:
            renderer.run_menu_render(self.menu, self.highlighted)
        elif state == GameState.GAME_OVER:
            score = tracker.score if tracker is not None else 0
            renderer.run_menu_render(self.menu, self.highlighted, [f"Your score: {score}"])
        elif state in (GameState.RUNNING, GameState.PAUSE) and tracker is not None:
            renderer.run_world_render(tracker)
            renderer.run_screen_render(tracker)
            if state == GameState.PAUSE:
                renderer.run_menu_render(self.menu, self.highlighted)

    def run(self, renderer: Renderer, clock: pygame.time.Clock) -> int:
        """Run frames until the game exits."""
        session = self.session
        while True:
            inputs, quit_requested = _poll_inputs()
            if quit_requested:
                session.game_state = GameState.EXIT
            renderer.surface = pygame.display.get_surface()
            renderer.mouse_position = inputs.mouse_position
            renderer.surface.fill(BLACK)

            state = session.game_state
            if not self.step(inputs):
                return 0
            self._render(renderer, state)
            pygame.display.flip()
            session.frame_time = clock.tick(session.fps_target) / 1000


def _poll_inputs() -> tuple[InputState, bool]:
    pressed = set()
    wheel = 0.0
    quit_requested = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            quit_requested = True
        elif event.type == pygame.KEYDOWN and event.key in _KEY_NAMES:
            pressed.add(_KEY_NAMES[event.key])
        elif event.type == pygame.MOUSEWHEEL:
            wheel += event.y

    keys = pygame.key.get_pressed()
    down = {name for code, name in _KEY_NAMES.items() if keys[code]}
    left, _, right = pygame.mouse.get_pressed(3)
    mouse_down = {button for button, held in ((LEFT_MOUSE, left), (RIGHT_MOUSE, right)) if held}
    mx, my = pygame.mouse.get_pos()
    dx, dy = pygame.mouse.get_rel()
    return (
        InputState(
            down=down,
            pressed=pressed,
            mouse_down=mouse_down,
            mouse_position=Vector2(mx, my),
            mouse_delta=Vector2(dx, dy),
            wheel=wheel,
        ),
        quit_requested,
    )


def _on_interrupt(signum: int, frame: object) -> None:
    sys.stderr.write(
        f"{Path(sys.argv[0]).name}: Got a signal interupt from console. Exiting now\n"
    )
    raise SystemExit(signum)


def _install_signal_handlers() -> None:
    signal.signal(signal.SIGINT, _on_interrupt)
    signal.signal(signal.SIGTERM, _on_interrupt)


def _configure(session: Session, args: Sequence[str]) -> None:
    logger = session.logger
    if session.benchmarking:
        logger.bench_file = open(BENCH_LOG_FILE_NAME, "w", encoding="utf-8")
        logger.log(
            LogLevel.DEBUG, "Compiled with benchmarking support.\nBenchmarking is enabled"
        )
    create_log_file(session)
    parse_startup_arguments(session, args)
    logger.file_level = max(logger.file_level, logger.console_level)


def _open_window(session: Session) -> tuple[pygame.Surface, pygame.time.Clock]:
    pygame.init()
    surface = pygame.display.set_mode(
        (session.screen_width, session.screen_height), pygame.RESIZABLE
    )
    pygame.display.set_caption(_WINDOW_TITLE)
    return surface, pygame.time.Clock()


def _shutdown(session: Session) -> None:
    pygame.quit()
    session.logger.close()


def _timed(action: Callable[[Tracker], object], tracker: Tracker) -> int:
    start = get_time_mics()
    action(tracker)
    return get_time_mics() - start


def format_benchmark_report(
    frames: int,
    seconds: float,
    action_list_us: int,
    screen_render_us: int,
    world_render_us: int,
) -> str:
    """The summary printed at the end of a benchmark run."""
    if frames <= 0:
        raise ValueError("a benchmark report needs at least one frame")
    return (
        "\n========== BENCHMARK FINISHED ==========\n"
        f"Rendered {frames:,} frames in {seconds:,f} seconds\n"
        f"Average fps: {frames / seconds:.0f}\n"
        f"Average frame time: {seconds * 1000 / frames:.2f}ms\n"
        f"Action list took {action_list_us:,}us total, "
        f"{action_list_us // frames:,}us on average\n"
        f"Screen render took {screen_render_us:,}us, "
        f"{screen_render_us // frames:,}us on average\n"
        f"World render took {world_render_us:,}us, "
        f"{world_render_us // frames:,}us on average\n"
        "============== END OF LOG ==============\n"
    )


def benchmark(argv: Optional[Sequence[str]] = None) -> int:
    """Render a crowded field for a fixed time and print timing figures."""
    args = list(sys.argv[1:] if argv is None else argv)
    session = Session(benchmarking=True, debugging="--debug" in args)
    _configure(session, args)
    _install_signal_handlers()
    surface, clock = _open_window(session)
    try:
        renderer = Renderer(surface, session)
        tracker = init_tracker(session)
        session.game_time_passed = 0.0
        tracker.camera.zoom = 0.2
        tracker.camera.target = Vector2(WORLD_POS_MAX_X / 2, WORLD_POS_MAX_Y / 2)
        for _ in range(SOFT_MAX_ASTEROIDS - 1):
            asteroid_safe_spawn(tracker)

        action_us = screen_us = world_us = 0
        frames = 0
        text_x = (session.screen_width - renderer.measure_text("TIME PASSED: 12.34", 24)) / 2
        while session.game_time_passed < _BENCH_RUN_FOR:
            if any(event.type == pygame.QUIT for event in pygame.event.get()):
                break
            renderer.surface = pygame.display.get_surface()
            renderer.surface.fill(BLACK)
            action_us += _timed(run_action_list, tracker)
            screen_us += _timed(renderer.run_screen_render, tracker)
            world_us += _timed(renderer.run_world_render, tracker)
            renderer.display_text(
                Vector2(text_x, 30), 24, RAYWHITE,
                f"TIME PASSED: {session.game_time_passed:.2f}",
            )
            pygame.display.flip()
            session.frame_time = clock.tick(0) / 1000
            session.game_time_passed += session.frame_time
            frames += 1

        print(
            format_benchmark_report(
                frames, session.game_time_passed, action_us, screen_us, world_us
            ),
            end="",
        )
        delete_tracker(tracker)
    finally:
        _shutdown(session)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the game; ``-lc``/``-lf`` set log levels, ``--debug`` enables developer keys."""
    args = list(sys.argv[1:] if argv is None else argv)
    session = Session(debugging="--debug" in args)
    _configure(session, args)
    _install_signal_handlers()
    surface, clock = _open_window(session)
    try:
        return StateMachine(session).run(Renderer(surface, session), clock)
    finally:
        _shutdown(session)


if __name__ == "__main__":
    sys.exit(main())