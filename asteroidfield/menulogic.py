"""Menus, their options and the actions the options trigger."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .structs import Difficulty, GameState, LogLevel, MenuOptionType, Session

MenuAction = Callable[[Session, Any], None]


@dataclass(frozen=True)
class MenuFunction:
    """An action run when its option is selected, with the payload it gets."""

    func: MenuAction
    payload: Any = None


@dataclass(frozen=True)
class MenuOption:
    name: str
    type: MenuOptionType
    data: Union[MenuFunction, "MenuParent", None] = None


@dataclass(frozen=True)
class MenuParent:
    """A titled list of options."""

    name: str
    options: tuple[MenuOption, ...]

    @property
    def option_list_len(self) -> int:
        return len(self.options)


def trigger_game_over(session: Session, payload: Any = None) -> None:
    session.game_state = GameState.GAME_OVER


def trigger_new_game(session: Session, payload: Any = None) -> None:
    session.game_state = GameState.START_NEW


def set_difficulty(session: Session, difficulty: Difficulty | int) -> None:
    """Choose the difficulty and start a new game."""
    session.difficulty = Difficulty(difficulty)
    trigger_new_game(session, None)


def trigger_restart(session: Session, payload: Any = None) -> None:
    session.game_state = GameState.CLEANUP
    session.next_state = GameState.START_NEW


def trigger_main_menu(session: Session, payload: Any = None) -> None:
    session.game_state = GameState.CLEANUP
    session.next_state = GameState.MAIN_MENU


def trigger_testing(session: Session, payload: Any = None) -> None:
    session.game_state = GameState.TESTING


def trigger_exit_game(session: Session, payload: Any = None) -> None:
    session.game_state = GameState.CLEANUP
    session.next_state = GameState.EXIT


def select_current(session: Session, menu: MenuParent, highlighted: int) -> MenuParent:
    """Act on the highlighted option and return the menu to show next.

    A submenu option returns that submenu; any other option runs its action
    (if it has one) and returns ``menu``.
    """
    selected = menu.options[highlighted]
    if selected.type == MenuOptionType.FUNCTION:
        action = selected.data
        action.func(session, action.payload)
    elif selected.type == MenuOptionType.SUBMENU:
        return selected.data
    else:
        session.logger.log(
            LogLevel.INFO, "Got a dummy menu object selected, dono what to do next..."
        )
    return menu


def _function_option(name: str, func: MenuAction, payload: Any = None) -> MenuOption:
    return MenuOption(name, MenuOptionType.FUNCTION, MenuFunction(func, payload))


PAUSE_MENU = MenuParent(
    "PAUSE",
    (
        _function_option("RESTART", trigger_restart),
        _function_option("MAIN MENU", trigger_main_menu),
        _function_option("EXIT", trigger_exit_game),
    ),
)

DIFFICULTY_MENU = MenuParent(
    "DIFFICULTY",
    tuple(
        _function_option(level.name, set_difficulty, level)
        for level in (
            Difficulty.GAME_JOURNALIST,
            Difficulty.LOW,
            Difficulty.MEDIUM,
            Difficulty.HIGH,
            Difficulty.VERY_HIGH,
            Difficulty.INSANE,
            Difficulty.DOFH,
        )
    ),
)

MAIN_MENU = MenuParent(
    "ASTEROIDS WITHOUT ASTEROIDS",
    (
        MenuOption("START GAME", MenuOptionType.SUBMENU, DIFFICULTY_MENU),
        _function_option("TESTING", trigger_testing),
        _function_option("EXIT", trigger_exit_game),
    ),
)


def find_option(menu: MenuParent, name: str) -> Optional[int]:
    """Index of the option called ``name``, or ``None``."""
    return next((i for i, opt in enumerate(menu.options) if opt.name == name), None)