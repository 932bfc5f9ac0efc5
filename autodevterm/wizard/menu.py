"""Wizard screens and the main menu."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from autodevterm.wizard.ui import (
    LARGE_TITLE_STYLE,
    MENU_ITEM_STYLE,
    SELECTED_MENU_ITEM_STYLE,
    SUBTLE,
    Style,
    join_vertical,
    key_map,
)

_CONTAINER = Style(width=70, height=20)


class Screen(IntEnum):
    """The screens of the wizard, in order."""

    WELCOME = 0
    MAIN_MENU = 1
    DETECTION = 2
    MODULE_SELECTION = 3
    PREVIEW = 4
    INSTALLING = 5
    RESULTS = 6
    EXIT = 7


@dataclass(frozen=True)
class MainMenuOption:
    """An entry of the main menu and the screen it leads to."""

    title: str
    description: str
    screen: Screen


def main_menu_options() -> list[MainMenuOption]:
    """Return the main menu entries in display order."""
    return [
        MainMenuOption(
            "Run Detection",
            "Detect your system configuration (OS, Shell, Package Managers)",
            Screen.DETECTION,
        ),
        MainMenuOption(
            "Setup Modules",
            "Select and install development modules (Starship, Oh-My-Zsh, etc.)",
            Screen.MODULE_SELECTION,
        ),
        MainMenuOption(
            "View Configuration",
            "View and manage your configuration files and backups",
            Screen.RESULTS,
        ),
        MainMenuOption("Exit", "Exit the wizard", Screen.EXIT),
    ]


def main_menu_view(model: Any) -> str:
    """Render the main menu, marking the entry at ``model.menu_cursor``."""
    header = LARGE_TITLE_STYLE.render("Auto Dev Terminal") + "\n\n"
    header += SUBTLE.render("Automated Development Environment Setup\n") + "\n"

    items: list[str] = []
    for index, option in enumerate(main_menu_options()):
        if index == model.menu_cursor:
            items.append(SELECTED_MENU_ITEM_STYLE.render("▶ " + option.title))
        else:
            items.append(MENU_ITEM_STYLE.render("  " + option.title))
        items.append(SUBTLE.render("  " + option.description))
        items.append("")

    footer = "\n\n" + key_map()
    return _CONTAINER.render(header + join_vertical(*items) + footer)


def main_menu_help() -> str:
    """Extra help text shown under the main menu."""
    return f"\n{SUBTLE.render('Press Enter to select an option • Use arrow keys to navigate')}\n"