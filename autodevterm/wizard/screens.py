"""Welcome, exit, detection and module-selection screens of the wizard."""

from __future__ import annotations

from typing import Any

from autodevterm.wizard.ui import (
    BOLD,
    CHECKBOX_CHECKED,
    CHECKBOX_UNCHECKED,
    ERROR,
    ERROR_BOX_STYLE,
    HIGHLIGHT,
    LARGE_TITLE_STYLE,
    MENU_ITEM_STYLE,
    PANEL_STYLE,
    SELECTED_MENU_ITEM_STYLE,
    SUBTLE,
    SUCCESS,
    TITLE_STYLE,
    WARNING,
    Style,
    format_list,
    join_vertical,
    short_key_map,
    truncate,
)

_EXIT_CONTAINER = Style(width=60, height=15)

_DESCRIPTION = """
This wizard will help you set up your development environment
by detecting your system configuration and installing useful
development tools and configurations.
"""


def _text(value: object) -> str:
    return "" if value is None else str(value)


def welcome_view(model: Any) -> str:
    """Render the welcome screen."""
    title = LARGE_TITLE_STYLE.render("Auto Dev Terminal") + "\n\n"
    tagline = SUBTLE.render("Automated Development Environment Setup") + "\n\n"
    desc = SUBTLE.render(_DESCRIPTION)

    check = SUCCESS.render("✓")
    features = PANEL_STYLE.render(
        BOLD.render("Features:")
        + "\n"
        + check
        + " Automatic system detection\n"
        + check
        + " Multi-platform support (Linux, macOS, Windows)\n"
        + check
        + " Modular installation\n"
        + check
        + " Configuration backup\n"
        + check
        + " Interactive TUI"
    )

    prompt = "\n\n" + HIGHLIGHT.render("Press Enter to continue...")
    prompt += "\n" + SUBTLE.render("Press Ctrl+C to exit")
    return title + tagline + desc + features + prompt


def exit_view() -> str:
    """Render the goodbye screen."""
    content = TITLE_STYLE.render("Goodbye!")
    content += "\n\n" + SUBTLE.render("Thank you for using Auto Dev Terminal.")
    content += "\n\n" + SUCCESS.render("✓ Session complete")
    content += "\n\n" + SUBTLE.render("Press any key to exit...")
    return _EXIT_CONTAINER.render(content)


def detection_view(model: Any) -> str:
    """Render the system detection screen: running, failed or finished."""
    title = TITLE_STYLE.render("System Detection") + "\n\n"

    if model.system_info is None:
        if model.detection_err is not None:
            content = ERROR_BOX_STYLE.render(
                f"Detection Error: {ERROR.render(str(model.detection_err))}\n\n"
                f"{SUBTLE.render('Press Esc to go back and try again')}"
            )
        else:
            content = PANEL_STYLE.render(HIGHLIGHT.render("Detecting system configuration..."))
            content += "\n\n"
            content += SUBTLE.render("Please wait while we analyze your environment.\n")
            content += SUBTLE.render("This may take a few seconds...")
    else:
        content = _render_detection_results(model.system_info)

    return title + content + "\n" + short_key_map()


def _render_detection_results(info: Any) -> str:
    check = SUCCESS.render("✓")
    sections: list[str] = []

    os_info = f"{BOLD.render('Operating System')}: {_text(info.os)}"
    distro = _text(getattr(info, "distro", None))
    if distro:
        os_info += f" ({distro}"
        distro_version = _text(getattr(info, "distro_version", None))
        if distro_version:
            os_info += f" {distro_version}"
        os_info += ")"
    sections.append(f"{check} {os_info}")

    shell_info = f"{BOLD.render('Shell')}: {_text(info.shell)}"
    shell_version = _text(getattr(info, "shell_version", None))
    if shell_version:
        shell_info += f" ({shell_version})"
    sections.append(f"{check} {shell_info}")

    sections.append(f"{check} {BOLD.render('Architecture')}: {_text(getattr(info, 'arch', None))}")
    sections.append(f"{check} {BOLD.render('Home Directory')}: {_text(info.home_dir)}")

    header = BOLD.render("Package Managers")
    managers = [str(pm) for pm in (info.package_managers or [])]
    if managers:
        section = f"{header}: {HIGHLIGHT.render('Available')}\n    "
        section += SUBTLE.render("Found: ")
        section += format_list(managers, 1)
        sections.append(section)
    else:
        sections.append(f"{header}: {WARNING.render('None detected')}")

    result = PANEL_STYLE.render(join_vertical(*sections))
    result += "\n\n" + SUBTLE.render("Press Esc to return to the main menu.")
    result += "\n" + SUBTLE.render("Press Enter to continue to module selection.")
    return result


def module_selection_view(model: Any) -> str:
    """Render the module selection screen."""
    title = TITLE_STYLE.render("Select Modules") + "\n\n"

    if not model.available_modules:
        content = ERROR_BOX_STYLE.render(
            ERROR.render("No modules available")
            + "\n\n"
            + SUBTLE.render("Please run detection first to load available modules.\n")
            + SUBTLE.render("Press Esc to go back to the main menu.")
        )
        return title + content

    content = ""
    if model.system_info is None:
        content += WARNING.render("⚠ System not detected") + "\n"
        content += SUBTLE.render("Run detection first to ensure modules are compatible.\n\n")

    content += _render_module_list(model)

    selected_count = len(model.selected_modules())
    if selected_count > 0:
        content += "\n"
        content += PANEL_STYLE.render(
            f"{HIGHLIGHT.render('→')} {selected_count} module(s) selected"
        )

    content += "\n\n"
    content += SUBTLE.render(
        "Press Space to toggle selection • Enter to continue • Esc to go back"
    )
    return title + content + "\n" + short_key_map()


def _render_module_list(model: Any) -> str:
    selected_names = {mod.name for mod in model.selected_modules()}
    items: list[str] = []
    for index, mod in enumerate(model.available_modules):
        style = CHECKBOX_CHECKED if mod.name in selected_names else CHECKBOX_UNCHECKED
        checkbox = style.render(" ")
        name_style = SELECTED_MENU_ITEM_STYLE if index == model.module_cursor else MENU_ITEM_STYLE
        name = name_style.render(mod.name)
        description = SUBTLE.render(truncate(mod.description, 50))
        version = SUBTLE.render("v" + mod.version)

        items.append(f"{checkbox} {name} {version}")
        items.append("   " + description)
        items.append("")
    return PANEL_STYLE.render(join_vertical(*items))


def module_checkbox(selected: bool) -> str:
    """Return the checkbox shown next to a module."""
    if selected:
        return CHECKBOX_CHECKED.render("[X]")
    return CHECKBOX_UNCHECKED.render("[ ]")


def module_status(mod_name: str, selected: bool, installed: bool) -> str:
    """Return the status label of a module."""
    if installed:
        return SUCCESS.render("installed")
    if selected:
        return HIGHLIGHT.render("selected")
    return SUBTLE.render("available")