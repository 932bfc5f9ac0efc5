"""Preview and installation-progress screens of the wizard."""

from __future__ import annotations

import re
from typing import Any

from autodevterm.wizard.ui import (
    BOLD,
    ERROR,
    ERROR_BOX_STYLE,
    HIGHLIGHT,
    INFO_BOX_STYLE,
    LIST_NUMBER_STYLE,
    PANEL_STYLE,
    SUBTLE,
    SUCCESS,
    TITLE_STYLE,
    WARNING,
    join_vertical,
    progress_bar,
    short_key_map,
    truncate,
)

_ESCAPE_RE = re.compile(r"\x1b[^m]*m?")
_MAX_OUTPUT_LINES = 10


def _text(value: object) -> str:
    return "" if value is None else str(value)


def installing_view(model: Any) -> str:
    """Render the installation progress screen."""
    title = TITLE_STYLE.render("Installing Modules") + "\n\n"

    bar = progress_bar(model.install_progress, model.install_total, 40)
    progress_text = f"Progress: {model.install_progress}/{model.install_total}"
    content = PANEL_STYLE.render(bar + "\n\n" + BOLD.render(progress_text))

    selected = model.selected_modules()
    if 0 <= model.install_progress < len(selected):
        current = selected[model.install_progress]
        content += "\n\n"
        content += HIGHLIGHT.render("→ Installing: ") + BOLD.render(current.name)

    if model.install_results:
        content += "\n\n" + BOLD.render("Results:") + "\n"
        content += _render_install_results(model.install_results)

    content += "\n\n" + SUBTLE.render("Installation in progress... Please wait.")
    footer = "\n" + SUBTLE.render("Ctrl+C to cancel (not recommended)")
    return title + content + footer


def _render_install_results(results: list[Any]) -> str:
    items: list[str] = []
    for result in results:
        status = SUCCESS.render("✓") if result.success else ERROR.render("✗")
        name = result.module
        if result.version:
            name += f" (v{result.version})"
        items.append(f"  {status} {name}")
        if not result.success and result.error:
            items.append(SUBTLE.render("    Error: " + truncate(result.error, 50)))
    return join_vertical(*items)


def install_progress_view(module_name: str, step: str, progress: int) -> str:
    """Render detailed progress for one module, progress being a percentage."""
    return PANEL_STYLE.render(
        BOLD.render("Installing: ")
        + HIGHLIGHT.render(module_name)
        + "\n\n"
        + SUBTLE.render(step)
        + "\n\n"
        + progress_bar(progress, 100, 30)
    )


def installation_status(model: Any) -> str:
    """Summarise the state of the current installation in one line."""
    if model.is_installing:
        return HIGHLIGHT.render("Installing...")

    success = model.success_count()
    total = len(model.install_results)
    if success == total:
        return SUCCESS.render("All installations complete!")
    if success > 0:
        return WARNING.render(f"{success}/{total} successful")
    return ERROR.render("Installation failed")


def strip_ansi(s: str) -> str:
    """Remove escape sequences, each running from ESC up to and including 'm'."""
    return _ESCAPE_RE.sub("", s)


def render_command_output(output: str) -> str:
    """Strip escape codes from command output and keep at most ten lines."""
    lines = strip_ansi(output).split("\n")
    if len(lines) > _MAX_OUTPUT_LINES:
        lines = lines[:_MAX_OUTPUT_LINES]
        lines.append(SUBTLE.render("... (output truncated)"))
    return "\n".join(lines)


def preview_view(model: Any) -> str:
    """Render the confirmation screen listing what will be installed."""
    title = TITLE_STYLE.render("Installation Preview") + "\n\n"

    selected = model.selected_modules()
    if not selected:
        content = ERROR_BOX_STYLE.render(
            ERROR.render("No modules selected")
            + "\n\n"
            + SUBTLE.render("Please select at least one module to install.\n")
            + SUBTLE.render("Press Esc to go back and select modules.")
        )
        return title + content

    info = model.system_info
    if info is not None:
        sys_info = (
            f"{BOLD.render('OS:')} {_text(info.os)}  •  "
            f"{BOLD.render('Shell:')} {_text(info.shell)}  •  "
            f"{BOLD.render('Arch:')} {_text(getattr(info, 'arch', None))}"
        )
    else:
        sys_info = WARNING.render("System info not available")

    content = PANEL_STYLE.render(SUBTLE.render(sys_info)) + "\n\n"
    content += BOLD.render("Modules to install:") + "\n"
    content += _render_selected_modules(selected)

    destination = _text(info.home_dir) if info is not None else ""
    content += "\n\n"
    content += INFO_BOX_STYLE.render(
        f"Total: {len(selected)} module(s)\n"
        f"Package Manager: {BOLD.render(_package_manager_info(info))}\n"
        f"Destination: {destination}"
    )

    if _requires_sudo(info):
        content += "\n\n" + WARNING.render("⚠ Some installations may require sudo privileges")

    content += "\n\n" + BOLD.render("Ready to install?")
    content += "\n" + SUBTLE.render("Press Enter to confirm and start installation")
    content += "\n" + SUBTLE.render("Press Esc to go back and modify selection")
    return title + content + "\n" + short_key_map()


def _render_selected_modules(selected: list[Any]) -> str:
    items: list[str] = []
    for number, mod in enumerate(selected, start=1):
        items.append(
            f"{LIST_NUMBER_STYLE.render(f'{number}.')} "
            f"{HIGHLIGHT.render(mod.name)} {SUBTLE.render('v' + mod.version)}"
        )
        items.append("")
    return PANEL_STYLE.render(join_vertical(*items))


def _package_manager_info(info: Any) -> str:
    if info is None or not info.package_managers:
        return WARNING.render("Not detected")
    return str(info.package_managers[0])


def _requires_sudo(info: Any) -> bool:
    return info is not None and _text(info.os) == "linux"


def confirm_view(prompt: str, confirmed: bool) -> str:
    """Render a yes/no prompt with the current choice marked."""
    if confirmed:
        options = [SUCCESS.render("▶ Yes"), SUBTLE.render("  No")]
    else:
        options = [SUBTLE.render("  Yes"), SUCCESS.render("▶ No")]
    return PANEL_STYLE.render(BOLD.render(prompt) + "\n\n" + join_vertical(*options))