"""Installation results screen of the wizard."""

from __future__ import annotations

from typing import Any

from autodevterm.wizard.ui import (
    BOLD,
    ERROR,
    ERROR_BOX_STYLE,
    PANEL_STYLE,
    SUBTLE,
    SUCCESS,
    WARNING,
    join_vertical,
)

_ERROR_WRAP_WIDTH = 60


def results_view(model: Any) -> str:
    """Render the summary and per-module details of a finished installation."""
    results = list(model.install_results)
    success = model.success_count()
    total = len(results)

    if success == total and total > 0:
        title = SUCCESS.derive(bold=True).render("✓ Installation Complete!")
    elif success > 0:
        title = WARNING.derive(bold=True).render("⚠ Partial Success")
    else:
        title = ERROR.derive(bold=True).render("✗ Installation Failed")
    title += "\n\n"

    summary = _render_summary(success, total)

    details = "\n\n" + BOLD.render("Details:") + "\n"
    details += _render_detailed_results(results)

    next_steps = _render_next_steps(results)

    footer = "\n\n" + SUBTLE.render("Press Esc to return to the main menu")
    footer += "\n" + SUBTLE.render("Press Ctrl+C to exit")

    return title + summary + details + next_steps + footer


def _render_summary(success: int, total: int) -> str:
    if success == total and total > 0:
        line = SUCCESS.render(f"All {total} module(s) installed successfully!")
    elif success > 0:
        line = WARNING.render(f"{success} of {total} modules installed successfully")
    else:
        line = ERROR.render("No modules were installed successfully")
    return PANEL_STYLE.render(join_vertical(line))


def _render_detailed_results(results: list[Any]) -> str:
    items: list[str] = []
    for result in results:
        if result.success:
            icon, status = SUCCESS.render("✓"), SUCCESS.render("Success")
        else:
            icon, status = ERROR.render("✗"), ERROR.render("Failed")
        items.append(f"{icon} {BOLD.render(result.module)} - {status}")

        if result.success and result.version:
            items.append(SUBTLE.render("  Version: " + result.version))

        if not result.success and result.error:
            items.extend(
                ERROR.render("  " + line) for line in wrap_text(result.error, _ERROR_WRAP_WIDTH)
            )

        items.append("")
    return PANEL_STYLE.render(join_vertical(*items))


def _render_next_steps(results: list[Any]) -> str:
    steps: list[str] = []
    if any(r.success and r.module == "starship" for r in results):
        steps.append("To enable Starship, add the following to your shell config:")
        steps.append(SUBTLE.render('  eval "$(starship init <shell_name>)"'))

    if not steps:
        return ""
    return "\n\n" + BOLD.render("Next Steps:") + "\n" + PANEL_STYLE.render(join_vertical(*steps))


def wrap_text(text: str, width: int) -> list[str]:
    """Break *text* into lines of at most *width* characters at word boundaries.

    A single word longer than *width* is kept whole on its own line.
    """
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) > width:
            if current:
                lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def error_results_view(err: BaseException | str) -> str:
    """Render the screen shown when the installation itself failed."""
    title = ERROR.derive(bold=True).render("Installation Error") + "\n\n"
    content = ERROR_BOX_STYLE.render(
        ERROR.render("An error occurred during installation:\n\n") + ERROR.render(str(err))
    )
    footer = "\n\n" + SUBTLE.render("Press Esc to return to the main menu")
    return title + content + footer