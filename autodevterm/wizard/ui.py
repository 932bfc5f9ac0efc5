"""Terminal styles and small text-layout helpers for the wizard."""

from __future__ import annotations

import dataclasses
import os
import re
from dataclasses import dataclass
from typing import NamedTuple

import wcwidth

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
_RESET = "\x1b[0m"


class Border(NamedTuple):
    """Characters that draw a box border."""

    top: str
    bottom: str
    left: str
    right: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str


NORMAL_BORDER = Border("─", "─", "│", "│", "┌", "┐", "└", "┘")
ROUNDED_BORDER = Border("─", "─", "│", "│", "╭", "╮", "╰", "╯")


def _colors_enabled() -> bool:
    return "NO_COLOR" not in os.environ


def _color_code(color: str | None, base: int) -> str | None:
    if color and color.isdigit() and int(color) < 256:
        return f"{base};5;{color}"
    return None


def _sgr(foreground: str | None, background: str | None, bold: bool) -> str:
    codes = []
    if bold:
        codes.append("1")
    for code in (_color_code(foreground, 38), _color_code(background, 48)):
        if code:
            codes.append(code)
    return f"\x1b[{';'.join(codes)}m" if codes else ""


def _paint(text: str, sgr: str) -> str:
    return f"{sgr}{text}{_RESET}" if sgr and text else text


def _line_width(line: str) -> int:
    return sum(max(wcwidth.wcwidth(ch), 0) for ch in line)


def visible_width(text: str) -> int:
    """Return the cell width of the widest line, ignoring ANSI escape codes."""
    plain = _ANSI_RE.sub("", text)
    return max((_line_width(line) for line in plain.split("\n")), default=0)


@dataclass(frozen=True)
class Style:
    """An immutable text style: colours, boldness, padding, border and size.

    Colours are 256-colour palette numbers given as strings. Setting the
    NO_COLOR environment variable turns colour and bold output off.
    """

    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    padding: tuple[int, int] = (0, 0)
    border: Border | None = None
    border_foreground: str | None = None
    border_background: str | None = None
    width: int = 0
    height: int = 0
    value: str = ""

    def derive(self, **kwargs: object) -> Style:
        """Return a copy of this style with the given fields changed."""
        return dataclasses.replace(self, **kwargs)

    def render(self, text: str = "") -> str:
        """Apply the style to *text*; a preset value is put before it."""
        if self.value:
            text = f"{self.value} {text}"
        colors = _colors_enabled()
        vpad, hpad = self.padding
        lines = text.replace("\t", "    ").split("\n")

        inner = max((visible_width(line) for line in lines), default=0)
        if self.width:
            inner = max(inner, self.width - 2 * hpad)

        text_sgr = _sgr(self.foreground, self.background, self.bold) if colors else ""
        fill_sgr = _sgr(None, self.background, False) if colors else ""
        side = _paint(" " * hpad, fill_sgr)

        body = [
            side + _paint(line, text_sgr) + _paint(" " * (inner - visible_width(line)), fill_sgr) + side
            for line in lines
        ]
        full = inner + 2 * hpad
        blank = _paint(" " * full, fill_sgr)
        body = [blank] * vpad + body + [blank] * vpad
        body.extend([blank] * max(self.height - len(body), 0))

        if self.border is not None:
            body = self._frame(body, full, colors)
        return "\n".join(body)

    def _frame(self, body: list[str], width: int, colors: bool) -> list[str]:
        b = self.border
        assert b is not None
        sgr = _sgr(self.border_foreground, self.border_background, False) if colors else ""
        top = _paint(b.top_left + b.top * width + b.top_right, sgr)
        bottom = _paint(b.bottom_left + b.bottom * width + b.bottom_right, sgr)
        left, right = _paint(b.left, sgr), _paint(b.right, sgr)
        return [top, *(left + line + right for line in body), bottom]


SUBTLE = Style(foreground="241")
BOLD = Style(bold=True)
HIGHLIGHT = Style(foreground="86")
ERROR = Style(foreground="204")
SUCCESS = Style(foreground="76")
WARNING = Style(foreground="226")

WINDOW_STYLE = Style(border=ROUNDED_BORDER, border_foreground="62", padding=(1, 2))
PANEL_STYLE = Style(border=NORMAL_BORDER, border_foreground="240", padding=(1, 2))

MENU_ITEM_STYLE = Style(foreground="white")
SELECTED_MENU_ITEM_STYLE = Style(foreground="86", bold=True)

TITLE_STYLE = Style(foreground="99", bold=True, padding=(0, 1))
LARGE_TITLE_STYLE = Style(foreground="99", bold=True, padding=(0, 1))

STATUS_BAR_STYLE = Style(foreground="241", background="235", padding=(0, 1))
STATUS_GOOD_STYLE = Style(foreground="76")
STATUS_BAD_STYLE = Style(foreground="204")

PROGRESS_BAR_EMPTY = Style(foreground="236")
PROGRESS_BAR_FULL = Style(foreground="86")

LIST_NUMBER_STYLE = Style(foreground="86")
CHECKBOX_CHECKED = Style(foreground="76", value="✓")
CHECKBOX_UNCHECKED = Style(foreground="241", value="○")

HELP_STYLE = Style(foreground="245")

INFO_BOX_STYLE = Style(
    border=NORMAL_BORDER,
    border_foreground="62",
    border_background="235",
    background="236",
    padding=(1, 2),
)
ERROR_BOX_STYLE = Style(
    border=NORMAL_BORDER, border_foreground="204", background="235", padding=(1, 2)
)


def join_vertical(*args: str) -> str:
    """Stack blocks of text, left aligned, padding every line to the widest."""
    lines = [line for block in args for line in block.split("\n")]
    if not args:
        return ""
    widest = max(visible_width(line) for line in lines)
    return "\n".join(line + " " * (widest - visible_width(line)) for line in lines)


def repeat_char(n: int, char: str) -> str:
    """Return *n* copies of *char*; a negative count is an error."""
    if n < 0:
        raise ValueError(f"negative repeat count: {n}")
    return char * n


def progress_bar(current: int, total: int, width: int) -> str:
    """Draw a bar of *width* cells filled in proportion to current/total."""
    if total <= 0:
        total = 1
    filled = int(width * (current / total))
    return PROGRESS_BAR_FULL.render(repeat_char(filled, "█")) + PROGRESS_BAR_EMPTY.render(
        repeat_char(width - filled, "░")
    )


def centered(text: str, width: int) -> str:
    """Centre each line of *text* within *width* cells."""
    lines = [
        repeat_char(max((width - visible_width(line)) // 2, 0), " ") + line
        for line in text.split("\n")
    ]
    return join_vertical(*lines)


def truncate(text: str, width: int) -> str:
    """Shorten *text* to fit *width* cells, ending it with an ellipsis."""
    if visible_width(text) <= width:
        return text
    truncated = text
    while truncated and visible_width(truncated) > width - 3:
        truncated = truncated[:-1]
    return truncated + "..."


def _format_number(n: int) -> str:
    if n < 10:
        return f"{n:>2}"
    return f"{n // 10 % 10}{n % 10}"


def format_list(items: list[str], start_num: int) -> str:
    """Format *items* as a numbered list starting at *start_num*."""
    return join_vertical(
        *(
            LIST_NUMBER_STYLE.render(_format_number(number)) + ". " + item
            for number, item in enumerate(items, start=start_num)
        )
    )


def key_map() -> str:
    """Help line for the navigation keys."""
    return HELP_STYLE.render("↑/↓: Navigate  •  Enter: Select  •  Esc: Back  •  Ctrl+C: Exit")


def short_key_map() -> str:
    """Shorter help line for the navigation keys."""
    return HELP_STYLE.render("↑↓: Navigate  •  Enter: Select  •  Esc: Back  •  Ctrl+C: Exit")