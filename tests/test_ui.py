import pytest

from autodevterm.wizard.ui import (
    BOLD,
    CHECKBOX_CHECKED,
    PANEL_STYLE,
    SUCCESS,
    Style,
    centered,
    format_list,
    join_vertical,
    key_map,
    progress_bar,
    repeat_char,
    short_key_map,
    truncate,
    visible_width,
)


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


def test_render_with_color_keeps_visible_width(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    rendered = SUCCESS.render("abc")
    assert "\x1b[" in rendered
    assert visible_width(rendered) == 3


def test_plain_render_without_color():
    assert SUCCESS.render("abc") == "abc"


def test_visible_width_wide_characters():
    assert visible_width("日本") == 4


def test_visible_width_multiline_takes_widest():
    assert visible_width("a\nabcde\nab") == 5


def test_repeat_char():
    assert repeat_char(3, "█") == "███"
    assert repeat_char(0, "x") == ""
    with pytest.raises(ValueError):
        repeat_char(-1, "x")


def test_progress_bar_empty_and_full():
    assert progress_bar(0, 5, 10) == "░" * 10
    assert progress_bar(5, 5, 10) == "█" * 10


def test_progress_bar_width_invariant():
    for current in range(0, 8):
        assert visible_width(progress_bar(current, 7, 40)) == 40


def test_progress_bar_zero_total_overflows():
    with pytest.raises(ValueError):
        progress_bar(3, 0, 10)


def test_truncate_short_text_unchanged():
    assert truncate("hello", 10) == "hello"


def test_truncate_long_text():
    result = truncate("hello world, this is long", 8)
    assert result.endswith("...")
    assert visible_width(result) <= 8
    assert "hello world, this is long".startswith(result[:-3])


def test_truncate_tiny_width():
    assert truncate("abc", 1) == "..."


def test_centered():
    assert centered("ab", 6) == "  ab"


def test_centered_never_negative():
    assert centered("abcdef", 2) == "abcdef"


def test_join_vertical_pads_to_widest():
    joined = join_vertical("a", "bcd", "")
    lines = joined.split("\n")
    assert [line.rstrip() for line in lines] == ["a", "bcd", ""]
    assert {visible_width(line) for line in lines} == {3}


def test_format_list():
    lines = format_list(["apt", "brew"], 1).split("\n")
    assert lines[0].rstrip() == " 1. apt"
    assert lines[1].endswith("2. brew")
    assert format_list(["x"], 10) == "10. x"


def test_panel_lines_have_equal_width():
    rendered = PANEL_STYLE.render("x\nlonger line")
    lines = rendered.split("\n")
    assert len({visible_width(line) for line in lines}) == 1
    assert any("longer line" in line for line in lines)
    assert visible_width(rendered) > visible_width("longer line")


def test_checkbox_value_prefix():
    rendered = CHECKBOX_CHECKED.render("[X]")
    assert rendered.startswith("✓")
    assert rendered.endswith("[X]")


def test_style_width_and_height():
    rendered = Style(width=12, height=4).render("hi")
    lines = rendered.split("\n")
    assert len(lines) == 4
    assert all(visible_width(line) == 12 for line in lines)


def test_derive_does_not_change_original():
    plain = BOLD.derive(bold=False)
    assert plain.bold is False
    assert BOLD.bold is True


def test_key_maps():
    assert "Ctrl+C: Exit" in key_map()
    assert "↑/↓: Navigate" in key_map()
    assert short_key_map().startswith("↑↓: Navigate")