from dataclasses import dataclass, field
from types import SimpleNamespace

import pytest

from autodevterm.wizard.progress import (
    confirm_view,
    install_progress_view,
    installation_status,
    installing_view,
    preview_view,
    render_command_output,
    strip_ansi,
)


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


@dataclass
class FakeModel:
    system_info: object = None
    available_modules: list = field(default_factory=list)
    selected: set = field(default_factory=set)
    install_progress: int = 0
    install_total: int = 0
    install_results: list = field(default_factory=list)
    is_installing: bool = False

    def selected_modules(self):
        return [m for m in self.available_modules if m.name in self.selected]

    def success_count(self):
        return sum(1 for r in self.install_results if r.success)


def _mod(name, version="1.0"):
    return SimpleNamespace(name=name, description="desc", version=version)


def _result(module, success=True, version="", error=""):
    return SimpleNamespace(module=module, success=success, version=version, error=error)


def _info(os="linux", package_managers=("apt",)):
    return SimpleNamespace(
        os=os,
        shell="zsh",
        arch="amd64",
        home_dir="/home/user",
        package_managers=list(package_managers),
    )


def test_strip_ansi_removes_sequences():
    assert strip_ansi("\x1b[31mred\x1b[0m plain") == "red plain"


def test_strip_ansi_unterminated_sequence_drops_rest():
    assert strip_ansi("abc\x1b[31") == "abc"


def test_strip_ansi_leaves_plain_text():
    assert strip_ansi("hello\nworld") == "hello\nworld"


def test_render_command_output_truncates_long_output():
    output = "\n".join(f"line{i}" for i in range(12))
    lines = render_command_output(output).split("\n")
    assert len(lines) == 11
    assert lines[:10] == [f"line{i}" for i in range(10)]
    assert lines[-1] == "... (output truncated)"


def test_render_command_output_short_output_is_cleaned():
    assert render_command_output("\x1b[1mok\x1b[0m\ndone") == "ok\ndone"


def test_installation_status_states():
    assert installation_status(FakeModel(is_installing=True)) == "Installing..."
    assert installation_status(FakeModel(install_results=[_result("a")])) == (
        "All installations complete!"
    )
    mixed = FakeModel(install_results=[_result("a"), _result("b", success=False)])
    assert installation_status(mixed) == "1/2 successful"
    failed = FakeModel(install_results=[_result("a", success=False)])
    assert installation_status(failed) == "Installation failed"


def test_install_progress_view_bar_has_fixed_width():
    view = install_progress_view("starship", "Downloading", 50)
    assert "Installing: starship" in view
    assert "Downloading" in view
    assert view.count("█") + view.count("░") == 30
    assert view.count("█") > 0 and view.count("░") > 0


def test_installing_view_shows_progress_and_results():
    model = FakeModel(
        available_modules=[_mod("a"), _mod("b")],
        selected={"a", "b"},
        install_progress=1,
        install_total=2,
        install_results=[_result("a", version="1.0")],
    )
    view = installing_view(model)
    assert "Progress: 1/2" in view
    assert "→ Installing: b" in view
    assert "✓ a (v1.0)" in view
    assert view.count("█") + view.count("░") == 40


def test_installing_view_shows_failure_error():
    model = FakeModel(
        install_progress=1,
        install_total=1,
        install_results=[_result("a", success=False, error="network down")],
    )
    view = installing_view(model)
    assert "✗ a" in view
    assert "Error: network down" in view
    assert "→ Installing" not in view


def test_preview_view_without_selection():
    assert "No modules selected" in preview_view(FakeModel())


def test_preview_view_linux_summary():
    model = FakeModel(
        system_info=_info(),
        available_modules=[_mod("starship", "1.16.0")],
        selected={"starship"},
    )
    view = preview_view(model)
    assert "1. starship v1.16.0" in view
    assert "Total: 1 module(s)" in view
    assert "Package Manager: apt" in view
    assert "Destination: /home/user" in view
    assert "Some installations may require sudo privileges" in view


def test_preview_view_darwin_without_package_manager():
    model = FakeModel(
        system_info=_info(os="darwin", package_managers=()),
        available_modules=[_mod("starship")],
        selected={"starship"},
    )
    view = preview_view(model)
    assert "Package Manager: Not detected" in view
    assert "sudo" not in view


def test_confirm_view_marks_choice():
    yes = confirm_view("Proceed?", True)
    no = confirm_view("Proceed?", False)
    assert "Proceed?" in yes
    assert "▶ Yes" in yes and "▶ No" not in yes
    assert "▶ No" in no and "▶ Yes" not in no